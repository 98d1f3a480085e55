"""Tests for file-system primitives."""

from pathlib import Path

from function_host_core.utils import fs


def test_write_text_replaces_and_leaves_no_temp_files(tmp_path: Path):
    target = tmp_path / "doc.json"
    fs.write_text(target, "first")
    fs.write_text(target, "second")
    assert fs.read_text(target) == "second"
    assert [p.name for p in tmp_path.iterdir()] == ["doc.json"]


def test_list_directories_only_returns_directories(tmp_path: Path):
    (tmp_path / "a").mkdir()
    (tmp_path / "b").mkdir()
    (tmp_path / "file.txt").write_text("x", encoding="utf-8")
    assert sorted(p.name for p in fs.list_directories(tmp_path)) == ["a", "b"]


def test_ensure_directory_is_idempotent(tmp_path: Path):
    d = tmp_path / "x" / "y"
    assert fs.ensure_directory(d) == d
    assert fs.ensure_directory(d) == d
    assert fs.directory_exists(d)
    assert not fs.file_exists(d)


def test_delete_directory_ignore_errors(tmp_path: Path):
    fs.delete_directory(tmp_path / "missing", ignore_errors=True)
    d = fs.ensure_directory(tmp_path / "gone" / "deep")
    (d / "f").write_text("x", encoding="utf-8")
    fs.delete_directory(tmp_path / "gone")
    assert not (tmp_path / "gone").exists()


def test_write_bytes_keeps_content_unchanged(tmp_path: Path):
    target = tmp_path / "run.js"
    fs.write_bytes(target, b"\xe9\x00\r\n")
    assert target.read_bytes() == b"\xe9\x00\r\n"
    assert [p.name for p in tmp_path.iterdir()] == ["run.js"]
