"""File-system primitives used by the registry.

All helpers are synchronous; async callers dispatch them to a thread pool.
"""
from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO, List, Union

PathLike = Union[str, "os.PathLike[str]"]


def ensure_directory(path: PathLike) -> Path:
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p


def directory_exists(path: PathLike) -> bool:
    return Path(path).is_dir()


def file_exists(path: PathLike) -> bool:
    return Path(path).is_file()


def list_directories(path: PathLike) -> List[Path]:
    """Immediate subdirectories of ``path`` in enumeration order; [] if it is missing."""
    p = Path(path)
    if not p.is_dir():
        return []
    return [child for child in p.iterdir() if child.is_dir()]


def read_text(path: PathLike, errors: str = "strict") -> str:
    return Path(path).read_text(encoding="utf-8", errors=errors)


def write_text(path: PathLike, content: str) -> None:
    write_bytes(path, content.encode("utf-8"))


def write_bytes(path: PathLike, content: bytes) -> None:
    """Create-or-replace ``path``.

    Content goes to a temporary sibling first and is renamed into place, so
    concurrent readers see either the old or the new document, never a mix.
    """
    target = Path(path)
    fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        os.replace(tmp_name, target)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


def delete_directory(path: PathLike, ignore_errors: bool = False) -> None:
    shutil.rmtree(path, ignore_errors=ignore_errors)


def open_read_stream(path: PathLike) -> BinaryIO:
    return open(path, "rb")


__all__ = [
    "ensure_directory",
    "directory_exists",
    "file_exists",
    "list_directories",
    "read_text",
    "write_text",
    "write_bytes",
    "delete_directory",
    "open_read_stream",
]
