"""Tests for configuration loading."""

from pathlib import Path

import pytest

from function_host_core.core.config import ConfigLoader, ServiceConfig
from function_host_core.core.exceptions import ConfigurationError
from function_host_core.registry.registry import FunctionRegistry
from function_host_core.vfs.resolver import VfsResolver


def test_load_from_yaml(tmp_path: Path):
    cfg = tmp_path / "service.yaml"
    cfg.write_text(
        "functions_path: /home/site/functions\n"
        "root_path: /home\n"
        "authority: https://host/\n"
        "log_level: debug\n",
        encoding="utf-8",
    )
    config = ConfigLoader(str(cfg), environ={}).load()
    assert config.functions_path == Path("/home/site/functions")
    assert config.root_path == Path("/home")
    assert config.authority == "https://host"
    assert config.log_level == "DEBUG"


def test_env_overrides_file(tmp_path: Path):
    cfg = tmp_path / "service.yaml"
    cfg.write_text("functions_path: /home/a\n", encoding="utf-8")
    env = {"FNHOST_FUNCTIONS_PATH": "/home/b", "FNHOST_AUTHORITY": "http://x"}
    config = ConfigLoader(str(cfg), environ=env).load()
    assert config.functions_path == Path("/home/b")
    assert config.authority == "http://x"


def test_explicit_overrides_win():
    env = {"FNHOST_FUNCTIONS_PATH": "/home/b"}
    config = ConfigLoader(environ=env).load(functions_path="/srv/functions", authority=None)
    assert config.functions_path == Path("/srv/functions")
    assert config.authority is None


def test_defaults():
    config = ConfigLoader(environ={"FNHOST_FUNCTIONS_PATH": "/srv/functions"}).load()
    assert config.root_path == Path("/")
    assert config.log_level == "INFO"


def test_missing_functions_path():
    with pytest.raises(ConfigurationError):
        ConfigLoader(environ={}).load()


def test_missing_file(tmp_path: Path):
    with pytest.raises(ConfigurationError):
        ConfigLoader(str(tmp_path / "nope.yaml"), environ={}).load()


def test_invalid_yaml(tmp_path: Path):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("functions_path: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        ConfigLoader(str(cfg), environ={}).load()


def test_functions_path_must_be_under_root():
    with pytest.raises(ConfigurationError):
        ConfigLoader(environ={}).load(functions_path="/srv/functions", root_path="/home")


def test_service_config_direct():
    config = ServiceConfig(functions_path="/home/site/functions", root_path="/home/site")
    assert config.authority is None


@pytest.mark.asyncio
async def test_relative_paths_resolve_against_cwd(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = ServiceConfig(functions_path="functions", root_path=".")
    assert config.functions_path == tmp_path / "functions"
    assert config.root_path == tmp_path

    registry = FunctionRegistry(config, VfsResolver("https://host", config.root_path))
    created = await registry.create_or_update("foo", "{}")
    assert created["script_href"] == "https://host/api/vfs/functions/foo/run.js"


@pytest.mark.asyncio
async def test_non_normalized_root_is_normalized(tmp_path: Path):
    (tmp_path / "x").mkdir()
    config = ServiceConfig(functions_path=tmp_path / "functions", root_path=f"{tmp_path}/x/..")
    assert config.root_path == tmp_path

    registry = FunctionRegistry(config, VfsResolver("https://host", config.root_path))
    created = await registry.create_or_update("foo", "{}")
    assert created["script_href"] == "https://host/api/vfs/functions/foo/run.js"
    assert [d["name"] for d in await registry.list()] == ["foo"]
