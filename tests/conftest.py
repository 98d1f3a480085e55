from pathlib import Path

import pytest

from function_host_core.core.config import ServiceConfig
from function_host_core.registry.host_settings import HostSettingsStore
from function_host_core.registry.registry import FunctionRegistry
from function_host_core.vfs.resolver import VfsResolver

AUTHORITY = "https://fnhost.test"


@pytest.fixture
def functions_root(tmp_path: Path) -> Path:
    root = tmp_path / "functions"
    root.mkdir()
    return root


@pytest.fixture
def config(functions_root: Path) -> ServiceConfig:
    return ServiceConfig(functions_path=functions_root, root_path="/", authority=AUTHORITY)


@pytest.fixture
def resolver(config: ServiceConfig) -> VfsResolver:
    return VfsResolver(AUTHORITY, config.root_path)


@pytest.fixture
def registry(config: ServiceConfig, resolver: VfsResolver) -> FunctionRegistry:
    return FunctionRegistry(config, resolver)


@pytest.fixture
def host_settings(config: ServiceConfig) -> HostSettingsStore:
    return HostSettingsStore(config)
