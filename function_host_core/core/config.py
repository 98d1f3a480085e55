"""
Configuration loading utilities.
Settings come from an optional YAML file, then FNHOST_* environment overrides.
"""
import os
from pathlib import Path, PurePath
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from function_host_core.core.exceptions import ConfigurationError

ENV_PREFIX = "FNHOST_"
ENV_KEYS = ("functions_path", "root_path", "authority", "log_level")


class ServiceConfig(BaseModel):
    """
    Paths and addressing for one function host.
    Passed explicitly to the registry, host settings store and VFS resolver.
    """
    functions_path: Path = Field(..., description="Registry root holding one directory per function.")
    root_path: Path = Field(Path("/"), description="Service root the /api/vfs namespace is rooted at.")
    authority: Optional[str] = Field(None, description="Fixed base URL; derived from the request when unset.")
    log_level: str = Field("INFO", description="Level for the JSON lines logger.")

    @field_validator("functions_path", "root_path")
    @classmethod
    def _absolute_path(cls, value: Path) -> Path:
        # the resolver compares these as plain strings
        return Path(os.path.abspath(value))

    @field_validator("authority")
    @classmethod
    def _strip_authority(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.rstrip("/") or None

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @model_validator(mode="after")
    def _functions_under_root(self) -> "ServiceConfig":
        functions = PurePath(self.functions_path)
        root = PurePath(self.root_path)
        if functions != root and root not in functions.parents:
            raise ValueError(f"functions_path '{functions}' is not under root_path '{root}'")
        return self


class ConfigLoader:
    """
    Loads the service configuration from YAML and the environment.
    """
    def __init__(self, path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> None:
        """
        Initializes the loader.

        Args:
            path: Optional path to a YAML configuration file.
            environ: Environment mapping to read overrides from; defaults to os.environ.
        """
        self._path = path
        self._environ = os.environ if environ is None else environ

    def load_file(self) -> Dict[str, Any]:
        """
        Loads and parses the YAML configuration file.

        Returns:
            A dictionary of raw settings, empty if no file was given.
        """
        if not self._path:
            return {}
        try:
            with open(self._path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise ConfigurationError(f"Configuration file was not found: {e.filename}") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Configuration file is not valid YAML: {e}") from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration file must contain a mapping.")
        return data

    def load_env(self) -> Dict[str, Any]:
        """Returns the FNHOST_* overrides present in the environment."""
        overrides = {}
        for key in ENV_KEYS:
            value = self._environ.get(ENV_PREFIX + key.upper())
            if value:
                overrides[key] = value
        return overrides

    def load(self, **overrides: Any) -> ServiceConfig:
        """
        Builds the validated configuration.

        Args:
            **overrides: Explicit values (e.g. from CLI flags) that win over file and environment.

        Returns:
            A ServiceConfig instance.
        """
        raw = self.load_file()
        raw.update(self.load_env())
        raw.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return ServiceConfig(**raw)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
