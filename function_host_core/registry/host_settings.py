"""
Host settings: one JSON document at the registry root, beside the function
directories.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from starlette.concurrency import run_in_threadpool

from function_host_core.core.config import ServiceConfig
from function_host_core.core.exceptions import HostSettingsNotFoundError
from function_host_core.core.logging import Logger
from function_host_core.core.types import FUNCTIONS_CONFIG_FILE
from function_host_core.utils import fs
from function_host_core.utils.json_document import decode_content, parse_json


class HostSettingsStore:
    """
    Reads and replaces the host-wide settings document.
    """
    def __init__(self, config: ServiceConfig, logger: Optional[Logger] = None) -> None:
        self.root = Path(config.functions_path)
        self.path = self.root / FUNCTIONS_CONFIG_FILE
        self.logger = logger or Logger("function_host.host_settings", config.log_level)

    async def get(self) -> Any:
        """
        Returns the parsed settings, whatever JSON value they hold.

        Raises:
            HostSettingsNotFoundError: if nothing has been written yet.
            ConfigParseError: if the stored document is not JSON.
        """
        with self.logger.step("HostSettingsStore.get()"):
            try:
                text = await run_in_threadpool(fs.read_text, self.path)
            except FileNotFoundError as e:
                raise HostSettingsNotFoundError("Host settings have not been set") from e
            return parse_json(text, source=str(self.path))

    async def put(self, content: Union[str, bytes]) -> None:
        """Overwrites the settings document, creating the registry root if needed.

        Raises InvalidContentError for bodies that are not UTF-8.
        """
        with self.logger.step("HostSettingsStore.put()"):
            text = decode_content(content)
            await run_in_threadpool(fs.ensure_directory, self.root)
            await run_in_threadpool(fs.write_text, self.path, text)
