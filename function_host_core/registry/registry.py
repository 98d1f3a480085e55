"""
File-system backed registry of function definitions.

Layout under the registry root::

    <root>/function.json          host settings (see host_settings.py)
    <root>/<name>/function.json   function config, stored verbatim
    <root>/<name>/run.js          optional script

``name`` and ``script_href`` are injected on every read and never trusted
from disk.
"""
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, List, Optional, Union

from starlette.concurrency import run_in_threadpool

from function_host_core.core.config import ServiceConfig
from function_host_core.core.exceptions import (
    ConfigParseError,
    FunctionNotFoundError,
    InvalidContentError,
    InvalidFunctionNameError,
    OperationNotImplementedError,
    ScriptNotFoundError,
)
from function_host_core.core.logging import Logger
from function_host_core.core.types import (
    FUNCTIONS_CONFIG_FILE,
    FUNCTIONS_SCRIPT_FILE,
    Document,
    ScriptStream,
)
from function_host_core.utils import fs
from function_host_core.utils.json_document import decode_content, encode_content, parse_document, set_field
from function_host_core.vfs.resolver import VfsResolver

Content = Union[str, bytes]
# Longest single path segment most file systems accept, in bytes.
MAX_NAME_BYTES = 255


def validate_function_name(name: str) -> str:
    """Rejects names that are not exactly one safe directory segment."""
    if not name or name in (".", ".."):
        raise InvalidFunctionNameError(f"Invalid function name: '{name}'")
    if any(sep in name for sep in ("/", "\\", "\x00")):
        raise InvalidFunctionNameError(f"Function name must not contain path separators: '{name}'")
    if len(name.encode("utf-8", "surrogatepass")) > MAX_NAME_BYTES:
        raise InvalidFunctionNameError(f"Function name is longer than {MAX_NAME_BYTES} bytes")
    if name == FUNCTIONS_CONFIG_FILE:
        raise InvalidFunctionNameError(f"'{name}' is reserved for host settings")
    return name


class FunctionRegistry:
    """
    CRUD over function definitions stored as one directory per function.
    Holds no state besides the directory tree; safe to build per request.
    """
    def __init__(self, config: ServiceConfig, resolver: VfsResolver, logger: Optional[Logger] = None) -> None:
        """
        Initializes the registry.

        Args:
            config: Service configuration supplying the registry root.
            resolver: Resolver used to compute each definition's script_href.
            logger: Structured logger; one is created if omitted.
        """
        self.root = Path(config.functions_path)
        self.resolver = resolver
        self.logger = logger or Logger("function_host.registry", config.log_level)

    def _function_dir(self, name: str) -> Path:
        return self.root / validate_function_name(name)

    def get_function_path(self, name: str) -> Path:
        """
        Resolves a function name to its existing directory.

        Raises:
            FunctionNotFoundError: if no such directory exists.
        """
        path = self._function_dir(name)
        if not fs.directory_exists(path):
            raise FunctionNotFoundError(f"Function '{name}' was not found")
        return path

    def script_path(self, function_dir: Path) -> Path:
        return function_dir / FUNCTIONS_SCRIPT_FILE

    async def _read_definition(self, function_dir: Path) -> Document:
        config_path = function_dir / FUNCTIONS_CONFIG_FILE
        if not await run_in_threadpool(fs.file_exists, config_path):
            raise FunctionNotFoundError(f"Function '{function_dir.name}' has no {FUNCTIONS_CONFIG_FILE}")
        try:
            text = await run_in_threadpool(fs.read_text, config_path)
        except FileNotFoundError as e:
            # deleted between the existence check and the read
            raise FunctionNotFoundError(f"Function '{function_dir.name}' was not found") from e
        doc = parse_document(text, source=str(config_path))
        set_field(doc, "name", function_dir.name)
        set_field(doc, "script_href", self.resolver.to_uri(self.script_path(function_dir)))
        return doc

    async def create_or_update(self, name: str, content: Content) -> Document:
        """
        Writes a function's config document, creating its directory if needed.

        Args:
            name: Function name, used as the directory name.
            content: Raw config (JSON object text); persisted verbatim.

        Returns:
            The decorated definition as read back from disk.

        Raises:
            InvalidContentError: if the content is not a UTF-8 JSON object; nothing is written.
        """
        with self.logger.step(f"FunctionRegistry.create_or_update({name})"):
            function_dir = self._function_dir(name)
            text = decode_content(content)
            try:
                parse_document(text, source=name)
            except ConfigParseError as e:
                raise InvalidContentError(str(e)) from e
            await run_in_threadpool(fs.ensure_directory, function_dir)
            await run_in_threadpool(fs.write_text, function_dir / FUNCTIONS_CONFIG_FILE, text)
            return await self._read_definition(function_dir)

    async def get(self, name: str) -> Document:
        with self.logger.step(f"FunctionRegistry.get({name})"):
            function_dir = await run_in_threadpool(self.get_function_path, name)
            return await self._read_definition(function_dir)

    def _configured_directories(self) -> List[Path]:
        return [d for d in fs.list_directories(self.root) if fs.file_exists(d / FUNCTIONS_CONFIG_FILE)]

    async def _get_if_present(self, function_dir: Path) -> Optional[Document]:
        try:
            return await self._read_definition(function_dir)
        except FunctionNotFoundError:
            return None

    async def list(self) -> List[Document]:
        """
        Returns every function whose directory holds a config document.
        Order follows directory enumeration; configless directories are skipped.
        """
        with self.logger.step("FunctionRegistry.list()"):
            candidates = await run_in_threadpool(self._configured_directories)
            results = await asyncio.gather(*(self._get_if_present(d) for d in candidates))
            return [doc for doc in results if doc is not None]

    async def delete(self, name: str) -> None:
        """
        Recursively removes a function directory. Removal errors propagate.
        """
        with self.logger.step(f"FunctionRegistry.delete({name})"):
            function_dir = await run_in_threadpool(self.get_function_path, name)
            await run_in_threadpool(fs.delete_directory, function_dir, False)

    async def get_script(self, name: str) -> ScriptStream:
        """
        Opens the function's script for streaming.

        Raises:
            FunctionNotFoundError: if the function directory is missing.
            ScriptNotFoundError: if no script has been uploaded.
        """
        with self.logger.step(f"FunctionRegistry.get_script({name})"):
            script = self.script_path(await run_in_threadpool(self.get_function_path, name))
            try:
                handle = await run_in_threadpool(fs.open_read_stream, script)
            except FileNotFoundError as e:
                raise ScriptNotFoundError(f"Function '{name}' has no {FUNCTIONS_SCRIPT_FILE}") from e
            return ScriptStream(path=script, handle=handle)

    async def get_script_text(self, name: str) -> str:
        with self.logger.step(f"FunctionRegistry.get_script_text({name})"):
            script = self.script_path(await run_in_threadpool(self.get_function_path, name))
            try:
                return await run_in_threadpool(fs.read_text, script, "replace")
            except FileNotFoundError as e:
                raise ScriptNotFoundError(f"Function '{name}' has no {FUNCTIONS_SCRIPT_FILE}") from e

    async def put_script(self, name: str, content: Content) -> None:
        """Replaces the script of an existing function; bytes are stored unchanged."""
        with self.logger.step(f"FunctionRegistry.put_script({name})"):
            script = self.script_path(await run_in_threadpool(self.get_function_path, name))
            await run_in_threadpool(fs.write_bytes, script, encode_content(content))

    async def run(self, name: str, payload: Any = None) -> Any:
        with self.logger.step(f"FunctionRegistry.run({name})"):
            raise OperationNotImplementedError("Running functions is not implemented")

    async def get_run_status(self, run_id: str) -> Any:
        with self.logger.step(f"FunctionRegistry.get_run_status({run_id})"):
            raise OperationNotImplementedError("Run status tracking is not implemented")
