"""
Core type definitions and on-disk constants shared by the registry and API.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO, Dict, Iterator

# Fixed file names; only the enclosing directory varies per function.
FUNCTIONS_CONFIG_FILE = "function.json"
FUNCTIONS_SCRIPT_FILE = "run.js"

SCRIPT_MEDIA_TYPE = "application/javascript"
BUFFER_SIZE = 32 * 1024

# A parsed JSON object, key order preserved.
Document = Dict[str, Any]


@dataclass
class ScriptStream:
    """An open script file handed out in fixed-size chunks."""
    path: Path
    handle: BinaryIO = field(repr=False)
    media_type: str = SCRIPT_MEDIA_TYPE
    chunk_size: int = BUFFER_SIZE

    def iter_bytes(self) -> Iterator[bytes]:
        """Yields the file content and closes the handle when exhausted."""
        try:
            while True:
                chunk = self.handle.read(self.chunk_size)
                if not chunk:
                    break
                yield chunk
        finally:
            self.handle.close()

    def close(self) -> None:
        self.handle.close()
