"""JSON document helpers for caller-defined configuration."""
from __future__ import annotations

import json
from typing import Any

from function_host_core.core.exceptions import ConfigParseError, InvalidContentError
from function_host_core.core.types import Document


def parse_json(text: str, source: str = "<document>") -> Any:
    """Parse ``text`` as any JSON value; ConfigParseError if it is not JSON."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"{source}: invalid JSON ({e.msg} at line {e.lineno})") from e


def parse_document(text: str, source: str = "<document>") -> Document:
    """Parse ``text`` into an ordered mapping.

    Raises ConfigParseError for invalid JSON or a non-object top level value.
    """
    value = parse_json(text, source)
    if not isinstance(value, dict):
        raise ConfigParseError(f"{source}: expected a JSON object, got {type(value).__name__}")
    return value


def get_field(doc: Document, key: str, default: Any = None) -> Any:
    return doc.get(key, default)


def set_field(doc: Document, key: str, value: Any) -> Document:
    doc[key] = value
    return doc


def decode_content(content: Any) -> str:
    """Request bodies arrive as bytes or str; stored documents are UTF-8 text."""
    if isinstance(content, (bytes, bytearray)):
        try:
            return bytes(content).decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidContentError(f"Document is not valid UTF-8 (byte {e.start})") from e
    return str(content)


def encode_content(content: Any) -> bytes:
    """Scripts are stored byte for byte; text is written as UTF-8."""
    if isinstance(content, (bytes, bytearray)):
        return bytes(content)
    return str(content).encode("utf-8")
