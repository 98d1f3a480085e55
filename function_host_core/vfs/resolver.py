"""
Maps on-disk paths under the service root to /api/vfs URIs and back.
"""
from pathlib import Path
from typing import Union
from urllib.parse import quote, unquote

from function_host_core.core.exceptions import PathOutsideRootError

VFS_PREFIX = "/api/vfs/"


def _normalize(path: Union[str, Path]) -> str:
    return str(path).replace("\\", "/")


class VfsResolver:
    """
    Rewrites absolute file paths into externally addressable VFS URIs.
    """
    def __init__(self, authority: str, root_path: Union[str, Path]) -> None:
        """
        Initializes the resolver.

        Args:
            authority: Scheme and host of the service, e.g. "https://example.net".
            root_path: Absolute service root; every resolved path must lie under it.
        """
        self.authority = authority.rstrip("/")
        self._root = _normalize(root_path).rstrip("/")

    def relative_path(self, path: Union[str, Path]) -> str:
        """
        Strips the root prefix from an absolute path.

        Args:
            path: Absolute path under the service root.

        Returns:
            The forward-slash relative path with no leading or trailing separator.
        """
        normalized = _normalize(path)
        if self._root:
            if normalized != self._root and not normalized.startswith(self._root + "/"):
                raise PathOutsideRootError(f"'{path}' is not under the service root '{self._root}'")
        elif not normalized.startswith("/"):
            raise PathOutsideRootError(f"'{path}' is not an absolute path")
        return normalized[len(self._root):].strip("/")

    def to_uri(self, path: Union[str, Path]) -> str:
        """Returns '{authority}/api/vfs/{relative path}' for ``path``."""
        return f"{self.authority}{VFS_PREFIX}{quote(self.relative_path(path), safe='/')}"

    def to_path(self, uri: str) -> str:
        """
        Inverse of to_uri: recovers the absolute path, with forward slashes.

        Args:
            uri: A URI previously produced by this resolver.
        """
        prefix = self.authority + VFS_PREFIX
        if not uri.startswith(prefix):
            raise PathOutsideRootError(f"'{uri}' is not a VFS URI of '{self.authority}'")
        relative = unquote(uri[len(prefix):]).strip("/")
        if not relative:
            return self._root or "/"
        return f"{self._root}/{relative}"
