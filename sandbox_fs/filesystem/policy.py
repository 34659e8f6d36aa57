"""Path and payload checks applied before a command reaches the sandbox."""

from __future__ import annotations

import posixpath
from typing import Sequence

from sandbox_fs.errors import PathNotAllowedError, PayloadTooLargeError


class PathPolicy:
    """Optional allowlist of path roots plus an optional write size cap.

    With no roots configured every path is accepted unless it holds a NUL
    byte or starts with "-".
    """

    def __init__(
        self,
        allowed_roots: Sequence[str] | None = None,
        max_write_bytes: int | None = None,
    ) -> None:
        self._roots = [self._normalize(root) for root in allowed_roots or ()]
        self._max_write_bytes = max_write_bytes

    @staticmethod
    def _normalize(path: str) -> str:
        return posixpath.normpath(path)

    def check_path(self, path: str) -> None:
        if "\x00" in path:
            raise PathNotAllowedError(f"Path contains a NUL byte: {path!r}")
        if path.startswith("-"):
            # would be parsed as an option by find, rm, cat and stat
            raise PathNotAllowedError(f"Path must not start with '-': {path}")
        if not self._roots:
            return
        normalized = self._normalize(path)
        for root in self._roots:
            if normalized == root:
                return
            prefix = root if root.endswith("/") else f"{root}/"
            if normalized.startswith(prefix):
                return
        raise PathNotAllowedError(f"Path is outside the allowed roots: {path}")

    def check_write_size(self, path: str, size: int) -> None:
        if self._max_write_bytes is not None and size > self._max_write_bytes:
            raise PayloadTooLargeError(
                f"Refusing to write {size} bytes to {path}: "
                f"limit is {self._max_write_bytes}"
            )
