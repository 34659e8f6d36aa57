"""Exceptions raised by sandbox filesystem operations."""

from __future__ import annotations


class SandboxFsError(RuntimeError):
    pass


class CommandFailedError(SandboxFsError):
    """A sandbox command exited non-zero."""

    def __init__(self, message: str, path: str, stderr: str, exit_code: int) -> None:
        super().__init__(message)
        self.path = path
        self.stderr = stderr
        self.exit_code = exit_code


class OutputFormatError(SandboxFsError):
    """A sandbox command succeeded but its output had an unexpected shape."""


class PathNotAllowedError(ValueError):
    pass


class PayloadTooLargeError(ValueError):
    pass


class UnknownContainerError(KeyError):
    pass
