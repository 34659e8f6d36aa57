"""Filesystem operations executed inside isolated sandboxes."""

from sandbox_fs.filesystem import SandboxFilesystem
from sandbox_fs.models import Operation, OperationResult

__all__ = ["Operation", "OperationResult", "SandboxFilesystem"]
