"""Command translation layer for sandbox filesystem operations."""

from sandbox_fs.filesystem.commands import CommandBuilder, CommandSpec, shell_quote
from sandbox_fs.filesystem.operations import SandboxFilesystem
from sandbox_fs.filesystem.policy import PathPolicy

__all__ = [
    "CommandBuilder",
    "CommandSpec",
    "PathPolicy",
    "SandboxFilesystem",
    "shell_quote",
]
