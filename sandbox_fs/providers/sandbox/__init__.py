"""Sandbox executor implementations and interfaces."""

from sandbox_fs.providers.sandbox.base import SandboxExecutor
from sandbox_fs.providers.sandbox.docker import DockerExecutor
from sandbox_fs.providers.sandbox.local import LocalExecutor

__all__ = ["DockerExecutor", "LocalExecutor", "SandboxExecutor"]
