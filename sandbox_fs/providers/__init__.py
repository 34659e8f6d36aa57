"""Provider package for sandbox executors."""

from sandbox_fs.providers.sandbox import DockerExecutor, LocalExecutor, SandboxExecutor

__all__ = [
    "DockerExecutor",
    "LocalExecutor",
    "SandboxExecutor",
]
