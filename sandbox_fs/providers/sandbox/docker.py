"""Docker sandbox executor backed by the docker CLI."""

from __future__ import annotations

from typing import Sequence

from sandbox_fs.models.sandbox import ExecResult
from sandbox_fs.providers.sandbox.base import SandboxExecutor
from sandbox_fs.providers.sandbox.process import run_process


class DockerExecutor(SandboxExecutor):
    def __init__(self, docker_binary: str = "docker", user: str | None = None) -> None:
        self._docker_binary = docker_binary
        self._user = user

    def build_argv(
        self, container_id: str, executable: str, args: Sequence[str]
    ) -> list[str]:
        argv = [self._docker_binary, "exec"]
        if self._user:
            argv.extend(["--user", self._user])
        argv.extend([container_id, executable, *args])
        return argv

    async def exec(
        self,
        container_id: str,
        executable: str,
        args: Sequence[str],
        timeout_ms: int,
    ) -> ExecResult:
        return await run_process(
            self.build_argv(container_id, executable, args), timeout_ms
        )
