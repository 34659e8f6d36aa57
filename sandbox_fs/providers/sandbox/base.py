"""Sandbox executor interface."""

from __future__ import annotations

from typing import Protocol, Sequence

from sandbox_fs.models.sandbox import ExecResult

TIMEOUT_EXIT_CODE = 124


class SandboxExecutor(Protocol):
    async def exec(
        self,
        container_id: str,
        executable: str,
        args: Sequence[str],
        timeout_ms: int,
    ) -> ExecResult:
        ...
