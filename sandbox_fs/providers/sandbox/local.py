"""Local sandbox executor implementation."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
import shutil
import tempfile
from typing import Sequence
from uuid import uuid4

from sandbox_fs.errors import UnknownContainerError
from sandbox_fs.models.sandbox import ExecResult
from sandbox_fs.providers.sandbox.base import SandboxExecutor
from sandbox_fs.providers.sandbox.process import run_process

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _SandboxRecord:
    sandbox_id: str
    root: Path


class LocalExecutor(SandboxExecutor):
    """Runs commands on the host, one directory per sandbox.

    The sandbox root is only the working directory of each command; it is not
    an isolation boundary. Use ``PathPolicy`` to confine paths.
    """

    def __init__(
        self, base_dir: str | None = None, env: dict[str, str] | None = None
    ) -> None:
        self._base_dir = Path(base_dir) if base_dir else Path(
            tempfile.mkdtemp(prefix="sandbox-fs-local-")
        )
        self._env = env
        self._sandboxes: dict[str, _SandboxRecord] = {}

    def create_sandbox(self, name: str) -> str:
        sandbox_id = f"{name}-{uuid4().hex[:8]}"
        root = self._base_dir / sandbox_id
        root.mkdir(parents=True, exist_ok=False)
        self._sandboxes[sandbox_id] = _SandboxRecord(sandbox_id=sandbox_id, root=root)
        logger.info("Created local sandbox %s at %s", sandbox_id, root)
        return sandbox_id

    def delete_sandbox(self, sandbox_id: str) -> None:
        record = self._get_record(sandbox_id)
        shutil.rmtree(record.root, ignore_errors=True)
        self._sandboxes.pop(sandbox_id, None)
        logger.info("Deleted local sandbox %s", sandbox_id)

    def sandbox_root(self, sandbox_id: str) -> Path:
        return self._get_record(sandbox_id).root

    async def exec(
        self,
        container_id: str,
        executable: str,
        args: Sequence[str],
        timeout_ms: int,
    ) -> ExecResult:
        root = self._get_record(container_id).root
        return await run_process(
            [executable, *args],
            timeout_ms,
            cwd=root,
            env=self._merge_env(self._env),
        )

    def _get_record(self, sandbox_id: str) -> _SandboxRecord:
        record = self._sandboxes.get(sandbox_id)
        if record is not None:
            return record
        # directories created outside this process are adopted on first use
        if sandbox_id in ("", ".", "..") or "/" in sandbox_id or "\x00" in sandbox_id:
            raise UnknownContainerError(f"Unknown sandbox id: {sandbox_id}")
        root = self._base_dir / sandbox_id
        if not root.is_dir():
            raise UnknownContainerError(f"Unknown sandbox id: {sandbox_id}")
        record = _SandboxRecord(sandbox_id=sandbox_id, root=root)
        self._sandboxes[sandbox_id] = record
        logger.info("Adopted local sandbox %s at %s", sandbox_id, root)
        return record

    def _merge_env(self, env: dict[str, str] | None) -> dict[str, str]:
        merged = os.environ.copy()
        if env:
            merged.update(env)
        return merged
