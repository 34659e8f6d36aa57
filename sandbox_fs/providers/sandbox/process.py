"""Subprocess helper shared by the bundled executors."""

from __future__ import annotations

import asyncio
import logging
import os
import signal
import time
from pathlib import Path
from typing import Sequence

from sandbox_fs.models.sandbox import ExecResult
from sandbox_fs.providers.sandbox.base import TIMEOUT_EXIT_CODE

logger = logging.getLogger(__name__)


async def run_process(
    argv: Sequence[str],
    timeout_ms: int,
    cwd: Path | None = None,
    env: dict[str, str] | None = None,
) -> ExecResult:
    """Run ``argv`` to completion, killing it once ``timeout_ms`` elapses."""
    logger.debug("Running %s (timeout=%sms, cwd=%s)", list(argv), timeout_ms, cwd)
    start = time.monotonic()
    process = await asyncio.create_subprocess_exec(
        *argv,
        cwd=cwd,
        env=env,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        start_new_session=True,
    )
    try:
        stdout, stderr = await asyncio.wait_for(
            process.communicate(), timeout=timeout_ms / 1000
        )
    except asyncio.TimeoutError:
        _kill_group(process)
        await process.wait()
        duration_ms = int((time.monotonic() - start) * 1000)
        logger.warning("Command timed out after %sms: %s", timeout_ms, argv[0])
        return ExecResult(
            exit_code=TIMEOUT_EXIT_CODE,
            stdout="",
            stderr=f"Command timed out after {timeout_ms}ms",
            duration_ms=duration_ms,
            timed_out=True,
        )
    duration_ms = int((time.monotonic() - start) * 1000)
    return ExecResult(
        exit_code=process.returncode if process.returncode is not None else -1,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
        duration_ms=duration_ms,
    )


def _kill_group(process: asyncio.subprocess.Process) -> None:
    """Kill the child and everything it spawned, e.g. the tools behind ``sh -c``."""
    try:
        os.killpg(process.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass
