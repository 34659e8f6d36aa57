"""Mapping of sandbox exit codes and stderr onto success or failure."""

from __future__ import annotations

import logging

from sandbox_fs.errors import CommandFailedError
from sandbox_fs.models.sandbox import ExecResult

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "Unknown error"
ALREADY_EXISTS_MARKER = "File exists"


def command_failure(result: ExecResult, action: str, path: str) -> CommandFailedError:
    message = f"Failed to {action} {path}: {result.stderr or UNKNOWN_ERROR}"
    logger.warning(
        "Sandbox command failed (exit=%s, timed_out=%s): %s",
        result.exit_code,
        result.timed_out,
        message,
    )
    return CommandFailedError(
        message, path=path, stderr=result.stderr, exit_code=result.exit_code
    )


def ensure_success(result: ExecResult, action: str, path: str) -> ExecResult:
    if not result.success:
        raise command_failure(result, action, path)
    return result


def directory_created(result: ExecResult, path: str) -> bool:
    """True when mkdir created ``path``, False when it was already there."""
    if result.success:
        return True
    if not result.timed_out and ALREADY_EXISTS_MARKER in result.stderr:
        logger.debug("Directory already exists: %s", path)
        return False
    raise command_failure(result, "create directory", path)
