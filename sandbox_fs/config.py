"""Settings for the sandbox-fs service.

Values come from an optional YAML file, then ``SANDBOX_FS_*`` environment
variables, and are validated by ``Settings``.
"""

from __future__ import annotations

import importlib
import importlib.util
import logging
import os
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from sandbox_fs.filesystem.commands import DEFAULT_TIMEOUTS, CommandBuilder
from sandbox_fs.filesystem.operations import SandboxFilesystem
from sandbox_fs.filesystem.policy import PathPolicy
from sandbox_fs.providers.sandbox import DockerExecutor, LocalExecutor, SandboxExecutor

DEFAULT_CONFIG_PATH = "config/sandbox_fs.yaml"

_ENV_OVERRIDES = {
    "SANDBOX_FS_EXECUTOR": "executor",
    "SANDBOX_FS_LOCAL_DIR": "local_base_dir",
    "SANDBOX_FS_DOCKER_BINARY": "docker_binary",
    "SANDBOX_FS_LOG_LEVEL": "log_level",
}


class Settings(BaseModel):
    executor: Literal["local", "docker"] = "local"
    local_base_dir: Optional[str] = None
    docker_binary: str = "docker"
    docker_user: Optional[str] = None
    allowed_roots: list[str] = Field(default_factory=list)
    max_write_bytes: Optional[int] = Field(None, gt=0)
    timeouts: dict[str, int] = Field(default_factory=dict)
    log_level: str = "INFO"

    @field_validator("timeouts")
    @classmethod
    def known_timeouts(cls, value: dict[str, int]) -> dict[str, int]:
        unknown = sorted(set(value) - set(DEFAULT_TIMEOUTS))
        if unknown:
            raise ValueError(f"Unknown timeout keys: {', '.join(unknown)}")
        if any(timeout <= 0 for timeout in value.values()):
            raise ValueError("Timeouts must be positive")
        return value

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, value: str) -> str:
        return value.upper()


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    yaml_spec = importlib.util.find_spec("yaml")
    if yaml_spec is None:
        raise RuntimeError("PyYAML is required to load sandbox-fs settings.")
    yaml = importlib.import_module("yaml")
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file must contain a mapping: {path}")
    return data


def load_settings(
    config_path: str | None = None, environ: dict[str, str] | None = None
) -> Settings:
    env = os.environ if environ is None else environ
    path = Path(config_path or env.get("SANDBOX_FS_CONFIG") or DEFAULT_CONFIG_PATH)
    data = _load_yaml(path)
    for variable, key in _ENV_OVERRIDES.items():
        value = env.get(variable)
        if value:
            data[key] = value
    return Settings.model_validate(data)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_executor(settings: Settings) -> SandboxExecutor:
    if settings.executor == "docker":
        return DockerExecutor(settings.docker_binary, user=settings.docker_user)
    return LocalExecutor(settings.local_base_dir)


def build_filesystem(
    settings: Settings, executor: SandboxExecutor | None = None
) -> SandboxFilesystem:
    return SandboxFilesystem(
        executor or build_executor(settings),
        builder=CommandBuilder(settings.timeouts),
        policy=PathPolicy(settings.allowed_roots, settings.max_write_bytes),
    )
