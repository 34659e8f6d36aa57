from __future__ import annotations

from functools import lru_cache
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from sandbox_fs.config import build_filesystem, configure_logging, load_settings
from sandbox_fs.errors import (
    PathNotAllowedError,
    PayloadTooLargeError,
    SandboxFsError,
    UnknownContainerError,
)
from sandbox_fs.filesystem import SandboxFilesystem
from sandbox_fs.models.filesystem import Operation

app = FastAPI(title="sandbox-fs")


@lru_cache(maxsize=1)
def get_filesystem() -> SandboxFilesystem:
    settings = load_settings()
    configure_logging(settings)
    return build_filesystem(settings)


@app.get("/health")
def health_check() -> dict:
    return {"status": "ok"}


@app.post("/fs/{operation}")
async def run_operation(
    operation: str,
    payload: dict[str, Any] = Body(...),
    filesystem: SandboxFilesystem = Depends(get_filesystem),
) -> dict:
    try:
        op = Operation(operation)
    except ValueError:
        raise HTTPException(
            status_code=404, detail=f"Unknown operation: {operation}"
        ) from None
    try:
        result = await filesystem.execute(op, payload)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc
    except PathNotAllowedError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    except PayloadTooLargeError as exc:
        raise HTTPException(status_code=413, detail=str(exc)) from exc
    except UnknownContainerError as exc:
        raise HTTPException(status_code=404, detail=exc.args[0]) from exc
    except SandboxFsError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return result.to_dict()
