"""Filesystem operations executed inside a sandbox."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Mapping

from sandbox_fs.filesystem.commands import CommandBuilder, CommandSpec
from sandbox_fs.filesystem.parsers import (
    count_written_bytes,
    normalize_read_output,
    parse_exists,
    parse_listing,
    parse_stat,
)
from sandbox_fs.filesystem.policy import PathPolicy
from sandbox_fs.filesystem.results import directory_created, ensure_success
from sandbox_fs.models.filesystem import (
    REQUEST_MODELS,
    CreateDirectoryRequest,
    CreateDirectoryResult,
    DeleteRequest,
    DeleteResult,
    ExistsRequest,
    ExistsResult,
    FileInfoRecord,
    FileInfoRequest,
    ListDirectoryRequest,
    ListDirectoryResult,
    Operation,
    OperationRequest,
    OperationResult,
    ReadFileRequest,
    ReadFileResult,
    WriteFileRequest,
    WriteFileResult,
)
from sandbox_fs.models.sandbox import ExecResult
from sandbox_fs.providers.sandbox.base import SandboxExecutor

logger = logging.getLogger(__name__)


class SandboxFilesystem:
    """Seven filesystem verbs, each one command round trip to the sandbox.

    Instances hold no per-call state, so a single instance can serve
    concurrent requests.
    """

    def __init__(
        self,
        executor: SandboxExecutor,
        builder: CommandBuilder | None = None,
        policy: PathPolicy | None = None,
    ) -> None:
        self._executor = executor
        self._builder = builder or CommandBuilder()
        self._policy = policy or PathPolicy()
        self._handlers: dict[Operation, Callable[[Any], Awaitable[OperationResult[Any]]]] = {
            Operation.READ: self.read_file,
            Operation.WRITE: self.write_file,
            Operation.LIST: self.list_directory,
            Operation.CREATE_DIRECTORY: self.create_directory,
            Operation.DELETE: self.delete,
            Operation.EXISTS: self.exists,
            Operation.FILE_INFO: self.file_info,
        }

    async def execute(
        self,
        operation: Operation | str,
        request: OperationRequest | Mapping[str, Any],
    ) -> OperationResult[Any]:
        """Validate ``request`` for ``operation`` and run it.

        Raw mappings are validated against the operation's request model, so
        unknown fields raise ``pydantic.ValidationError``.
        """
        operation = Operation(operation)
        model = REQUEST_MODELS[operation]
        if not isinstance(request, model):
            if isinstance(request, OperationRequest):
                raise TypeError(
                    f"{type(request).__name__} is not a request for {operation.value}"
                )
            request = model.model_validate(request)
        return await self._handlers[operation](request)

    async def _run(self, container_id: str, command: CommandSpec) -> ExecResult:
        logger.debug(
            "Dispatching %s %s to %s", command.executable, command.args, container_id
        )
        return await self._executor.exec(
            container_id, command.executable, list(command.args), command.timeout_ms
        )

    async def read_file(self, request: ReadFileRequest) -> OperationResult[ReadFileResult]:
        self._policy.check_path(request.path)
        result = await self._run(request.container_id, self._builder.read(request))
        ensure_success(result, "read file", request.path)
        content = normalize_read_output(result.stdout, request.encoding)
        return OperationResult(ReadFileResult(content=content, encoding=request.encoding))

    async def write_file(
        self, request: WriteFileRequest
    ) -> OperationResult[WriteFileResult]:
        self._policy.check_path(request.path)
        bytes_written = count_written_bytes(request.content, request.encoding)
        self._policy.check_write_size(request.path, bytes_written)

        parent_command = self._builder.write_parent(request)
        if parent_command is not None:
            parent = parent_command.args[-1]
            result = await self._run(request.container_id, parent_command)
            ensure_success(result, "create parent directory", parent)

        result = await self._run(request.container_id, self._builder.write(request))
        ensure_success(result, "write file", request.path)
        return OperationResult(
            WriteFileResult(path=request.path, bytes_written=bytes_written)
        )

    async def list_directory(
        self, request: ListDirectoryRequest
    ) -> OperationResult[ListDirectoryResult]:
        self._policy.check_path(request.path)
        result = await self._run(request.container_id, self._builder.list_directory(request))
        ensure_success(result, "list directory", request.path)
        entries = parse_listing(result.stdout, request.path)
        return OperationResult(ListDirectoryResult(path=request.path, entries=entries))

    async def create_directory(
        self, request: CreateDirectoryRequest
    ) -> OperationResult[CreateDirectoryResult]:
        self._policy.check_path(request.path)
        result = await self._run(
            request.container_id, self._builder.create_directory(request)
        )
        created = directory_created(result, request.path)
        return OperationResult(CreateDirectoryResult(path=request.path, created=created))

    async def delete(self, request: DeleteRequest) -> OperationResult[DeleteResult]:
        self._policy.check_path(request.path)
        result = await self._run(request.container_id, self._builder.delete(request))
        ensure_success(result, "delete", request.path)
        return OperationResult(DeleteResult(path=request.path, deleted=True))

    async def exists(self, request: ExistsRequest) -> OperationResult[ExistsResult]:
        self._policy.check_path(request.path)
        result = await self._run(request.container_id, self._builder.exists(request))
        ensure_success(result, "check existence of", request.path)
        found, file_type = parse_exists(result.stdout)
        return OperationResult(
            ExistsResult(path=request.path, exists=found, type=file_type)
        )

    async def file_info(
        self, request: FileInfoRequest
    ) -> OperationResult[FileInfoRecord]:
        self._policy.check_path(request.path)
        result = await self._run(request.container_id, self._builder.file_info(request))
        ensure_success(result, "get file info for", request.path)
        return OperationResult(parse_stat(result.stdout, request.path))
