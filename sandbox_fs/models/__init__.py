"""Shared data models for the sandbox-fs application."""

from sandbox_fs.models.filesystem import (
    REQUEST_MODELS,
    CreateDirectoryRequest,
    CreateDirectoryResult,
    DeleteRequest,
    DeleteResult,
    Encoding,
    ExistsRequest,
    ExistsResult,
    FileEntry,
    FileInfoRecord,
    FileInfoRequest,
    FileType,
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

__all__ = [
    "REQUEST_MODELS",
    "CreateDirectoryRequest",
    "CreateDirectoryResult",
    "DeleteRequest",
    "DeleteResult",
    "Encoding",
    "ExecResult",
    "ExistsRequest",
    "ExistsResult",
    "FileEntry",
    "FileInfoRecord",
    "FileInfoRequest",
    "FileType",
    "ListDirectoryRequest",
    "ListDirectoryResult",
    "Operation",
    "OperationRequest",
    "OperationResult",
    "ReadFileRequest",
    "ReadFileResult",
    "WriteFileRequest",
    "WriteFileResult",
]
