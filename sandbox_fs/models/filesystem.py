"""Request and result models for sandbox filesystem operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StrictBool
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class Operation(str, Enum):
    READ = "read"
    WRITE = "write"
    LIST = "list"
    CREATE_DIRECTORY = "createDirectory"
    DELETE = "delete"
    EXISTS = "exists"
    FILE_INFO = "fileInfo"


class Encoding(str, Enum):
    UTF8 = "utf8"
    BASE64 = "base64"


class FileType(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"


class OperationRequest(BaseModel):
    """Fields shared by every operation.

    Requests are strict: unknown fields are rejected, and both the wire names
    (``containerId``) and the Python names (``container_id``) are accepted.
    """

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    container_id: str = Field(..., min_length=1)
    path: str = Field(..., min_length=1)


class ReadFileRequest(OperationRequest):
    encoding: Encoding = Encoding.UTF8


class WriteFileRequest(OperationRequest):
    content: str
    encoding: Encoding = Encoding.UTF8
    create_parent_dirs: StrictBool = True


class ListDirectoryRequest(OperationRequest):
    recursive: StrictBool = False


class CreateDirectoryRequest(OperationRequest):
    recursive: StrictBool = True


class DeleteRequest(OperationRequest):
    recursive: StrictBool = False
    force: StrictBool = False


class ExistsRequest(OperationRequest):
    pass


class FileInfoRequest(OperationRequest):
    pass


REQUEST_MODELS: dict[Operation, type[OperationRequest]] = {
    Operation.READ: ReadFileRequest,
    Operation.WRITE: WriteFileRequest,
    Operation.LIST: ListDirectoryRequest,
    Operation.CREATE_DIRECTORY: CreateDirectoryRequest,
    Operation.DELETE: DeleteRequest,
    Operation.EXISTS: ExistsRequest,
    Operation.FILE_INFO: FileInfoRequest,
}


@dataclass(frozen=True)
class FileEntry:
    name: str
    type: FileType
    size: int
    path: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type.value,
            "size": self.size,
            "path": self.path,
        }


@dataclass(frozen=True)
class FileInfoRecord:
    path: str
    name: str
    type: FileType
    size: int
    permissions: str
    owner: str
    group: str
    modified_at: str
    accessed_at: str
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "name": self.name,
            "type": self.type.value,
            "size": self.size,
            "permissions": self.permissions,
            "owner": self.owner,
            "group": self.group,
            "modifiedAt": self.modified_at,
            "accessedAt": self.accessed_at,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class ReadFileResult:
    content: str
    encoding: Encoding

    def to_dict(self) -> dict[str, Any]:
        return {"content": self.content, "encoding": self.encoding.value}


@dataclass(frozen=True)
class WriteFileResult:
    path: str
    bytes_written: int

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "bytesWritten": self.bytes_written}


@dataclass(frozen=True)
class ListDirectoryResult:
    path: str
    entries: list[FileEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "entries": [entry.to_dict() for entry in self.entries],
        }


@dataclass(frozen=True)
class CreateDirectoryResult:
    path: str
    created: bool

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "created": self.created}


@dataclass(frozen=True)
class DeleteResult:
    path: str
    deleted: bool

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "deleted": self.deleted}


@dataclass(frozen=True)
class ExistsResult:
    path: str
    exists: bool
    type: Optional[FileType]

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "exists": self.exists,
            "type": self.type.value if self.type is not None else None,
        }


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    data: T

    def to_dict(self) -> dict[str, Any]:
        return {"data": self.data.to_dict()}
