"""Command construction for sandbox filesystem operations.

Every operation becomes a ``CommandSpec``: an executable, a discrete argument
vector and a timeout. Only three operations need a shell (write, list,
exists) and those build their script through ``shell_quote``; everything else
passes the path as its own argument.
"""

from __future__ import annotations

from dataclasses import dataclass
import base64
import posixpath
import re

from sandbox_fs.models.filesystem import (
    CreateDirectoryRequest,
    DeleteRequest,
    Encoding,
    ExistsRequest,
    FileInfoRequest,
    ListDirectoryRequest,
    ReadFileRequest,
    WriteFileRequest,
)

WRITE_PARENT_TIMEOUT_MS = 5000
EXISTS_TIMEOUT_MS = 10000
CREATE_DIRECTORY_TIMEOUT_MS = 10000
FILE_INFO_TIMEOUT_MS = 10000
READ_TIMEOUT_MS = 30000
WRITE_TIMEOUT_MS = 30000
DELETE_TIMEOUT_MS = 30000
LIST_TIMEOUT_MS = 30000

DEFAULT_TIMEOUTS: dict[str, int] = {
    "read": READ_TIMEOUT_MS,
    "write": WRITE_TIMEOUT_MS,
    "write_parent": WRITE_PARENT_TIMEOUT_MS,
    "list": LIST_TIMEOUT_MS,
    "create_directory": CREATE_DIRECTORY_TIMEOUT_MS,
    "delete": DELETE_TIMEOUT_MS,
    "exists": EXISTS_TIMEOUT_MS,
    "file_info": FILE_INFO_TIMEOUT_MS,
}

NOT_FOUND_SENTINEL = "NOT_FOUND"
LISTING_FORMAT = "%y %s %p\\n"
STAT_FORMAT = "%F|%s|%A|%U|%G|%y|%x|%w"

_NON_BASE64 = re.compile(r"[^A-Za-z0-9+/=]")


@dataclass(frozen=True)
class CommandSpec:
    executable: str
    args: tuple[str, ...]
    timeout_ms: int


def shell_quote(value: str) -> str:
    """Wrap ``value`` in single quotes, escaping embedded quotes as ``'\\''``."""
    return "'" + value.replace("'", "'\\''") + "'"


def sanitize_base64(content: str) -> str:
    return _NON_BASE64.sub("", content)


def encode_content(content: str, encoding: Encoding) -> str:
    """Return the base64 payload that will be decoded into the target file."""
    if encoding is Encoding.UTF8:
        return base64.b64encode(content.encode("utf-8")).decode("ascii")
    return sanitize_base64(content)


def parent_directory(path: str) -> str | None:
    """Parent directory to create before a write, or None when there is none."""
    parent = posixpath.dirname(path)
    if parent in ("", "/", "."):
        return None
    return parent


class CommandBuilder:
    def __init__(self, timeouts: dict[str, int] | None = None) -> None:
        self._timeouts = dict(DEFAULT_TIMEOUTS)
        if timeouts:
            self._timeouts.update(timeouts)

    def timeout(self, step: str) -> int:
        return self._timeouts[step]

    def read(self, request: ReadFileRequest) -> CommandSpec:
        executable = "base64" if request.encoding is Encoding.BASE64 else "cat"
        return CommandSpec(executable, (request.path,), self.timeout("read"))

    def write_parent(self, request: WriteFileRequest) -> CommandSpec | None:
        if not request.create_parent_dirs:
            return None
        parent = parent_directory(request.path)
        if parent is None:
            return None
        return CommandSpec("mkdir", ("-p", parent), self.timeout("write_parent"))

    def write(self, request: WriteFileRequest) -> CommandSpec:
        payload = encode_content(request.content, request.encoding)
        script = f"echo '{payload}' | base64 -d > {shell_quote(request.path)}"
        return CommandSpec("sh", ("-c", script), self.timeout("write"))

    def list_directory(self, request: ListDirectoryRequest) -> CommandSpec:
        depth = "" if request.recursive else " -maxdepth 1"
        script = f"find {shell_quote(request.path)}{depth} -printf '{LISTING_FORMAT}'"
        return CommandSpec("sh", ("-c", script), self.timeout("list"))

    def create_directory(self, request: CreateDirectoryRequest) -> CommandSpec:
        args = ("-p", request.path) if request.recursive else (request.path,)
        return CommandSpec("mkdir", args, self.timeout("create_directory"))

    def delete(self, request: DeleteRequest) -> CommandSpec:
        args: list[str] = []
        if request.recursive:
            args.append("-r")
        if request.force:
            args.append("-f")
        args.append(request.path)
        return CommandSpec("rm", tuple(args), self.timeout("delete"))

    def exists(self, request: ExistsRequest) -> CommandSpec:
        script = (
            f"if [ -e {shell_quote(request.path)} ]; "
            f"then stat -c '%F' {shell_quote(request.path)}; "
            f"else echo '{NOT_FOUND_SENTINEL}'; fi"
        )
        return CommandSpec("sh", ("-c", script), self.timeout("exists"))

    def file_info(self, request: FileInfoRequest) -> CommandSpec:
        return CommandSpec(
            "stat", ("-c", STAT_FORMAT, request.path), self.timeout("file_info")
        )
