"""Parsers turning raw sandbox command output into typed results."""

from __future__ import annotations

import base64
import binascii
import re
from typing import Optional

from sandbox_fs.errors import OutputFormatError
from sandbox_fs.filesystem.commands import NOT_FOUND_SENTINEL, sanitize_base64
from sandbox_fs.models.filesystem import Encoding, FileEntry, FileInfoRecord, FileType

_TYPE_CODES = {
    "f": FileType.FILE,
    "d": FileType.DIRECTORY,
    "l": FileType.SYMLINK,
}

_LISTING_LINE = re.compile(r"^(\S)\s+(\d+)\s+(.+)$")

STAT_FIELD_COUNT = 8
NO_BIRTH_TIME = "-"


def parse_file_type(descriptor: str) -> FileType:
    """Classify a ``find -printf %y`` code or a ``stat -c %F`` description.

    Anything unrecognised is ``FileType.OTHER``.
    """
    text = descriptor.strip()
    if len(text) == 1:
        return _TYPE_CODES.get(text, FileType.OTHER)
    lower = text.lower()
    if "regular" in lower:
        return FileType.FILE
    if "directory" in lower:
        return FileType.DIRECTORY
    if "symbolic link" in lower:
        return FileType.SYMLINK
    return FileType.OTHER


def entry_name(path: str) -> str:
    name = path.rsplit("/", 1)[-1]
    return name or path


def parse_exists(stdout: str) -> tuple[bool, Optional[FileType]]:
    output = stdout.strip()
    if output == NOT_FOUND_SENTINEL:
        return False, None
    return True, parse_file_type(output)


def _is_self_entry(entry_path: str, directory: str) -> bool:
    if entry_path == directory:
        return True
    # find echoes the starting point verbatim, so "dir/" stays "dir/"
    stripped = directory.rstrip("/")
    return bool(stripped) and entry_path == stripped


def parse_listing(stdout: str, directory: str) -> list[FileEntry]:
    entries: list[FileEntry] = []
    for line in stdout.split("\n"):
        if not line.strip():
            continue
        match = _LISTING_LINE.match(line)
        if match is None:
            continue
        type_code, size, entry_path = match.groups()
        if _is_self_entry(entry_path, directory):
            continue
        entries.append(
            FileEntry(
                name=entry_name(entry_path),
                type=parse_file_type(type_code),
                size=int(size),
                path=entry_path,
            )
        )
    return entries


def parse_stat(stdout: str, path: str) -> FileInfoRecord:
    output = stdout.strip()
    parts = output.split("|")
    if len(parts) < STAT_FIELD_COUNT:
        raise OutputFormatError(f"Unexpected stat output format: {output}")
    type_text, size_text, permissions, owner, group, mtime, atime, ctime = parts[
        :STAT_FIELD_COUNT
    ]
    try:
        size = int(size_text)
    except ValueError as exc:
        raise OutputFormatError(f"Unexpected stat size field: {size_text}") from exc
    return FileInfoRecord(
        path=path,
        name=entry_name(path),
        type=parse_file_type(type_text),
        size=size,
        permissions=permissions,
        owner=owner,
        group=group,
        modified_at=mtime,
        accessed_at=atime,
        created_at=mtime if ctime == NO_BIRTH_TIME else ctime,
    )


def decoded_length(payload: str) -> int:
    """Byte length of a base64 payload after sanitisation.

    Payloads with broken padding are counted leniently, the way the decoder
    inside the sandbox would consume them.
    """
    cleaned = sanitize_base64(payload).rstrip("=")
    try:
        return len(base64.b64decode(cleaned + "=" * (-len(cleaned) % 4)))
    except binascii.Error:
        return len(cleaned) * 3 // 4


def count_written_bytes(content: str, encoding: Encoding) -> int:
    if encoding is Encoding.UTF8:
        return len(content.encode("utf-8"))
    return decoded_length(content)


def normalize_read_output(stdout: str, encoding: Encoding) -> str:
    """Strip the line wrapping ``base64`` adds; utf8 output is returned as-is."""
    if encoding is Encoding.BASE64:
        return "".join(stdout.split())
    return stdout
