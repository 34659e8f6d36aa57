"""Tests for SandboxFilesystem against a scripted executor."""

import asyncio
import base64

import pytest
from pydantic import ValidationError

from sandbox_fs.errors import (
    CommandFailedError,
    OutputFormatError,
    PathNotAllowedError,
    PayloadTooLargeError,
)
from sandbox_fs.filesystem import PathPolicy, SandboxFilesystem
from sandbox_fs.models.filesystem import (
    Encoding,
    ExistsRequest,
    FileType,
    Operation,
    ReadFileRequest,
    WriteFileRequest,
)
from tests.fakes import ExecCall, RaisingExecutor


@pytest.mark.asyncio
async def test_read_file_returns_stdout(executor):
    executor.queue(stdout="hello\n")
    fs = SandboxFilesystem(executor)
    result = await fs.read_file(ReadFileRequest(container_id="box", path="/a.txt"))
    assert result.data.content == "hello\n"
    assert result.data.encoding is Encoding.UTF8
    assert executor.calls == [ExecCall("box", "cat", ["/a.txt"], 30000)]


@pytest.mark.asyncio
async def test_read_file_failure_raises_with_stderr(executor):
    executor.queue(exit_code=1, stderr="cat: /a.txt: No such file or directory")
    fs = SandboxFilesystem(executor)
    with pytest.raises(CommandFailedError, match="Failed to read file /a.txt: cat:"):
        await fs.read_file(ReadFileRequest(container_id="box", path="/a.txt"))


@pytest.mark.asyncio
async def test_write_file_creates_parent_then_writes(executor):
    fs = SandboxFilesystem(executor)
    result = await fs.write_file(
        WriteFileRequest(container_id="box", path="/w/sub/a.txt", content="hello")
    )
    assert result.data.bytes_written == 5
    assert result.data.path == "/w/sub/a.txt"
    assert executor.calls[0] == ExecCall("box", "mkdir", ["-p", "/w/sub"], 5000)
    payload = base64.b64encode(b"hello").decode()
    assert executor.calls[1] == ExecCall(
        "box", "sh", ["-c", f"echo '{payload}' | base64 -d > '/w/sub/a.txt'"], 30000
    )


@pytest.mark.asyncio
async def test_write_file_base64_counts_decoded_bytes(executor):
    fs = SandboxFilesystem(executor)
    payload = base64.b64encode(b"\x00\x01\x02\x03").decode()
    result = await fs.write_file(
        WriteFileRequest(
            container_id="box",
            path="blob.bin",
            content=payload,
            encoding=Encoding.BASE64,
        )
    )
    assert result.data.bytes_written == 4
    assert len(executor.calls) == 1


@pytest.mark.asyncio
async def test_write_file_parent_failure_stops_write(executor):
    executor.queue(exit_code=1, stderr="mkdir: Permission denied")
    fs = SandboxFilesystem(executor)
    with pytest.raises(CommandFailedError, match="create parent directory /ro"):
        await fs.write_file(WriteFileRequest(container_id="box", path="/ro/a", content="x"))
    assert len(executor.calls) == 1


@pytest.mark.asyncio
async def test_list_directory_excludes_self_entry(executor):
    executor.queue(stdout="d 4096 /w\nf 10 /w/file.txt\nd 4096 /w/sub\n")
    fs = SandboxFilesystem(executor)
    result = await fs.execute("list", {"containerId": "box", "path": "/w"})
    entries = result.data.entries
    assert [(e.name, e.type, e.size) for e in entries] == [
        ("file.txt", FileType.FILE, 10),
        ("sub", FileType.DIRECTORY, 4096),
    ]


@pytest.mark.asyncio
async def test_create_directory_existing_is_not_an_error(executor):
    executor.queue(exit_code=1, stderr="mkdir: cannot create directory '/d': File exists")
    fs = SandboxFilesystem(executor)
    result = await fs.execute(
        Operation.CREATE_DIRECTORY,
        {"containerId": "box", "path": "/d", "recursive": False},
    )
    assert result.data.created is False
    assert executor.calls[0].args == ["/d"]


@pytest.mark.asyncio
async def test_create_directory_other_failures_raise(executor):
    executor.queue(exit_code=1, stderr="mkdir: cannot create directory '/d': Permission denied")
    fs = SandboxFilesystem(executor)
    with pytest.raises(CommandFailedError):
        await fs.execute("createDirectory", {"containerId": "box", "path": "/d"})


@pytest.mark.asyncio
async def test_delete_reports_deleted(executor):
    fs = SandboxFilesystem(executor)
    result = await fs.execute(
        "delete", {"containerId": "box", "path": "/d", "recursive": True, "force": True}
    )
    assert result.to_dict() == {"data": {"path": "/d", "deleted": True}}
    assert executor.calls[0] == ExecCall("box", "rm", ["-r", "-f", "/d"], 30000)


@pytest.mark.asyncio
async def test_exists_not_found(executor):
    executor.queue(stdout="NOT_FOUND\n")
    fs = SandboxFilesystem(executor)
    result = await fs.exists(ExistsRequest(container_id="box", path="/nope"))
    assert result.to_dict() == {"data": {"path": "/nope", "exists": False, "type": None}}


@pytest.mark.asyncio
async def test_exists_regular_file(executor):
    executor.queue(stdout="regular file\n")
    fs = SandboxFilesystem(executor)
    result = await fs.exists(ExistsRequest(container_id="box", path="/a"))
    assert result.data.exists is True
    assert result.data.type is FileType.FILE


@pytest.mark.asyncio
async def test_file_info_wire_shape(executor):
    executor.queue(stdout="directory|4096|drwxr-xr-x|root|root|M|A|-\n")
    fs = SandboxFilesystem(executor)
    result = await fs.execute("fileInfo", {"containerId": "box", "path": "/w/dir"})
    assert result.to_dict()["data"] == {
        "path": "/w/dir",
        "name": "dir",
        "type": "directory",
        "size": 4096,
        "permissions": "drwxr-xr-x",
        "owner": "root",
        "group": "root",
        "modifiedAt": "M",
        "accessedAt": "A",
        "createdAt": "M",
    }


@pytest.mark.asyncio
async def test_file_info_format_error(executor):
    executor.queue(stdout="regular file|1\n")
    fs = SandboxFilesystem(executor)
    with pytest.raises(OutputFormatError):
        await fs.execute("fileInfo", {"containerId": "box", "path": "/a"})


@pytest.mark.asyncio
async def test_execute_rejects_unknown_fields(executor):
    fs = SandboxFilesystem(executor)
    with pytest.raises(ValidationError):
        await fs.execute("read", {"containerId": "box", "path": "/a", "mode": "fast"})
    assert executor.calls == []


@pytest.mark.asyncio
async def test_execute_rejects_empty_path_and_bad_encoding(executor):
    fs = SandboxFilesystem(executor)
    with pytest.raises(ValidationError):
        await fs.execute("read", {"containerId": "box", "path": ""})
    with pytest.raises(ValidationError):
        await fs.execute("read", {"containerId": "box", "path": "/a", "encoding": "latin1"})


@pytest.mark.asyncio
async def test_execute_rejects_unknown_operation(executor):
    fs = SandboxFilesystem(executor)
    with pytest.raises(ValueError):
        await fs.execute("chmod", {"containerId": "box", "path": "/a"})


@pytest.mark.asyncio
async def test_execute_rejects_mismatched_request_model(executor):
    fs = SandboxFilesystem(executor)
    with pytest.raises(TypeError):
        await fs.execute("read", ExistsRequest(container_id="box", path="/a"))


@pytest.mark.asyncio
async def test_policy_blocks_before_dispatch(executor):
    fs = SandboxFilesystem(executor, policy=PathPolicy(["/workspace"], max_write_bytes=3))
    with pytest.raises(PathNotAllowedError):
        await fs.execute("delete", {"containerId": "box", "path": "/workspace/../etc"})
    with pytest.raises(PayloadTooLargeError):
        await fs.execute(
            "write", {"containerId": "box", "path": "/workspace/a", "content": "four"}
        )
    assert executor.calls == []


@pytest.mark.asyncio
async def test_executor_exceptions_propagate():
    fs = SandboxFilesystem(RaisingExecutor(ConnectionError("sandbox unreachable")))
    with pytest.raises(ConnectionError):
        await fs.execute("exists", {"containerId": "box", "path": "/a"})


@pytest.mark.asyncio
async def test_concurrent_operations_do_not_share_state(executor):
    executor.queue(stdout="regular file\n")
    executor.queue(stdout="NOT_FOUND\n")
    fs = SandboxFilesystem(executor)
    first, second = await asyncio.gather(
        fs.execute("exists", {"containerId": "box", "path": "/a"}),
        fs.execute("exists", {"containerId": "box", "path": "/b"}),
    )
    assert first.data.path == "/a"
    assert second.data.path == "/b"
    assert {first.data.exists, second.data.exists} == {True, False}


@pytest.mark.asyncio
@pytest.mark.parametrize("flag", ["yes", "true", 1, 0, None])
async def test_flags_must_be_real_booleans(executor, flag):
    fs = SandboxFilesystem(executor)
    with pytest.raises(ValidationError):
        await fs.execute("delete", {"containerId": "box", "path": "/d", "recursive": flag})
    with pytest.raises(ValidationError):
        await fs.execute(
            "write",
            {"containerId": "box", "path": "/a", "content": "x", "createParentDirs": flag},
        )
    assert executor.calls == []


@pytest.mark.asyncio
async def test_encoding_still_accepts_wire_strings(executor):
    executor.queue(stdout="aGk=\n")
    fs = SandboxFilesystem(executor)
    result = await fs.execute(
        "read", {"containerId": "box", "path": "/a", "encoding": "base64"}
    )
    assert result.data.encoding is Encoding.BASE64
    assert result.data.content == "aGk="
