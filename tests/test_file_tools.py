"""Tests for the read_file and write_file tools."""

import pytest

from wstools.exceptions import ToolError, ToolErrorKind
from wstools.tools import call_tool, run_tool
from wstools.tools.fs import DEFAULT_MAX_CHARS


def test_write_and_read_file(workspace, ctx):
    """Test writing and reading a file."""
    content = "Hello, workspace!"

    result = call_tool("write_file", {"path": "test.txt", "content": content}, ctx)
    assert result == {"path": "test.txt", "bytes_written": len(content), "mode": "overwrite"}
    assert (workspace / "test.txt").read_text() == content

    read = call_tool("read_file", {"path": "test.txt"}, ctx)
    assert read == {"path": "test.txt", "content": content, "truncated": False}


def test_write_file_creates_directories(workspace, ctx):
    """Writing into a missing directory creates it by default."""
    result = call_tool("write_file", {"path": "out/log.txt", "content": "hello", "create_dirs": True}, ctx)

    assert result["bytes_written"] == 5
    assert (workspace / "out").is_dir()
    assert (workspace / "out" / "log.txt").read_text() == "hello"


def test_write_file_reports_utf8_byte_length(workspace, ctx):
    content = "héllo ✓"
    result = call_tool("write_file", {"path": "utf8.txt", "content": content}, ctx)

    assert result["bytes_written"] == len(content.encode("utf-8"))
    assert result["bytes_written"] > len(content)
    assert (workspace / "utf8.txt").read_text(encoding="utf-8") == content


@pytest.mark.parametrize("first, second", [("a much longer first version", "short"), ("x", "a longer replacement")])
def test_overwrite_leaves_only_latest_content(workspace, ctx, first, second):
    call_tool("write_file", {"path": "doc.txt", "content": first}, ctx)
    call_tool("write_file", {"path": "doc.txt", "content": second, "mode": "overwrite"}, ctx)

    assert (workspace / "doc.txt").read_text() == second


def test_append_accumulates(workspace, ctx):
    call_tool("write_file", {"path": "log.txt", "content": "first\n"}, ctx)
    result = call_tool("write_file", {"path": "log.txt", "content": "second\n", "mode": "append"}, ctx)

    assert result["mode"] == "append"
    assert (workspace / "log.txt").read_text() == "first\nsecond\n"


def test_unknown_mode_falls_back_to_overwrite(workspace, ctx):
    (workspace / "doc.txt").write_text("old content")

    result = call_tool("write_file", {"path": "doc.txt", "content": "new", "mode": "prepend"}, ctx)

    assert result["mode"] == "overwrite"
    assert (workspace / "doc.txt").read_text() == "new"


def test_write_preserves_line_endings(workspace, ctx):
    call_tool("write_file", {"path": "crlf.txt", "content": "a\r\nb\r\n"}, ctx)
    assert (workspace / "crlf.txt").read_bytes() == b"a\r\nb\r\n"


def test_write_without_create_dirs_requires_parent(workspace, ctx):
    with pytest.raises(ToolError, match="parent directory does not exist: missing") as exc_info:
        call_tool("write_file", {"path": "missing/file.txt", "content": "x", "create_dirs": False}, ctx)

    assert exc_info.value.kind == ToolErrorKind.INVALID_INPUT
    assert not (workspace / "missing").exists()


def test_write_without_create_dirs_parent_is_file(workspace, ctx):
    (workspace / "blocker").write_text("not a directory")

    with pytest.raises(ToolError, match="parent path is not a directory: blocker") as exc_info:
        call_tool("write_file", {"path": "blocker/file.txt", "content": "x", "create_dirs": False}, ctx)

    assert exc_info.value.kind == ToolErrorKind.INVALID_INPUT


def test_write_with_create_dirs_parent_is_file(workspace, ctx):
    (workspace / "blocker").write_text("not a directory")

    with pytest.raises(ToolError) as exc_info:
        call_tool("write_file", {"path": "blocker/file.txt", "content": "x"}, ctx)

    assert exc_info.value.kind == ToolErrorKind.INVALID_INPUT


def test_write_without_create_dirs_existing_parent(workspace, ctx):
    (workspace / "docs").mkdir()

    call_tool("write_file", {"path": "docs/a.txt", "content": "x", "create_dirs": False}, ctx)

    assert (workspace / "docs" / "a.txt").read_text() == "x"


def test_write_to_directory_is_rejected(workspace, ctx):
    (workspace / "docs").mkdir()

    with pytest.raises(ToolError, match="path is a directory: docs"):
        call_tool("write_file", {"path": "docs", "content": "x"}, ctx)


@pytest.mark.parametrize("content", [None, 42, ["a"], {"text": "a"}])
def test_write_requires_string_content(ctx, content):
    tool_input = {"path": "a.txt"}
    if content is not None:
        tool_input["content"] = content

    with pytest.raises(ToolError, match="content must be a string") as exc_info:
        call_tool("write_file", tool_input, ctx)

    assert exc_info.value.kind == ToolErrorKind.INVALID_INPUT


def test_write_rejects_unencodable_content(workspace, ctx):
    with pytest.raises(ToolError, match="not valid UTF-8"):
        call_tool("write_file", {"path": "bad.txt", "content": "bad \ud800 surrogate"}, ctx)

    assert not (workspace / "bad.txt").exists()


@pytest.mark.parametrize("path", ["../escape.txt", "/tmp/escape.txt", "a/../../escape.txt", "..\\escape.txt"])
def test_write_outside_workspace_is_rejected(workspace, ctx, path):
    with pytest.raises(ToolError, match="path must") as exc_info:
        call_tool("write_file", {"path": path, "content": "x"}, ctx)

    assert exc_info.value.kind == ToolErrorKind.INVALID_INPUT
    assert not (workspace.parent / "escape.txt").exists()


@pytest.mark.parametrize("path", ["../secret.txt", "/etc/hostname", "notes/../../secret.txt"])
def test_read_outside_workspace_is_rejected(workspace, ctx, path):
    (workspace.parent / "secret.txt").write_text("secret")

    with pytest.raises(ToolError, match="path must") as exc_info:
        call_tool("read_file", {"path": path}, ctx)

    assert exc_info.value.kind == ToolErrorKind.INVALID_INPUT


def test_read_truncates_to_max_chars(workspace, ctx):
    content = "abcdefghij" * 10
    call_tool("write_file", {"path": "long.txt", "content": content}, ctx)

    result = call_tool("read_file", {"path": "long.txt", "max_chars": 25}, ctx)
    assert result["content"] == content[:25]
    assert result["truncated"] is True

    result = call_tool("read_file", {"path": "long.txt", "max_chars": len(content)}, ctx)
    assert result["content"] == content
    assert result["truncated"] is False


def test_read_preserves_line_endings(workspace, ctx):
    (workspace / "crlf.txt").write_bytes(b"a\r\nb\rc")

    result = call_tool("read_file", {"path": "crlf.txt"}, ctx)
    assert result["content"] == "a\r\nb\rc"

    result = call_tool("read_file", {"path": "crlf.txt", "max_chars": 3}, ctx)
    assert result["content"] == "a\r\n"
    assert result["truncated"] is True


def test_read_clamps_max_chars(workspace, ctx):
    (workspace / "a.txt").write_text("abc")

    result = call_tool("read_file", {"path": "a.txt", "max_chars": 0}, ctx)
    assert result["content"] == "a"
    assert result["truncated"] is True

    result = call_tool("read_file", {"path": "a.txt", "max_chars": "not a number"}, ctx)
    assert result["content"] == "abc"


def test_read_default_max_chars(workspace, ctx):
    (workspace / "big.txt").write_text("x" * (DEFAULT_MAX_CHARS + 10))

    result = call_tool("read_file", {"path": "big.txt"}, ctx)

    assert len(result["content"]) == DEFAULT_MAX_CHARS
    assert result["truncated"] is True


def test_read_nonexistent_file(ctx):
    with pytest.raises(ToolError, match="file not found: missing.txt") as exc_info:
        call_tool("read_file", {"path": "missing.txt"}, ctx)

    assert exc_info.value.kind == ToolErrorKind.NOT_FOUND


def test_read_directory_as_file(workspace, ctx):
    (workspace / "subdir").mkdir()

    with pytest.raises(ToolError, match="path is not a file: subdir") as exc_info:
        call_tool("read_file", {"path": "subdir"}, ctx)

    assert exc_info.value.kind == ToolErrorKind.INVALID_INPUT


def test_read_binary_file_is_rejected(workspace, ctx):
    (workspace / "image.bin").write_bytes(b"PNG\x00\x01\x02")

    with pytest.raises(ToolError, match="binary") as exc_info:
        call_tool("read_file", {"path": "image.bin"}, ctx)

    assert exc_info.value.kind == ToolErrorKind.INVALID_INPUT


def test_read_requires_path(ctx):
    result = run_tool("read_file", {}, ctx)

    assert result.ok is False
    assert result.kind == ToolErrorKind.INVALID_INPUT
    assert result.to_dict() == {"ok": False, "error": "path is required"}


@pytest.mark.parametrize("tool_name", ["read_file", "write_file"])
def test_null_byte_in_path_is_invalid_input(ctx, tool_name):
    result = run_tool(tool_name, {"path": "a\x00b", "content": "x"}, ctx)

    assert result.ok is False
    assert result.kind == ToolErrorKind.INVALID_INPUT
    assert result.status_code == 400


def test_error_messages_do_not_leak_absolute_paths(workspace, ctx):
    result = run_tool("read_file", {"path": "nested/missing.txt"}, ctx)

    assert result.error == "file not found: nested/missing.txt"
    assert str(workspace) not in result.error
