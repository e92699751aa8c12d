"""File read/write tools bounded to the workspace."""

import logging
from typing import Any, Dict

from ..models import ToolContext
from ..tools import tool
from ..utils import clamp_int, internal_error, invalid_input_error, not_found_error
from .paths import resolve_workspace_path

logger = logging.getLogger(__name__)

DEFAULT_MAX_CHARS = 40_000
MAX_CHARS_LIMIT = 500_000

WRITE_MODES = ("overwrite", "append")

READ_FILE_SCHEMA = {
    "type": "object",
    "properties": {
        "path": {"type": "string", "description": "Relative path within workspace"},
        "max_chars": {
            "type": "integer",
            "description": f"Max chars to return (default {DEFAULT_MAX_CHARS})",
            "default": DEFAULT_MAX_CHARS,
        },
    },
    "required": ["path"],
}

WRITE_FILE_SCHEMA = {
    "type": "object",
    "properties": {
        "path": {"type": "string", "description": "Relative path within workspace"},
        "content": {"type": "string", "description": "Full file content to write"},
        "mode": {"type": "string", "enum": list(WRITE_MODES), "default": "overwrite"},
        "create_dirs": {"type": "boolean", "default": True},
    },
    "required": ["path", "content"],
}


def _parent_label(relative_path: str) -> str:
    parent = relative_path.rpartition("/")[0]
    return parent or "."


@tool(name="read_file", purpose="Read a text file from the workspace.", input_schema=READ_FILE_SCHEMA)
def read_file(tool_input: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    """Read a text file, returning at most ``max_chars`` characters.

    Args:
        tool_input: ``{"path": str, "max_chars": int}``
        ctx: Tool context

    Returns:
        ``{"path", "content", "truncated"}``

    Raises:
        ToolError: NOT_FOUND if the file is missing, INVALID_INPUT for
            directories and binary content, INTERNAL if reading fails
    """
    relative_path, file_path = resolve_workspace_path(tool_input.get("path"), ctx.workspace_root)
    max_chars = clamp_int(tool_input.get("max_chars"), DEFAULT_MAX_CHARS, 1, MAX_CHARS_LIMIT)

    try:
        stats = file_path.stat()
    except OSError:
        raise not_found_error(f"file not found: {relative_path}") from None

    if not file_path.is_file():
        raise invalid_input_error(f"path is not a file: {relative_path}")

    try:
        # newline="" keeps \r\n and \r as they are on disk
        with open(file_path, "r", encoding="utf-8", errors="replace", newline="") as f:
            content = f.read()
    except OSError as e:
        raise internal_error(f"failed to read file: {relative_path}") from e

    if "\x00" in content:
        raise invalid_input_error("file appears to be binary and cannot be returned as text")

    truncated = len(content) > max_chars
    logger.debug("Read %s (%d bytes, truncated=%s)", relative_path, stats.st_size, truncated)

    return {
        "path": relative_path,
        "content": content[:max_chars] if truncated else content,
        "truncated": truncated,
    }


@tool(
    name="write_file",
    purpose="Write or append text content to a file in the workspace.",
    input_schema=WRITE_FILE_SCHEMA,
)
def write_file(tool_input: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    """Write or append text to a file.

    Any ``mode`` other than ``"append"`` is treated as ``"overwrite"``.
    Parent directories are created unless ``create_dirs`` is explicitly false.

    Args:
        tool_input: ``{"path": str, "content": str, "mode": str, "create_dirs": bool}``
        ctx: Tool context

    Returns:
        ``{"path", "bytes_written", "mode"}`` where ``bytes_written`` is the
        UTF-8 byte length of ``content``

    Raises:
        ToolError: INVALID_INPUT for bad arguments or a missing parent when
            ``create_dirs`` is false, INTERNAL if the write itself fails
    """
    relative_path, file_path = resolve_workspace_path(tool_input.get("path"), ctx.workspace_root)

    content = tool_input.get("content")
    if not isinstance(content, str):
        raise invalid_input_error("content must be a string")

    try:
        encoded = content.encode("utf-8")
    except UnicodeEncodeError:
        raise invalid_input_error("content is not valid UTF-8 text") from None

    mode = "append" if tool_input.get("mode") == "append" else "overwrite"
    create_dirs = tool_input.get("create_dirs") is not False

    if file_path.is_dir():
        raise invalid_input_error(f"path is a directory: {relative_path}")

    parent_dir = file_path.parent
    if create_dirs:
        try:
            parent_dir.mkdir(parents=True, exist_ok=True)
        except (FileExistsError, NotADirectoryError):
            raise invalid_input_error(f"parent path is not a directory: {_parent_label(relative_path)}") from None
        except OSError as e:
            raise internal_error(f"failed to create parent directory: {_parent_label(relative_path)}") from e
    elif not parent_dir.exists():
        raise invalid_input_error(f"parent directory does not exist: {_parent_label(relative_path)}")
    elif not parent_dir.is_dir():
        raise invalid_input_error(f"parent path is not a directory: {_parent_label(relative_path)}")

    try:
        with open(file_path, "ab" if mode == "append" else "wb") as f:
            f.write(encoded)
    except OSError as e:
        raise internal_error(f"failed to write file: {relative_path}") from e

    logger.debug("Wrote %d bytes to %s (mode=%s)", len(encoded), relative_path, mode)

    return {"path": relative_path, "bytes_written": len(encoded), "mode": mode}
