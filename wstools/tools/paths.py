"""Path guard keeping tool paths inside the workspace root."""

import os
import posixpath
import re
from pathlib import Path
from typing import Any, Tuple

from ..utils import invalid_input_error

_DRIVE_PREFIX = re.compile(r"^[A-Za-z]:")


def validate_relative_path(raw_path: Any) -> str:
    """Validate and normalize a caller-supplied workspace-relative path.

    Backslashes count as separators, so traversal written as ``..\\etc`` is
    rejected on every host.

    Args:
        raw_path: Path as received from the caller

    Returns:
        Normalized relative path with forward slashes ("." for the root itself)

    Raises:
        ToolError: INVALID_INPUT if the path is empty, contains a null byte,
            is absolute, or escapes the workspace
    """
    if raw_path is None:
        raw_path = ""
    if not isinstance(raw_path, str):
        raise invalid_input_error("path must be a string")

    raw = raw_path.strip()
    if not raw:
        raise invalid_input_error("path is required")
    if "\x00" in raw:
        raise invalid_input_error("path must not contain null bytes")

    candidate = raw.replace("\\", "/")
    if candidate.startswith("/") or _DRIVE_PREFIX.match(candidate) or os.path.isabs(raw):
        raise invalid_input_error("path must be relative to workspace")

    normalized = posixpath.normpath(candidate)
    if normalized.split("/", 1)[0] == "..":
        raise invalid_input_error("path must stay within workspace")

    return normalized


def is_within_root(absolute_path: str, workspace_root: str) -> bool:
    """True if ``absolute_path`` is the root or lies strictly beneath it."""
    return absolute_path == workspace_root or absolute_path.startswith(workspace_root.rstrip(os.sep) + os.sep)


def resolve_workspace_path(raw_path: Any, workspace_root: Path) -> Tuple[str, Path]:
    """Validate ``raw_path`` and resolve it against the workspace root.

    After the lexical check, the joined path is resolved (following any
    symlinks that exist) and must still be inside the resolved root.

    Args:
        raw_path: Path as received from the caller
        workspace_root: Absolute workspace directory

    Returns:
        Tuple of (normalized relative path, absolute path)

    Raises:
        ToolError: INVALID_INPUT if the path fails either check
    """
    relative_path = validate_relative_path(raw_path)

    root = os.path.realpath(workspace_root)
    absolute_path = os.path.realpath(os.path.join(root, *relative_path.split("/")))

    if not is_within_root(absolute_path, root):
        raise invalid_input_error("path must stay within workspace")

    return relative_path, Path(absolute_path)
