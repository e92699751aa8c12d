"""Recursive text search across the workspace."""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from ..models import SearchMatch, SearchState, ToolContext
from ..tools import tool
from ..utils import clamp_int, internal_error, invalid_input_error, to_posix_path

logger = logging.getLogger(__name__)

DEFAULT_GLOB = "**/*"
DEFAULT_MAX_RESULTS = 20
DEFAULT_MAX_FILE_SIZE_BYTES = 2_000_000
MAX_RESULTS_LIMIT = 200
MIN_FILE_SIZE_LIMIT = 1024
MAX_FILE_SIZE_LIMIT = 10_000_000
MAX_SNIPPET_CHARS = 500
PATH_MATCH_SNIPPET = "[path match]"

# Version control metadata, dependency caches, and build output
SKIP_DIRS = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        "node_modules",
        "dist",
        "build",
        ".angular",
        "__pycache__",
        ".venv",
        "venv",
        ".tox",
        ".mypy_cache",
        ".pytest_cache",
    }
)

SEARCH_FILES_SCHEMA = {
    "type": "object",
    "properties": {
        "query": {"type": "string", "description": "Search string (plain text)"},
        "glob": {"type": "string", "description": "Optional glob like **/*.py", "default": DEFAULT_GLOB},
        "max_results": {"type": "integer", "default": DEFAULT_MAX_RESULTS},
        "max_file_size_bytes": {"type": "integer", "default": DEFAULT_MAX_FILE_SIZE_BYTES},
    },
    "required": ["query"],
}


@dataclass(frozen=True)
class _SearchOptions:
    workspace_root: Path
    query_lower: str
    glob_pattern: re.Pattern
    max_file_size_bytes: int
    ctx: ToolContext


def compile_glob(glob: str) -> re.Pattern:
    """Translate a workspace glob into an anchored regular expression.

    ``**`` as a whole segment spans any number of directories (including
    none), ``*`` matches within a segment, ``?`` matches one non-separator
    character, and everything else is literal.

    Examples:
        >>> bool(compile_glob("**/*.py").fullmatch("setup.py"))
        True
        >>> bool(compile_glob("src/*.py").fullmatch("src/pkg/mod.py"))
        False
    """
    parts = to_posix_path(glob).split("/")
    regex = ""
    for index, part in enumerate(parts):
        is_last = index == len(parts) - 1
        if part == "**":
            regex += ".*" if is_last else "(?:.*/)?"
            continue
        regex += re.escape(part).replace(r"\*", "[^/]*").replace(r"\?", "[^/]")
        if not is_last:
            regex += "/"
    return re.compile(regex, re.DOTALL)


def _check_cancelled(options: _SearchOptions) -> None:
    if options.ctx.cancelled:
        raise internal_error("search_files was cancelled")


def _scan_file(file_path: str, relative_path: str, state: SearchState, options: _SearchOptions) -> bool:
    """Scan one file. Returns True when the result cap has been reached."""
    if options.query_lower in relative_path.lower():
        if state.add(SearchMatch(path=relative_path, line=1, snippet=PATH_MATCH_SNIPPET)):
            return True

    if not options.glob_pattern.fullmatch(relative_path):
        return False

    try:
        if os.stat(file_path).st_size > options.max_file_size_bytes:
            return False
        with open(file_path, "r", encoding="utf-8", errors="replace", newline="") as f:
            content = f.read()
    except OSError as e:
        # Files can vanish or change permissions mid-walk
        logger.debug("Skipping unreadable file %s: %s", relative_path, e)
        return False

    if "\x00" in content:
        return False

    for index, line in enumerate(content.split("\n")):
        if line.endswith("\r"):
            line = line[:-1]
        if options.query_lower not in line.lower():
            continue
        match = SearchMatch(path=relative_path, line=index + 1, snippet=line.strip()[:MAX_SNIPPET_CHARS])
        if state.add(match):
            return True

    return False


def _search_directory(directory: str, state: SearchState, options: _SearchOptions) -> None:
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                _check_cancelled(options)

                if entry.is_dir(follow_symlinks=False):
                    if entry.name in SKIP_DIRS:
                        continue
                    _search_directory(entry.path, state, options)
                    if state.truncated:
                        return
                    continue

                if not entry.is_file(follow_symlinks=False):
                    continue

                relative_path = to_posix_path(os.path.relpath(entry.path, options.workspace_root))
                if _scan_file(entry.path, relative_path, state, options):
                    return
    except (FileNotFoundError, NotADirectoryError, PermissionError) as e:
        logger.debug("Skipping directory %s: %s", directory, e)


@tool(
    name="search_files",
    purpose="Search text in files under workspace with size and result limits.",
    input_schema=SEARCH_FILES_SCHEMA,
)
def search_files(tool_input: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    """Search file paths and contents for a case-insensitive substring.

    Walks the workspace depth-first in filesystem order, skipping
    ``SKIP_DIRS``. A path containing the query yields a ``[path match]`` hit on
    line 1; files matching ``glob`` are then scanned line by line. The walk
    stops as soon as ``max_results`` matches are collected, in which case
    ``truncated`` is true.

    Args:
        tool_input: ``{"query": str, "glob": str, "max_results": int, "max_file_size_bytes": int}``
        ctx: Tool context

    Returns:
        ``{"query", "results": [{"path", "line", "snippet"}], "truncated"}``

    Raises:
        ToolError: INVALID_INPUT if the query is empty
    """
    raw_query = tool_input.get("query")
    query = raw_query.strip() if isinstance(raw_query, str) else ""
    if not query:
        raise invalid_input_error("query is required")

    raw_glob = tool_input.get("glob")
    glob = (raw_glob.strip() if isinstance(raw_glob, str) else "") or DEFAULT_GLOB
    max_results = clamp_int(tool_input.get("max_results"), DEFAULT_MAX_RESULTS, 1, MAX_RESULTS_LIMIT)
    max_file_size_bytes = clamp_int(
        tool_input.get("max_file_size_bytes"),
        DEFAULT_MAX_FILE_SIZE_BYTES,
        MIN_FILE_SIZE_LIMIT,
        MAX_FILE_SIZE_LIMIT,
    )

    state = SearchState(max_results=max_results)
    options = _SearchOptions(
        workspace_root=ctx.workspace_root,
        query_lower=query.lower(),
        glob_pattern=compile_glob(glob),
        max_file_size_bytes=max_file_size_bytes,
        ctx=ctx,
    )

    _search_directory(str(ctx.workspace_root), state, options)
    logger.debug("search_files %r: %d results (truncated=%s)", query, len(state.results), state.truncated)

    return {
        "query": query,
        "results": [match.to_dict() for match in state.results],
        "truncated": state.truncated,
    }
