"""Test configuration and fixtures."""

import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from wstools.models import ToolContext


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def workspace(temp_dir) -> Path:
    """An empty workspace directory with symlinks resolved."""
    root = temp_dir / "workspace"
    root.mkdir()
    return root.resolve()


@pytest.fixture
def ctx(workspace) -> ToolContext:
    """Tool context rooted at the test workspace."""
    return ToolContext.for_root(workspace)


@pytest.fixture
def reset_tool_registry():
    """Reset the tool registry before each test."""
    from wstools.tools import _tools

    original_tools = _tools.copy()
    _tools.clear()
    yield
    _tools.clear()
    _tools.update(original_tools)
