"""Tool registry and dispatcher for wstools."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from ..exceptions import ToolError
from ..models import ToolContext, ToolResult
from ..utils import internal_error, invalid_input_error, not_found_error

logger = logging.getLogger(__name__)

ToolHandler = Callable[[Dict[str, Any], ToolContext], Dict[str, Any]]


@dataclass(frozen=True)
class ToolInfo:
    """Information about a registered tool."""

    name: str
    func: ToolHandler
    purpose: str
    input_schema: Dict[str, Any]

    def describe(self) -> Dict[str, Any]:
        """Catalog entry for this tool (never includes the handler)."""
        return {"name": self.name, "purpose": self.purpose, "input_schema": self.input_schema}


# Global tool registry, in registration order
_tools: Dict[str, ToolInfo] = {}


def tool(name: str, purpose: str, input_schema: Dict[str, Any]) -> Callable[[ToolHandler], ToolHandler]:
    """Register a function as a tool.

    The decorated function receives the caller's input mapping and a
    ``ToolContext``, and returns the ``data`` mapping of a successful result.
    Failures are raised as ``ToolError``.

    Args:
        name: Unique tool name used for dispatch
        purpose: One-line description shown in the catalog
        input_schema: JSON schema describing accepted input fields

    Raises:
        ValueError: If a tool with the same name is already registered
    """

    def decorator(func: ToolHandler) -> ToolHandler:
        if name in _tools:
            raise ValueError(f"Tool '{name}' is already registered")
        _tools[name] = ToolInfo(name=name, func=func, purpose=purpose, input_schema=input_schema)
        return func

    return decorator


def get_tool(name: str) -> ToolInfo:
    """Get a registered tool by name.

    Raises:
        ToolError: NOT_FOUND if no tool is registered under ``name``
    """
    tool_info = _tools.get(name)
    if tool_info is None:
        raise not_found_error(f"Unknown tool: {name}")
    return tool_info


def list_tools() -> List[str]:
    """List all registered tool names."""
    return list(_tools.keys())


def get_tool_catalog() -> List[Dict[str, Any]]:
    """Return ``{name, purpose, input_schema}`` for every tool, in registration order."""
    return [tool_info.describe() for tool_info in _tools.values()]


def call_tool(name: str, tool_input: Optional[Dict[str, Any]], ctx: ToolContext) -> Dict[str, Any]:
    """Invoke a tool by name and return its data.

    ``ToolError`` raised by the handler propagates unchanged. Any other
    exception is logged and replaced by a generic INTERNAL error so raw
    system details never reach the caller.

    Args:
        name: Registered tool name
        tool_input: Free-form input mapping (None is treated as empty)
        ctx: Execution context carrying the workspace root

    Returns:
        The tool's result data

    Raises:
        ToolError: On any failure
    """
    tool_info = get_tool(name)

    if tool_input is None:
        tool_input = {}
    if not isinstance(tool_input, dict):
        raise invalid_input_error("tool input must be an object")

    logger.debug("Calling tool %s", name)
    try:
        return tool_info.func(tool_input, ctx)
    except ToolError:
        raise
    except Exception as e:
        logger.exception("Tool %s raised an unexpected error", name)
        raise internal_error(f"Tool '{name}' failed unexpectedly") from e


def run_tool(name: str, tool_input: Optional[Dict[str, Any]], ctx: ToolContext) -> ToolResult:
    """Invoke a tool by name and wrap the outcome in a ``ToolResult`` envelope.

    Unlike ``call_tool`` this never raises for tool failures.
    """
    try:
        data = call_tool(name, tool_input, ctx)
    except ToolError as e:
        logger.info("Tool %s failed (%s): %s", name, e.kind.value, e.message)
        return ToolResult.from_error(e)
    return ToolResult.success(data)


# Import tool modules at the end to avoid circular imports
# (they need to import 'tool' decorator from this module)
from . import search as search  # noqa: E402
from . import fs as fs  # noqa: E402
