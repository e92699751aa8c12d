"""Data models shared by the tool registry and the tools."""

import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel

from .exceptions import ToolError, ToolErrorKind


@dataclass(frozen=True)
class ToolContext:
    """Execution context handed to every tool handler.

    Attributes:
        workspace_root: Absolute, symlink-resolved workspace directory
        cancel_event: Optional cooperative cancellation signal
    """

    workspace_root: Path
    cancel_event: Optional[threading.Event] = None

    @classmethod
    def for_root(cls, root: Union[str, Path], cancel_event: Optional[threading.Event] = None) -> "ToolContext":
        """Build a context for ``root``, resolving it to a real absolute path."""
        return cls(workspace_root=Path(os.path.realpath(root)), cancel_event=cancel_event)

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()


class ToolResult(BaseModel):
    """Uniform envelope returned by the dispatcher.

    Exactly one of ``data`` (success) or ``error`` (failure) is set.
    """

    ok: bool
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    kind: Optional[ToolErrorKind] = None

    @classmethod
    def success(cls, data: Dict[str, Any]) -> "ToolResult":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, kind: ToolErrorKind, message: str) -> "ToolResult":
        return cls(ok=False, error=message, kind=kind)

    @classmethod
    def from_error(cls, error: ToolError) -> "ToolResult":
        return cls.failure(error.kind, error.message)

    @property
    def status_code(self) -> int:
        """Transport status for this result (200 on success)."""
        if self.ok:
            return 200
        return (self.kind or ToolErrorKind.INTERNAL).status_code

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the wire envelope: ``{ok, data}`` or ``{ok, error}``."""
        if self.ok:
            return {"ok": True, "data": self.data}
        return {"ok": False, "error": self.error}


@dataclass
class SearchMatch:
    """A single search hit."""

    path: str
    line: int
    snippet: str

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "line": self.line, "snippet": self.snippet}


@dataclass
class SearchState:
    """Accumulator for a single search invocation."""

    max_results: int
    results: List[SearchMatch] = field(default_factory=list)
    truncated: bool = False

    def add(self, match: SearchMatch) -> bool:
        """Record a match.

        Returns:
            True once the result cap has been reached and the search must stop
        """
        self.results.append(match)
        if len(self.results) >= self.max_results:
            self.truncated = True
            return True
        return False
