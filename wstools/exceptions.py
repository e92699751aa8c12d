"""Custom exception classes for wstools."""

from enum import Enum


class ToolErrorKind(str, Enum):
    """Classification of a tool failure.

    The transport layer maps each kind onto its own status codes; the core
    never deals in protocol codes directly.
    """

    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"

    @property
    def status_code(self) -> int:
        """HTTP-equivalent status for this kind."""
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ToolErrorKind.INVALID_INPUT: 400,
    ToolErrorKind.NOT_FOUND: 404,
    ToolErrorKind.INTERNAL: 500,
}


class ToolError(RuntimeError):
    """Exception raised when a tool invocation fails.

    Attributes:
        kind: Failure classification
        message: Human-readable message naming the offending field or
            workspace-relative path
    """

    def __init__(self, kind: ToolErrorKind, message: str):
        """Initialize ToolError.

        Args:
            kind: Failure classification
            message: Error message
        """
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"ToolError({self.kind.value!r}, {self.message!r})"
