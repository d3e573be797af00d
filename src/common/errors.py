"""Error types surfaced while extracting dependency graphs.

Errors carry enough context for a user to act on them: the underlying cause,
a troubleshooting hint and a documentation link. They are never handled
locally; callers decide how to report them.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional, Union


class ErrorType(Enum):
    """Broad classification of a failure."""
    EXEC = "exec"
    UNKNOWN = "unknown"


class DepGraphError(Exception):
    """Base error with troubleshooting context."""

    error_type = ErrorType.UNKNOWN

    def __init__(
        self,
        message: str,
        *,
        cause: Optional[BaseException] = None,
        troubleshooting: str = "",
        link: str = "",
    ):
        super().__init__(message)
        self.cause = cause
        self.troubleshooting = troubleshooting
        self.link = link

    def describe(self) -> str:
        """Multi-line description suitable for logging."""
        lines = [str(self)]
        if self.cause is not None:
            lines.append(f"Cause: {self.cause}")
        if self.troubleshooting:
            lines.append(f"Troubleshooting: {self.troubleshooting}")
        if self.link:
            lines.append(f"See: {self.link}")
        return "\n".join(lines)


class ExecutionError(DepGraphError):
    """The external build tool could not be run or exited abnormally."""

    error_type = ErrorType.EXEC


class DecodeError(DepGraphError):
    """Tool output could not be decoded into a dependency tree."""

    error_type = ErrorType.UNKNOWN

    def __init__(self, message: str, *, raw: Union[str, bytes], **kwargs):
        super().__init__(message, **kwargs)
        self.raw = raw
