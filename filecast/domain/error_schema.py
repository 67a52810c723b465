"""TypedDict for serialized errors (documentation and type checking).

Describes the structure returned by FilecastError.to_dict().
"""

from __future__ import annotations

from typing import Any, TypedDict

__all__ = ["ErrorDict"]


class ErrorDict(TypedDict):
    """Serialized form of a FilecastError.

    Example:
        >>> def report(error_dict: ErrorDict) -> None:
        ...     print(f"{error_dict['error_type']}: {error_dict['message']}")
    """

    error_type: str
    """Exception class name (e.g., 'ConversionError')."""

    message: str
    """Human-readable error message."""

    context: dict[str, Any]
    """Additional context (program, exit code, paths)."""

    suggestions: list[str]
    """Actionable suggestions for the user."""

    timestamp: str
    """ISO 8601 timestamp when the error was created."""

    cause: str | None
    """Stringified original exception, if any."""
