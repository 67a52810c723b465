"""Rich error hierarchy for filecast.

Every error carries a human-readable message plus optional context,
suggestions and the underlying cause, so callers can render it for a
terminal, serialize it for an API, or inspect it programmatically.

The taxonomy is deliberately small:

- MissingExecutableError: raised. The deployment is misconfigured.
- ConversionError: returned inside a ProcessResult. The external tool failed.
- UnrecognizedTransformError: returned. The definition produced an unknown shape.
- SourceIOError: returned. The source could not be materialized.
- ConfigurationError: raised while loading config or definition references.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from rich.panel import Panel

    from filecast.domain.error_schema import ErrorDict

__all__ = [
    "ConfigurationError",
    "ConversionError",
    "FilecastError",
    "MissingExecutableError",
    "SourceIOError",
    "UnrecognizedTransformError",
]

# Truncation limit for process output shown in suggestions
_OUTPUT_PREVIEW_CHARS = 200


class FilecastError(Exception):
    """Base error with context and actionable suggestions.

    Args:
        message: Human-readable description of what went wrong
        cause: Original exception, if this error wraps another one
        context: Extra details (paths, exit codes, program names)
        suggestions: Things the user can try to fix the problem
    """

    def __init__(
        self,
        message: str,
        *,
        cause: BaseException | None = None,
        context: dict[str, Any] | None = None,
        suggestions: Sequence[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.context: dict[str, Any] = dict(context or {})
        self.suggestions: list[str] = list(suggestions or [])
        self.timestamp = datetime.now()

    def format_error(self) -> str:
        """Render the error as plain text for logs and terminals."""
        lines = [f"✗ Error: {self.message}"]

        if self.context:
            lines.append("")
            lines.append("Details:")
            for key, value in self.context.items():
                lines.append(f"  • {key}: {value}")

        if self.suggestions:
            lines.append("")
            lines.append("Possible solutions:")
            for suggestion in self.suggestions:
                lines.append(f"  • {suggestion}")

        if self.cause is not None:
            lines.append("")
            lines.append(f"Caused by: {type(self.cause).__name__}: {self.cause}")

        return "\n".join(lines)

    def format_rich(self) -> Panel:
        """Render the error as a Rich panel."""
        from rich.panel import Panel
        from rich.text import Text

        body = Text()
        body.append(self.message, style="bold")

        if self.context:
            body.append("\n\nDetails:\n", style="bold cyan")
            for key, value in self.context.items():
                body.append(f"  • {key}: ", style="cyan")
                body.append(f"{value}\n")

        if self.suggestions:
            body.append("\nPossible solutions:\n", style="bold green")
            for suggestion in self.suggestions:
                body.append(f"  • {suggestion}\n")

        if self.cause is not None:
            body.append(f"\nCaused by: {type(self.cause).__name__}: {self.cause}", style="dim")

        return Panel(body, title=f"[red]{type(self).__name__}[/red]", border_style="red")

    def to_dict(self) -> ErrorDict:
        """Serialize for API and programmatic consumers."""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "context": dict(self.context),
            "suggestions": list(self.suggestions),
            "timestamp": self.timestamp.isoformat(),
            "cause": str(self.cause) if self.cause is not None else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FilecastError:
        """Rebuild an error from ``to_dict`` output.

        The original cause is not recoverable; only its string form survives
        serialization, so it is kept in the context under ``cause``.
        """
        context = dict(data.get("context") or {})
        if data.get("cause"):
            context.setdefault("cause", data["cause"])
        error = cls(
            data.get("message", ""),
            context=context,
            suggestions=data.get("suggestions") or [],
        )
        timestamp = data.get("timestamp")
        if timestamp:
            error.timestamp = datetime.fromisoformat(timestamp)
        return error


class MissingExecutableError(FilecastError):
    """The program named by a shell transform is not on the search path."""

    def __init__(self, message: str, *, program: str = "", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.program = program

    @classmethod
    def for_program(cls, program: str, search_path: str | None = None) -> MissingExecutableError:
        context: dict[str, Any] = {"program": program}
        if search_path:
            context["search_path"] = search_path
        return cls(
            f"Executable '{program}' was not found on the search path",
            program=program,
            context=context,
            suggestions=[
                f"Install '{program}' or add its directory to PATH",
                "Check the program name returned by the transform definition",
            ],
        )


class ConversionError(FilecastError):
    """The external converter ran but did not succeed."""

    def __init__(self, message: str, *, output: str = "", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.output = output

    @classmethod
    def from_process(
        cls,
        command: Sequence[str],
        returncode: int,
        output: str,
        output_path: Path | str | None = None,
    ) -> ConversionError:
        program = command[0] if command else ""
        preview = output.strip()[:_OUTPUT_PREVIEW_CHARS] or "No output"
        context: dict[str, Any] = {
            "program": program,
            "exit_code": returncode,
            "command": " ".join(command),
        }
        if output_path is not None:
            context["output_path"] = str(output_path)
        return cls(
            f"'{program}' exited with status {returncode}",
            output=output,
            context=context,
            suggestions=[
                "Check the transform arguments are valid for this program",
                f"Program output: {preview}",
            ],
        )

    @classmethod
    def from_spawn_error(cls, command: Sequence[str], exc: OSError) -> ConversionError:
        program = command[0] if command else ""
        return cls(
            f"Could not start '{program}'",
            output=str(exc),
            cause=exc,
            context={"program": program, "command": " ".join(command)},
            suggestions=["Check the program is executable by the current user"],
        )


class UnrecognizedTransformError(FilecastError):
    """A definition returned something that is not a transform descriptor."""

    @classmethod
    def from_value(cls, value: Any, version: str | None = None) -> UnrecognizedTransformError:
        shape = _describe_shape(value)
        context: dict[str, Any] = {"shape": shape}
        if version is not None:
            context["version"] = version
        return cls(
            f"Unrecognized transform shape: {shape}",
            context=context,
            suggestions=[
                "Return NoAction, Skip, ShellTemplate, ShellTemplateFn, ShellArgsFn or Custom",
                "Shorthand forms: 'noaction', 'skip', (program, args[, extension]), "
                "('custom', callback, params)",
            ],
        )


class SourceIOError(FilecastError):
    """The source file could not be made available on the local filesystem."""

    @classmethod
    def from_os_error(cls, file_name: str, temp_dir: Path, exc: OSError) -> SourceIOError:
        return cls(
            f"Could not write temporary copy of '{file_name}'",
            cause=exc,
            context={"file_name": file_name, "temp_dir": str(temp_dir)},
            suggestions=[
                f"Check that {temp_dir} exists and is writable",
                "Configure a different temp_dir",
            ],
        )


class ConfigurationError(FilecastError):
    """Invalid configuration file or definition reference."""

    @classmethod
    def invalid_config_file(cls, path: Path, cause: BaseException) -> ConfigurationError:
        return cls(
            f"Invalid configuration file: {path}",
            cause=cause,
            context={"path": str(path)},
            suggestions=[
                "Check the file is valid TOML with a [filecast] table",
                f"Remove {path} to fall back to defaults",
            ],
        )

    @classmethod
    def invalid_reference(cls, ref: str, cause: BaseException | None = None) -> ConfigurationError:
        return cls(
            f"Cannot load '{ref}'",
            cause=cause,
            context={"reference": ref},
            suggestions=[
                "Use the form 'package.module:attribute'",
                "Make sure the module is importable from the current environment",
            ],
        )


def _describe_shape(value: Any) -> str:
    if isinstance(value, tuple) and value:
        return f"tuple tagged {value[0]!r} with {len(value)} elements"
    if isinstance(value, str):
        return repr(value)
    return type(value).__name__
