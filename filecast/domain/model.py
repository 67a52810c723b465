"""Core value types: file handles, transform descriptors and results."""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any, Union

from filecast.domain.exceptions import FilecastError, UnrecognizedTransformError

if TYPE_CHECKING:
    from filecast.domain.protocols import CustomCallback

__all__ = [
    "Custom",
    "ExecutableCommand",
    "NoAction",
    "ProcessResult",
    "SHELL_DESCRIPTORS",
    "ShellArgsFn",
    "ShellTemplate",
    "ShellTemplateFn",
    "Skip",
    "SourceFile",
    "TransformDescriptor",
    "coerce_descriptor",
    "normalize_extension",
]


def normalize_extension(extension: str | None) -> str | None:
    """Return ``extension`` with exactly one leading dot, or None."""
    if extension is None:
        return None
    extension = extension.strip()
    if not extension:
        return None
    return "." + extension.lstrip(".")


@dataclass(frozen=True)
class SourceFile:
    """A file flowing through the pipeline.

    Backed by a filesystem path, an in-memory binary, or both. Results of
    processing have the same shape, so they can be fed to further stages
    or handed to storage.

    Attributes:
        file_name: Logical file name, used to derive extensions
        path: Location on disk, if any
        binary: In-memory content, if any
        is_temp: The pipeline created ``path`` and the caller may delete it
    """

    file_name: str
    path: Path | None = None
    binary: bytes | None = None
    is_temp: bool = False

    def __post_init__(self) -> None:
        if not self.file_name:
            raise ValueError("file_name must be a non-empty string")
        if self.path is None and self.binary is None:
            raise ValueError("SourceFile needs a path or a binary")
        if self.path is not None and not isinstance(self.path, Path):
            object.__setattr__(self, "path", Path(self.path))

    @classmethod
    def from_path(cls, path: Path | str, file_name: str | None = None) -> SourceFile:
        path = Path(path)
        return cls(file_name=file_name or path.name, path=path)

    @classmethod
    def from_binary(cls, binary: bytes, file_name: str) -> SourceFile:
        return cls(file_name=file_name, binary=binary)

    @property
    def extension(self) -> str:
        """Lower-cased extension of ``file_name`` including the dot, or ''."""
        return Path(self.file_name).suffix.lower()

    def read_bytes(self) -> bytes:
        if self.binary is not None:
            return self.binary
        if self.path is None:
            raise ValueError(f"'{self.file_name}' has neither a path nor a binary")
        return self.path.read_bytes()

    def with_path(self, path: Path, *, is_temp: bool = True) -> SourceFile:
        return replace(self, path=Path(path), is_temp=is_temp)

    def cleanup(self) -> bool:
        """Delete ``path`` if the pipeline created it.

        Returns True when a file was removed. Caller-supplied paths are
        never touched.
        """
        if not self.is_temp or self.path is None:
            return False
        try:
            os.remove(self.path)
        except FileNotFoundError:
            return False
        return True


# ---------------------------------------------------------------------------
# Transform descriptors
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NoAction:
    """Pass the source through untouched."""


@dataclass(frozen=True)
class Skip:
    """Produce no output for this version."""


@dataclass(frozen=True)
class ShellTemplate:
    """Run ``program <input> <args...> <output>``.

    ``args`` is tokenized with shell-like rules; the input and output
    paths are added as whole tokens and never re-tokenized.
    """

    program: str
    args: str
    extension: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "extension", normalize_extension(self.extension))


@dataclass(frozen=True)
class ShellTemplateFn:
    """Run ``program`` with the argument string built from (input, output)."""

    program: str
    build: Callable[[str, str], str]
    extension: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "extension", normalize_extension(self.extension))


@dataclass(frozen=True)
class ShellArgsFn:
    """Run ``program`` with the argument vector built from (input, output)."""

    program: str
    build: Callable[[str, str], Sequence[str]]
    extension: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "extension", normalize_extension(self.extension))


@dataclass(frozen=True)
class Custom:
    """Hand the materialized source to ``callback(file, params)``.

    ``callback`` is a callable or an import reference of the form
    ``"package.module:function"``.
    """

    callback: CustomCallback | str
    params: Mapping[str, Any] = field(default_factory=dict)


TransformDescriptor = Union[NoAction, Skip, ShellTemplate, ShellTemplateFn, ShellArgsFn, Custom]

SHELL_DESCRIPTORS = (ShellTemplate, ShellTemplateFn, ShellArgsFn)
_DESCRIPTOR_TYPES = (NoAction, Skip, *SHELL_DESCRIPTORS, Custom)


def coerce_descriptor(value: Any, version: str | None = None) -> TransformDescriptor:
    """Turn a definition's return value into a transform descriptor.

    Accepts descriptor instances and the compact shorthand forms:

    - ``"noaction"`` / ``"skip"``
    - ``(program, args)`` or ``(program, args, extension)`` where ``args``
      is a string template or a callable of (input, output)
    - ``("custom", callback, params)``

    Raises:
        UnrecognizedTransformError: If ``value`` matches none of the above
    """
    if isinstance(value, _DESCRIPTOR_TYPES):
        return value

    if isinstance(value, str):
        if value == "noaction":
            return NoAction()
        if value == "skip":
            return Skip()
        raise UnrecognizedTransformError.from_value(value, version)

    if isinstance(value, tuple) and value and isinstance(value[0], str):
        tag = value[0]
        if tag == "custom" and len(value) in (2, 3):
            params = value[2] if len(value) == 3 else {}
            if callable(value[1]) or isinstance(value[1], str):
                return Custom(value[1], params or {})
        elif len(value) in (2, 3):
            extension = value[2] if len(value) == 3 else None
            if isinstance(value[1], str):
                return ShellTemplate(tag, value[1], extension)
            if callable(value[1]):
                # Whether it yields a string or a list is only known at call time
                return ShellTemplateFn(tag, value[1], extension)

    raise UnrecognizedTransformError.from_value(value, version)


# ---------------------------------------------------------------------------
# Commands and results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ExecutableCommand:
    """A resolved external program and its arguments."""

    program: str
    args: tuple[str, ...]
    executable: str

    @property
    def argv(self) -> list[str]:
        return [self.executable, *self.args]

    def display(self) -> list[str]:
        """Command as the user wrote it, for diagnostics."""
        return [self.program, *self.args]


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of processing one version of a file.

    ``file`` is None on failure and also for skipped versions, so check
    ``success`` before ``file``. ``source`` is the temporary copy written
    for a binary-backed source, if one was made; it is set on failure too
    so callers can remove it (see ``cleanup``).
    """

    file: SourceFile | None = None
    error: FilecastError | None = None
    source: SourceFile | None = None

    @classmethod
    def ok(cls, file: SourceFile | None) -> ProcessResult:
        return cls(file=file)

    @classmethod
    def failure(cls, error: FilecastError) -> ProcessResult:
        return cls(error=error)

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def skipped(self) -> bool:
        return self.success and self.file is None

    def unwrap(self) -> SourceFile | None:
        if self.error is not None:
            raise self.error
        return self.file

    def with_source(self, source: SourceFile) -> ProcessResult:
        return replace(self, source=source)

    def cleanup(self) -> int:
        """Remove the temp output and the temp source copy; returns files removed."""
        removed = 0
        for handle in (self.file, self.source):
            if handle is not None and handle.cleanup():
                removed += 1
        return removed
