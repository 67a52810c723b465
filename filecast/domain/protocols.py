"""Protocols for the collaborators the pipeline consumes.

Definitions and custom callbacks are supplied by the caller; the pipeline
depends only on these interfaces, never on a concrete definition type.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Callable, Protocol, Tuple, Union

if TYPE_CHECKING:
    from filecast.domain.model import ProcessResult, SourceFile

__all__ = [
    "CustomCallback",
    "Definition",
    "ProcessingContext",
    "VersionedDefinition",
]

# (source file, scope). Scope is opaque: e.g. the key of a parent record
ProcessingContext = Tuple["SourceFile", Any]


class Definition(Protocol):
    """Maps a version name to the transform that produces it."""

    def transform(self, version: str, context: ProcessingContext) -> Any:
        """Return a TransformDescriptor (or its shorthand) for ``version``."""
        ...


class VersionedDefinition(Definition, Protocol):
    """A definition that can also enumerate its versions."""

    def versions(self) -> Sequence[str]:
        ...


# Receives the materialized source and the descriptor's params.
# Returning None means "no output", a ProcessResult is passed through as-is.
CustomCallback = Callable[
    ["SourceFile", Mapping[str, Any]],
    Union["SourceFile", "ProcessResult", None],
]
