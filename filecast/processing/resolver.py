"""Look up the transform a definition binds to a version."""

from __future__ import annotations

from typing import Any

from filecast.domain.protocols import Definition, ProcessingContext

__all__ = ["resolve_transform"]


def resolve_transform(definition: Definition, version: str, context: ProcessingContext) -> Any:
    """Ask ``definition`` for the transform of ``version``.

    Errors raised by the definition propagate unchanged. The raw return
    value may be a shorthand form; see ``coerce_descriptor``.
    """
    return definition.transform(version, context)
