"""Resolve ``"package.module:attribute"`` references to Python objects."""

from __future__ import annotations

import importlib
from typing import Any

from filecast.domain.exceptions import ConfigurationError

__all__ = ["load_reference"]


def load_reference(ref: str) -> Any:
    """Import ``module`` and walk the dotted attribute path after the colon.

    Raises:
        ConfigurationError: If the reference is malformed or cannot be loaded
    """
    module_name, sep, attr_path = ref.partition(":")
    if not sep or not module_name or not attr_path:
        raise ConfigurationError.invalid_reference(ref)

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigurationError.invalid_reference(ref, exc) from exc

    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError as exc:
            raise ConfigurationError.invalid_reference(ref, exc) from exc
    return target
