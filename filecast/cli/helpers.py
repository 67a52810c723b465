"""CLI helpers shared by commands."""

from __future__ import annotations

import inspect
from pathlib import Path
from typing import Any

import typer
from rich.console import Console

from filecast.config import AppConfig, load_config
from filecast.domain.exceptions import ConfigurationError, FilecastError
from filecast.processing.references import load_reference

err_console = Console(stderr=True)


def load_definition(ref: str) -> Any:
    """Load a definition from ``module:attribute``; classes are instantiated."""
    target = load_reference(ref)
    if inspect.isclass(target):
        target = target()
    if not callable(getattr(target, "transform", None)):
        raise ConfigurationError(
            f"'{ref}' has no transform(version, context) method",
            context={"reference": ref},
            suggestions=["Point at a class, instance or module defining transform()"],
        )
    return target


def load_cli_config(config_path: Path | None, temp_dir: Path | None) -> AppConfig:
    config = load_config(config_path)
    if temp_dir is not None:
        config = config.model_copy(update={"temp_dir": temp_dir.expanduser().resolve()})
    return config


def fail(error: FilecastError, code: int = 1) -> typer.Exit:
    """Print ``error`` to stderr and return the Exit to raise."""
    err_console.print(error.format_rich())
    return typer.Exit(code=code)
