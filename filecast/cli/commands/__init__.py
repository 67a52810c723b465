"""Composable CLI command registrations for Typer."""

from .process import register_process
from .versions import register_versions

__all__ = [
    "register_process",
    "register_versions",
]
