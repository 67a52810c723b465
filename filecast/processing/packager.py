"""Wrap executor output into SourceFile handles."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from filecast.domain.model import ProcessResult, SourceFile

__all__ = ["package_custom", "package_output"]


def package_output(source: SourceFile, output_path: Path) -> ProcessResult:
    """Handle for a file written by an external program.

    The file name keeps the source stem and takes the generated extension,
    so ``photo.png`` converted with a ``.jpg`` override becomes ``photo.jpg``.
    """
    output_path = Path(output_path)
    file_name = Path(source.file_name).stem + output_path.suffix
    return ProcessResult.ok(SourceFile(file_name=file_name, path=output_path, is_temp=True))


def package_custom(value: Any) -> ProcessResult:
    """Interpret a custom callback's return value.

    Raises:
        TypeError: If the callback returned something other than a
            SourceFile, a ProcessResult or None
    """
    if isinstance(value, ProcessResult):
        return value
    if value is None or isinstance(value, SourceFile):
        return ProcessResult.ok(value)
    raise TypeError(
        f"Custom transform must return SourceFile, ProcessResult or None, got {type(value).__name__}"
    )
