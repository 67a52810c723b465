"""Tests for SourceMaterializer."""

from __future__ import annotations

from pathlib import Path

import pytest

from filecast.domain import SourceFile, SourceIOError
from filecast.processing import SourceMaterializer
from filecast.processing.materializer import MAX_PREFIX_CHARS


def test_path_backed_file_is_returned_unchanged(work_dir: Path, source_file: Path) -> None:
    file = SourceFile.from_path(source_file)
    assert SourceMaterializer(work_dir).materialize(file) is file
    assert list(work_dir.iterdir()) == []


def test_binary_is_written_to_temp_file(work_dir: Path) -> None:
    file = SourceFile.from_binary(b"\x89PNG data", "image two.png")

    materialized = SourceMaterializer(work_dir).materialize(file)

    assert materialized.path is not None
    assert materialized.path.parent == work_dir
    assert materialized.path.suffix == ".png"
    assert materialized.path.name.startswith("image two_")
    assert materialized.path.read_bytes() == b"\x89PNG data"
    assert materialized.is_temp is True
    assert materialized.file_name == "image two.png"


def test_each_call_creates_a_distinct_file(work_dir: Path) -> None:
    file = SourceFile.from_binary(b"abc", "a.txt")
    materializer = SourceMaterializer(work_dir)
    first = materializer.materialize(file)
    second = materializer.materialize(file)
    assert first.path != second.path
    assert len(list(work_dir.iterdir())) == 2


def test_unwritable_temp_dir(tmp_path: Path) -> None:
    missing = tmp_path / "does-not-exist"
    file = SourceFile.from_binary(b"abc", "a.txt")
    with pytest.raises(SourceIOError) as exc_info:
        SourceMaterializer(missing).materialize(file)
    assert exc_info.value.context["temp_dir"] == str(missing)
    assert isinstance(exc_info.value.cause, OSError)


def test_defaults_to_platform_temp_dir() -> None:
    import tempfile

    assert SourceMaterializer().temp_dir == Path(tempfile.gettempdir())


def test_long_stem_is_truncated_and_keeps_extension(work_dir: Path) -> None:
    file = SourceFile.from_binary(b"abc", "b" * 250 + ".png")

    materialized = SourceMaterializer(work_dir).materialize(file)

    assert materialized.path.suffix == ".png"
    assert materialized.path.name.startswith("b" * MAX_PREFIX_CHARS + "_")
    assert len(materialized.path.name) < 255
    assert materialized.file_name == file.file_name
