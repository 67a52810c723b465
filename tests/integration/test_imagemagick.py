"""Thumbnail generation through ImageMagick's ``convert``.

Skipped when ImageMagick is not installed.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any

import pytest

from filecast.domain import (
    ConversionError,
    Custom,
    NoAction,
    ShellArgsFn,
    ShellTemplate,
    ShellTemplateFn,
    Skip,
    SourceFile,
)
from filecast.processing import Processor

Image = pytest.importorskip("PIL.Image")

pytestmark = pytest.mark.skipif(shutil.which("convert") is None, reason="ImageMagick not installed")


def process_image(file: SourceFile, params: dict[str, Any]) -> SourceFile:
    return SourceFile(file_name=file.file_name, binary=file.read_bytes())


class ImageDefinition:
    def transform(self, version: str, context: Any) -> Any:
        return {
            "original": NoAction(),
            "thumb": ShellTemplate("convert", "-strip -thumbnail 10x10"),
            "med": ShellTemplateFn(
                "convert",
                lambda input, output: f" {input} -strip -thumbnail 10x10 {output}",
                "jpg",
            ),
            "small": ShellArgsFn(
                "convert",
                lambda input, output: [input, "-strip", "-thumbnail", "10x10", output],
                "jpg",
            ),
            "broken": ShellTemplate("convert", "-strip -invalidTransformation 10x10"),
            "custom": Custom(process_image, {"width": 10, "height": 10}),
            "skipped": Skip(),
        }[version]


def geometry(path: Path) -> tuple[int, int]:
    with Image.open(path) as img:
        return img.size


@pytest.fixture
def image(tmp_path: Path) -> Path:
    path = tmp_path / "image.png"
    Image.new("RGB", (128, 128), (200, 40, 40)).save(path)
    return path


@pytest.fixture
def image_two(tmp_path: Path) -> Path:
    path = tmp_path / "image two.png"
    Image.new("RGB", (128, 128), (40, 40, 200)).save(path)
    return path


@pytest.fixture
def processor(work_dir: Path) -> Processor:
    return Processor(temp_dir=work_dir)


def test_noaction_returns_original(processor, image):
    result = processor.process(ImageDefinition(), "original", (SourceFile.from_path(image), None))
    assert result.file.path == image


def test_thumbnail_from_template(processor, image):
    result = processor.process(ImageDefinition(), "thumb", (SourceFile.from_path(image), None))

    assert result.file.path != image
    assert geometry(image) == (128, 128)
    assert geometry(result.file.path) == (10, 10)


def test_thumbnail_from_string_function(processor, image):
    result = processor.process(ImageDefinition(), "med", (SourceFile.from_path(image), None))

    assert geometry(image) == (128, 128)
    assert geometry(result.file.path) == (10, 10)
    assert result.file.path.suffix == ".jpg"


def test_thumbnail_from_list_function(processor, image):
    result = processor.process(ImageDefinition(), "small", (SourceFile.from_path(image), None))

    assert geometry(image) == (128, 128)
    assert geometry(result.file.path) == (10, 10)


def test_thumbnail_from_binary(processor, image):
    file = SourceFile.from_binary(image.read_bytes(), "image.png")

    result = processor.process(ImageDefinition(), "small", (file, None))

    assert geometry(result.file.path) == (10, 10)
    assert result.file.path.suffix == ".jpg"


def test_file_names_with_spaces(processor, image_two):
    result = processor.process(ImageDefinition(), "thumb", (SourceFile.from_path(image_two), None))

    assert result.file.path != image_two
    assert geometry(image_two) == (128, 128)
    assert geometry(result.file.path) == (10, 10)


def test_invalid_transformation_returns_error(processor, image):
    result = processor.process(ImageDefinition(), "broken", (SourceFile.from_path(image), None))

    assert isinstance(result.error, ConversionError)
    assert "invalidTransformation" in result.error.output


def test_custom_function(processor, image):
    result = processor.process(ImageDefinition(), "custom", (SourceFile.from_path(image), None))

    assert result.file.binary == image.read_bytes()
    assert geometry(image) == (128, 128)


def test_skip(processor, image):
    result = processor.process(ImageDefinition(), "skipped", (SourceFile.from_path(image), None))
    assert result.success
    assert result.file is None
