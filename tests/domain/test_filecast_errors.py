"""Tests for the rich error hierarchy."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from filecast.domain.exceptions import (
    ConfigurationError,
    ConversionError,
    FilecastError,
    MissingExecutableError,
    SourceIOError,
    UnrecognizedTransformError,
)


class TestFilecastError:
    """Tests for the base error class."""

    def test_basic_initialization(self):
        error = FilecastError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.cause is None
        assert error.context == {}
        assert error.suggestions == []

    def test_format_error_sections(self):
        error = FilecastError(
            "Conversion failed",
            cause=ValueError("bad value"),
            context={"program": "convert"},
            suggestions=["Install ImageMagick"],
        )
        formatted = error.format_error()
        assert "✗ Error: Conversion failed" in formatted
        assert "Details:" in formatted
        assert "program: convert" in formatted
        assert "Possible solutions:" in formatted
        assert "Install ImageMagick" in formatted
        assert "Caused by: ValueError: bad value" in formatted

    def test_format_rich_returns_panel(self):
        from rich.panel import Panel

        error = FilecastError("Test error", context={"key": "value"}, suggestions=["Do something"])
        assert isinstance(error.format_rich(), Panel)

    def test_to_dict(self):
        error = FilecastError(
            "Test error",
            cause=OSError("disk full"),
            context={"file": "a.png"},
            suggestions=["Try this"],
        )
        data = error.to_dict()
        assert data["error_type"] == "FilecastError"
        assert data["message"] == "Test error"
        assert data["context"] == {"file": "a.png"}
        assert data["suggestions"] == ["Try this"]
        assert data["cause"] == "disk full"
        assert isinstance(datetime.fromisoformat(data["timestamp"]), datetime)

    def test_from_dict_with_missing_fields(self):
        error = FilecastError.from_dict({"message": "Only a message"})
        assert error.message == "Only a message"
        assert error.context == {}
        assert error.suggestions == []

    def test_from_dict_restores_subclass_and_timestamp(self):
        original = ConversionError("failed", context={"exit_code": 1}, suggestions=["retry"])
        restored = ConversionError.from_dict(original.to_dict())
        assert isinstance(restored, ConversionError)
        assert restored.context == {"exit_code": 1}
        assert restored.timestamp == original.timestamp


class TestMissingExecutableError:
    def test_names_the_program(self):
        error = MissingExecutableError.for_program("blah")
        assert error.program == "blah"
        assert "blah" in str(error)
        assert error.context == {"program": "blah"}
        assert any("install" in s.lower() for s in error.suggestions)

    def test_records_custom_search_path(self):
        error = MissingExecutableError.for_program("convert", "/opt/bin")
        assert error.context["search_path"] == "/opt/bin"


class TestConversionError:
    def test_from_process_keeps_output(self):
        output = "convert: unrecognized option `-invalidTransformation'"
        error = ConversionError.from_process(["convert", "in.png", "out.png"], 1, output)
        assert error.output == output
        assert error.context["exit_code"] == 1
        assert error.context["program"] == "convert"
        assert error.context["command"] == "convert in.png out.png"
        assert any("invalidTransformation" in s for s in error.suggestions)

    def test_from_process_without_output(self):
        error = ConversionError.from_process(["convert"], 2, "")
        assert any("No output" in s for s in error.suggestions)
        assert "output_path" not in error.context

    def test_from_process_records_output_path(self, tmp_path):
        target = tmp_path / "ABC.png"
        error = ConversionError.from_process(["convert", "in.png", str(target)], 1, "", output_path=target)
        assert error.context["output_path"] == str(target)

    def test_from_spawn_error(self):
        cause = PermissionError("Permission denied")
        error = ConversionError.from_spawn_error(["convert", "a"], cause)
        assert error.cause is cause
        assert "convert" in error.message


class TestUnrecognizedTransformError:
    def test_describes_tuple_shape(self):
        error = UnrecognizedTransformError.from_value(("blah",), "thumb")
        assert "'blah'" in error.message
        assert error.context["version"] == "thumb"

    def test_describes_other_types(self):
        error = UnrecognizedTransformError.from_value(42)
        assert error.context["shape"] == "int"
        assert "version" not in error.context


class TestSourceIOError:
    def test_from_os_error(self):
        cause = PermissionError("read-only")
        error = SourceIOError.from_os_error("image.png", Path("/readonly"), cause)
        assert error.cause is cause
        assert error.context["temp_dir"] == "/readonly"
        assert "image.png" in error.message


class TestConfigurationError:
    def test_invalid_reference(self):
        error = ConfigurationError.invalid_reference("nope")
        assert "nope" in error.message
        assert any("module:attribute" in s for s in error.suggestions)

    def test_invalid_config_file(self):
        cause = ValueError("bad toml")
        error = ConfigurationError.invalid_config_file(Path("/etc/filecast.toml"), cause)
        assert error.context["path"] == "/etc/filecast.toml"
        assert error.cause is cause
