"""Tests for the exception hierarchy and the error paths that raise it."""

from pathlib import Path
from unittest.mock import patch

import pytest

from slugline.exceptions import (
    ConfigurationError,
    FileSystemError,
    ParseError,
    ScreenplayFileNotFoundError,
    SluglineError,
    ValidationError,
    check_config_keys,
)
from slugline.parser import Element, ElementType, FountainParser, parse, write_file


class TestSluglineError:
    """Test the base error formatting."""

    def test_message_only(self):
        """Test an error without hint or details."""
        error = SluglineError("Something broke")
        assert str(error) == "Error: Something broke"
        assert error.hint is None
        assert error.details is None

    def test_hint_and_details(self):
        """Test that hint and details are appended in order."""
        error = SluglineError(
            "Cannot read file",
            hint="Check permissions",
            details={"path": "/tmp/x.fountain", "mode": "r"},
        )
        assert str(error) == (
            "Error: Cannot read file\n"
            "Hint: Check permissions\n"
            "Details:\n"
            "  path: /tmp/x.fountain\n"
            "  mode: r"
        )

    @pytest.mark.parametrize(
        "error_class",
        [
            ConfigurationError,
            ParseError,
            ScreenplayFileNotFoundError,
            ValidationError,
            FileSystemError,
        ],
    )
    def test_subclasses(self, error_class):
        """Test that every error can be caught as SluglineError."""
        with pytest.raises(SluglineError) as exc_info:
            raise error_class("failed", hint="retry")
        assert exc_info.value.message == "failed"
        assert "Hint: retry" in str(exc_info.value)


class TestCheckConfigKeys:
    """Test detection of misspelled configuration keys."""

    @pytest.mark.parametrize(
        ("wrong", "correct"),
        [
            ("level", "log_level"),
            ("format", "log_format"),
            ("times_of_day", "extra_times_of_day"),
            ("no_scene_numbers", "suppress_scene_numbers"),
        ],
    )
    def test_wrong_key(self, wrong, correct):
        """Test the hint naming the correct key."""
        with pytest.raises(ConfigurationError) as exc_info:
            check_config_keys({wrong: "x", "encoding": "utf-8"})
        error = exc_info.value
        assert error.hint == f"Use '{correct}' instead of '{wrong}'"
        assert error.details["invalid_key"] == wrong
        assert error.details["found_keys"] == [wrong, "encoding"]

    def test_valid_keys(self):
        """Test that correct keys pass."""
        check_config_keys({"log_level": "INFO", "extra_times_of_day": ["DUSK"]})


class TestParserErrors:
    """Test errors raised while reading screenplay files."""

    def test_missing_file(self, tmp_path):
        """Test reading a file that does not exist."""
        with pytest.raises(ScreenplayFileNotFoundError) as exc_info:
            FountainParser().parse_file(tmp_path / "missing.fountain")
        assert exc_info.value.details == {"path": str(tmp_path / "missing.fountain")}

    def test_wrong_encoding(self, tmp_path):
        """Test a file that is not valid in the configured encoding."""
        path = tmp_path / "latin.fountain"
        path.write_bytes("Café scene.".encode("latin-1"))
        with pytest.raises(ParseError) as exc_info:
            FountainParser().parse_file(path)
        assert exc_info.value.details["encoding"] == "utf-8"
        assert "SLUGLINE_ENCODING" in exc_info.value.hint

        screenplay = FountainParser().parse_file(path, encoding="latin-1")
        assert screenplay.elements[0].text == "Café scene."

    def test_unknown_encoding(self, tmp_path):
        """Test an encoding name Python does not know."""
        path = tmp_path / "script.fountain"
        path.write_text("Hello.")
        with pytest.raises(ParseError):
            FountainParser().parse_file(path, encoding="no-such-codec")

    def test_os_error(self, tmp_path):
        """Test other read failures."""
        path = tmp_path / "script.fountain"
        path.write_text("Hello.")
        with patch.object(Path, "read_text", side_effect=PermissionError("denied")):
            with pytest.raises(FileSystemError) as exc_info:
                FountainParser().parse_file(path)
        assert exc_info.value.details["error"] == "denied"
        assert isinstance(exc_info.value.__cause__, PermissionError)


class TestWriterErrors:
    """Test errors raised while writing screenplay files."""

    def test_missing_directory(self, tmp_path):
        """Test writing into a directory that does not exist."""
        target = tmp_path / "nope" / "out.fountain"
        with pytest.raises(FileSystemError) as exc_info:
            write_file(parse("INT. A - DAY\n"), target)
        assert exc_info.value.details["path"] == str(target)
        assert not target.exists()

    def test_unencodable_text(self, tmp_path):
        """Test text that the chosen encoding cannot represent."""
        with pytest.raises(FileSystemError):
            write_file(parse("Café.\n"), tmp_path / "out.fountain", encoding="ascii")


class TestModelErrors:
    """Test invalid model construction."""

    def test_negative_section_depth(self):
        """Test that a negative depth is rejected."""
        with pytest.raises(ValueError, match="section_depth must be >= 0"):
            Element(ElementType.SECTION_HEADING, "Act One", section_depth=-1)
