"""Errors raised by Slugline, each with an optional hint and details."""

from __future__ import annotations

from typing import Any


class SluglineError(Exception):
    """Base class for Slugline errors.

    ``message`` says what failed, ``hint`` suggests a fix and ``details``
    carries values (paths, encodings, keys) that help when debugging. The
    CLI prints message and hint; ``str(error)`` includes all three.
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.hint = hint
        self.details = details
        super().__init__(self.format_error())

    def format_error(self) -> str:
        """Render message, hint and details as multi-line text."""
        output = f"Error: {self.message}"
        if self.hint:
            output += f"\nHint: {self.hint}"
        if self.details:
            details_str = "\n".join(
                f"  {key}: {value}" for key, value in self.details.items()
            )
            output += f"\nDetails:\n{details_str}"
        return output


class ConfigurationError(SluglineError):
    """Invalid settings or an unreadable configuration file."""


class ParseError(SluglineError):
    """A screenplay file that cannot be decoded as text."""


class ScreenplayFileNotFoundError(SluglineError):
    """A screenplay or configuration file that does not exist."""


class ValidationError(SluglineError):
    """Command line input that fails validation."""


class FileSystemError(SluglineError):
    """Reading or writing a file failed for another reason."""


def check_config_keys(config: dict[str, Any]) -> None:
    """Reject well-known misspellings of setting names.

    Raises:
        ConfigurationError: Naming the key that should have been used.
    """
    wrong_keys = {
        "level": "log_level",
        "format": "log_format",
        "times_of_day": "extra_times_of_day",
        "no_scene_numbers": "suppress_scene_numbers",
    }

    for wrong, correct in wrong_keys.items():
        if wrong in config:
            raise ConfigurationError(
                message=f"Invalid configuration key '{wrong}'",
                hint=f"Use '{correct}' instead of '{wrong}'",
                details={
                    "found_keys": list(config.keys()),
                    "invalid_key": wrong,
                    "correct_key": correct,
                },
            )
