"""Input validators for the Slugline CLI."""

from __future__ import annotations

from slugline.cli.validators.base import Validator
from slugline.cli.validators.file_validator import (
    ConfigFileValidator,
    FileValidator,
    ScreenplayFileValidator,
)

__all__ = [
    "ConfigFileValidator",
    "FileValidator",
    "ScreenplayFileValidator",
    "Validator",
]
