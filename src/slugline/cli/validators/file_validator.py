"""File and path validators for CLI input."""

from __future__ import annotations

from pathlib import Path

from slugline.cli.validators.base import Validator
from slugline.config.settings import CONFIG_LOADERS
from slugline.exceptions import ScreenplayFileNotFoundError, ValidationError


class FileValidator(Validator[Path]):
    """Validator for file paths."""

    def __init__(
        self,
        must_exist: bool = True,
        must_be_file: bool = True,
        extensions: list[str] | None = None,
    ) -> None:
        """Initialize file validator.

        Args:
            must_exist: Whether file must exist
            must_be_file: Whether path must be a file (not directory)
            extensions: Allowed file extensions (e.g., [".fountain", ".txt"])
        """
        self.must_exist = must_exist
        self.must_be_file = must_be_file
        self.extensions = extensions

    def validate(self, value: str | Path) -> Path:
        """Validate file path.

        Args:
            value: File path to validate

        Returns:
            Resolved Path object

        Raises:
            ScreenplayFileNotFoundError: If the file must exist and does not
            ValidationError: If the path is not a file or has the wrong suffix
        """
        path = Path(value).expanduser().resolve()

        if self.must_exist and not path.exists():
            raise ScreenplayFileNotFoundError(
                message=f"File does not exist: {path}",
                hint="Check the path and try again.",
                details={"path": str(path)},
            )

        if self.must_be_file and path.exists() and not path.is_file():
            raise ValidationError(
                message=f"Path is not a file: {path}",
                details={"path": str(path)},
            )

        if self.extensions and path.suffix.lower() not in self.extensions:
            raise ValidationError(
                message=f"Invalid file extension: {path.suffix or '(none)'}",
                hint=f"Expected one of: {', '.join(self.extensions)}",
                details={"path": str(path)},
            )

        return path


class ScreenplayFileValidator(FileValidator):
    """Validator for Fountain screenplay input files."""

    def __init__(self) -> None:
        super().__init__(must_exist=True, must_be_file=True)


class ConfigFileValidator(FileValidator):
    """Validator for configuration files."""

    def __init__(self) -> None:
        super().__init__(
            must_exist=True, must_be_file=True, extensions=list(CONFIG_LOADERS)
        )
