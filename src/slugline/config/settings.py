"""Slugline configuration settings."""

from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from slugline.exceptions import ConfigurationError, check_config_keys


def _load_yaml(path: Path) -> Any:
    with path.open(encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _load_toml(path: Path) -> Any:
    with path.open("rb") as f:
        return tomllib.load(f)


def _load_json(path: Path) -> Any:
    with path.open(encoding="utf-8") as f:
        return json.load(f)


# Config file readers by lower-cased suffix
CONFIG_LOADERS: dict[str, Callable[[Path], Any]] = {
    ".yaml": _load_yaml,
    ".yml": _load_yaml,
    ".toml": _load_toml,
    ".json": _load_json,
}

# Files looked up automatically, lowest precedence first
USER_CONFIG_NAMES = ("config.yaml", "config.json", "config.toml")
PROJECT_CONFIG_NAMES = ("slugline.yaml", "slugline.json", "slugline.toml")


class SluglineSettings(BaseSettings):
    """Settings for parsing, writing and logging.

    Values are resolved from several places. From strongest to weakest:

    * command line flags such as ``--debug``
    * configuration files (``--config``, the per-user file, then
      ``slugline.yaml`` in the working directory; later files win)
    * ``SLUGLINE_*`` environment variables, e.g.
      ``SLUGLINE_EXTRA_TIMES_OF_DAY="GOLDEN HOUR,TWILIGHT"``
    * a ``.env`` file
    * the defaults declared below
    """

    model_config = SettingsConfigDict(
        env_prefix="SLUGLINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Parsing settings
    encoding: str = Field(
        default="utf-8",
        description="Text encoding used to read and write screenplay files",
    )
    extra_times_of_day: list[str] = Field(
        default_factory=list,
        description=(
            "Additional time-of-day words recognised in scene headings "
            "(e.g. GOLDEN HOUR)"
        ),
    )

    # Writer settings
    suppress_scene_numbers: bool = Field(
        default=False,
        description="Omit scene number markers when writing Fountain text",
    )
    untitled_title: str = Field(
        default="Untitled",
        description="Outline title used when a screenplay has no title",
        min_length=1,
    )

    # Debug settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # Logging settings
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        pattern="^(?i)(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    log_format: str = Field(
        default="console",
        description="Log output format (console, json, structured)",
        pattern="^(?i)(console|json|structured)$",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional log file path",
    )

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path | None:
        """Expand ``$VARS`` and ``~`` and make the log path absolute."""
        if v is None:
            return None
        if isinstance(v, str):
            return Path(os.path.expandvars(v)).expanduser().resolve()
        if isinstance(v, Path):
            return v.resolve()
        raise ValueError(
            f"log_file must be a string or Path, got {type(v).__name__}: {v!r}"
        )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        if isinstance(v, str):
            return v.upper()
        raise ValueError(f"log_level must be a string, got {type(v).__name__}")

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_log_format(cls, v: Any) -> str:
        if isinstance(v, str):
            return v.lower()
        raise ValueError(f"log_format must be a string, got {type(v).__name__}")

    @field_validator("extra_times_of_day", mode="before")
    @classmethod
    def normalize_times_of_day(cls, v: Any) -> list[str]:
        """Accept a comma separated string as well as a list of words."""
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split(",")
        if not isinstance(v, list | tuple | set):
            raise ValueError(
                f"extra_times_of_day must be a list, got {type(v).__name__}"
            )
        return [str(word).strip().upper() for word in v if str(word).strip()]

    @classmethod
    def from_env(cls) -> SluglineSettings:
        """Settings from the environment, ``.env`` and defaults only."""
        return cls()

    @classmethod
    def from_file(cls, config_path: Path | str) -> SluglineSettings:
        """Load settings from a YAML, TOML or JSON file.

        Args:
            config_path: Path to the configuration file.

        Returns:
            Settings with the file's values applied.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigurationError: If the suffix is unsupported, the file cannot
                be parsed, or it holds something other than a mapping.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        suffix = config_path.suffix.lower()
        loader = CONFIG_LOADERS.get(suffix)
        if loader is None:
            raise ConfigurationError(
                message=f"Unsupported configuration file format: {suffix}",
                hint=f"Use one of: {', '.join(CONFIG_LOADERS)}",
                details={
                    "file": str(config_path),
                    "detected_format": suffix,
                    "supported_formats": list(CONFIG_LOADERS),
                },
            )

        try:
            data = loader(config_path)
        except (yaml.YAMLError, tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
            raise ConfigurationError(
                message=f"Cannot parse configuration file: {config_path}",
                hint="Check the file for syntax errors",
                details={"file": str(config_path), "error": str(e)},
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                message=f"Configuration file must contain a mapping: {config_path}",
                hint="Write settings as 'key: value' pairs at the top level",
                details={"file": str(config_path), "found": type(data).__name__},
            )

        check_config_keys(data)
        return cls(**data)

    @classmethod
    def from_multiple_sources(
        cls,
        config_files: list[Path | str] | None = None,
        env_file: Path | str | None = None,
        cli_args: dict[str, Any] | None = None,
    ) -> SluglineSettings:
        """Merge config files, the environment and CLI arguments.

        Missing config files are skipped with a warning. Only keys that a
        file actually sets override earlier files; ``None`` CLI values are
        ignored.

        Args:
            config_files: Files to apply in order, later ones winning.
            env_file: ``.env`` file to read instead of ``./.env``.
            cli_args: Values from command line flags.

        Returns:
            The merged settings.
        """
        file_values: dict[str, Any] = {}
        for config_file in config_files or []:
            try:
                loaded = cls.from_file(config_file)
            except FileNotFoundError:
                from slugline.config.logging import get_logger as _get_logger

                _get_logger(__name__).warning(
                    "Configuration file not found, using defaults",
                    config_file=str(config_file),
                )
                continue
            file_values.update(loaded.model_dump(exclude_unset=True))

        if env_file:
            settings = cls(_env_file=env_file, **file_values)  # type: ignore[call-arg]
        else:
            settings = cls(**file_values)

        overrides = {k: v for k, v in (cli_args or {}).items() if v is not None}
        if overrides:
            settings = cls(**{**settings.model_dump(), **overrides})
        return settings


_settings: SluglineSettings | None = None
_config_paths_cache: list[Path | str] | None = None


def _candidate_config_paths() -> Iterator[Path]:
    user_dir = Path.home() / ".config" / "slugline"
    for name in USER_CONFIG_NAMES:
        yield user_dir / name
    for name in PROJECT_CONFIG_NAMES:
        yield Path.cwd() / name


def _get_config_paths() -> list[Path | str]:
    """Existing config files, lowest precedence first. Cached."""
    global _config_paths_cache

    if _config_paths_cache is None:
        found: list[Path | str] = []
        for path in _candidate_config_paths():
            try:
                if path.is_file():
                    found.append(path)
            except OSError:
                continue
        _config_paths_cache = found
    return _config_paths_cache


def get_settings() -> SluglineSettings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        config_paths = _get_config_paths()
        if config_paths:
            _settings = SluglineSettings.from_multiple_sources(
                config_files=config_paths
            )
        else:
            _settings = SluglineSettings.from_env()
    return _settings


def set_settings(settings: SluglineSettings) -> None:
    """Replace the process-wide settings."""
    global _settings
    _settings = settings


def clear_settings_cache() -> None:
    """Forget loaded settings and discovered config files.

    The next ``get_settings()`` call reads the environment and the config
    files again.
    """
    global _settings, _config_paths_cache
    _settings = None
    _config_paths_cache = None


def reset_settings() -> None:
    """Reset the global settings instance."""
    clear_settings_cache()


def get_settings_for_cli(
    config_file: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> SluglineSettings:
    """Resolve settings for a CLI invocation.

    Args:
        config_file: File given with ``--config``. When set, it replaces
            the automatically discovered config files.
        cli_overrides: Values from global flags; ``None`` values are ignored.

    Returns:
        The settings to use for this invocation.

    Raises:
        FileNotFoundError: If ``config_file`` does not exist.
    """
    if config_file:
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")
        return SluglineSettings.from_multiple_sources(
            config_files=[config_file],
            cli_args=cli_overrides,
        )

    settings = get_settings()
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    if overrides:
        settings = SluglineSettings(**{**settings.model_dump(), **overrides})
    return settings
