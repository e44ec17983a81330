"""Configuration template generator for Slugline."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from slugline.config.settings import SluglineSettings

# Section title -> settings written in that section, in order
TEMPLATE_SECTIONS: list[tuple[str, list[str]]] = [
    ("Parsing", ["encoding", "extra_times_of_day"]),
    ("Writing and outlines", ["suppress_scene_numbers", "untitled_title"]),
    ("Logging", ["debug", "log_level", "log_format", "log_file"]),
]


def _default_value(name: str) -> Any:
    field = SluglineSettings.model_fields[name]
    if field.default_factory is not None:
        return field.default_factory()  # type: ignore[call-arg]
    return field.default


def _render_value(name: str, value: Any) -> str:
    rendered = yaml.safe_dump({name: value}, default_flow_style=True, sort_keys=False)
    # safe_dump wraps flow mappings in braces
    return rendered.strip().removeprefix("{").removesuffix("}")


def generate_config_template() -> str:
    """Generate a commented YAML configuration template.

    Every setting is written with its default value and the description
    declared on ``SluglineSettings``. Settings without a default (such as
    ``log_file``) are written commented out.

    Returns:
        The YAML template text.
    """
    lines = [
        "# Slugline Configuration File",
        "# Settings can be overridden by environment variables prefixed with "
        "SLUGLINE_",
        "# For example: SLUGLINE_LOG_LEVEL=DEBUG",
    ]

    for title, names in TEMPLATE_SECTIONS:
        lines.append("")
        lines.append(f"# {title}")
        for name in names:
            description = SluglineSettings.model_fields[name].description or name
            value = _default_value(name)
            lines.append(f"# {description}")
            if value is None:
                lines.append(f"# {name}: /path/to/value")
            else:
                lines.append(_render_value(name, value))

    return "\n".join(lines) + "\n"


def write_config_template(output_path: Path, force: bool = False) -> Path:
    """Write the configuration template to a file.

    Args:
        output_path: Path where the config file should be written.
        force: If True, overwrite existing file.

    Returns:
        The path to the written configuration file.

    Raises:
        FileExistsError: If the file exists and force is False.
    """
    output_path = output_path.resolve()

    if output_path.exists() and not force:
        raise FileExistsError(f"Configuration file already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(generate_config_template(), encoding="utf-8")

    return output_path


def get_default_config_path() -> Path:
    """Get the default configuration file path.

    Returns:
        ``~/.config/slugline/config.yaml``, or ``./slugline.yaml`` when the
        home directory cannot be used.
    """
    try:
        config_dir = Path.home().resolve() / ".config" / "slugline"
        config_dir.mkdir(parents=True, exist_ok=True)
        return config_dir / "config.yaml"
    except (OSError, RuntimeError):
        return Path.cwd() / "slugline.yaml"
