"""Slugline: Fountain screenplay parsing and structural analysis.

Slugline turns Fountain screenplay markup into typed elements, pulls
location data out of scene headings, rebuilds the chapter / scene group /
scene outline from section markers, and writes screenplays back to
Fountain.
"""

from pathlib import Path

from .analysis import extract_characters, group_scenes_by_location
from .config import SluglineSettings, get_logger, get_settings
from .exceptions import ParseError, SluglineError
from .parser import (
    Element,
    ElementType,
    FountainParser,
    FountainWriter,
    Lighting,
    NodeKind,
    OutlineNode,
    SceneLocation,
    Screenplay,
    TitlePageEntry,
    analyze_location,
    extract_outline,
    parse,
    write,
)
from .parser import parse_file as _parse_file
from .parser import write_file as _write_file

__version__ = "0.1.0"

__all__ = [
    "Element",
    "ElementType",
    "FountainParser",
    "FountainWriter",
    "Lighting",
    "NodeKind",
    "OutlineNode",
    "ParseError",
    "SceneLocation",
    "Screenplay",
    "SluglineError",
    "SluglineSettings",
    "TitlePageEntry",
    "__version__",
    "analyze_location",
    "extract_characters",
    "extract_outline",
    "get_logger",
    "get_settings",
    "group_scenes_by_location",
    "parse",
    "parse_file",
    "write",
    "write_file",
]


def parse_file(path: str | Path, encoding: str | None = None) -> Screenplay:
    """Read and parse a Fountain file.

    Args:
        path: Path to the ``.fountain`` file.
        encoding: Text encoding, defaults to the configured encoding.

    Returns:
        The parsed screenplay.
    """
    return _parse_file(path, encoding=encoding)


def write_file(
    screenplay: Screenplay,
    path: str | Path,
    suppress_scene_numbers: bool | None = None,
    normalize_headings: bool = False,
) -> Path:
    """Write a screenplay to a Fountain file and return the path."""
    return _write_file(
        screenplay,
        path,
        suppress_scene_numbers=suppress_scene_numbers,
        normalize_headings=normalize_headings,
    )
