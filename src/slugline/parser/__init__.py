"""Fountain screenplay parsing, outlining and writing."""

from __future__ import annotations

from .classifier import FountainParser, line_kind, parse, parse_file
from .location import (
    DEFAULT_TIMES_OF_DAY,
    Lighting,
    LocationAnalyzer,
    SceneLocation,
    analyze_location,
)
from .models import Element, ElementType, Screenplay, TitlePageEntry
from .outline import NodeKind, OutlineExtractor, OutlineNode, extract_outline
from .title_page import TitlePageExtractor, canonical_key
from .writer import FountainWriter, write, write_file

__all__ = [
    "DEFAULT_TIMES_OF_DAY",
    "Element",
    "ElementType",
    "FountainParser",
    "FountainWriter",
    "Lighting",
    "LocationAnalyzer",
    "NodeKind",
    "OutlineExtractor",
    "OutlineNode",
    "SceneLocation",
    "Screenplay",
    "TitlePageEntry",
    "TitlePageExtractor",
    "analyze_location",
    "canonical_key",
    "extract_outline",
    "line_kind",
    "parse",
    "parse_file",
    "write",
    "write_file",
]
