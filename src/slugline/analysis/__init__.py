"""Breakdowns computed from parsed screenplays."""

from __future__ import annotations

from .characters import CharacterInfo, extract_characters, normalize_character_name
from .locations import (
    LocationGroup,
    SceneWithLocation,
    all_locations,
    extract_scene_locations,
    group_scenes_by_location,
    locations_by_appearance,
    locations_by_frequency,
    scenes_at,
)

__all__ = [
    "CharacterInfo",
    "LocationGroup",
    "SceneWithLocation",
    "all_locations",
    "extract_characters",
    "extract_scene_locations",
    "group_scenes_by_location",
    "locations_by_appearance",
    "locations_by_frequency",
    "normalize_character_name",
    "scenes_at",
]
