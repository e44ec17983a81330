"""Location breakdown for production planning."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from slugline.parser.location import Lighting, SceneLocation
from slugline.parser.models import Element, Screenplay


@dataclass(frozen=True)
class SceneWithLocation:
    """A scene heading together with its parsed location."""

    location: SceneLocation
    element_index: int
    heading: Element
    scene_number: str | None = None


@dataclass(frozen=True)
class LocationGroup:
    """All scenes that share a location key."""

    location_key: str
    scenes: tuple[SceneWithLocation, ...]

    @property
    def representative(self) -> SceneLocation:
        """Location of the first scene at this place."""
        return self.scenes[0].location

    @property
    def scene_count(self) -> int:
        return len(self.scenes)

    @property
    def first_index(self) -> int:
        return self.scenes[0].element_index

    @property
    def lighting_types(self) -> frozenset[Lighting]:
        return frozenset(scene.location.lighting for scene in self.scenes)

    @property
    def times_of_day(self) -> frozenset[str]:
        return frozenset(
            scene.location.time_of_day
            for scene in self.scenes
            if scene.location.time_of_day
        )

    @property
    def has_multiple_lighting_types(self) -> bool:
        return len(self.lighting_types) > 1

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "location": self.representative.full_location,
            "location_key": self.location_key,
            "scene_count": self.scene_count,
            "lighting": sorted(
                lighting.abbreviation or lighting.value
                for lighting in self.lighting_types
            ),
            "times_of_day": sorted(self.times_of_day),
            "scenes": [
                {
                    "index": scene.element_index,
                    "heading": scene.heading.text,
                    "scene_number": scene.scene_number,
                }
                for scene in self.scenes
            ],
        }


def extract_scene_locations(screenplay: Screenplay) -> list[SceneWithLocation]:
    """List every scene heading with its location, in script order."""
    scenes = []
    for index, element in enumerate(screenplay.elements):
        # Only scene headings carry a location
        if element.location is None:
            continue
        scenes.append(
            SceneWithLocation(
                location=element.location,
                element_index=index,
                heading=element,
                scene_number=element.scene_number,
            )
        )
    return scenes


def group_scenes_by_location(screenplay: Screenplay) -> dict[str, LocationGroup]:
    """Group scenes by ``SceneLocation.location_key``.

    The mapping is ordered by first appearance.
    """
    grouped: dict[str, list[SceneWithLocation]] = {}
    for scene in extract_scene_locations(screenplay):
        grouped.setdefault(scene.location.location_key, []).append(scene)
    return {
        key: LocationGroup(location_key=key, scenes=tuple(scenes))
        for key, scenes in grouped.items()
    }


def locations_by_frequency(screenplay: Screenplay) -> list[LocationGroup]:
    """Location groups, most used first; ties keep appearance order."""
    groups = group_scenes_by_location(screenplay).values()
    return sorted(groups, key=lambda group: -group.scene_count)


def locations_by_appearance(screenplay: Screenplay) -> list[LocationGroup]:
    """Location groups in order of first appearance."""
    groups = group_scenes_by_location(screenplay).values()
    return sorted(groups, key=lambda group: group.first_index)


def scenes_at(screenplay: Screenplay, location_key: str) -> list[SceneWithLocation]:
    """Scenes at ``location_key``, or an empty list."""
    group = group_scenes_by_location(screenplay).get(location_key.upper())
    return list(group.scenes) if group else []


def all_locations(screenplay: Screenplay) -> list[str]:
    """Sorted unique location keys."""
    return sorted(group_scenes_by_location(screenplay))
