"""Character breakdown: who speaks, where, and how much."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from slugline.parser.models import ElementType, Screenplay

_EXTENSION_PATTERN = re.compile(r"\s*\([^()]*\)\s*$")


def normalize_character_name(text: str) -> str:
    """Drop extensions such as ``(V.O.)`` and ``(CONT'D)`` from a cue."""
    name = text.strip().rstrip("^").strip()
    while True:
        stripped = _EXTENSION_PATTERN.sub("", name)
        if stripped == name:
            break
        name = stripped
    return name.strip()


@dataclass
class CharacterInfo:
    """Dialogue statistics for one character.

    Attributes:
        name: Character name without extensions.
        scenes: Ordinals (0-based) of the scenes the character speaks in.
        cues: Number of character cues.
        dialogue_lines: Number of non-empty dialogue lines.
        dialogue_words: Number of words in those lines.
        first_scene: Ordinal of the first scene with dialogue, or None if
            the character only speaks before the first scene heading.
    """

    name: str
    scenes: list[int] = field(default_factory=list)
    cues: int = 0
    dialogue_lines: int = 0
    dialogue_words: int = 0
    first_scene: int | None = None

    @property
    def scene_count(self) -> int:
        return len(self.scenes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "scenes": list(self.scenes),
            "scene_count": self.scene_count,
            "cues": self.cues,
            "dialogue_lines": self.dialogue_lines,
            "dialogue_words": self.dialogue_words,
            "first_scene": self.first_scene,
        }


def extract_characters(screenplay: Screenplay) -> dict[str, CharacterInfo]:
    """Collect dialogue statistics per character.

    Args:
        screenplay: The parsed screenplay.

    Returns:
        Mapping of character name to statistics, in order of first cue.
    """
    characters: dict[str, CharacterInfo] = {}
    scene: int | None = None
    scene_ordinal = -1
    speaker: CharacterInfo | None = None

    for element in screenplay.elements:
        kind = element.element_type
        if kind is ElementType.SCENE_HEADING:
            scene_ordinal += 1
            scene = scene_ordinal
            speaker = None
        elif kind is ElementType.CHARACTER:
            name = normalize_character_name(element.text)
            if not name:
                speaker = None
                continue
            speaker = characters.setdefault(name, CharacterInfo(name=name))
            speaker.cues += 1
            if scene is not None:
                if scene not in speaker.scenes:
                    speaker.scenes.append(scene)
                if speaker.first_scene is None:
                    speaker.first_scene = scene
        elif kind is ElementType.DIALOGUE and speaker is not None:
            lines = [line for line in element.text.split("\n") if line.strip()]
            speaker.dialogue_lines += len(lines)
            speaker.dialogue_words += sum(len(line.split()) for line in lines)
        elif kind not in (ElementType.PARENTHETICAL, ElementType.LYRICS):
            speaker = None

    return characters
