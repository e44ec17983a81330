"""Data models for parsed screenplays."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from slugline.parser.location import Lighting, SceneLocation, analyze_location

if TYPE_CHECKING:
    from slugline.parser.outline import OutlineNode


class ElementType(str, Enum):
    """The closed set of screenplay element kinds."""

    SCENE_HEADING = "Scene Heading"
    ACTION = "Action"
    CHARACTER = "Character"
    DIALOGUE = "Dialogue"
    PARENTHETICAL = "Parenthetical"
    TRANSITION = "Transition"
    SECTION_HEADING = "Section Heading"
    SYNOPSIS = "Synopsis"
    PAGE_BREAK = "Page Break"
    LYRICS = "Lyrics"
    CENTERED = "Centered"
    BONEYARD = "Boneyard"

    def __str__(self) -> str:
        return self.value


ContentKey = tuple[ElementType, str, bool, bool, int]


@dataclass(frozen=True)
class Element:
    """One screenplay element in reading order.

    Scene headings carry a ``location`` computed from their text; every
    other kind has ``location=None``. The location does not take part in
    equality since it is derived from ``text``.
    """

    element_type: ElementType
    text: str = ""
    is_centered: bool = False
    is_dual_dialogue: bool = False
    scene_number: str | None = None
    section_depth: int = 0
    location: SceneLocation | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.section_depth < 0:
            raise ValueError(
                f"section_depth must be >= 0, got {self.section_depth}"
            )
        if self.element_type is ElementType.CENTERED and not self.is_centered:
            object.__setattr__(self, "is_centered", True)
        if self.element_type is ElementType.SCENE_HEADING:
            # A location carried over by dataclasses.replace may be stale
            if self.location is None or self.location.source != self.text:
                object.__setattr__(self, "location", analyze_location(self.text))
        elif self.location is not None:
            object.__setattr__(self, "location", None)

    @property
    def lighting(self) -> Lighting | None:
        return self.location.lighting if self.location else None

    @property
    def place(self) -> str | None:
        return self.location.place if self.location else None

    @property
    def sub_place(self) -> str | None:
        return self.location.sub_place if self.location else None

    @property
    def time_of_day(self) -> str | None:
        return self.location.time_of_day if self.location else None

    @property
    def modifiers(self) -> tuple[str, ...]:
        return self.location.modifiers if self.location else ()

    @property
    def content_key(self) -> ContentKey:
        """Fields that must survive a write and re-parse unchanged."""
        return (
            self.element_type,
            self.text,
            self.is_centered,
            self.is_dual_dialogue,
            self.section_depth,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        data: dict[str, Any] = {
            "type": self.element_type.value,
            "text": self.text,
        }
        if self.is_centered:
            data["centered"] = True
        if self.is_dual_dialogue:
            data["dual_dialogue"] = True
        if self.scene_number is not None:
            data["scene_number"] = self.scene_number
        if self.element_type is ElementType.SECTION_HEADING:
            data["depth"] = self.section_depth
        if self.location is not None:
            data["location"] = {
                "lighting": self.location.lighting.value,
                "place": self.location.place,
                "sub_place": self.location.sub_place,
                "time_of_day": self.location.time_of_day,
                "modifiers": list(self.location.modifiers),
            }
        return data


@dataclass(frozen=True)
class TitlePageEntry:
    """A title page key with its values in source order."""

    key: str
    values: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.values, tuple):
            object.__setattr__(self, "values", tuple(self.values))


@dataclass(frozen=True)
class Screenplay:
    """A parsed screenplay.

    Instances are immutable; use ``with_elements`` or ``dataclasses.replace``
    to derive an edited copy.
    """

    filename: str | None = None
    elements: tuple[Element, ...] = ()
    title_page: tuple[TitlePageEntry, ...] = ()
    suppress_scene_numbers: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.elements, tuple):
            object.__setattr__(self, "elements", tuple(self.elements))
        if not isinstance(self.title_page, tuple):
            object.__setattr__(self, "title_page", tuple(self.title_page))

    @classmethod
    def from_string(cls, text: str, filename: str | None = None) -> Screenplay:
        """Parse Fountain text into a screenplay."""
        from slugline.parser.classifier import FountainParser

        return FountainParser().parse(text, filename=filename)

    @classmethod
    def from_file(cls, path: Path | str, encoding: str | None = None) -> Screenplay:
        """Read and parse a Fountain file."""
        from slugline.parser.classifier import FountainParser

        return FountainParser().parse_file(Path(path), encoding=encoding)

    def with_elements(self, elements: Iterable[Element]) -> Screenplay:
        """Return a copy of this screenplay with a different element list."""
        return Screenplay(
            filename=self.filename,
            elements=tuple(elements),
            title_page=self.title_page,
            suppress_scene_numbers=self.suppress_scene_numbers,
        )

    def title_values(self, key: str) -> tuple[str, ...]:
        """Values of the first title page entry matching ``key`` (any case)."""
        wanted = key.lower()
        for entry in self.title_page:
            if entry.key.lower() == wanted:
                return entry.values
        return ()

    @property
    def title(self) -> str | None:
        """The title page title, if any, with multiple lines joined."""
        values = self.title_values("title")
        return " ".join(values) if values else None

    @property
    def scene_headings(self) -> list[Element]:
        return [
            e for e in self.elements if e.element_type is ElementType.SCENE_HEADING
        ]

    def outline(self, untitled_title: str | None = None) -> OutlineNode:
        """Build the outline tree for this screenplay."""
        from slugline.parser.outline import extract_outline

        return extract_outline(self, untitled_title=untitled_title)

    def to_markup(
        self,
        suppress_scene_numbers: bool | None = None,
        normalize_headings: bool = False,
    ) -> str:
        """Serialize back to Fountain text."""
        from slugline.parser.writer import FountainWriter

        return FountainWriter(
            suppress_scene_numbers=suppress_scene_numbers,
            normalize_headings=normalize_headings,
        ).write(self)
