"""Structured location data derived from scene heading text."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

SEGMENT_DELIMITER = " - "


class Lighting(Enum):
    """Interior/exterior marker at the start of a scene heading."""

    INTERIOR = "interior"
    EXTERIOR = "exterior"
    BOTH = "both"
    UNKNOWN = "unknown"

    @property
    def abbreviation(self) -> str:
        """Canonical heading prefix for this lighting ("" for UNKNOWN)."""
        return _ABBREVIATIONS[self]


_ABBREVIATIONS = {
    Lighting.INTERIOR: "INT.",
    Lighting.EXTERIOR: "EXT.",
    Lighting.BOTH: "INT./EXT.",
    Lighting.UNKNOWN: "",
}

# Longest alternatives first so INT./EXT is not read as INT
LIGHTING_PATTERN = re.compile(
    r"^(INT\./EXT|INT/EXT|EXT\./INT|EXT/INT|I/E|INT|EXT)(\.|(?=\s)|$)",
    re.IGNORECASE,
)
MODIFIER_PATTERN = re.compile(r"\(([^()]*)\)")
MODIFIER_STRIP_PATTERN = re.compile(r"\s*\([^()]*\)")

DEFAULT_TIMES_OF_DAY: frozenset[str] = frozenset(
    {
        "DAY",
        "NIGHT",
        "MORNING",
        "AFTERNOON",
        "EVENING",
        "DAWN",
        "DUSK",
        "SUNRISE",
        "SUNSET",
        "NOON",
        "MIDNIGHT",
        "LATER",
        "MOMENTS LATER",
        "CONTINUOUS",
        "SAME",
        "SAME TIME",
        "MAGIC HOUR",
        "FIRST LIGHT",
        "LATE NIGHT",
        "EARLY MORNING",
    }
)


@dataclass(frozen=True)
class SceneLocation:
    """Location fields parsed out of one scene heading.

    Attributes:
        lighting: Interior/exterior marker.
        place: Primary place, never empty.
        sub_place: Area within the place, if any.
        time_of_day: Recognised time-of-day segment, if any.
        modifiers: Parenthesized notes such as ``FLASHBACK`` or ``1995``.
        source: The heading text this location was derived from.
    """

    lighting: Lighting
    place: str
    sub_place: str | None = None
    time_of_day: str | None = None
    modifiers: tuple[str, ...] = ()
    source: str = field(default="", compare=False)

    @property
    def full_location(self) -> str:
        """Place and sub-place joined the way they appear in a heading."""
        if self.sub_place:
            return f"{self.place}{SEGMENT_DELIMITER}{self.sub_place}"
        return self.place

    @property
    def location_key(self) -> str:
        """Key used to group scenes that happen at the same place."""
        normalized = self.full_location.upper().replace("’", "'")
        return " ".join(normalized.split())

    @property
    def heading(self) -> str:
        """Reassemble a canonical scene heading from the parsed fields."""
        body = [self.place]
        if self.sub_place:
            body.append(self.sub_place)
        if self.time_of_day:
            body.append(self.time_of_day)
        text = SEGMENT_DELIMITER.join(body)
        if self.lighting is not Lighting.UNKNOWN:
            text = f"{self.lighting.abbreviation} {text}"
        for modifier in self.modifiers:
            text += f" ({modifier})"
        return text


class LocationAnalyzer:
    """Split scene heading text into a ``SceneLocation``.

    The analyzer is total: every input yields a location, with
    ``Lighting.UNKNOWN`` when no lighting prefix is present.
    """

    def __init__(self, extra_times_of_day: Iterable[str] = ()) -> None:
        """Initialize the analyzer.

        Args:
            extra_times_of_day: Words recognised as time of day in addition
                to ``DEFAULT_TIMES_OF_DAY``.
        """
        self.times_of_day = DEFAULT_TIMES_OF_DAY | {
            word.strip().upper() for word in extra_times_of_day if word.strip()
        }

    def analyze(self, text: str) -> SceneLocation:
        """Parse a scene heading.

        Args:
            text: Heading text without scene number markers.

        Returns:
            The parsed location.
        """
        heading = text.strip()

        modifiers = [
            m.strip() for m in MODIFIER_PATTERN.findall(heading) if m.strip()
        ]
        remainder = MODIFIER_STRIP_PATTERN.sub("", heading).strip()

        lighting = Lighting.UNKNOWN
        match = LIGHTING_PATTERN.match(remainder)
        if match:
            lighting = self._lighting_for(match.group(1))
            remainder = remainder[match.end() :].strip()

        segments = [s.strip() for s in remainder.split(SEGMENT_DELIMITER)]
        segments = [s for s in segments if s]

        place = segments[0] if segments else ""
        rest = segments[1:]

        time_index = None
        for index, segment in enumerate(rest):
            if segment.upper() in self.times_of_day:
                time_index = index
                break

        time_of_day = None
        if time_index is None:
            sub_segments = rest
        else:
            time_of_day = rest[time_index]
            sub_segments = rest[:time_index]
            modifiers.extend(rest[time_index + 1 :])

        if not place:
            place = heading

        return SceneLocation(
            lighting=lighting,
            place=place,
            sub_place=SEGMENT_DELIMITER.join(sub_segments) or None,
            time_of_day=time_of_day,
            modifiers=tuple(modifiers),
            source=text,
        )

    @staticmethod
    def _lighting_for(token: str) -> Lighting:
        token = token.upper()
        if token == "INT":
            return Lighting.INTERIOR
        if token == "EXT":
            return Lighting.EXTERIOR
        return Lighting.BOTH


_default_analyzer = LocationAnalyzer()


def analyze_location(
    text: str, extra_times_of_day: Iterable[str] | None = None
) -> SceneLocation:
    """Parse scene heading text into a ``SceneLocation``.

    Args:
        text: Scene heading text.
        extra_times_of_day: Optional additional time-of-day words.

    Returns:
        The parsed location.
    """
    if extra_times_of_day:
        return LocationAnalyzer(extra_times_of_day).analyze(text)
    return _default_analyzer.analyze(text)
