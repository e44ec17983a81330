"""Fountain screenplay parser.

The parser walks the document line by line and assigns every line to an
element. It never fails on odd input: anything that matches no other rule
becomes action text.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Iterable
from dataclasses import replace
from pathlib import Path

from slugline.config import get_logger
from slugline.exceptions import (
    FileSystemError,
    ParseError,
    ScreenplayFileNotFoundError,
)
from slugline.parser.location import LocationAnalyzer
from slugline.parser.models import Element, ElementType, Screenplay
from slugline.parser.title_page import TitlePageExtractor

logger = get_logger(__name__)

SCENE_HEADING_PATTERN = re.compile(
    r"^((INT|EXT|EST|(I|INT)\.?/(E|EXT)\.?)[.\-\s].+|OVER BLACK)$", re.IGNORECASE
)
SCENE_NUMBER_PATTERN = re.compile(r"\s*#([^\n#]*?)#\s*$")
TRANSITION_PATTERN = re.compile(r"^[^a-z]*TO:$")
TRANSITION_PHRASES = frozenset({"FADE OUT.", "CUT TO BLACK.", "FADE TO BLACK."})
PAGE_BREAK_PATTERN = re.compile(r"^={3,}$")
TRAILING_PARENTHETICAL_PATTERN = re.compile(r"\s*\([^()]*\)\s*$")
TWO_SPACE_PATTERN = re.compile(r"^\s{2}$")
NOTE_PATTERN = re.compile(r"(/\*.*?\*/)|\[\[.*?\]\]", re.DOTALL)

# Stands in for a removed note so note-only lines can be dropped afterwards
_NOTE_MARK = "\x00"

# Prefixes that keep their meaning inside a dialogue block
_DIALOGUE_BREAKERS = ("~", "!", "@", "/*")

# Element kinds that belong to a character block
BLOCK_TYPES = frozenset(
    {ElementType.DIALOGUE, ElementType.PARENTHETICAL, ElementType.LYRICS}
)


def is_character_name(text: str) -> bool:
    """Return True if ``text`` is shaped like a character cue.

    A cue has at least one letter and no lower-case letters, ignoring a
    trailing parenthetical such as ``(CONT'D)`` and a dual-dialogue ``^``.
    """
    name = text.strip()
    if name.endswith("^"):
        name = name[:-1].rstrip()
    name = TRAILING_PARENTHETICAL_PATTERN.sub("", name)
    return any(c.isalpha() for c in name) and not any(c.islower() for c in name)


def line_kind(
    line: str, after_blank: bool = True, next_line: str | None = None
) -> ElementType | None:
    """Classify one line outside of a dialogue block.

    Args:
        line: The raw line.
        after_blank: Whether the previous line was blank (or the line starts
            the document).
        next_line: The following line, or None at the end of the document.

    Returns:
        The element kind the line starts, or None for a blank line.
    """
    stripped = line.strip()
    if not stripped:
        return None

    next_blank = next_line is None or not next_line.strip()

    if stripped.startswith("~"):
        return ElementType.LYRICS
    if stripped.startswith("!"):
        return ElementType.ACTION
    if stripped.startswith("@"):
        return ElementType.CHARACTER
    if stripped.startswith("/*"):
        return ElementType.BONEYARD
    if PAGE_BREAK_PATTERN.match(stripped):
        return ElementType.PAGE_BREAK
    if stripped.startswith("=") and not stripped.startswith("=="):
        return ElementType.SYNOPSIS
    if stripped.startswith("#"):
        return ElementType.SECTION_HEADING

    unnumbered = SCENE_NUMBER_PATTERN.sub("", stripped)
    # A forced heading needs text after the period
    forced_heading = (
        len(unnumbered) > 1
        and unnumbered.startswith(".")
        and not unnumbered.startswith("..")
    )
    if forced_heading or SCENE_HEADING_PATTERN.match(unnumbered):
        # Scene headings need a blank line on both sides
        if after_blank and next_blank:
            return ElementType.SCENE_HEADING
        return ElementType.ACTION

    if TRANSITION_PATTERN.match(stripped) or stripped in TRANSITION_PHRASES:
        return ElementType.TRANSITION
    if stripped.startswith(">"):
        if len(stripped) > 1 and stripped.endswith("<"):
            return ElementType.CENTERED
        return ElementType.TRANSITION
    if after_blank and not next_blank and is_character_name(stripped):
        return ElementType.CHARACTER
    return ElementType.ACTION


def strip_notes(text: str) -> list[str]:
    """Remove ``[[notes]]`` and split into lines.

    Lines that contained nothing but notes are dropped. Notes inside
    boneyard are left alone.
    """

    def _replace(match: re.Match[str]) -> str:
        return match.group(1) if match.group(1) is not None else _NOTE_MARK

    marked = NOTE_PATTERN.sub(_replace, text)
    lines = []
    for line in marked.split("\n"):
        if _NOTE_MARK in line:
            line = line.replace(_NOTE_MARK, "")
            if not line.strip():
                continue
        lines.append(line)
    return lines


class _ParseState:
    """Mutable bookkeeping for a single parse run."""

    def __init__(self) -> None:
        self.elements: list[Element] = []
        self.newlines_before = 1
        self.in_dialogue = False
        self.dual_block = False
        self.boneyard: list[str] | None = None

    @property
    def last(self) -> Element | None:
        return self.elements[-1] if self.elements else None

    def add(self, element: Element) -> None:
        self.elements.append(element)

    def extend_last(self, text: str) -> None:
        last = self.elements[-1]
        self.elements[-1] = replace(last, text=f"{last.text}\n{text}")


class FountainParser:
    """Parse Fountain text into a ``Screenplay``."""

    def __init__(self, extra_times_of_day: Iterable[str] | None = None) -> None:
        """Initialize the parser.

        Args:
            extra_times_of_day: Additional time-of-day words for scene
                heading analysis. Defaults to the configured
                ``extra_times_of_day`` setting.
        """
        if extra_times_of_day is None:
            from slugline.config import get_settings

            extra_times_of_day = get_settings().extra_times_of_day
        self.analyzer = LocationAnalyzer(extra_times_of_day)
        self.title_page_extractor = TitlePageExtractor()

    def parse(self, text: str, filename: str | None = None) -> Screenplay:
        """Parse Fountain text.

        Args:
            text: Fountain source text.
            filename: Optional name recorded on the screenplay.

        Returns:
            The parsed screenplay.
        """
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        lines = strip_notes(text)
        while lines and not lines[0].strip():
            lines.pop(0)

        title_page, consumed = self.title_page_extractor.extract(lines)
        elements = self._parse_body(lines[consumed:])

        counts = Counter(e.element_type.value for e in elements)
        logger.debug(
            "Parsed screenplay",
            filename=filename,
            elements=len(elements),
            title_page_entries=len(title_page),
            scenes=counts.get(ElementType.SCENE_HEADING.value, 0),
        )

        return Screenplay(
            filename=filename,
            elements=tuple(elements),
            title_page=tuple(title_page),
        )

    def parse_file(self, file_path: Path, encoding: str | None = None) -> Screenplay:
        """Read and parse a Fountain file.

        Args:
            file_path: Path to the Fountain file.
            encoding: Text encoding, defaults to the configured encoding.

        Returns:
            The parsed screenplay, with ``filename`` set to the file name.

        Raises:
            ScreenplayFileNotFoundError: If the file does not exist.
            ParseError: If the file cannot be decoded.
            FileSystemError: If the file cannot be read.
        """
        if encoding is None:
            from slugline.config import get_settings

            encoding = get_settings().encoding

        logger.debug("Reading screenplay file", path=str(file_path), encoding=encoding)
        try:
            content = file_path.read_text(encoding=encoding)
        except FileNotFoundError as e:
            raise ScreenplayFileNotFoundError(
                message=f"Screenplay file not found: {file_path}",
                hint="Check the path and try again.",
                details={"path": str(file_path)},
            ) from e
        except (UnicodeDecodeError, LookupError) as e:
            raise ParseError(
                message=f"Cannot decode screenplay file: {file_path}",
                hint="Set the correct text encoding with SLUGLINE_ENCODING.",
                details={"path": str(file_path), "encoding": encoding, "error": str(e)},
            ) from e
        except OSError as e:
            raise FileSystemError(
                message=f"Cannot read screenplay file: {file_path}",
                hint="Check that the path is a readable file.",
                details={"path": str(file_path), "error": str(e)},
            ) from e

        return self.parse(content, filename=file_path.name)

    def _parse_body(self, lines: list[str]) -> list[Element]:
        state = _ParseState()

        for index, line in enumerate(lines):
            next_line = lines[index + 1] if index + 1 < len(lines) else None
            stripped = line.strip()

            if state.boneyard is not None:
                self._continue_boneyard(state, state.boneyard, line)
                continue

            if state.in_dialogue and TWO_SPACE_PATTERN.match(line):
                last = state.last
                if last is not None and last.element_type is ElementType.DIALOGUE:
                    state.extend_last("")
                else:
                    state.add(
                        Element(
                            ElementType.DIALOGUE,
                            "",
                            is_dual_dialogue=state.dual_block,
                        )
                    )
                state.newlines_before = 0
                continue

            if not stripped:
                last = state.last
                if (
                    line
                    and state.newlines_before == 0
                    and not state.in_dialogue
                    and last is not None
                    and last.element_type is ElementType.ACTION
                ):
                    state.extend_last(line)
                    continue
                state.in_dialogue = False
                state.newlines_before += 1
                continue

            if state.in_dialogue and not stripped.startswith(_DIALOGUE_BREAKERS):
                self._add_dialogue_line(state, stripped)
            else:
                kind = line_kind(line, state.newlines_before > 0, next_line)
                self._add_line(state, kind, line, stripped)

            state.newlines_before = 0

        if state.boneyard is not None:
            # Unterminated boneyard runs to the end of the document
            state.add(Element(ElementType.BONEYARD, "\n".join(state.boneyard)))

        return state.elements

    def _add_line(
        self,
        state: _ParseState,
        kind: ElementType | None,
        line: str,
        stripped: str,
    ) -> None:
        if kind is ElementType.LYRICS:
            state.add(
                Element(
                    ElementType.LYRICS,
                    stripped[1:].strip(),
                    is_dual_dialogue=state.in_dialogue and state.dual_block,
                )
            )
        elif kind is ElementType.CHARACTER:
            self._add_character(state, stripped)
        elif kind is ElementType.BONEYARD:
            self._open_boneyard(state, stripped)
        elif kind is ElementType.PAGE_BREAK:
            state.in_dialogue = False
            state.add(Element(ElementType.PAGE_BREAK))
        elif kind is ElementType.SYNOPSIS:
            state.add(Element(ElementType.SYNOPSIS, stripped[1:].strip()))
        elif kind is ElementType.SECTION_HEADING:
            title = stripped.lstrip("#")
            state.add(
                Element(
                    ElementType.SECTION_HEADING,
                    title.strip(),
                    section_depth=len(stripped) - len(title),
                )
            )
        elif kind is ElementType.SCENE_HEADING:
            self._add_scene_heading(state, stripped)
        elif kind is ElementType.TRANSITION:
            text = stripped[1:].strip() if stripped.startswith(">") else stripped
            state.add(Element(ElementType.TRANSITION, text))
        elif kind is ElementType.CENTERED:
            state.add(
                Element(ElementType.CENTERED, stripped[1:-1].strip(), is_centered=True)
            )
        else:
            self._add_action(state, line, stripped)

    def _add_action(self, state: _ParseState, line: str, stripped: str) -> None:
        text = line.lstrip()[1:] if stripped.startswith("!") else line
        state.in_dialogue = False
        last = state.last
        if (
            state.newlines_before == 0
            and last is not None
            and last.element_type is ElementType.ACTION
        ):
            state.extend_last(text)
        else:
            state.add(Element(ElementType.ACTION, text))

    def _add_scene_heading(self, state: _ParseState, stripped: str) -> None:
        text = stripped[1:].strip() if stripped.startswith(".") else stripped
        scene_number = None
        match = SCENE_NUMBER_PATTERN.search(text)
        if match:
            scene_number = match.group(1).strip() or None
            text = text[: match.start()].rstrip()
        state.in_dialogue = False
        state.add(
            Element(
                ElementType.SCENE_HEADING,
                text,
                scene_number=scene_number,
                location=self.analyzer.analyze(text),
            )
        )

    def _add_character(self, state: _ParseState, stripped: str) -> None:
        name = stripped[1:].strip() if stripped.startswith("@") else stripped
        dual = name.endswith("^")
        if dual:
            name = name[:-1].rstrip()
            self._mark_previous_block_dual(state)
        state.add(Element(ElementType.CHARACTER, name, is_dual_dialogue=dual))
        state.in_dialogue = True
        state.dual_block = dual

    @staticmethod
    def _mark_previous_block_dual(state: _ParseState) -> None:
        index = len(state.elements) - 1
        while index >= 0 and state.elements[index].element_type in BLOCK_TYPES:
            index -= 1
        if index < 0 or state.elements[index].element_type is not ElementType.CHARACTER:
            return
        for i in range(index, len(state.elements)):
            state.elements[i] = replace(state.elements[i], is_dual_dialogue=True)

    @staticmethod
    def _add_dialogue_line(state: _ParseState, stripped: str) -> None:
        if len(stripped) > 1 and stripped.startswith("(") and stripped.endswith(")"):
            state.add(
                Element(
                    ElementType.PARENTHETICAL,
                    stripped[1:-1].strip(),
                    is_dual_dialogue=state.dual_block,
                )
            )
            return
        last = state.last
        if last is not None and last.element_type is ElementType.DIALOGUE:
            state.extend_last(stripped)
        else:
            state.add(
                Element(
                    ElementType.DIALOGUE, stripped, is_dual_dialogue=state.dual_block
                )
            )

    @staticmethod
    def _open_boneyard(state: _ParseState, stripped: str) -> None:
        if len(stripped) >= 4 and stripped.endswith("*/"):
            state.add(Element(ElementType.BONEYARD, stripped[2:-2].strip()))
            return
        opening = stripped[2:].strip()
        state.boneyard = [opening] if opening else []

    @staticmethod
    def _continue_boneyard(
        state: _ParseState, boneyard: list[str], line: str
    ) -> None:
        if line.rstrip().endswith("*/"):
            closing = line.rstrip()[:-2].strip()
            if closing:
                boneyard.append(closing)
            state.add(Element(ElementType.BONEYARD, "\n".join(boneyard)))
            state.boneyard = None
            state.newlines_before = 0
        else:
            boneyard.append(line)


def parse(text: str, filename: str | None = None) -> Screenplay:
    """Parse Fountain text with the configured settings."""
    return FountainParser().parse(text, filename=filename)


def parse_file(path: Path | str, encoding: str | None = None) -> Screenplay:
    """Read and parse a Fountain file with the configured settings."""
    return FountainParser().parse_file(Path(path), encoding=encoding)
