"""Serialize screenplays back to Fountain text."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from slugline.config import get_logger
from slugline.exceptions import FileSystemError
from slugline.parser.classifier import BLOCK_TYPES, line_kind
from slugline.parser.models import Element, ElementType, Screenplay
from slugline.parser.title_page import TitlePageExtractor

logger = get_logger(__name__)

TITLE_PAGE_INDENT = "    "
# Blank dialogue paragraph lines must be written as two spaces
DIALOGUE_BREAK = "  "


class _WriteContext:
    """Per-call writer state."""

    def __init__(self, elements: tuple[Element, ...]) -> None:
        self.elements = elements
        self.index = 0
        self.scene_count = 0

    @property
    def next_element(self) -> Element | None:
        position = self.index + 1
        return self.elements[position] if position < len(self.elements) else None

    def previous_cue(self) -> Element | None:
        """The cue whose block ends right before the current element."""
        position = self.index - 1
        while position >= 0 and self.elements[position].element_type in BLOCK_TYPES:
            position -= 1
        return self._cue_at(position)

    def next_cue(self) -> Element | None:
        """The cue that directly follows the current element's block."""
        position = self.index + 1
        while (
            position < len(self.elements)
            and self.elements[position].element_type in BLOCK_TYPES
        ):
            position += 1
        return self._cue_at(position)

    def _cue_at(self, position: int) -> Element | None:
        if 0 <= position < len(self.elements):
            element = self.elements[position]
            if element.element_type is ElementType.CHARACTER:
                return element
        return None


class FountainWriter:
    """Write a ``Screenplay`` as Fountain text.

    Forcing markers (``!``, ``@``, ``>``, ``.``) are only written where the
    plain text would be read back as a different element kind.

    Scene headings are written with their parsed text by default, not
    reassembled from lighting, place, sub-place and time of day. That keeps
    spelling and punctuation such as ``int/ext`` exactly as written. Pass
    ``normalize_headings=True`` to rebuild each heading from its location
    with ``" - "`` joins.
    """

    def __init__(
        self,
        suppress_scene_numbers: bool | None = None,
        normalize_headings: bool = False,
    ) -> None:
        """Initialize the writer.

        Args:
            suppress_scene_numbers: Force scene number markers off. When
                None, the screenplay's own flag and the
                ``suppress_scene_numbers`` setting decide.
            normalize_headings: Rebuild scene headings from their parsed
                location instead of writing the original heading text.
        """
        self.suppress_scene_numbers = suppress_scene_numbers
        self.normalize_headings = normalize_headings
        self._renderers: dict[ElementType, Callable[[Element, _WriteContext], str]] = {
            ElementType.SCENE_HEADING: self._scene_heading,
            ElementType.ACTION: self._action,
            ElementType.CHARACTER: self._character,
            ElementType.DIALOGUE: self._dialogue,
            ElementType.PARENTHETICAL: lambda e, _: f"({e.text})",
            ElementType.TRANSITION: self._transition,
            ElementType.SECTION_HEADING: self._section,
            ElementType.SYNOPSIS: lambda e, _: f"= {e.text}",
            ElementType.PAGE_BREAK: lambda e, _: "===",
            ElementType.LYRICS: lambda e, _: f"~{e.text}",
            ElementType.CENTERED: lambda e, _: f"> {e.text} <",
            ElementType.BONEYARD: self._boneyard,
        }
        missing = set(ElementType) - set(self._renderers)
        if missing:
            raise NotImplementedError(
                f"No writer rule for element types: {sorted(m.value for m in missing)}"
            )

    def write(self, screenplay: Screenplay) -> str:
        """Serialize ``screenplay`` to Fountain text.

        Args:
            screenplay: The screenplay to write.

        Returns:
            Fountain text ending with a newline.
        """
        suppress = self._suppress_numbers(screenplay)
        context = _WriteContext(screenplay.elements)

        chunks: list[str] = []
        block: Element | None = None
        for index, element in enumerate(screenplay.elements):
            context.index = index
            kind = element.element_type
            if kind is ElementType.SCENE_HEADING:
                context.scene_count += 1
            text = self._renderers[kind](element, context)
            if kind is ElementType.SCENE_HEADING and not suppress:
                number = element.scene_number or str(context.scene_count)
                text = f"{text} #{number}#"

            if block is not None and self._joins_block(element, block):
                separator = "\n"
            else:
                separator = "\n\n"
                block = element if kind is ElementType.CHARACTER else None
            chunks.append(text if not chunks else separator + text)

        if chunks and not screenplay.title_page:
            chunks[0] = self._guard_title_page(screenplay.elements[0], chunks, context)

        body = "".join(chunks)
        title_page = self._title_page(screenplay)
        if title_page and body:
            output = f"{title_page}\n\n{body}"
        else:
            output = title_page or body
        return f"{output}\n" if output else ""

    def write_file(
        self, screenplay: Screenplay, path: Path, encoding: str | None = None
    ) -> Path:
        """Write ``screenplay`` to ``path``.

        Raises:
            FileSystemError: If the file cannot be written.
        """
        if encoding is None:
            from slugline.config import get_settings

            encoding = get_settings().encoding
        text = self.write(screenplay)
        try:
            path.write_text(text, encoding=encoding)
        except (OSError, LookupError, UnicodeEncodeError) as e:
            raise FileSystemError(
                message=f"Cannot write screenplay file: {path}",
                hint="Check that the directory exists and is writable.",
                details={"path": str(path), "encoding": encoding, "error": str(e)},
            ) from e
        logger.info("Wrote screenplay", path=str(path), bytes=len(text))
        return path

    @staticmethod
    def _joins_block(element: Element, cue: Element) -> bool:
        """Whether ``element`` is written inside the open block of ``cue``.

        Boneyard inside a block is written on its own line without closing
        the block. A lyric only joins a block with the same dual flag, since
        lyrics read inside a block take the block's flag.
        """
        kind = element.element_type
        if kind is ElementType.LYRICS:
            return element.is_dual_dialogue == cue.is_dual_dialogue
        return kind in BLOCK_TYPES or kind is ElementType.BONEYARD

    def _suppress_numbers(self, screenplay: Screenplay) -> bool:
        if self.suppress_scene_numbers is not None:
            return self.suppress_scene_numbers
        if screenplay.suppress_scene_numbers:
            return True
        from slugline.config import get_settings

        return get_settings().suppress_scene_numbers

    @staticmethod
    def _title_page(screenplay: Screenplay) -> str:
        lines = []
        for entry in screenplay.title_page:
            if len(entry.values) == 1:
                lines.append(f"{entry.key}: {entry.values[0]}")
            else:
                lines.append(f"{entry.key}:")
                lines.extend(f"{TITLE_PAGE_INDENT}{value}" for value in entry.values)
        return "\n".join(lines)

    def _guard_title_page(
        self, element: Element, chunks: list[str], context: _WriteContext
    ) -> str:
        """Force the first element if it would be read as a title page."""
        head = "".join(chunks[:2]).split("\n")
        _, consumed = TitlePageExtractor().extract(head)
        if not consumed:
            return chunks[0]
        prefix = {
            ElementType.ACTION: "!",
            ElementType.CHARACTER: "@",
            ElementType.SCENE_HEADING: ".",
            ElementType.TRANSITION: "> ",
        }.get(element.element_type)
        if prefix is None or chunks[0].startswith(prefix.strip()):
            return chunks[0]
        return prefix + chunks[0]

    def _scene_heading(self, element: Element, context: _WriteContext) -> str:
        text = element.text
        if self.normalize_headings and element.location is not None:
            text = element.location.heading
        if line_kind(text) is ElementType.SCENE_HEADING and not text.startswith("."):
            return text
        return f".{text}"

    @staticmethod
    def _action(element: Element, context: _WriteContext) -> str:
        lines = element.text.split("\n")
        written = []
        for position, line in enumerate(lines):
            following = lines[position + 1] if position + 1 < len(lines) else None
            if position > 0 and not line.strip():
                written.append(line)
                continue
            kind = line_kind(line, after_blank=position == 0, next_line=following)
            if kind is not ElementType.ACTION or line.lstrip().startswith("!"):
                line = f"!{line}"
            written.append(line)
        return "\n".join(written)

    @staticmethod
    def _character(element: Element, context: _WriteContext) -> str:
        name = element.text
        following = context.next_element
        followed_by_block = following is not None and (
            following.element_type is ElementType.PARENTHETICAL
            or (
                following.element_type is ElementType.LYRICS
                and following.is_dual_dialogue == element.is_dual_dialogue
            )
            or (
                following.element_type is ElementType.DIALOGUE
                and bool(following.text.split("\n")[0].strip())
            )
        )
        plain = (
            followed_by_block
            and line_kind(name, next_line="x") is ElementType.CHARACTER
            and not name.startswith("@")
        )
        text = name if plain else f"@{name}"

        # A ^ cue also marks the block right before it as dual, so the
        # first cue of a dual run is left to its successor.
        if element.is_dual_dialogue:
            previous, following_cue = context.previous_cue(), context.next_cue()
            if (previous is not None and previous.is_dual_dialogue) or not (
                following_cue is not None and following_cue.is_dual_dialogue
            ):
                text += " ^"
        return text

    @staticmethod
    def _dialogue(element: Element, context: _WriteContext) -> str:
        return "\n".join(
            line if line.strip() else DIALOGUE_BREAK
            for line in element.text.split("\n")
        )

    @staticmethod
    def _transition(element: Element, context: _WriteContext) -> str:
        text = element.text
        if line_kind(text) is ElementType.TRANSITION and not text.startswith(">"):
            return text
        return f"> {text}"

    @staticmethod
    def _section(element: Element, context: _WriteContext) -> str:
        return f"{'#' * max(element.section_depth, 1)} {element.text}"

    @staticmethod
    def _boneyard(element: Element, context: _WriteContext) -> str:
        text = element.text
        if "\n" in text or text != text.strip():
            return f"/*\n{text}\n*/"
        return f"/* {text} */"


def write(
    screenplay: Screenplay,
    suppress_scene_numbers: bool | None = None,
    normalize_headings: bool = False,
) -> str:
    """Serialize a screenplay to Fountain text."""
    return FountainWriter(
        suppress_scene_numbers=suppress_scene_numbers,
        normalize_headings=normalize_headings,
    ).write(screenplay)


def write_file(
    screenplay: Screenplay,
    path: Path | str,
    suppress_scene_numbers: bool | None = None,
    normalize_headings: bool = False,
    encoding: str | None = None,
) -> Path:
    """Serialize a screenplay and write it to ``path``."""
    return FountainWriter(
        suppress_scene_numbers=suppress_scene_numbers,
        normalize_headings=normalize_headings,
    ).write_file(screenplay, Path(path), encoding=encoding)
