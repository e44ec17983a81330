"""Outline tree built from section and scene headings."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath
from typing import Any

from slugline.config import get_logger
from slugline.parser.models import Element, ElementType, Screenplay

logger = get_logger(__name__)

CHAPTER_DEPTH = 2
SCENE_GROUP_DEPTH = 3
DIRECTIVE_MARKER = "S#"


class NodeKind(str, Enum):
    """Kinds of outline nodes, outermost first."""

    TITLE = "title"
    CHAPTER = "chapter"
    SCENE_GROUP = "scene_group"
    SCENE = "scene"
    PRE_SCENE = "pre_scene"


@dataclass(frozen=True)
class OutlineNode:
    """A node of the outline tree.

    Attributes:
        kind: Node kind.
        element_range: Half-open ``(start, end)`` range of element indices
            covered by this node.
        children: Child nodes in reading order.
        title: Display title (section text, scene heading text, or the
            screenplay title for the root).
        synthetic: True for chapters and scene groups created implicitly
            to hold content that had no explicit parent heading.
        directive: For scene groups, the directive name (``PROLOGUE`` in
            ``### PROLOGUE: opening S#{{SERIES: 1001}}``).
        directive_description: For scene groups, the text from ``S#`` on.
    """

    kind: NodeKind
    element_range: tuple[int, int]
    children: tuple[OutlineNode, ...] = ()
    title: str | None = None
    synthetic: bool = False
    directive: str | None = None
    directive_description: str | None = None

    @property
    def start(self) -> int:
        return self.element_range[0]

    @property
    def end(self) -> int:
        return self.element_range[1]

    def walk(self) -> Iterator[OutlineNode]:
        """Yield this node and all descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find_all(self, kind: NodeKind) -> list[OutlineNode]:
        """All nodes of ``kind`` in this subtree, in reading order."""
        return [node for node in self.walk() if node.kind is kind]

    def elements(self, screenplay: Screenplay) -> tuple[Element, ...]:
        """The elements this node covers."""
        return screenplay.elements[self.start : self.end]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        data: dict[str, Any] = {
            "kind": self.kind.value,
            "range": [self.start, self.end],
        }
        if self.title is not None:
            data["title"] = self.title
        if self.synthetic:
            data["synthetic"] = True
        if self.directive is not None:
            data["directive"] = self.directive
        if self.directive_description is not None:
            data["directive_description"] = self.directive_description
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


def split_directive(text: str) -> tuple[str | None, str | None]:
    """Split a scene group heading into directive name and description.

    >>> split_directive("PROLOGUE: cold open S#{{SERIES: 1001}}")
    ('PROLOGUE', 'S#{{SERIES: 1001}}')
    """
    text = text.strip()
    description = None
    marker = text.find(DIRECTIVE_MARKER)
    if marker >= 0:
        description = text[marker:].strip()
        text = text[:marker].strip()
    if ":" in text:
        text = text.split(":", 1)[0].strip()
    return text or None, description


class _NodeBuilder:
    """Open outline node whose end index is not known yet."""

    def __init__(
        self,
        kind: NodeKind,
        start: int,
        title: str | None = None,
        synthetic: bool = False,
    ) -> None:
        self.kind = kind
        self.start = start
        self.end: int | None = None
        self.title = title
        self.synthetic = synthetic
        self.children: list[_NodeBuilder] = []

    def freeze(self, default_end: int) -> OutlineNode:
        end = self.end if self.end is not None else default_end
        directive = description = None
        if self.kind is NodeKind.SCENE_GROUP and self.title:
            directive, description = split_directive(self.title)
        return OutlineNode(
            kind=self.kind,
            element_range=(self.start, end),
            children=tuple(child.freeze(end) for child in self.children),
            title=self.title,
            synthetic=self.synthetic,
            directive=directive,
            directive_description=description,
        )


class OutlineExtractor:
    """Reconcile section depths into a Title > Chapter > Group > Scene tree.

    Depth skips never fail: a scene group with no open chapter gets an
    implicit chapter, and a scene with no open group gets an implicit
    group. Elements before the first chapter form a pre-scene node.
    """

    def __init__(self, untitled_title: str | None = None) -> None:
        if untitled_title is None:
            from slugline.config import get_settings

            untitled_title = get_settings().untitled_title
        self.untitled_title = untitled_title

    def extract(self, screenplay: Screenplay) -> OutlineNode:
        """Build the outline tree for ``screenplay``."""
        elements = screenplay.elements
        total = len(elements)
        chapters: list[_NodeBuilder] = []
        chapter: _NodeBuilder | None = None
        group: _NodeBuilder | None = None
        scene: _NodeBuilder | None = None

        def close(node: _NodeBuilder | None, index: int) -> None:
            if node is not None and node.end is None:
                node.end = index

        def ensure_chapter(index: int) -> _NodeBuilder:
            nonlocal chapter
            if chapter is None:
                chapter = _NodeBuilder(NodeKind.CHAPTER, index, synthetic=True)
                chapters.append(chapter)
            return chapter

        def ensure_group(index: int) -> _NodeBuilder:
            nonlocal group
            if group is None:
                group = _NodeBuilder(NodeKind.SCENE_GROUP, index, synthetic=True)
                ensure_chapter(index).children.append(group)
            return group

        for index, element in enumerate(elements):
            kind = element.element_type
            if kind is ElementType.SECTION_HEADING:
                close(scene, index)
                scene = None
                depth = element.section_depth
                if depth == CHAPTER_DEPTH:
                    close(group, index)
                    close(chapter, index)
                    group = None
                    chapter = _NodeBuilder(NodeKind.CHAPTER, index, title=element.text)
                    chapters.append(chapter)
                elif depth == SCENE_GROUP_DEPTH:
                    close(group, index)
                    parent = ensure_chapter(index)
                    group = _NodeBuilder(
                        NodeKind.SCENE_GROUP, index, title=element.text
                    )
                    parent.children.append(group)
            elif kind is ElementType.SCENE_HEADING:
                close(scene, index)
                scene = _NodeBuilder(NodeKind.SCENE, index, title=element.text)
                ensure_group(index).children.append(scene)

        first_structural = chapters[0].start if chapters else total
        root_children: list[OutlineNode] = []
        if first_structural > 0:
            root_children.append(
                OutlineNode(
                    kind=NodeKind.PRE_SCENE, element_range=(0, first_structural)
                )
            )
        root_children.extend(c.freeze(total) for c in chapters)

        root = OutlineNode(
            kind=NodeKind.TITLE,
            element_range=(0, total),
            children=tuple(root_children),
            title=self._title_for(screenplay),
        )
        logger.debug(
            "Extracted outline",
            chapters=len(chapters),
            scenes=sum(1 for _ in root.find_all(NodeKind.SCENE)),
        )
        return root

    def _title_for(self, screenplay: Screenplay) -> str:
        for element in screenplay.elements:
            if (
                element.element_type is ElementType.SECTION_HEADING
                and element.section_depth == 1
                and element.text
            ):
                return element.text
        if screenplay.title:
            return screenplay.title
        if screenplay.filename:
            stem = PurePath(screenplay.filename).stem
            if stem:
                return stem
        return self.untitled_title


def extract_outline(
    screenplay: Screenplay | Sequence[Element], untitled_title: str | None = None
) -> OutlineNode:
    """Build the outline tree for a screenplay or a bare element list."""
    if not isinstance(screenplay, Screenplay):
        screenplay = Screenplay(elements=tuple(screenplay))
    return OutlineExtractor(untitled_title).extract(screenplay)
