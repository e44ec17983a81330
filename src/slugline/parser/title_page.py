"""Title page extraction for Fountain text."""

from __future__ import annotations

import re

from slugline.parser.models import TitlePageEntry

INLINE_PATTERN = re.compile(r"^([^\t\s][^:]+):\s*([^\t\s].*$)")
DIRECTIVE_PATTERN = re.compile(r"^([^\t\s][^:]+):([\t\s]*$)")

KEY_ALIASES = {"author": "authors"}


def canonical_key(key: str) -> str:
    """Map a title page key to its canonical casing.

    Keys compare case-insensitively, ``author`` folds into ``authors``,
    and the result is capitalized (``draft DATE`` -> ``Draft date``).
    """
    lowered = key.strip().lower()
    lowered = KEY_ALIASES.get(lowered, lowered)
    return lowered.capitalize()


def is_key_line(line: str) -> bool:
    """Return True for ``Key: value`` and ``Key:`` lines.

    Keys start with a letter or digit, so forced body lines such as
    ``!Note: ...`` or ``@BOB:`` are never read as title page keys.
    """
    if not line[:1].isalnum():
        return False
    return bool(INLINE_PATTERN.match(line) or DIRECTIVE_PATTERN.match(line))


class TitlePageExtractor:
    """Read the ``Key: value`` block at the top of a Fountain document."""

    def extract(self, lines: list[str]) -> tuple[list[TitlePageEntry], int]:
        """Extract title page entries from the start of ``lines``.

        Args:
            lines: Document lines with leading blank lines already removed.

        Returns:
            The entries in source order and the number of lines consumed
            (0 when the document has no title page).
        """
        if not lines or not is_key_line(lines[0]):
            return [], 0

        block_end = 0
        while block_end < len(lines) and lines[block_end].strip():
            block_end += 1
        block = lines[:block_end]

        entries: list[tuple[str, list[str]]] = []
        for line in block:
            if is_key_line(line):
                inline = INLINE_PATTERN.match(line)
                if inline:
                    key, values = inline.group(1), [inline.group(2).strip()]
                else:
                    key, values = line.split(":", 1)[0], []
                entries.append((canonical_key(key), values))
                continue
            # First line is always a key line, so there is an entry to extend
            entries[-1][1].append(line.strip())

        has_value = any(values for _, values in entries)
        if not has_value and len(block) == 1:
            # A lone "FADE IN:" is body text, not a title page
            return [], 0

        return [TitlePageEntry(key, tuple(values)) for key, values in entries], len(
            block
        )
