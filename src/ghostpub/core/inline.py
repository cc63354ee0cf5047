"""Inline span resolution: bold, italic, code and links within a single line"""

import re
from typing import NamedTuple

from ghostpub.core.models import Link, Run, Text, TextFormat


BOLD_RE   = re.compile(r'\*\*(.+?)\*\*')
ITALIC_RE = re.compile(r'(?<!\*)\*(?!\*)([^*]+?)\*(?!\*)')
CODE_RE   = re.compile(r'`([^`]+)`')
LINK_RE   = re.compile(r'(?<!!)\[([^\]]+)\]\(([^)\s]+)\)')

# Collection order doubles as the tie-break for matches starting at the same offset.
_PATTERNS: tuple[tuple[str, re.Pattern], ...] = (
    ("bold",   BOLD_RE),
    ("italic", ITALIC_RE),
    ("code",   CODE_RE),
    ("link",   LINK_RE),
)

_FORMATS = {
    "bold":   TextFormat.BOLD,
    "italic": TextFormat.ITALIC,
    "code":   TextFormat.CODE,
}


class _Match(NamedTuple):
    start: int
    end: int
    kind: str
    groups: tuple[str, ...]


def _collect(line: str) -> list[_Match]:
    """Every match of every pattern, sorted by start offset (stable)."""
    found = [
        _Match(m.start(), m.end(), kind, m.groups())
        for kind, pattern in _PATTERNS
        for m in pattern.finditer(line)
    ]
    return sorted(found, key=lambda m: m.start)


def _select(matches: list[_Match]) -> list[_Match]:
    """Keep leftmost matches greedily; drop any that overlap a kept one."""
    kept: list[_Match] = []
    last_end = 0
    for m in matches:
        if m.start >= last_end:
            kept.append(m)
            last_end = m.end
    return kept


def _to_run(m: _Match) -> Run:
    if m.kind == "link":
        label, url = m.groups
        return Link(url=url, label=label)
    return Text(m.groups[0], _FORMATS[m.kind])


def resolve_inline(line: str) -> tuple[Run, ...]:
    """Split a line into non-overlapping runs that cover it end to end.

    Overlaps are resolved first-match-wins: once a span is kept, anything
    starting inside it is discarded, so bold inside italic cannot be expressed.
    A line with no markup (including an empty line) yields a single Text run.
    """
    kept = _select(_collect(line))
    if not kept:
        return (Text(line),)

    runs: list[Run] = []
    cursor = 0
    for m in kept:
        if m.start > cursor:
            runs.append(Text(line[cursor:m.start]))
        runs.append(_to_run(m))
        cursor = m.end
    if cursor < len(line):
        runs.append(Text(line[cursor:]))
    return tuple(runs)
