"""Frontmatter codec: parse, serialize, strip and merge the leading '---' header"""

import logging
import re
from typing import Any, Iterable, Mapping

logger = logging.getLogger(__name__)


FRONTMATTER_RE = re.compile(r'^---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)', re.DOTALL)
DEFAULT_PASSTHROUGH = ("title", "excerpt")

FrontmatterValue = str | bool | list[str]


def unquote(value: str) -> str:
    """Strip one pair of matching single or double quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def _is_item(line: str) -> bool:
    stripped = line.strip()
    return stripped == "-" or stripped.startswith("- ")


def _item_value(line: str) -> str:
    return unquote(line.strip()[1:].strip())


def _scalar(value: str) -> FrontmatterValue:
    """Interpret a raw value: [a, b] list, true/false, else quote-stripped string."""
    if value.startswith("[") and value.endswith("]"):
        return [unquote(v.strip()) for v in value[1:-1].split(",") if v.strip()]
    if value == "true":
        return True
    if value == "false":
        return False
    return unquote(value)


def _next_content(lines: list[str], i: int) -> int:
    """Index of the next non-blank line at or after i (len(lines) if none)."""
    while i < len(lines) and not lines[i].strip():
        i += 1
    return i


def _parse_body(body: str, passthrough: Iterable[str]) -> dict[str, FrontmatterValue]:
    passthrough = set(passthrough)
    fm: dict[str, FrontmatterValue] = {}
    lines = body.splitlines()
    i = 0
    while i < len(lines):
        line = lines[i]
        i += 1
        if not line.strip():
            continue
        if _is_item(line):
            logger.debug("Ignoring list item without a key: %r", line)
            continue
        colon = line.find(":")
        if colon <= 0:
            logger.debug("Ignoring frontmatter line without a key: %r", line)
            continue

        key = line[:colon].strip()
        value = line[colon + 1:].strip()

        if key in passthrough:
            fm[key] = value
        elif value:
            fm[key] = _scalar(value)
        else:
            j = _next_content(lines, i)
            if j < len(lines) and _is_item(lines[j]):
                items = []
                while j < len(lines) and _is_item(lines[j]):
                    items.append(_item_value(lines[j]))
                    j = _next_content(lines, j + 1)
                fm[key] = items
                i = j
            else:
                fm[key] = ""
    return fm


def split_frontmatter(
    content: str,
    passthrough: Iterable[str] = DEFAULT_PASSTHROUGH,
    ) -> tuple[dict[str, FrontmatterValue], str]:
    """Return (frontmatter, body). Body is the trimmed text after the header."""
    m = FRONTMATTER_RE.match(content)
    if not m:
        return {}, content
    return _parse_body(m.group(1) or "", passthrough), content[m.end():].strip()


def parse_frontmatter(
    content: str,
    passthrough: Iterable[str] = DEFAULT_PASSTHROUGH,
    ) -> dict[str, FrontmatterValue]:
    """Parse the leading header into an ordered mapping; {} when there is none.

    A missing or malformed header is not an error. Values become lists
    ('[a, b]' or a '- item' block under an empty key), booleans
    ('true'/'false'), or quote-stripped strings. Fields named in
    ``passthrough`` keep their raw text, quotes included.
    """
    return split_frontmatter(content, passthrough)[0]


def remove_frontmatter(content: str) -> str:
    """Strip a leading header and trim; input is returned unchanged without one."""
    m = FRONTMATTER_RE.match(content)
    if not m:
        return content
    return content[m.end():].strip()


def _needs_quotes(text: str) -> bool:
    """Strings that would reparse as something else: 'a: b', bools, '[..]' lists."""
    return (
        ":" in text or '"' in text
        or text in ("true", "false")
        or (text.startswith("[") and text.endswith("]"))
    )


def _format_value(key: str, value: Any, passthrough: set[str]) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    text = str(value)
    if key in passthrough:
        return text
    if isinstance(value, str) and _needs_quotes(text):
        return f'"{text}"'
    return text


def serialize_frontmatter(
    content: str,
    frontmatter: Mapping[str, Any],
    passthrough: Iterable[str] = DEFAULT_PASSTHROUGH,
    ) -> str:
    """Prepend a '---' header built from frontmatter to content (kept verbatim).

    List values become a '- item' block; strings containing ':' or '"', and
    strings spelled like a bool or '[..]' list, are wrapped in double quotes
    without further escaping.
    """
    passthrough = set(passthrough)
    lines = ["---"]
    for key, value in frontmatter.items():
        if isinstance(value, (list, tuple)):
            if not value:
                lines.append(f"{key}: []")
                continue
            lines.append(f"{key}:")
            lines.extend(f"  - {item}" for item in value)
        else:
            lines.append(f"{key}: {_format_value(key, value, passthrough)}".rstrip())
    lines.append("---")
    return "\n".join(lines) + "\n\n" + content


def merge_frontmatter(
    existing: Mapping[str, Any],
    updates: Mapping[str, Any],
    ) -> dict[str, Any]:
    """Overlay non-None updates on existing fields; order and unknown keys are kept."""
    merged = dict(existing)
    for key, value in updates.items():
        if value is not None:
            merged[key] = value
    return merged
