"""File discovery, media substitution, and line-based markdown block parsing"""

import logging
import re
from pathlib import Path, PurePosixPath
from typing import Iterable, Mapping, Optional

from ghostpub.core.frontmatter import DEFAULT_PASSTHROUGH, split_frontmatter
from ghostpub.core.inline import resolve_inline
from ghostpub.core.models import (
    Block,
    Blockquote,
    CodeBlock,
    Document,
    Heading,
    HorizontalRule,
    Image,
    List,
    ListItem,
    ParsedDoc,
    Paragraph,
)
from ghostpub.core.utils.slug import slugify

logger = logging.getLogger(__name__)


MD_EXTENSIONS = {'.md', '.markdown'}
DEFAULT_PLACEHOLDER = "[missing media: {name}]"

HEADING_RE = re.compile(r'^(#+) (.*)$')
ORDERED_RE = re.compile(r'^(\d+)\. (.*)$')
IMAGE_RE   = re.compile(r'^!\[([^\]]*)\]\(([^)\s]+)\)$')
EMBED_RE   = re.compile(r'!\[\[([^\]|]+)(?:\|[^\]]*)?\]\]')
INLINE_IMAGE_RE = re.compile(r'!\[([^\]]*)\]\(([^)\s]+)\)')
FENCE = "```"
THEMATIC_BREAKS = {"---", "***", "___"}


# --- media substitution ---

def _lookup(name: str, media: Mapping[str, str]) -> Optional[str]:
    """Find a URL by exact reference name, then by basename."""
    if name in media:
        return media[name]
    return media.get(PurePosixPath(name).name)


def resolve_media(line: str, media: Mapping[str, str], placeholder: str = DEFAULT_PLACEHOLDER) -> str:
    """Rewrite '![[name]]' embeds and known image sources to uploaded URLs.

    Embeds missing from the media map become the placeholder text so the
    surrounding paragraph survives.
    """
    def _embed(m: re.Match) -> str:
        name = m.group(1).strip()
        url = _lookup(name, media)
        if url is None:
            logger.warning("Unresolved media reference: %s", name)
            return placeholder.replace("{name}", name)
        return f"![{name}]({url})"

    def _image(m: re.Match) -> str:
        alt, src = m.groups()
        url = _lookup(src, media)
        return m.group(0) if url is None else f"![{alt}]({url})"

    line = EMBED_RE.sub(_embed, line)
    if media:
        line = INLINE_IMAGE_RE.sub(_image, line)
    return line


# --- block recognition ---

def _heading(line: str) -> Optional[Heading]:
    """'# '..'### ' headings; deeper '#' runs collapse to level 3 keeping the extras."""
    m = HEADING_RE.match(line)
    if not m:
        return None
    hashes, text = m.groups()
    if len(hashes) > 3:
        text = f"{hashes[3:]} {text}"
    return Heading(level=min(len(hashes), 3), runs=resolve_inline(text))


def _bullet_text(line: str) -> Optional[str]:
    if line.startswith("- ") or line.startswith("* "):
        return line[2:]
    return None


def _ordered_text(line: str) -> Optional[str]:
    m = ORDERED_RE.match(line)
    return m.group(2) if m else None


def _quote_text(line: str) -> Optional[str]:
    return line[2:] if line.startswith("> ") else None


def _group(lines: list[str], i: int, match) -> tuple[list, int]:
    """Collect consecutive lines accepted by match; returns (results, next index)."""
    found = []
    while i < len(lines):
        result = match(lines[i])
        if result is None:
            break
        found.append(result)
        i += 1
    return found, i


def _items(texts: list[str]) -> tuple[ListItem, ...]:
    return tuple(ListItem(resolve_inline(t)) for t in texts)


def _resolve_lines(lines: list[str], media: Mapping[str, str], placeholder: str) -> list[str]:
    """Apply media substitution to every line outside fenced code."""
    resolved = []
    in_code = False
    for line in lines:
        if in_code:
            in_code = line.strip() != FENCE
        elif line.startswith(FENCE):
            in_code = True
        else:
            line = resolve_media(line, media, placeholder)
        resolved.append(line)
    return resolved


def _code_block(lines: list[str], i: int) -> tuple[CodeBlock, int]:
    """Consume an opening fence at i through its closing fence (or end of input)."""
    language = lines[i][len(FENCE):].strip() or None
    body = []
    i += 1
    while i < len(lines) and lines[i].strip() != FENCE:
        body.append(lines[i])
        i += 1
    if i == len(lines):
        logger.debug("Unterminated code fence; closing at end of document")
    return CodeBlock(language=language, code="\n".join(body)), i + 1


def parse_markdown(
    text: str,
    media: Optional[Mapping[str, str]] = None,
    placeholder: str = DEFAULT_PLACEHOLDER,
    ) -> Document:
    """Parse markdown (without frontmatter) into a Document tree in one pass.

    Each line is matched against heading, code fence, ordered list, bullet
    list, blockquote, thematic break, standalone image and blank line, in that
    order; anything else is an inline-formatted paragraph. Grouped constructs
    consume all of their lines at once. Never raises on malformed input.
    """
    media = media or {}
    raw_lines = text.splitlines()
    lines = _resolve_lines(raw_lines, media, placeholder)
    blocks: list[Block] = []
    i = 0

    while i < len(lines):
        line = lines[i]
        if line.startswith(FENCE):
            block, i = _code_block(raw_lines, i)
            blocks.append(block)
        elif (heading := _heading(line)) is not None:
            blocks.append(heading)
            i += 1
        elif m := ORDERED_RE.match(line):
            texts, i = _group(lines, i, _ordered_text)
            blocks.append(List(ordered=True, items=_items(texts), start=int(m.group(1))))
        elif _bullet_text(line) is not None:
            texts, i = _group(lines, i, _bullet_text)
            blocks.append(List(ordered=False, items=_items(texts)))
        elif _quote_text(line) is not None:
            texts, i = _group(lines, i, _quote_text)
            blocks.append(Blockquote(resolve_inline(" ".join(texts))))
        elif line.strip() in THEMATIC_BREAKS:
            blocks.append(HorizontalRule())
            i += 1
        elif m := IMAGE_RE.match(line.strip()):
            alt, src = m.groups()
            blocks.append(Image(src=src, alt=alt))
            i += 1
        elif not line.strip():
            blocks.append(Paragraph())
            i += 1
        else:
            blocks.append(Paragraph(resolve_inline(line)))
            i += 1

    return Document(children=tuple(blocks))


# --- files ---

def discover_files(path: Path) -> list[Path]:
    """Return sorted markdown files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.suffix in MD_EXTENSIONS)


def parse_file(
    path: Path,
    media: Optional[Mapping[str, str]] = None,
    placeholder: str = DEFAULT_PLACEHOLDER,
    passthrough: Iterable[str] = DEFAULT_PASSTHROUGH,
    ) -> ParsedDoc:
    """Read a markdown file into a ParsedDoc with frontmatter and Document tree."""
    raw = path.read_text(encoding='utf-8')
    frontmatter, body = split_frontmatter(raw, passthrough)
    slug = slugify(str(frontmatter.get('slug') or path.stem))
    return ParsedDoc(
        path=path,
        slug=slug,
        raw_markdown=raw,
        markdown=body,
        frontmatter=frontmatter,
        document=parse_markdown(body, media, placeholder),
    )
