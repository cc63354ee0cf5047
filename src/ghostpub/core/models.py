"""Document tree: block and inline node variants shared by all renderers"""

from dataclasses import dataclass, field
from enum import IntFlag
from pathlib import Path
from typing import Any, Optional, Union


class TextFormat(IntFlag):
    """Bitmask for text run styling; values are part of the Lexical wire format."""
    PLAIN  = 0
    BOLD   = 1
    ITALIC = 2
    CODE   = 4


# --- inline runs ---

@dataclass(frozen=True)
class Text:
    content: str
    format: TextFormat = TextFormat.PLAIN


@dataclass(frozen=True)
class Link:
    url: str
    label: str      # plain text only; no nested formatting


Run = Union[Text, Link]


# --- blocks ---

@dataclass(frozen=True)
class Heading:
    level: int      # 1-6
    runs: tuple[Run, ...]


@dataclass(frozen=True)
class Paragraph:
    """A line of inline runs. No runs at all marks a blank source line."""
    runs: tuple[Run, ...] = ()

    @property
    def is_blank(self) -> bool:
        return not self.runs


@dataclass(frozen=True)
class ListItem:
    runs: tuple[Run, ...]


@dataclass(frozen=True)
class List:
    ordered: bool
    items: tuple[ListItem, ...]
    start: int = 1  # first number of an ordered list


@dataclass(frozen=True)
class Blockquote:
    runs: tuple[Run, ...]


@dataclass(frozen=True)
class CodeBlock:
    language: Optional[str]
    code: str       # raw text, never inline-formatted


@dataclass(frozen=True)
class HorizontalRule:
    pass


@dataclass(frozen=True)
class Image:
    src: str
    alt: str = ""


Block = Union[Heading, Paragraph, List, Blockquote, CodeBlock, HorizontalRule, Image]


@dataclass(frozen=True)
class Document:
    """Root node: an ordered sequence of blocks."""
    children: tuple[Block, ...] = field(default_factory=tuple)


def plain_text(runs: tuple[Run, ...]) -> str:
    """Concatenate the visible text of a run sequence (markup stripped)."""
    return "".join(r.content if isinstance(r, Text) else r.label for r in runs)


@dataclass
class ParsedDoc:
    """Parse result for one source file; built per call and never persisted."""
    path:         Path
    slug:         str
    raw_markdown: str                   # full file content (includes frontmatter)
    markdown:     str                   # body only (frontmatter stripped)
    frontmatter:  dict[str, Any]
    document:     Document
