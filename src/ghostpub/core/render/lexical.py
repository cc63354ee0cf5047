"""Document tree to Ghost Lexical JSON (schema version 1)

Node shapes follow the editor's serialized format. Text runs are
``extended-text`` nodes whose ``format`` field carries the TextFormat bitmask
unchanged (bold=1, italic=2, code=4).
"""

import json
from typing import Any

from ghostpub.core.models import (
    Block,
    Blockquote,
    CodeBlock,
    Document,
    Heading,
    HorizontalRule,
    Image,
    Link,
    List,
    ListItem,
    Paragraph,
    Run,
    Text,
)


TEXT_TYPE = "extended-text"
VERSION = 1


def _element(node_type: str, children: list[dict], **attrs: Any) -> dict[str, Any]:
    """Common shape of element nodes (nodes with children)."""
    return {
        "children": children,
        "direction": "ltr",
        "format": "",
        "indent": 0,
        "type": node_type,
        "version": VERSION,
        **attrs,
    }


def _text(content: str, fmt: int = 0) -> dict[str, Any]:
    return {
        "detail": 0,
        "format": int(fmt),
        "mode": "normal",
        "style": "",
        "text": content,
        "type": TEXT_TYPE,
        "version": VERSION,
    }


def run_to_lexical(run: Run) -> dict[str, Any]:
    if isinstance(run, Text):
        return _text(run.content, run.format)
    if isinstance(run, Link):
        return _element("link", [_text(run.label)], rel=None, target=None, title=None, url=run.url)
    raise TypeError(f"Unhandled inline node: {type(run).__name__}")


def _runs(runs: tuple[Run, ...]) -> list[dict]:
    return [run_to_lexical(r) for r in runs]


def _list_item(item: ListItem, value: int) -> dict[str, Any]:
    return _element("listitem", _runs(item.runs), value=value)


def block_to_lexical(block: Block) -> dict[str, Any]:
    if isinstance(block, Heading):
        return _element("heading", _runs(block.runs), tag=f"h{block.level}")
    if isinstance(block, Paragraph):
        return _element("paragraph", _runs(block.runs))
    if isinstance(block, List):
        first = block.start if block.ordered else 1
        return _element(
            "list",
            [_list_item(item, first + n) for n, item in enumerate(block.items)],
            listType="number" if block.ordered else "bullet",
            start=first,
            tag="ol" if block.ordered else "ul",
        )
    if isinstance(block, Blockquote):
        return _element("quote", _runs(block.runs))
    if isinstance(block, CodeBlock):
        return {
            "type": "codeblock",
            "version": VERSION,
            "code": block.code,
            "language": block.language or "",
            "caption": "",
        }
    if isinstance(block, HorizontalRule):
        return {"type": "horizontalrule", "version": VERSION}
    if isinstance(block, Image):
        return {
            "type": "image",
            "version": VERSION,
            "src": block.src,
            "alt": block.alt,
            "caption": "",
            "title": "",
            "width": None,
            "height": None,
            "href": "",
        }
    raise TypeError(f"Unhandled block node: {type(block).__name__}")


def to_lexical(document: Document) -> dict[str, Any]:
    """Build the Lexical document dict: {'root': {...children...}}."""
    root = _element("root", [block_to_lexical(b) for b in document.children])
    return {"root": root}


def render_lexical(document: Document) -> str:
    """Compact JSON string, as sent in a post's 'lexical' field."""
    return json.dumps(to_lexical(document), ensure_ascii=False, separators=(",", ":"))
