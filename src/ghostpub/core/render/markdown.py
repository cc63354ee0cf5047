"""Lexical JSON back to markdown (paragraphs and headings only)"""

import json
import logging
from typing import Any, Iterator, Mapping

logger = logging.getLogger(__name__)


HEADING_TYPES = {"heading", "extended-heading"}


def _children(node: Mapping[str, Any]) -> Iterator[Mapping[str, Any]]:
    """Child nodes that are objects; a malformed 'children' value yields nothing."""
    children = node.get("children")
    if not isinstance(children, list):
        return
    for child in children:
        if isinstance(child, Mapping):
            yield child
        else:
            logger.debug("Skipping malformed lexical node: %r", child)


def _text_of(node: Mapping[str, Any]) -> str:
    """Concatenate the string 'text' field of direct children; other children add nothing."""
    return "".join(
        child["text"] for child in _children(node) if isinstance(child.get("text"), str)
    )


def _level(node: Mapping[str, Any]) -> int:
    tag = str(node.get("tag") or "h1")
    return int(tag[1:]) if tag[1:].isdigit() else 1


def lexical_to_markdown(lexical: str | Mapping[str, Any]) -> str:
    """Rebuild markdown from a Lexical document.

    Only paragraph and heading nodes survive; lists, quotes, code, images,
    rules and link text are dropped, so this is a lossy inverse of
    render_lexical. Undecodable input is logged and yields ''; nodes of the
    wrong shape are skipped.
    """
    if isinstance(lexical, str):
        try:
            lexical = json.loads(lexical)
        except json.JSONDecodeError as e:
            logger.warning("Could not decode lexical JSON: %s", e)
            return ""

    root = lexical.get("root") if isinstance(lexical, Mapping) else None
    if not isinstance(root, Mapping):
        logger.warning("Lexical document has no root node")
        return ""

    parts = []
    for node in _children(root):
        node_type = node.get("type")
        if node_type == "paragraph":
            parts.append(f"{_text_of(node)}\n\n")
        elif node_type in HEADING_TYPES:
            parts.append(f"{'#' * _level(node)} {_text_of(node)}\n\n")
        else:
            logger.debug("Dropping unsupported lexical node: %s", node_type)
    return "".join(parts).strip()
