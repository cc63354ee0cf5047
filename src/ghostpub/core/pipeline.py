"""Pipeline step functions: convert markdown files, import downloaded posts, record saved posts"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from ghostpub.config import Settings
from ghostpub.core.frontmatter import split_frontmatter
from ghostpub.core.models import Document
from ghostpub.core.parse import discover_files, parse_markdown
from ghostpub.core.post import (
    build_post_payload,
    post_meta_from_frontmatter,
    post_to_markdown,
    record_published,
)
from ghostpub.core.render.html import render_html
from ghostpub.core.render.lexical import render_lexical
from ghostpub.core.utils.slug import slugify

logger = logging.getLogger(__name__)


@dataclass
class Conversion:
    """All outputs for one document; a pure value built per call."""
    frontmatter: dict[str, Any]
    document:    Document
    html:        str
    lexical:     str            # compact Lexical JSON
    post:        dict[str, Any]


def load_media_map(path: Optional[Path]) -> dict[str, str]:
    """Read a YAML/JSON name -> URL mapping produced by an upload step."""
    if path is None:
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid media map {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Invalid media map {path}: expected a mapping, got {type(data).__name__}")
    return {str(k): str(v) for k, v in data.items()}


def convert_text(
    raw: str,
    settings: Settings,
    media: Optional[Mapping[str, str]] = None,
    fallback_title: str = "",
    ) -> Conversion:
    """Split frontmatter, parse the body and render HTML, Lexical and the post payload."""
    frontmatter, body = split_frontmatter(raw, settings.passthrough_fields)
    document = parse_markdown(body, media, settings.media_placeholder)
    meta = post_meta_from_frontmatter(frontmatter, settings, fallback_title)
    return Conversion(
        frontmatter=frontmatter,
        document=document,
        html=render_html(document),
        lexical=render_lexical(document),
        post=build_post_payload(meta, document),
    )


def _write_json(path: Path, data: Any) -> None:
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


def run_convert(
    path: str,
    output_dir: Path,
    settings: Settings,
    media: Optional[Mapping[str, str]] = None,
    ) -> list[tuple[Path, list[Path]]]:
    """Convert every markdown file under path. Returns (source, [written files]) pairs."""
    output_dir.mkdir(parents=True, exist_ok=True)
    results = []
    for p in discover_files(Path(path)):
        try:
            conv = convert_text(p.read_text(encoding="utf-8"), settings, media, fallback_title=p.stem)
            slug = slugify(str(conv.frontmatter.get("slug") or p.stem))

            html_path = output_dir / f"{slug}.html"
            lexical_path = output_dir / f"{slug}.lexical.json"
            post_path = output_dir / f"{slug}.post.json"
            html_path.write_text(conv.html, encoding="utf-8")
            _write_json(lexical_path, json.loads(conv.lexical))
            _write_json(post_path, conv.post)
        except Exception as e:
            raise RuntimeError(f"Failed to convert {p}: {e}") from e
        logger.info("Converted %s -> %s", p, slug)
        results.append((p, [html_path, lexical_path, post_path]))
    return results


def _unwrap_post(data: Any) -> Mapping[str, Any]:
    """Accept either an API response ({'posts': [post]}) or a bare post object."""
    if isinstance(data, dict) and isinstance(data.get("posts"), list) and data["posts"]:
        data = data["posts"][0]
    if not isinstance(data, dict) or "lexical" not in data:
        raise ValueError("expected a post object with a 'lexical' field")
    return data


def run_import(post_path: Path, output_dir: Path, settings: Settings) -> Path:
    """Write a downloaded post JSON file as markdown with frontmatter. Returns the .md path."""
    try:
        post = _unwrap_post(json.loads(post_path.read_text(encoding="utf-8")))
        output_dir.mkdir(parents=True, exist_ok=True)
        slug = slugify(str(post.get("slug") or post.get("title") or post_path.stem))
        out_file = output_dir / f"{slug}.md"
        out_file.write_text(post_to_markdown(post, settings.passthrough_fields), encoding="utf-8")
    except Exception as e:
        raise RuntimeError(f"Failed to import {post_path}: {e}") from e
    logger.info("Imported %s -> %s", post_path, out_file)
    return out_file


def run_record(post_path: Path, md_path: Path, settings: Settings) -> Path:
    """Merge a saved post's server fields into the frontmatter of md_path, in place."""
    try:
        post = _unwrap_post(json.loads(post_path.read_text(encoding="utf-8")))
        content = md_path.read_text(encoding="utf-8")
        md_path.write_text(record_published(content, post, settings.passthrough_fields), encoding="utf-8")
    except Exception as e:
        raise RuntimeError(f"Failed to record {post_path} into {md_path}: {e}") from e
    logger.info("Recorded %s -> %s", post_path, md_path)
    return md_path
