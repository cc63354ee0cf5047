"""Post payloads: frontmatter <-> publishing metadata, and downloaded posts back to markdown"""

from typing import Any, Iterable, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from ghostpub.config import Settings
from ghostpub.core.frontmatter import (
    DEFAULT_PASSTHROUGH,
    merge_frontmatter,
    parse_frontmatter,
    remove_frontmatter,
    serialize_frontmatter,
    unquote,
)
from ghostpub.core.models import Document
from ghostpub.core.render.lexical import render_lexical
from ghostpub.core.render.markdown import lexical_to_markdown


class PostMeta(BaseModel):
    """Publishing metadata for one post, resolved from frontmatter and defaults."""
    title:          str
    excerpt:        str = ""
    tags:           list[str] = Field(default_factory=list)
    status:         str = Field(default="draft", pattern="^(draft|published|scheduled)$")
    visibility:     str = Field(default="public", pattern="^(public|members|paid)$")
    featured:       bool = False
    featured_image: str = ""
    ghost_id:       Optional[str] = None     # set once the post exists remotely

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tags(cls, value: Any) -> Any:
        """Accept 'a, b' as well as ['a', 'b']."""
        if isinstance(value, str):
            return [t.strip() for t in value.split(",") if t.strip()]
        return value


def post_meta_from_frontmatter(
    frontmatter: Mapping[str, Any],
    settings: Settings,
    fallback_title: str = "",
    ) -> PostMeta:
    """Frontmatter values win; Settings defaults fill anything missing.

    Pass-through fields arrive with their quotes, which are dropped here.
    """
    def pick(key: str, default: Any) -> Any:
        value = frontmatter.get(key)
        return default if value in (None, "") else value

    return PostMeta(
        title=unquote(str(pick("title", fallback_title))),
        excerpt=unquote(str(pick("excerpt", ""))),
        tags=pick("tags", settings.default_tags),
        status=pick("status", settings.default_status),
        visibility=pick("visibility", settings.default_visibility),
        featured=pick("featured", settings.default_featured),
        featured_image=str(pick("featured_image", "")),
        ghost_id=pick("ghost_id", None),
    )


def build_post_payload(meta: PostMeta, document: Document) -> dict[str, Any]:
    """Assemble the post body for create/update calls.

    Optional fields (custom_excerpt, feature_image, tags) are only present
    when they carry a value.
    """
    post: dict[str, Any] = {
        "title": meta.title,
        "lexical": render_lexical(document),
        "status": meta.status,
        "featured": meta.featured,
        "visibility": meta.visibility,
    }
    if meta.excerpt.strip():
        post["custom_excerpt"] = meta.excerpt.strip()
    if meta.featured_image.strip():
        post["feature_image"] = meta.featured_image.strip()
    if meta.tags:
        post["tags"] = [{"name": t} for t in meta.tags]
    return post


def _tag_names(post: Mapping[str, Any]) -> list[str]:
    return [t["name"] for t in post.get("tags") or [] if t.get("name")]


def post_to_frontmatter(post: Mapping[str, Any]) -> dict[str, Any]:
    """Frontmatter fields recorded for a downloaded post."""
    fm: dict[str, Any] = {
        "ghost_id": post.get("id"),
        "title": post.get("title"),
        "excerpt": post.get("custom_excerpt") or "",
        "status": post.get("status"),
        "visibility": post.get("visibility"),
        "featured": post.get("featured"),
        "created_at": post.get("created_at"),
        "updated_at": post.get("updated_at"),
        "published_at": post.get("published_at"),
    }
    if post.get("feature_image"):
        fm["featured_image"] = post["feature_image"]
    if tags := _tag_names(post):
        fm["tags"] = tags
    return fm


def post_to_markdown(
    post: Mapping[str, Any],
    passthrough: Iterable[str] = DEFAULT_PASSTHROUGH,
    ) -> str:
    """Markdown file content for a downloaded post (lossy: see lexical_to_markdown)."""
    body = lexical_to_markdown(post.get("lexical") or "{}")
    return serialize_frontmatter(body, post_to_frontmatter(post), passthrough)


def record_published(
    content: str,
    post: Mapping[str, Any],
    passthrough: Iterable[str] = DEFAULT_PASSTHROUGH,
    ) -> str:
    """Merge server-assigned fields of a saved post into the document's frontmatter."""
    passthrough = tuple(passthrough)
    updates: dict[str, Any] = {
        "ghost_id": post.get("id"),
        "status": post.get("status"),
        "visibility": post.get("visibility"),
        "featured": post.get("featured"),
        "created_at": post.get("created_at"),
        "updated_at": post.get("updated_at"),
    }
    if post.get("custom_excerpt"):
        updates["excerpt"] = post["custom_excerpt"]
    if post.get("feature_image"):
        updates["featured_image"] = post["feature_image"]
    if tags := _tag_names(post):
        updates["tags"] = tags

    merged = merge_frontmatter(parse_frontmatter(content, passthrough), updates)
    return serialize_frontmatter(remove_frontmatter(content), merged, passthrough)
