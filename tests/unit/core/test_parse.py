"""Unit tests for core/parse.py"""

import pytest

from ghostpub.core.models import (
    Blockquote,
    CodeBlock,
    Heading,
    HorizontalRule,
    Image,
    Link,
    List,
    ListItem,
    ParsedDoc,
    Paragraph,
    Text,
    TextFormat,
)
from ghostpub.core.parse import discover_files, parse_file, parse_markdown, resolve_media


def _blocks(md: str, **kwargs):
    return parse_markdown(md, **kwargs).children


def test_sample_document_block_sequence(sample_doc):
    """The shared sample parses into the expected block kinds, blank lines included."""
    kinds = [type(b).__name__ for b in sample_doc.children]
    assert kinds == [
        "Heading", "Paragraph", "Paragraph", "Paragraph", "Heading", "Paragraph",
        "List", "Paragraph", "CodeBlock", "Paragraph", "HorizontalRule", "Paragraph", "Paragraph",
    ]


@pytest.mark.parametrize("md,level,text", [
    ("# One", 1, "One"),
    ("## Two", 2, "Two"),
    ("### Three", 3, "Three"),
    ("#### Four", 3, "# Four"),
])
def test_heading_levels(md, level, text):
    """1-3 hashes set the level; deeper headings collapse to level 3 keeping extra '#'."""
    (block,) = _blocks(md)
    assert block == Heading(level=level, runs=(Text(text),))


def test_heading_requires_space():
    """'#tag' is a paragraph, not a heading."""
    assert _blocks("#tag") == (Paragraph((Text("#tag"),)),)


def test_heading_inline_formatting():
    """Heading text goes through the inline resolver."""
    (block,) = _blocks("# Hello *you*")
    assert block.runs == (Text("Hello "), Text("you", TextFormat.ITALIC))


def test_bullet_list_grouping():
    """Consecutive '- ' lines form one list with one item per line."""
    blocks = _blocks("- a\n- b\n- c")
    assert blocks == (List(ordered=False, items=(
        ListItem((Text("a"),)), ListItem((Text("b"),)), ListItem((Text("c"),)),
    )),)


def test_star_bullets_and_group_break():
    """'* ' also starts bullets; a non-item line ends the group."""
    blocks = _blocks("* a\n* b\nafter\n- c")
    assert [type(b) for b in blocks] == [List, Paragraph, List]
    assert len(blocks[0].items) == 2
    assert len(blocks[2].items) == 1


def test_ordered_list_records_start():
    """'<n>. ' lines group into an ordered list starting at the first number."""
    (block,) = _blocks("3. three\n4. four")
    assert block.ordered
    assert block.start == 3
    assert [item.runs for item in block.items] == [(Text("three"),), (Text("four"),)]


def test_ordered_then_bullet_are_separate_lists():
    """Switching list markers starts a new list."""
    blocks = _blocks("1. one\n- two")
    assert [(type(b), b.ordered) for b in blocks] == [(List, True), (List, False)]


def test_blockquote_lines_joined():
    """Consecutive quote lines merge into one Blockquote joined by a space."""
    (block,) = _blocks("> first line\n> second **line**")
    assert block == Blockquote((Text("first line second "), Text("line", TextFormat.BOLD)))


def test_code_block_language_and_raw_text():
    """Fenced code keeps its language tag and raw, unformatted text."""
    (block,) = _blocks("```python\nx = **not bold**\n\n# not a heading\n```")
    assert block == CodeBlock(language="python", code="x = **not bold**\n\n# not a heading")


def test_code_block_without_language():
    """A bare fence has no language."""
    (block,) = _blocks("```\ncode\n```")
    assert block.language is None


def test_unterminated_fence_consumes_rest():
    """An unclosed fence swallows every remaining line into one CodeBlock."""
    blocks = _blocks("intro\n```js\nlet a = 1;\n\n- not a list\n# not a heading")
    assert len(blocks) == 2
    assert blocks[1] == CodeBlock(language="js", code="let a = 1;\n\n- not a list\n# not a heading")


@pytest.mark.parametrize("md", ["---", "***", "___"])
def test_thematic_break(md):
    """---, *** and ___ become horizontal rules."""
    assert _blocks(md) == (HorizontalRule(),)


def test_standalone_image():
    """A line that is exactly one image reference becomes an Image block."""
    assert _blocks("![A cat](cat.png)") == (Image(src="cat.png", alt="A cat"),)


def test_image_with_text_is_paragraph():
    """An image reference sharing its line with text stays in a paragraph."""
    (block,) = _blocks("See ![A cat](cat.png)")
    assert isinstance(block, Paragraph)


def test_blank_lines_become_empty_paragraphs():
    """Blank lines are kept as empty paragraphs to preserve spacing."""
    blocks = _blocks("a\n\n\nb")
    assert blocks[1] == Paragraph()
    assert blocks[2].is_blank
    assert len(blocks) == 4


def test_paragraph_with_link():
    """Ordinary lines become paragraphs with inline runs."""
    (block,) = _blocks("Read [this](https://example.com).")
    assert block.runs == (Text("Read "), Link(url="https://example.com", label="this"), Text("."))


def test_empty_text_has_no_blocks():
    """Empty input produces an empty document."""
    assert _blocks("") == ()


# --- media substitution ---

def test_embed_resolved_to_standalone_image():
    """A resolved '![[name]]' embed on its own line becomes an Image."""
    blocks = _blocks("![[photo.png]]", media={"photo.png": "https://cdn/x.png"})
    assert blocks == (Image(src="https://cdn/x.png", alt="photo.png"),)


def test_embed_resolved_by_basename_with_alias():
    """Embeds with folders or '|alias' resolve by basename."""
    line = resolve_media("![[assets/photo.png|300]]", {"photo.png": "https://cdn/x.png"})
    assert line == "![assets/photo.png](https://cdn/x.png)"


def test_unresolved_embed_uses_placeholder():
    """Missing media becomes placeholder text inside the surrounding paragraph."""
    (block,) = _blocks("Look: ![[gone.png]] here")
    assert block == Paragraph((Text("Look: [missing media: gone.png] here"),))


def test_custom_placeholder():
    """The placeholder template is a parameter."""
    (block,) = _blocks("![[gone.png]]", placeholder="<{name}?>")
    assert block == Paragraph((Text("<gone.png?>"),))


def test_standard_image_source_substituted():
    """Standard image sources found in the media map are rewritten."""
    blocks = _blocks("![Cat](img/cat.png)", media={"img/cat.png": "https://cdn/cat.png"})
    assert blocks == (Image(src="https://cdn/cat.png", alt="Cat"),)


def test_embeds_inside_code_untouched():
    """Media references inside fenced code are not substituted."""
    (block,) = _blocks("```\n![[gone.png]]\n```", media={"gone.png": "u"})
    assert block.code == "![[gone.png]]"


# --- files ---

def test_discover_files_single(tmp_path):
    """discover_files returns a list with one file when given a file path."""
    f = tmp_path / "doc.md"
    f.write_text("# Hello")
    assert discover_files(f) == [f]


def test_discover_files_dir(tmp_path):
    """discover_files finds markdown files recursively and skips others."""
    (tmp_path / "a.md").write_text("a")
    (tmp_path / "notes.txt").write_text("text")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "b.markdown").write_text("b")
    assert discover_files(tmp_path) == [tmp_path / "a.md", sub / "b.markdown"]


def test_parse_file_with_frontmatter(tmp_path):
    """parse_file splits frontmatter and parses the body."""
    f = tmp_path / "My Post.md"
    f.write_text("---\nstatus: draft\n---\n# Body\n")
    doc = parse_file(f)
    assert isinstance(doc, ParsedDoc)
    assert doc.frontmatter == {"status": "draft"}
    assert doc.slug == "my-post"
    assert doc.markdown == "# Body"
    assert doc.document.children == (Heading(1, (Text("Body"),)),)


def test_parse_file_slug_from_frontmatter(tmp_path):
    """parse_file uses the frontmatter slug when present."""
    f = tmp_path / "anything.md"
    f.write_text("---\nslug: custom-slug\n---\nx\n")
    assert parse_file(f).slug == "custom-slug"


def test_placeholder_other_braces_kept_literally():
    """Only '{name}' is substituted; other brace fields stay as typed."""
    (block,) = _blocks("![[gone.png]]", placeholder="{0} {name} {other}")
    assert block == Paragraph((Text("{0} gone.png {other}"),))
