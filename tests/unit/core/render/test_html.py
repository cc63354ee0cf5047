"""Unit tests for core/render/html.py"""

from ghostpub.core.models import (
    CodeBlock,
    Document,
    HorizontalRule,
    Image,
    List,
    ListItem,
    Text,
    TextFormat,
)
from ghostpub.core.parse import parse_markdown
from ghostpub.core.render.html import render_html, render_run


def _html(md: str) -> str:
    return render_html(parse_markdown(md))


def test_heading_and_paragraph():
    """Blank lines collapse into the block separator."""
    assert _html("# Title\n\nHello **world**.") == "<h1>Title</h1>\n\n<p>Hello <strong>world</strong>.</p>"


def test_inline_tags_concatenated():
    """Inline runs map to em/code/a with no separator."""
    assert _html("*a*`b`[c](d)") == '<p><em>a</em><code>b</code><a href="d">c</a></p>'


def test_combined_format_bits_nest():
    """Combined bits wrap code innermost and strong outermost."""
    run = Text("x", TextFormat.BOLD | TextFormat.ITALIC | TextFormat.CODE)
    assert render_run(run) == "<strong><em><code>x</code></em></strong>"


def test_lists_mirror_tree_grouping():
    """Each List node becomes exactly one ul/ol with one li per item."""
    assert _html("- a\n- b") == "<ul>\n<li>a</li>\n<li>b</li>\n</ul>"
    assert _html("1. a\n2. b") == "<ol>\n<li>a</li>\n<li>b</li>\n</ol>"


def test_ordered_list_start_attribute():
    """Lists not starting at 1 carry a start attribute."""
    doc = Document((List(ordered=True, items=(ListItem((Text("x"),)),), start=5),))
    assert render_html(doc) == '<ol start="5">\n<li>x</li>\n</ol>'


def test_blockquote_rule_and_image():
    """Quote, rule and image blocks use their literal tags."""
    assert _html("> q\n\n---\n\n![alt](i.png)") == (
        "<blockquote>q</blockquote>\n\n<hr>\n\n" '<img src="i.png" alt="alt">'
    )


def test_code_block_escaped_with_language():
    """Code is escaped and tagged with its language class."""
    doc = Document((CodeBlock(language="html", code="<b>&</b>"),))
    assert render_html(doc) == '<pre><code class="language-html">&lt;b&gt;&amp;&lt;/b&gt;</code></pre>'


def test_text_and_attributes_escaped():
    """Text content and attribute values are HTML-escaped."""
    assert _html("a < b & c") == "<p>a &lt; b &amp; c</p>"
    doc = Document((Image(src='x".png', alt="<alt>"),))
    assert render_html(doc) == '<img src="x&quot;.png" alt="&lt;alt&gt;">'


def test_empty_document():
    """An empty tree renders as an empty string."""
    assert render_html(Document()) == ""
    assert render_html(Document((HorizontalRule(),))) == "<hr>"
