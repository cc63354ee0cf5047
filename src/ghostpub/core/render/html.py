"""Document tree to HTML"""

from html import escape

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
    Paragraph,
    Run,
    Text,
    TextFormat,
)


# Innermost wrapper first.
_WRAPPERS = (
    (TextFormat.CODE,   "code"),
    (TextFormat.ITALIC, "em"),
    (TextFormat.BOLD,   "strong"),
)


def render_run(run: Run) -> str:
    if isinstance(run, Link):
        return f'<a href="{escape(run.url)}">{escape(run.label, quote=False)}</a>'
    if isinstance(run, Text):
        out = escape(run.content, quote=False)
        for flag, tag in _WRAPPERS:
            if run.format & flag:
                out = f"<{tag}>{out}</{tag}>"
        return out
    raise TypeError(f"Unhandled inline node: {type(run).__name__}")


def render_runs(runs: tuple[Run, ...]) -> str:
    return "".join(render_run(r) for r in runs)


def render_block(block: Block) -> str:
    """Render one block node; blank paragraphs render as ''."""
    if isinstance(block, Heading):
        return f"<h{block.level}>{render_runs(block.runs)}</h{block.level}>"
    if isinstance(block, Paragraph):
        return "" if block.is_blank else f"<p>{render_runs(block.runs)}</p>"
    if isinstance(block, List):
        tag = "ol" if block.ordered else "ul"
        start = f' start="{block.start}"' if block.ordered and block.start != 1 else ""
        items = "\n".join(f"<li>{render_runs(item.runs)}</li>" for item in block.items)
        return f"<{tag}{start}>\n{items}\n</{tag}>"
    if isinstance(block, Blockquote):
        return f"<blockquote>{render_runs(block.runs)}</blockquote>"
    if isinstance(block, CodeBlock):
        cls = f' class="language-{escape(block.language)}"' if block.language else ""
        return f"<pre><code{cls}>{escape(block.code, quote=False)}</code></pre>"
    if isinstance(block, HorizontalRule):
        return "<hr>"
    if isinstance(block, Image):
        return f'<img src="{escape(block.src)}" alt="{escape(block.alt)}">'
    raise TypeError(f"Unhandled block node: {type(block).__name__}")


def render_html(document: Document) -> str:
    """Render block siblings separated by a blank line.

    Blank-line paragraphs produce no markup; the separator already carries
    the spacing. List grouping follows the tree as parsed.
    """
    parts = (render_block(b) for b in document.children)
    return "\n\n".join(p for p in parts if p)
