"""Markdown renderer — parses article Markdown and serializes it to HTML.

Parsing is done by markdown-it-py; the resulting syntax tree is never
modified. Serialization walks it depth-first, dispatching on the node type,
and appends to a list of string parts that is joined at the end.

The level-1 heading is never part of the output: it is the article's title
and is extracted separately with :func:`find_title`.
"""

import logging
from functools import lru_cache

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode
from mdit_py_plugins.footnote import footnote_plugin

from inkwell.services.html_text import (
    escape_attribute,
    html_encode,
    quote_attribute,
    strip_tags,
)

logger = logging.getLogger(__name__)

INVERT_PREFIX = "invert:"
INVERTABLE_IMAGE_CLASS = "invertable-image"
DEFAULT_LANGUAGE = "text"


@lru_cache(maxsize=2)
def _parser(extended: bool) -> MarkdownIt:
    md = MarkdownIt("commonmark")
    if extended:
        md.enable("strikethrough").use(footnote_plugin)
    return md


def parse(markdown: str, extended: bool = False) -> SyntaxTreeNode:
    """Parse Markdown into a syntax tree.

    The default flavour is plain CommonMark (with raw HTML); the extended
    one adds strikethrough and footnotes.
    """
    return SyntaxTreeNode(_parser(extended).parse(markdown))


def render_html(markdown: str, extended: bool = False) -> str:
    """Parse and render Markdown to an HTML fragment."""
    return HtmlSerializer().render(parse(markdown, extended))


def find_title(tree: SyntaxTreeNode) -> str | None:
    """Rendered inline content of the first level-1 heading, in document order."""
    if tree.type == "heading" and tree.tag == "h1":
        return HtmlSerializer().render_children(tree)
    for child in tree.children:
        title = find_title(child)
        if title is not None:
            return title
    return None


class HtmlSerializer:
    """Turns a markdown-it syntax tree into HTML.

    Every supported node type has a ``_render_<type>`` method. Nodes of any
    other type are skipped with a warning instead of failing the document.
    """

    def render(self, node: SyntaxTreeNode) -> str:
        out: list[str] = []
        self._render(node, out)
        return "".join(out)

    def render_children(self, node: SyntaxTreeNode) -> str:
        out: list[str] = []
        self._render_children(node, out)
        return "".join(out)

    def _render(self, node: SyntaxTreeNode, out: list[str]) -> None:
        handler = getattr(self, f"_render_{node.type}", None)
        if handler is None:
            logger.warning("Not rendering unsupported %s node", node.type)
            return
        handler(node, out)

    def _render_children(self, node: SyntaxTreeNode, out: list[str]) -> None:
        for child in node.children:
            self._render(child, out)

    def _wrap(self, tag: str, node: SyntaxTreeNode, out: list[str]) -> None:
        out.append(f"<{tag}>")
        self._render_children(node, out)
        out.append(f"</{tag}>")

    # -- containers ---------------------------------------------------------

    def _render_root(self, node: SyntaxTreeNode, out: list[str]) -> None:
        self._render_children(node, out)

    def _render_inline(self, node: SyntaxTreeNode, out: list[str]) -> None:
        self._render_children(node, out)

    def _render_heading(self, node: SyntaxTreeNode, out: list[str]) -> None:
        if node.tag == "h1":
            return
        self._wrap(node.tag, node, out)

    def _render_paragraph(self, node: SyntaxTreeNode, out: list[str]) -> None:
        self._wrap("p", node, out)

    def _render_blockquote(self, node: SyntaxTreeNode, out: list[str]) -> None:
        self._wrap("blockquote", node, out)

    def _render_bullet_list(self, node: SyntaxTreeNode, out: list[str]) -> None:
        self._wrap("ul", node, out)

    def _render_ordered_list(self, node: SyntaxTreeNode, out: list[str]) -> None:
        self._wrap("ol", node, out)

    def _render_list_item(self, node: SyntaxTreeNode, out: list[str]) -> None:
        self._wrap("li", node, out)

    def _render_em(self, node: SyntaxTreeNode, out: list[str]) -> None:
        self._wrap("em", node, out)

    def _render_strong(self, node: SyntaxTreeNode, out: list[str]) -> None:
        self._wrap("strong", node, out)

    def _render_s(self, node: SyntaxTreeNode, out: list[str]) -> None:
        self._wrap("s", node, out)

    # -- leaves -------------------------------------------------------------

    def _render_text(self, node: SyntaxTreeNode, out: list[str]) -> None:
        out.append(html_encode(node.content))

    def _render_html_block(self, node: SyntaxTreeNode, out: list[str]) -> None:
        out.append(node.content)

    def _render_html_inline(self, node: SyntaxTreeNode, out: list[str]) -> None:
        out.append(node.content)

    def _render_softbreak(self, node: SyntaxTreeNode, out: list[str]) -> None:
        out.append(" ")

    def _render_hardbreak(self, node: SyntaxTreeNode, out: list[str]) -> None:
        out.append("<br />")

    def _render_hr(self, node: SyntaxTreeNode, out: list[str]) -> None:
        out.append("<hr />")

    def _render_link(self, node: SyntaxTreeNode, out: list[str]) -> None:
        href = node.attrs.get("href", "")
        title = node.attrs.get("title", "")
        out.append(f'<a href="{href}">')
        out.append(html_encode(str(title)))
        self._render_children(node, out)
        out.append("</a>")

    def _render_image(self, node: SyntaxTreeNode, out: list[str]) -> None:
        caption = self.render_children(node)
        classes = ""
        if caption.startswith(INVERT_PREFIX):
            caption = caption[len(INVERT_PREFIX):]
            classes = f' class="{INVERTABLE_IMAGE_CLASS}"'
        src = node.attrs.get("src", "")
        alt = quote_attribute(strip_tags(caption))
        out.append('<div class="centered">')
        out.append(f'<img src="{src}" alt="{alt}"{classes}/>')
        out.append("</div>")

    def _render_code_inline(self, node: SyntaxTreeNode, out: list[str]) -> None:
        code = node.content
        language = DEFAULT_LANGUAGE
        if ":" in code:
            language, code = code.split(":", 1)
        out.append(f'<code class="language-{escape_attribute(language)}">')
        out.append(html_encode(code))
        out.append("</code>")

    def _render_fence(self, node: SyntaxTreeNode, out: list[str]) -> None:
        language = node.info.strip() or DEFAULT_LANGUAGE
        out.append(f'<pre><code class="language-{escape_attribute(language)}">')
        out.append(html_encode(node.content))
        out.append("</code></pre>")

    # Indented code blocks have no info string and render like a plain fence.
    _render_code_block = _render_fence

    # -- footnotes ----------------------------------------------------------

    def _render_footnote_ref(self, node: SyntaxTreeNode, out: list[str]) -> None:
        key = escape_attribute(_footnote_key(node))
        out.append(f'<sup><a href="#footnote-{key}">{key}</a></sup>')

    def _render_footnote_block(self, node: SyntaxTreeNode, out: list[str]) -> None:
        self._render_children(node, out)

    def _render_footnote(self, node: SyntaxTreeNode, out: list[str]) -> None:
        key = escape_attribute(_footnote_key(node))
        out.append(f'<div class="footnote" id="footnote-{key}">')
        out.append(f'<span class="footnote-key">{key}</span>')
        self._render_children(node, out)
        out.append("</div>")

    def _render_footnote_anchor(self, node: SyntaxTreeNode, out: list[str]) -> None:
        # Back-references are not shown; the key in the definition suffices.
        pass


def _footnote_key(node: SyntaxTreeNode) -> str:
    meta = node.meta or {}
    label = meta.get("label")
    if label:
        return str(label)
    # Inline footnotes (^[...]) have no label, only a running number.
    return str(meta.get("id", 0) + 1)
