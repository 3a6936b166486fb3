#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mathmd/renderers/html.py
"""HTML rendering from AST.

This module provides the HtmlRenderer class which serializes the mathmd AST
into an HTML fragment (or, in standalone mode, a complete document). Every
element carries a fixed class hook (``md__p``, ``md__math``, ...) so pages
can style the output and the math typesetter can find display math.

Text payloads arrive already escaped; literal payloads (code, math) and URL
attributes are escaped here, exactly once.

"""

from __future__ import annotations

import json
import logging
from typing import Optional

from mathmd.ast import (
    BlockQuote,
    Code,
    CodeBlock,
    Document,
    Emphasis,
    Heading,
    Image,
    ImagePlaceholder,
    LineBreak,
    Link,
    List,
    ListItem,
    MathBlock,
    Node,
    NodeVisitor,
    Paragraph,
    Spacer,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
)
from mathmd.constants import (
    CSS_CLASS_BLOCKQUOTE,
    CSS_CLASS_CODE_BLOCK,
    CSS_CLASS_HEADING,
    CSS_CLASS_IMAGE,
    CSS_CLASS_IMAGE_PLACEHOLDER,
    CSS_CLASS_INLINE_CODE,
    CSS_CLASS_LINK,
    CSS_CLASS_LIST_ITEM,
    CSS_CLASS_MATH_BLOCK,
    CSS_CLASS_ORDERED_LIST,
    CSS_CLASS_PARAGRAPH,
    CSS_CLASS_SPACER,
    CSS_CLASS_TABLE,
    CSS_CLASS_TASK_CHECKBOX,
    CSS_CLASS_UNORDERED_LIST,
    DEFAULT_IMAGE_ALT,
    LINK_REL,
    LINK_TARGET,
)
from mathmd.options.html import HtmlRendererOptions
from mathmd.renderers.base import BaseRenderer, InlineContentMixin
from mathmd.utils.html_utils import escape_attribute, escape_html

logger = logging.getLogger(__name__)

# Tries each CDN in order; on load failure the script tag is removed and the next URL is tried
MATHJAX_LOADER_TEMPLATE = """<script>
window.MathJax = {tex: {inlineMath: [], displayMath: [["$$", "$$"]]}, svg: {fontCache: "global"}};
(function (urls) {
  function load(index) {
    if (index >= urls.length) { return; }
    var script = document.createElement("script");
    script.id = "mathjax-script";
    script.async = true;
    script.src = urls[index];
    script.onerror = function () { script.remove(); load(index + 1); };
    document.head.appendChild(script);
  }
  load(0);
})(%s);
</script>"""

DEFAULT_CSS = """body { font-family: system-ui, sans-serif; line-height: 1.6; max-width: 50rem; margin: 0 auto; padding: 1rem; }
.md__spacer { height: 0.75rem; }
.md__pre { background: #f6f8fa; padding: 0.75rem; overflow-x: auto; }
.md__code { background: #f6f8fa; padding: 0 0.2rem; }
.md__blockquote { border-left: 0.25rem solid #d0d7de; margin: 0; padding-left: 1rem; color: #57606a; }
.md__math { overflow-x: auto; }
.md__img { max-width: 100%; }
.md__img_placeholder { color: #57606a; font-style: italic; }
.md__table { border-collapse: collapse; }
.md__table th, .md__table td { border: 1px solid #d0d7de; padding: 0.25rem 0.5rem; }"""


class HtmlRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render AST to an HTML fragment or document.

    Parameters
    ----------
    options : HtmlRendererOptions or None, default = None
        HTML rendering options

    Examples
    --------
        >>> from mathmd.ast import Document, MathBlock
        >>> doc = Document(children=[MathBlock(content="$$a<b$$")])
        >>> HtmlRenderer().render_to_string(doc)
        '<div class="md__math">$$a&lt;b$$</div>'

    """

    def __init__(self, options: HtmlRendererOptions | None = None):
        """Initialize the HTML renderer with options."""
        BaseRenderer._validate_options_type(options, HtmlRendererOptions, "html")
        options = options or HtmlRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: HtmlRendererOptions = options
        self._output: list[str] = []
        self._has_math = False

    def render_to_string(self, doc: Document) -> str:
        """Render a document AST to an HTML string.

        Parameters
        ----------
        doc : Document
            The document node to render

        Returns
        -------
        str
            HTML fragment with blocks joined by newlines, or a complete HTML
            document in standalone mode

        """
        self._output = []
        self._has_math = False

        doc.accept(self)
        content = "".join(self._output)

        if self.options.standalone:
            return self._wrap_in_document(doc, content)
        return content

    def _render_blocks(self, children: list[Node]) -> str:
        return "\n".join(self._render_inline_content([child]) for child in children)

    def _wrap_in_document(self, doc: Document, content: str) -> str:
        """Wrap content in a complete HTML document.

        Parameters
        ----------
        doc : Document
            Document node with metadata
        content : str
            Rendered HTML content

        Returns
        -------
        str
            Complete HTML document

        """
        title = doc.metadata.get("title", self.options.title) if doc.metadata else self.options.title
        language = doc.metadata.get("language", self.options.language) if doc.metadata else self.options.language

        parts = [
            "<!DOCTYPE html>",
            f'<html lang="{escape_attribute(str(language))}">',
            "<head>",
            '<meta charset="UTF-8">',
            '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
            f"<title>{escape_html(str(title))}</title>",
            "<style>",
            DEFAULT_CSS,
            "</style>",
        ]

        if self._has_math:
            if not self.options.allow_remote_scripts:
                logger.warning(
                    "Display math requires the MathJax typesetter from a CDN, but allow_remote_scripts=False. "
                    "Math will be shown as raw TeX. Set allow_remote_scripts=True to enable CDN script loading."
                )
            else:
                # Closing tags inside the JSON would end the script element early
                urls = json.dumps(list(self.options.mathjax_urls)).replace("</", "<\\/")
                parts.append(MATHJAX_LOADER_TEMPLATE % urls)

        parts.extend(["</head>", "<body>", "<main>", content, "</main>", "</body>", "</html>"])
        return "\n".join(parts)

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        """Render a Document node."""
        self._output.append(self._render_blocks(node.children))

    def visit_heading(self, node: Heading) -> None:
        """Render a Heading node."""
        content = self._render_inline_content(node.content)
        self._output.append(f'<h{node.level} class="{CSS_CLASS_HEADING}">{content}</h{node.level}>')

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a Paragraph node."""
        content = self._render_inline_content(node.content)
        self._output.append(f'<p class="{CSS_CLASS_PARAGRAPH}">{content}</p>')

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a CodeBlock node."""
        code_attr = f' class="language-{escape_attribute(node.language)}"' if node.language else ""
        self._output.append(
            f'<pre class="{CSS_CLASS_CODE_BLOCK}"><code{code_attr}>{escape_html(node.content)}</code></pre>'
        )

    def visit_math_block(self, node: MathBlock) -> None:
        """Render a MathBlock node.

        The delimiters and newlines are kept as written; the typesetter scans
        the container text for ``$$...$$``.
        """
        self._has_math = True
        self._output.append(f'<div class="{CSS_CLASS_MATH_BLOCK}">{escape_html(node.content)}</div>')

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Render a BlockQuote node."""
        lines = [f'<blockquote class="{CSS_CLASS_BLOCKQUOTE}">']
        if node.children:
            lines.append(self._render_blocks(node.children))
        lines.append("</blockquote>")
        self._output.append("\n".join(lines))

    def visit_list(self, node: List) -> None:
        """Render a List node."""
        if node.ordered:
            start_attr = f' start="{node.start}"' if node.start != 1 else ""
            open_tag, close_tag = f'<ol class="{CSS_CLASS_ORDERED_LIST}"{start_attr}>', "</ol>"
        else:
            open_tag, close_tag = f'<ul class="{CSS_CLASS_UNORDERED_LIST}">', "</ul>"

        lines = [open_tag]
        lines.extend(self._render_inline_content([item]) for item in node.items)
        lines.append(close_tag)
        self._output.append("\n".join(lines))

    def visit_list_item(self, node: ListItem) -> None:
        """Render a ListItem node."""
        content = self._render_inline_content(node.content)
        if node.task_status is not None:
            checked = " checked" if node.task_status == "checked" else ""
            checkbox = f'<input class="{CSS_CLASS_TASK_CHECKBOX}" type="checkbox" disabled{checked}>'
            content = f"{checkbox} {content}" if content else checkbox
        self._output.append(f'<li class="{CSS_CLASS_LIST_ITEM}">{content}</li>')

    def visit_table(self, node: Table) -> None:
        """Render a Table node."""
        lines = [f'<table class="{CSS_CLASS_TABLE}">', "<thead>"]
        lines.append(self._render_row(node.header, node.alignments))
        lines.extend(["</thead>", "<tbody>"])
        lines.extend(self._render_row(row, node.alignments) for row in node.rows)
        lines.extend(["</tbody>", "</table>"])
        self._output.append("\n".join(lines))

    def _render_row(self, row: TableRow, alignments: list[Optional[str]]) -> str:
        tag = "th" if row.is_header else "td"
        cells = []
        for index, cell in enumerate(row.cells):
            alignment = alignments[index] if index < len(alignments) else None
            style = f' style="text-align: {alignment}"' if alignment else ""
            cells.append(f"<{tag}{style}>{self._render_inline_content(cell.content)}</{tag}>")
        return f"<tr>{''.join(cells)}</tr>"

    def visit_table_row(self, node: TableRow) -> None:
        """Render a TableRow node outside of a table."""
        self._output.append(self._render_row(node, []))

    def visit_table_cell(self, node: TableCell) -> None:
        """Render a TableCell node's content."""
        self._output.append(self._render_inline_content(node.content))

    def visit_spacer(self, node: Spacer) -> None:
        """Render a Spacer node."""
        self._output.append(f'<div class="{CSS_CLASS_SPACER}"></div>')

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        """Render a Text node (payload is already escaped)."""
        self._output.append(node.content)

    def visit_emphasis(self, node: Emphasis) -> None:
        """Render an Emphasis node."""
        self._output.append(f"<em>{self._render_inline_content(node.content)}</em>")

    def visit_strong(self, node: Strong) -> None:
        """Render a Strong node."""
        self._output.append(f"<strong>{self._render_inline_content(node.content)}</strong>")

    def visit_code(self, node: Code) -> None:
        """Render an inline Code node."""
        self._output.append(f'<code class="{CSS_CLASS_INLINE_CODE}">{escape_html(node.content)}</code>')

    def visit_link(self, node: Link) -> None:
        """Render a Link node."""
        content = self._render_inline_content(node.content)
        self._output.append(
            f'<a class="{CSS_CLASS_LINK}" href="{escape_attribute(node.url)}" '
            f'target="{LINK_TARGET}" rel="{LINK_REL}">{content}</a>'
        )

    def visit_image(self, node: Image) -> None:
        """Render an Image node."""
        alt_text = node.alt_text or DEFAULT_IMAGE_ALT
        loading = ' loading="lazy"' if self.options.lazy_images else ""
        self._output.append(
            f'<img class="{CSS_CLASS_IMAGE}" src="{escape_attribute(node.url)}" alt="{alt_text}"{loading} />'
        )

    def visit_image_placeholder(self, node: ImagePlaceholder) -> None:
        """Render an ImagePlaceholder node."""
        alt_text = node.alt_text or DEFAULT_IMAGE_ALT
        self._output.append(f'<span class="{CSS_CLASS_IMAGE_PLACEHOLDER}">[image: {alt_text}]</span>')

    def visit_line_break(self, node: LineBreak) -> None:
        """Render a LineBreak node."""
        self._output.append("<br>")
