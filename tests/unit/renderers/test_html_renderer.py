"""Unit tests for the HTML renderer.

Tests cover:
- Class hooks and markup for every node kind
- Escaping of literal payloads and attributes
- Standalone document wrapping and the MathJax loader
- Output to paths and streams

"""

import logging
from io import BytesIO, StringIO

import pytest

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
    Paragraph,
    Spacer,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
)
from mathmd.exceptions import InvalidOptionsError
from mathmd.options import HtmlRendererOptions, MarkdownParserOptions
from mathmd.renderers.html import HtmlRenderer


def render(*children, **options) -> str:
    return HtmlRenderer(HtmlRendererOptions(**options)).render_to_string(Document(children=list(children)))


@pytest.mark.unit
class TestBlockRendering:
    """Tests for block-level nodes."""

    def test_empty_document(self):
        assert render() == ""

    def test_heading(self):
        html = render(Heading(level=2, content=[Text(content="Title")]))
        assert html == '<h2 class="md__h">Title</h2>'

    def test_paragraph(self):
        html = render(Paragraph(content=[Text(content="a &lt; b")]))
        assert html == '<p class="md__p">a &lt; b</p>'

    def test_blocks_joined_by_newline(self):
        html = render(Paragraph(content=[Text(content="a")]), Spacer(), Paragraph(content=[Text(content="b")]))
        assert html == '<p class="md__p">a</p>\n<div class="md__spacer"></div>\n<p class="md__p">b</p>'

    def test_math_block_keeps_delimiters_and_newlines(self):
        html = render(MathBlock(content="$$\na<b\n$$"))
        assert html == '<div class="md__math">$$\na&lt;b\n$$</div>'

    def test_code_block_with_language(self):
        html = render(CodeBlock(content='if a < b: print("x")', language="python"))
        assert html == (
            '<pre class="md__pre"><code class="language-python">if a &lt; b: print(&quot;x&quot;)</code></pre>'
        )

    def test_code_block_without_language(self):
        html = render(CodeBlock(content="x"))
        assert html == '<pre class="md__pre"><code>x</code></pre>'

    def test_unordered_list(self):
        html = render(List(ordered=False, items=[ListItem(content=[Text(content="a")])]))
        assert html == '<ul class="md__ul">\n<li class="md__li">a</li>\n</ul>'

    def test_ordered_list_start(self):
        html = render(List(ordered=True, start=3, items=[ListItem(content=[Text(content="c")])]))
        assert html.startswith('<ol class="md__ol" start="3">')
        assert html.endswith("</ol>")

    def test_ordered_list_default_start_omitted(self):
        html = render(List(ordered=True, items=[ListItem(content=[Text(content="a")])]))
        assert "start=" not in html

    def test_task_items(self):
        html = render(
            List(
                ordered=False,
                items=[
                    ListItem(content=[Text(content="done")], task_status="checked"),
                    ListItem(content=[Text(content="todo")], task_status="unchecked"),
                ],
            )
        )

        assert '<li class="md__li"><input class="md__task" type="checkbox" disabled checked> done</li>' in html
        assert '<li class="md__li"><input class="md__task" type="checkbox" disabled> todo</li>' in html

    def test_blockquote(self):
        html = render(BlockQuote(children=[Paragraph(content=[Text(content="q")]), Spacer()]))
        assert html == '<blockquote class="md__blockquote">\n<p class="md__p">q</p>\n<div class="md__spacer"></div>\n</blockquote>'

    def test_table(self):
        table = Table(
            header=TableRow(cells=[TableCell(content=[Text(content="n")]), TableCell(content=[Text(content="sq")])], is_header=True),
            alignments=["left", None],
            rows=[TableRow(cells=[TableCell(content=[Text(content="2")]), TableCell(content=[Text(content="4")])])],
        )

        html = render(table)

        assert html == (
            '<table class="md__table">\n<thead>\n'
            '<tr><th style="text-align: left">n</th><th>sq</th></tr>\n'
            "</thead>\n<tbody>\n"
            '<tr><td style="text-align: left">2</td><td>4</td></tr>\n'
            "</tbody>\n</table>"
        )


@pytest.mark.unit
class TestInlineRendering:
    """Tests for inline nodes."""

    def _para(self, *content, **options) -> str:
        return render(Paragraph(content=list(content)), **options)

    def test_strong_and_emphasis(self):
        html = self._para(Strong(content=[Text(content="b")]), Emphasis(content=[Text(content="i")]))
        assert html == '<p class="md__p"><strong>b</strong><em>i</em></p>'

    def test_inline_code_escaped_once(self):
        html = self._para(Code(content="a < b && c"))
        assert '<code class="md__code">a &lt; b &amp;&amp; c</code>' in html

    def test_link_attributes(self):
        html = self._para(Link(url="https://example.com/?a=1&b=2", content=[Text(content="x")]))
        assert (
            '<a class="link" href="https://example.com/?a=1&amp;b=2" target="_blank" rel="noopener noreferrer">x</a>'
            in html
        )

    def test_image(self):
        html = self._para(Image(url="https://example.com/i.png", alt_text="plot"))
        assert '<img class="md__img" src="https://example.com/i.png" alt="plot" loading="lazy" />' in html

    def test_image_without_lazy_loading(self):
        html = self._para(Image(url="/i.png", alt_text="plot"), lazy_images=False)
        assert "loading=" not in html

    def test_image_empty_alt_uses_default(self):
        html = self._para(Image(url="/i.png", alt_text=""))
        assert 'alt="image"' in html

    def test_image_placeholder(self):
        html = self._para(ImagePlaceholder(alt_text="diagram"))
        assert '<span class="md__img_placeholder">[image: diagram]</span>' in html

    def test_line_break(self):
        html = self._para(Text(content="$$"), LineBreak(), Text(content="a=b"))
        assert html == '<p class="md__p">$$<br>a=b</p>'


@pytest.mark.unit
class TestStandaloneDocument:
    """Tests for the standalone document wrapper."""

    def test_fragment_by_default(self):
        html = render(Paragraph(content=[Text(content="x")]))
        assert "<html" not in html

    def test_document_wrapper(self):
        html = render(Paragraph(content=[Text(content="x")]), standalone=True, title="A < B", language="fr")

        assert html.startswith("<!DOCTYPE html>")
        assert '<html lang="fr">' in html
        assert "<title>A &lt; B</title>" in html
        assert '<main>\n<p class="md__p">x</p>\n</main>' in html

    def test_metadata_overrides_options(self):
        doc = Document(children=[], metadata={"title": "From metadata"})
        html = HtmlRenderer(HtmlRendererOptions(standalone=True, title="From options")).render_to_string(doc)
        assert "<title>From metadata</title>" in html

    def test_no_scripts_without_opt_in(self, caplog):
        with caplog.at_level(logging.WARNING, logger="mathmd.renderers.html"):
            html = render(MathBlock(content="$$x$$"), standalone=True)

        assert "<script" not in html
        assert "allow_remote_scripts=False" in caplog.text

    def test_no_warning_without_math(self, caplog):
        with caplog.at_level(logging.WARNING, logger="mathmd.renderers.html"):
            render(Paragraph(content=[Text(content="x")]), standalone=True)

        assert caplog.records == []

    def test_mathjax_loader_with_opt_in(self):
        html = render(MathBlock(content="$$x$$"), standalone=True, allow_remote_scripts=True)

        assert html.count("<script>") == 1
        assert "https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-svg.js" in html
        assert 'displayMath: [["$$", "$$"]]' in html

    def test_mathjax_loader_only_when_math_present(self):
        html = render(Paragraph(content=[Text(content="x")]), standalone=True, allow_remote_scripts=True)
        assert "<script" not in html

    def test_custom_mathjax_urls(self):
        html = render(
            MathBlock(content="$$x$$"),
            standalone=True,
            allow_remote_scripts=True,
            mathjax_urls=("https://mirror.example.com/tex-svg.js",),
        )

        assert '["https://mirror.example.com/tex-svg.js"]' in html
        assert "cdn.jsdelivr.net" not in html

    def test_loader_urls_cannot_close_script(self):
        html = render(
            MathBlock(content="$$x$$"),
            standalone=True,
            allow_remote_scripts=True,
            mathjax_urls=("https://example.com/</script><script>alert(1)//",),
        )

        assert html.count("</script>") == 1


@pytest.mark.unit
class TestRendererOutput:
    """Tests for renderer construction and output targets."""

    def test_wrong_options_type(self):
        with pytest.raises(InvalidOptionsError):
            HtmlRenderer(MarkdownParserOptions())

    def test_renderer_reuse(self):
        renderer = HtmlRenderer()

        first = renderer.render_to_string(Document(children=[Paragraph(content=[Text(content="a")])]))
        second = renderer.render_to_string(Document(children=[Paragraph(content=[Text(content="b")])]))

        assert first == '<p class="md__p">a</p>'
        assert second == '<p class="md__p">b</p>'

    def test_render_to_path(self, tmp_path):
        target = tmp_path / "out.html"

        HtmlRenderer().render(Document(children=[Spacer()]), target)

        assert target.read_text(encoding="utf-8") == '<div class="md__spacer"></div>'

    def test_render_to_text_stream(self):
        buffer = StringIO()
        HtmlRenderer().render(Document(children=[Spacer()]), buffer)
        assert buffer.getvalue() == '<div class="md__spacer"></div>'

    def test_render_to_binary_stream(self):
        buffer = BytesIO()
        HtmlRenderer().render(Document(children=[Paragraph(content=[Text(content="é")])]), buffer)
        assert buffer.getvalue() == '<p class="md__p">é</p>'.encode("utf-8")

    def test_unsupported_output(self):
        with pytest.raises(TypeError):
            HtmlRenderer().render(Document(), 42)
