"""Integration tests for end-to-end rendering of problem statements.

Each test renders author text through the public API and inspects the
resulting HTML, either as a string or through BeautifulSoup.
"""

import pytest
from bs4 import BeautifulSoup

from mathmd import RenderOptions, ShareUrlResolver, render


def soup_of(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


@pytest.mark.integration
class TestDisplayMath:
    """Display math through the full pipeline."""

    def test_multiline_math(self):
        assert '<div class="md__math">$$\na=b+c\n$$</div>' in render("$$\na=b+c\n$$")

    def test_single_line_math(self):
        assert '<div class="md__math">$$a=b$$</div>' in render("$$a=b$$")

    def test_math_inside_fence_is_code(self):
        html = render("```\n$$\na\n$$\n```")

        assert "md__pre" in html
        assert "$$" in html
        assert "md__math" not in html

    def test_unterminated_math(self):
        html = render("$$\na=b")

        assert "$$<br>" in html
        assert "a=b" in html
        assert "md__math" not in html

    def test_math_between_lists(self):
        html = render("- item\n\n$$\na\n$$\n\n- item2")

        assert html.index("</ul>") < html.index('<div class="md__math">')
        assert html.count('<ul class="md__ul">') == 2
        assert html.index('<div class="md__math">') < html.rindex('<ul class="md__ul">')

    def test_math_text_is_escaped(self):
        html = render("$$\n\\{x < y\\} & z\n$$")
        assert '<div class="md__math">$$\n\\{x &lt; y\\} &amp; z\n$$</div>' in html


@pytest.mark.integration
@pytest.mark.security
class TestUrlSafety:
    """Link and image sanitization through the full pipeline."""

    def test_unknown_scheme_link(self):
        html = render("[x](foo:bar)")

        link = soup_of(html).find("a")
        assert link["href"] == "#"
        assert link["rel"] == ["noopener", "noreferrer"]
        assert link["target"] == "_blank"
        assert 'rel="noopener noreferrer"' in html

    def test_unknown_scheme_image(self):
        html = render("![alt](foo:bar)")

        placeholder = soup_of(html).find("span", class_="md__img_placeholder")
        assert placeholder is not None
        assert "alt" in placeholder.get_text()
        assert "<img" not in html

    def test_no_script_output(self):
        html = render("<script>alert(1)</script>\n```\n<script>x</script>\n```\n`<script>`")

        assert "<script" not in html
        assert soup_of(html).find("script") is None

    def test_attribute_breakout_in_alt(self):
        html = render('![x" onerror="alert(1)](https://example.com/a.png)')

        img = soup_of(html).find("img")
        assert img is not None
        assert not img.has_attr("onerror")
        assert img["alt"] == 'x" onerror="alert(1)'

    def test_attribute_breakout_in_url(self):
        html = render('[x](https://example.com/"onmouseover="alert)')

        link = soup_of(html).find("a")
        assert not link.has_attr("onmouseover")
        assert link["href"] == 'https://example.com/"onmouseover="alert'

    def test_ampersands_escaped_once(self):
        html = render("a & b < c > d\n[q](https://example.com/?a=1&b=2)")

        assert "&amp;amp;" not in html
        assert "a &amp; b &lt; c &gt; d" in html
        assert 'href="https://example.com/?a=1&amp;b=2"' in html


@pytest.mark.integration
class TestInlineMarkupInLabels:
    """Strong and emphasis inside link text and image alt text."""

    def test_bold_link_text(self):
        html = render("[**bold**](https://example.com)")
        assert html == (
            '<p class="md__p"><a class="link" href="https://example.com" target="_blank" '
            'rel="noopener noreferrer"><strong>bold</strong></a></p>'
        )

    def test_emphasized_link_text(self):
        link = soup_of(render("[*e*](https://example.com)")).find("a")

        assert link["href"] == "https://example.com"
        assert link.find("em").get_text() == "e"

    def test_bold_alt_text(self):
        html = render("![**x**](https://example.com/a.png)")

        img = soup_of(html).find("img")
        assert img["src"] == "https://example.com/a.png"
        assert img["alt"] == "x"
        assert "<strong>" not in html

    def test_bold_alt_text_on_rejected_image(self):
        placeholder = soup_of(render("![**x**](foo:bar)")).find("span", class_="md__img_placeholder")
        assert placeholder.get_text() == "[image: x]"


@pytest.mark.integration
class TestTables:
    """Pipe tables through the full pipeline."""

    def test_table_structure(self):
        html = render("|a|b|\n|---|---|\n|1|2|")

        assert "<table" in html
        assert "<thead>" in html
        assert "<tbody>" in html

        table = soup_of(html).find("table")
        assert [th.get_text() for th in table.find_all("th")] == ["a", "b"]
        assert [td.get_text() for td in table.find_all("td")] == ["1", "2"]

    def test_alignment_styles(self):
        table = soup_of(render("| l | c | r |\n|:--|:-:|--:|\n| 1 | 2 | 3 |")).find("table")
        assert [td.get("style") for td in table.find_all("td")] == [
            "text-align: left",
            "text-align: center",
            "text-align: right",
        ]


@pytest.mark.integration
class TestProblemStatement:
    """A complete problem statement."""

    def test_structure(self, sample_problem):
        soup = soup_of(render(sample_problem))

        assert soup.find("h1", class_="md__h").get_text() == "Problem 1"
        assert soup.find("strong").get_text() == "a"
        assert soup.find("em").get_text() == "b"
        assert soup.find("code", class_="md__code").get_text() == "a < b"
        assert len(soup.find_all("ul", class_="md__ul")) == 2
        assert [li.get_text() for li in soup.find("ol", class_="md__ol").find_all("li")] == ["step one", "step two"]
        assert soup.find("blockquote", class_="md__blockquote").find("a")["href"] == "https://example.com/notes"
        assert soup.find("div", class_="md__math").get_text() == "$$\na^2 + b^2 = c^2\n$$"
        assert soup.find("table", class_="md__table") is not None
        assert len(soup.find_all("input", class_="md__task")) == 2
        assert soup.find("img", class_="md__img")["src"] == "https://example.com/fig.png"
        assert soup.find("pre", class_="md__pre").find("code")["class"] == ["language-python"]

    def test_task_checkbox_states(self, sample_problem):
        boxes = soup_of(render(sample_problem)).find_all("input", class_="md__task")

        assert [box.has_attr("checked") for box in boxes] == [True, False]
        assert all(box.has_attr("disabled") for box in boxes)

    def test_standalone_page_with_mathjax(self, sample_problem):
        html = render(sample_problem, standalone=True, allow_remote_scripts=True, title="Problem 1")
        soup = soup_of(html)

        assert soup.find("title").get_text() == "Problem 1"
        scripts = soup.find_all("script")
        assert len(scripts) == 1
        assert "mathjax" in scripts[0].get_text()
        assert soup.find("main").find("div", class_="md__math") is not None

    def test_share_images_resolved(self):
        resolver = ShareUrlResolver(api_base_url="https://api.example.com/v1")
        source = "![a](/api/v1/files/share/k1)\n![b](/files/share/k2?x=1)\n![c](https://cdn.example.com/c.png)"

        srcs = [img["src"] for img in soup_of(render(source, RenderOptions(resolve_image_url=resolver))).find_all("img")]

        assert srcs == [
            "https://api.example.com/v1/files/share/k1",
            "https://api.example.com/v1/files/share/k2",
            "https://cdn.example.com/c.png",
        ]
