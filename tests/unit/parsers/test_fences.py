"""Unit tests for the fenced-code splitter.

Tests cover:
- Alternating prose and code segments
- Language hints and their sanitization
- Unterminated fences degrading to prose
- Line ending normalization

"""

import pytest

from mathmd.parsers.fences import Segment, is_fence_line, split_fenced_segments, split_lines


@pytest.mark.unit
class TestSplitLines:
    """Tests for line splitting."""

    def test_empty_source_has_no_lines(self):
        assert split_lines("") == []

    def test_trailing_newline_does_not_add_blank_line(self):
        assert split_lines("a\nb\n") == ["a", "b"]

    def test_carriage_returns_removed(self):
        assert split_lines("a\r\nb\r\n") == ["a", "b"]

    def test_interior_blank_lines_kept(self):
        assert split_lines("a\n\nb") == ["a", "", "b"]


@pytest.mark.unit
class TestFenceDetection:
    """Tests for fence line recognition."""

    @pytest.mark.parametrize("line", ["```", "```python", "   ```", "````"])
    def test_fence_lines(self, line):
        assert is_fence_line(line)

    @pytest.mark.parametrize("line", ["``", "text ```", "` ``", ""])
    def test_non_fence_lines(self, line):
        assert not is_fence_line(line)


@pytest.mark.unit
class TestSplitFencedSegments:
    """Tests for segment splitting."""

    def test_prose_only(self):
        segments = split_fenced_segments("hello\nworld")
        assert segments == [Segment(kind="prose", text="hello\nworld", start_line=1)]

    def test_code_between_prose(self):
        segments = split_fenced_segments("before\n```\nx = 1\n```\nafter")

        assert [s.kind for s in segments] == ["prose", "code", "prose"]
        assert segments[0].text == "before"
        assert segments[1].text == "x = 1"
        assert segments[1].start_line == 2
        assert segments[2].text == "after"
        assert segments[2].start_line == 5

    def test_code_keeps_interior_lines_verbatim(self):
        segments = split_fenced_segments("```\n# not a heading\n  $$\n- item\n```")

        assert len(segments) == 1
        assert segments[0].kind == "code"
        assert segments[0].text == "# not a heading\n  $$\n- item"

    def test_empty_code_block(self):
        segments = split_fenced_segments("```\n```")
        assert segments == [Segment(kind="code", text="", language=None, start_line=1)]

    def test_language_hint(self):
        segments = split_fenced_segments("```python\nprint(1)\n```")
        assert segments[0].language == "python"

    def test_language_hint_first_word_only(self):
        segments = split_fenced_segments("``` c++ title=main\nint x;\n```")
        assert segments[0].language == "c++"

    def test_unsafe_language_hint_dropped(self):
        segments = split_fenced_segments('```py"><script>\nx\n```')
        assert segments[0].kind == "code"
        assert segments[0].language is None

    def test_unterminated_fence_degrades_to_prose(self):
        segments = split_fenced_segments("intro\n```\n# heading\ntext")

        assert segments == [Segment(kind="prose", text="intro\n```\n# heading\ntext", start_line=1)]

    def test_unterminated_fence_after_balanced_pair(self):
        segments = split_fenced_segments("```\na\n```\n```\nb")

        assert [s.kind for s in segments] == ["code", "prose"]
        assert segments[0].text == "a"
        assert segments[1].text == "```\nb"

    def test_unterminated_fence_logs_debug(self, caplog):
        with caplog.at_level("DEBUG", logger="mathmd.parsers.fences"):
            split_fenced_segments("```\nnever closed")

        assert "Unterminated code fence" in caplog.text

    def test_blank_line_prose_segment_preserved(self):
        segments = split_fenced_segments("```\na\n```\n\n```\nb\n```")

        assert [s.kind for s in segments] == ["code", "prose", "code"]
        assert segments[1].text == ""

    def test_empty_source(self):
        assert split_fenced_segments("") == []
