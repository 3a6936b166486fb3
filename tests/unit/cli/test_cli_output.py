"""Tests for CLI output helpers."""

import argparse
import io

import pytest

from mathmd.cli.output import print_rich_html, should_use_rich_output, write_output
from mathmd.exceptions import OutputWriteError


class _TtyStream(io.StringIO):
    def isatty(self):
        return True


def _args(**overrides) -> argparse.Namespace:
    values = {"rich": True, "out": None}
    values.update(overrides)
    return argparse.Namespace(**values)


@pytest.mark.cli
@pytest.mark.unit
class TestShouldUseRichOutput:
    """Tests for rich output detection."""

    def test_tty_with_flag(self):
        assert should_use_rich_output(_args(), _TtyStream()) is True

    def test_flag_not_set(self):
        assert should_use_rich_output(_args(rich=False), _TtyStream()) is False

    def test_output_file_disables_rich(self):
        assert should_use_rich_output(_args(out="page.html"), _TtyStream()) is False

    def test_not_a_tty(self):
        assert should_use_rich_output(_args(), io.StringIO()) is False

    def test_closed_stream(self):
        stream = io.StringIO()
        stream.close()
        assert should_use_rich_output(_args(), stream) is False


@pytest.mark.cli
@pytest.mark.unit
class TestWriteOutput:
    """Tests for writing rendered HTML."""

    def test_stream_gets_trailing_newline(self):
        stream = io.StringIO()
        write_output("<p>x</p>", None, stream)
        assert stream.getvalue() == "<p>x</p>\n"

    def test_file(self, tmp_path):
        target = tmp_path / "out.html"
        write_output("<p>x</p>", str(target))
        assert target.read_text(encoding="utf-8") == "<p>x</p>\n"

    def test_unwritable_file(self, tmp_path):
        target = tmp_path / "missing-dir" / "out.html"

        with pytest.raises(OutputWriteError) as exc_info:
            write_output("<p>x</p>", str(target))

        assert exc_info.value.file_path == str(target)
        assert exc_info.value.rendering_stage == "file_write"


@pytest.mark.cli
@pytest.mark.unit
class TestPrintRichHtml:
    """Tests for highlighted output."""

    def test_prints_markup(self):
        stream = io.StringIO()
        print_rich_html('<p class="md__p">x</p>', stream)
        assert "md__p" in stream.getvalue()
