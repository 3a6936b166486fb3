#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mathmd/renderers/base.py
"""Base classes for AST renderers.

This module defines the abstract base class that AST renderers inherit from
and the inline-capture mixin used by text renderers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from mathmd.ast import Document
from mathmd.ast.nodes import Node
from mathmd.exceptions import InvalidOptionsError
from mathmd.options.base import BaseRendererOptions


class BaseRenderer(ABC):
    """Abstract base class for all AST renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render_to_string(self, doc: Document) -> str:
        """Render the AST to a string.

        Parameters
        ----------
        doc : Document
            AST Document node to render

        Returns
        -------
        str
            Rendered document as a string

        """

    def render(self, doc: Document, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render the AST and write the text to ``output``.

        Parameters
        ----------
        doc : Document
            AST Document node to render
        output : str, Path, IO[bytes] or IO[str]
            File path or file-like object

        """
        self.write_text_output(self.render_to_string(doc), output)

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Parameters
        ----------
        options : BaseRendererOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        renderer_name : str
            Name of the renderer (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_text_output(text: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Write text output to a file path or IO stream.

        Parameters
        ----------
        text : str
            Rendered text to write
        output : str, Path, IO[bytes] or IO[str]
            Output destination. Paths are written as UTF-8; binary streams
            receive UTF-8 bytes.

        Raises
        ------
        TypeError
            If output type is not supported

        Examples
        --------
        Write to StringIO:
            >>> from io import StringIO
            >>> buffer = StringIO()
            >>> BaseRenderer.write_text_output("<p>x</p>", buffer)
            >>> buffer.getvalue()
            '<p>x</p>'

        """
        if isinstance(output, (str, Path)):
            Path(output).write_text(text, encoding="utf-8")
            return
        if not hasattr(output, "write"):
            raise TypeError(f"Unsupported output type: {type(output).__name__}")
        try:
            output.write(text)  # type: ignore[arg-type]
        except TypeError:
            output.write(text.encode("utf-8"))  # type: ignore[arg-type]


class InlineContentMixin:
    """Mixin providing inline content rendering for text-based renderers.

    The implementing class must have:
    - A ``_output`` attribute (list[str]) for accumulating output
    - Visitor methods that append to ``_output``

    """

    _output: list[str]

    def _render_inline_content(self, content: list[Node]) -> str:
        """Render a list of inline nodes to text.

        Parameters
        ----------
        content : list of Node
            Inline nodes to render

        Returns
        -------
        str
            Rendered inline content as a string

        """
        saved_output = self._output
        self._output = []

        for node in content:
            node.accept(self)

        result = "".join(self._output)
        self._output = saved_output
        return result
