#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mathmd/parsers/base.py
"""Base classes for text parsers.

This module defines the abstract base class that parsers inherit from. The
BaseParser provides a consistent interface for turning author text into the
mathmd AST.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from mathmd.ast import Document
from mathmd.exceptions import InvalidOptionsError
from mathmd.options.base import BaseParserOptions

logger = logging.getLogger(__name__)


class BaseParser(ABC):
    """Abstract base class for all text parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    Examples
    --------
    Creating a custom parser:

        >>> from mathmd.parsers.base import BaseParser
        >>> from mathmd.ast import Document
        >>>
        >>> class NullParser(BaseParser):
        ...     def parse(self, source):
        ...         return Document(children=[])

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration.

        Parameters
        ----------
        options : BaseParserOptions or None, default = None
            Format-specific parsing options. If None, default options will be used.

        """
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Parameters
        ----------
        options : BaseParserOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        parser_name : str
            Name of the parser (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, source: str) -> Document:
        """Parse author text into an AST.

        Parameters
        ----------
        source : str
            Author-supplied text

        Returns
        -------
        Document
            AST Document node representing the parsed structure

        """
        raise NotImplementedError
