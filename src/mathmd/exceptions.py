#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the mathmd library.

The renderer itself never raises for malformed or adversarial markdown: bad
input degrades to literal text, ``href="#"`` or an image placeholder. The
exceptions below cover contract violations by callers (wrong option types,
invalid option values) and the file handling done by the command-line tool.

Exception Hierarchy
-------------------
- MathMdError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for parser or renderer)

  - FileError (file access and I/O)
    - FileNotFoundError (file doesn't exist)
    - FileAccessError (permissions, decoding failures)

  - RenderingError (output generation failures)
    - OutputWriteError (file write failures)

Errors raised by caller-supplied URL resolvers are not wrapped; they
propagate unchanged.

"""

from typing import Any


class MathMdError(Exception):
    """Base exception class for all mathmd-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(MathMdError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an incorrect options class is provided.

    For example, passing ``HtmlRendererOptions`` to the markdown parser.

    Parameters
    ----------
    converter_name : str
        Name of the parser or renderer that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        converter_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{converter_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.converter_name = converter_name
        self.expected_type = expected_type
        self.received_type = received_type


class FileError(MathMdError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FileNotFoundError(FileError):
    """Exception raised when an input file cannot be found."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file not found error."""
        if message is None:
            message = f"File not found: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class FileAccessError(FileError):
    """Exception raised when an input file cannot be read or decoded."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file access error."""
        if message is None:
            message = f"Cannot access file: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class RenderingError(MathMdError):
    """Exception raised when output rendering fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class OutputWriteError(RenderingError):
    """Exception raised when writing the output file fails.

    Parameters
    ----------
    file_path : str
        Path to the output file that failed to write
    message : str, optional
        Custom error message. If not provided, uses default message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the output write error."""
        if message is None:
            message = f"Failed to write output file: {file_path}"
        super().__init__(message, rendering_stage="file_write", original_error=original_error)
        self.file_path = file_path
