#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the findinfile package.

This module defines the error taxonomy used by the search engine and the
command-line interface. Only configuration problems are fatal; every error
raised while walking or scanning is recovered per file or per directory and
recorded on the search report.

Exception Hierarchy
-------------------
- FindInFileError (base exception)

  - ValidationError (a search parameter is unusable)
    - ConfigurationError (invalid search configuration, fatal)

  - FileError (file and directory access)
    - FileReadError (file cannot be read as text, recovered)
    - BinaryProbeError (binary prefix cannot be read, fail-open)
    - DirectoryAccessError (directory cannot be enumerated, recovered)

"""

from typing import Any


class FindInFileError(Exception):
    """Root of every error raised by findinfile.

    Parameters
    ----------
    message : str
        Text shown to the user, usually through the diagnostics log
    original_error : Exception, optional
        Lower-level exception (an ``OSError``, a decode error) being wrapped

    Attributes
    ----------
    message : str
        Same as ``str(error)``
    original_error : Exception or None
        The wrapped exception

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(FindInFileError):
    """A search parameter has a value the search cannot run with.

    Parameters
    ----------
    message : str
        What is wrong with the parameter
    parameter_name : str, optional
        Field name, e.g. ``"search_string"`` or ``"directories"``
    parameter_value : any, optional
        Offending value
    original_error : Exception, optional
        Exception that exposed the problem, if any

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class ConfigurationError(ValidationError):
    """Exception raised when the search configuration is unusable.

    Covers an empty search string, an empty directory list and directories
    that do not exist at validation time. Raised before any traversal.
    """


class FileError(FindInFileError):
    """Something on disk could not be accessed.

    Parameters
    ----------
    message : str
        Description including the path and the cause
    file_path : str, optional
        File or directory involved
    original_error : Exception, optional
        Underlying ``OSError`` or decode error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


def _with_cause(prefix: str, original_error: Exception | None) -> str:
    return f"{prefix}: {original_error}" if original_error is not None else prefix


class FileReadError(FileError):
    """Exception raised when a file cannot be opened or decoded as text."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        super().__init__(
            message or _with_cause(f"Error reading file {file_path}", original_error),
            file_path=file_path,
            original_error=original_error,
        )


class BinaryProbeError(FileError):
    """Exception raised when the binary detection prefix cannot be read."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        super().__init__(
            message or f"Cannot probe file for binary content: {file_path}",
            file_path=file_path,
            original_error=original_error,
        )


class DirectoryAccessError(FileError):
    """Exception raised when a directory cannot be enumerated.

    Parameters
    ----------
    directory : str
        Directory that could not be listed
    message : str, optional
        Overrides the message built from ``directory`` and the cause
    original_error : Exception, optional
        The ``OSError`` reported by the directory walk

    """

    def __init__(self, directory: str, message: str | None = None, original_error: Exception | None = None):
        super().__init__(
            message or _with_cause(f"Error accessing directory {directory}", original_error),
            file_path=directory,
            original_error=original_error,
        )

    @property
    def directory(self) -> str | None:
        """Return the directory that failed."""
        return self.file_path


__all__ = [
    "FindInFileError",
    "ValidationError",
    "ConfigurationError",
    "FileError",
    "FileReadError",
    "BinaryProbeError",
    "DirectoryAccessError",
]
