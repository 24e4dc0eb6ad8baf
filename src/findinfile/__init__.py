"""findinfile - recursive literal text search across directory trees.

findinfile walks one or more directories, scans every qualifying file line by
line for a literal string and reports the matches grouped by file, with line
numbers and the match highlighted.

Key Features
------------
- Literal, optionally case-insensitive substring search
- Extension filter and NUL-byte based binary file exclusion
- Relative display paths resolved against the most specific root
- Per-file and per-directory failures recorded, never fatal
- Table, plain text and JSON output

Examples
--------
Search from Python:

    >>> from findinfile import find_in_files
    >>> report = find_in_files("TODO", ["./src"], extensions=".py")
    >>> for match in report.matches:
    ...     print(match.file_path, match.line_number)

Search from the command line::

    $ findinfile -s TODO -d ./src,./tests -e py,txt -i

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "findinfile requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from typing import Any, Iterable

from findinfile.exceptions import (
    BinaryProbeError,
    ConfigurationError,
    DirectoryAccessError,
    FileError,
    FileReadError,
    FindInFileError,
    ValidationError,
)
from findinfile.options import SearchOptions, build_search_options
from findinfile.progress import ProgressCallback, ProgressEvent
from findinfile.search import MatchRecord, SearchReport, present, walk


def find_in_files(
    search_string: str,
    directories: str | Iterable[str],
    extensions: str | Iterable[str] | None = None,
    *,
    progress_callback: ProgressCallback | None = None,
    **flags: Any,
) -> SearchReport:
    """Validate the configuration and run a search.

    Parameters
    ----------
    search_string : str
        Literal text to find
    directories : str or iterable of str
        Root directories, as a sequence or a comma-separated string
    extensions : str or iterable of str, optional
        Extension filter; None searches all files
    progress_callback : ProgressCallback, optional
        Receives progress events during the walk
    **flags
        Other :class:`SearchOptions` fields, e.g. ``ignore_case=True``

    Returns
    -------
    SearchReport
        Matches and per-file/per-directory outcomes

    Raises
    ------
    ConfigurationError
        If the configuration is invalid; no traversal happens in that case

    """
    options = build_search_options(search_string, directories, extensions, **flags)
    return walk(options, progress_callback=progress_callback)


__all__ = [
    "__version__",
    "find_in_files",
    "present",
    "walk",
    "MatchRecord",
    "ProgressCallback",
    "ProgressEvent",
    "SearchOptions",
    "SearchReport",
    "build_search_options",
    "BinaryProbeError",
    "ConfigurationError",
    "DirectoryAccessError",
    "FileError",
    "FileReadError",
    "FindInFileError",
    "ValidationError",
]
