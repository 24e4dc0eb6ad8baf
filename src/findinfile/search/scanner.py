"""Line-oriented literal substring scanning of a single file."""

from __future__ import annotations

import io
import logging
import os
from typing import Iterator

from findinfile.exceptions import FileReadError
from findinfile.options import SearchOptions
from findinfile.search.types import MatchRecord
from findinfile.utils.encoding import read_text_with_encoding_detection

logger = logging.getLogger(__name__)


def find_first_match(line: str, query: str, ignore_case: bool = False) -> int:
    """Return the offset of the first occurrence of ``query`` in ``line``, or -1.

    The offset always indexes into ``line`` itself, also when lower-casing
    changes the length of some characters.
    """
    if not ignore_case:
        return line.find(query)

    folded_line = line.lower()
    folded_query = query.lower()
    if len(folded_line) == len(line):
        return folded_line.find(folded_query)

    width = len(query)
    for start in range(len(line) - width + 1):
        if line[start : start + width].lower() == folded_query:
            return start
    return -1


def iter_lines(text: str) -> Iterator[str]:
    """Yield the lines of ``text`` split on ``\\n``, ``\\r\\n`` or ``\\r``, without terminators."""
    for line in io.StringIO(text, newline=None):
        yield line[:-1] if line.endswith("\n") else line


def read_text(path: str, options: SearchOptions) -> str:
    """Read ``path`` and decode it according to the encoding options.

    Raises
    ------
    FileReadError
        If the file cannot be opened or decoded

    """
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise FileReadError(path, original_error=exc) from exc

    try:
        return read_text_with_encoding_detection(
            data,
            use_chardet=options.detect_encoding,
            encoding=options.encoding,
        )
    except (UnicodeDecodeError, LookupError) as exc:
        raise FileReadError(path, original_error=exc) from exc


def scan_file(path: str | os.PathLike[str], options: SearchOptions) -> list[MatchRecord]:
    """Find the first match of the search string on every line of a file.

    Parameters
    ----------
    path : str or PathLike
        File to scan; recorded on each match exactly as given
    options : SearchOptions
        Supplies the search string, case sensitivity and encoding settings

    Returns
    -------
    list[MatchRecord]
        One record per matching line, in line order

    Raises
    ------
    FileReadError
        If the file cannot be read as text

    """
    file_path = os.fspath(path)
    text = read_text(file_path, options)

    matches: list[MatchRecord] = []
    for line_number, line in enumerate(iter_lines(text), start=1):
        index = find_first_match(line, options.search_string, options.ignore_case)
        if index >= 0:
            matches.append(
                MatchRecord(file_path=file_path, line_number=line_number, line_content=line, match_index=index)
            )
    return matches
