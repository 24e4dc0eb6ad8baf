#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Aggregation of match records into display rows.

Matches are grouped by file, groups are ordered by path, records within a
group by line number. Each group gets a display path, either the raw path or
a path relative to the most specific configured root, and each record becomes
a :class:`~findinfile.search.types.ResultRow` whose content carries the match
as a styled span.
"""

from __future__ import annotations

import os
from collections import defaultdict
from typing import TYPE_CHECKING, Iterable, Sequence

from rich.text import Text

from findinfile.options import SearchOptions
from findinfile.search.types import FileGroup, MatchRecord, ResultRow, SearchReport, SearchSummary

if TYPE_CHECKING:
    from findinfile.search.sinks import ResultSink

HIGHLIGHT_STYLE = "black on yellow"

_SEPARATORS = tuple(sep for sep in (os.sep, os.altsep, "/") if sep)


def group_matches(matches: Iterable[MatchRecord]) -> list[tuple[str, list[MatchRecord]]]:
    """Group records by file path.

    Groups are ordered by path (ordinal), records by line number.
    """
    grouped: dict[str, list[MatchRecord]] = defaultdict(list)
    for record in matches:
        grouped[record.file_path].append(record)
    return [
        (file_path, sorted(grouped[file_path], key=lambda record: record.line_number)) for file_path in sorted(grouped)
    ]


def _is_path_prefix(directory: str, file_path: str) -> bool:
    """Case-insensitive prefix test that only matches on a path boundary."""
    lowered_dir = directory.lower()
    lowered_path = file_path.lower()
    if not lowered_path.startswith(lowered_dir):
        return False
    if len(lowered_path) == len(lowered_dir) or lowered_dir.endswith(_SEPARATORS):
        return True
    return lowered_path[len(lowered_dir)] in _SEPARATORS


def choose_base_directory(file_path: str, directories: Sequence[str]) -> str | None:
    """Pick the configured directory to show ``file_path`` relative to.

    Among the directories that prefix ``file_path`` the longest one wins, so a
    root nested inside another root is preferred. Returns None when no
    directory matches.

    Examples
    --------
    >>> choose_base_directory("./proj/sub/file.txt", ["./proj", "./proj/sub"])
    './proj/sub'

    """
    candidates = [directory for directory in directories if _is_path_prefix(directory, file_path)]
    if not candidates:
        return None
    return max(candidates, key=len)


def resolve_display_path(file_path: str, options: SearchOptions) -> str:
    """Return the path shown for ``file_path``.

    The raw path is used when full paths are requested or more than one
    directory is configured; otherwise the path relative to the chosen base
    directory, falling back to the raw path.
    """
    if options.show_full_path:
        return file_path

    base = choose_base_directory(file_path, options.directories)
    if base is None:
        return file_path
    try:
        return os.path.relpath(file_path, base)
    except ValueError:
        # different drives on Windows
        return file_path


def highlight_match(content: str, match_index: int, length: int, style: str = HIGHLIGHT_STYLE) -> Text:
    """Return ``content`` as rich Text with ``length`` characters styled at ``match_index``.

    The content is never parsed as console markup, so brackets and other markup
    characters in the line render literally.
    """
    text = Text(content, no_wrap=False)
    if 0 <= match_index < len(content) and length > 0:
        text.stylize(style, match_index, min(len(content), match_index + length))
    return text


def build_groups(matches: Iterable[MatchRecord], options: SearchOptions) -> list[FileGroup]:
    return [
        FileGroup(file_path=file_path, display_path=resolve_display_path(file_path, options), records=tuple(records))
        for file_path, records in group_matches(matches)
    ]


def build_rows(groups: Iterable[FileGroup], options: SearchOptions) -> list[ResultRow]:
    """Flatten groups into rows, labelling only the first row of each file."""
    rows: list[ResultRow] = []
    length = len(options.search_string)
    for group in groups:
        for position, record in enumerate(group.records):
            rows.append(
                ResultRow(
                    file_label=group.display_path if position == 0 else "",
                    line_number=record.line_number,
                    content=highlight_match(record.line_content, record.match_index, length),
                    record=record,
                )
            )
    return rows


def summarize(report: SearchReport, options: SearchOptions) -> SearchSummary:
    return SearchSummary(
        search_string=options.search_string,
        match_count=len(report.matches),
        file_count=len(report.matched_files),
        total_files=report.total_files,
        unreadable_files=len(report.file_errors),
        inaccessible_directories=len(report.directory_errors),
    )


def present(report: SearchReport, options: SearchOptions, sink: ResultSink) -> SearchSummary:
    """Write the summary and, when there are matches, the result rows to ``sink``.

    Parameters
    ----------
    report : SearchReport
        Output of :func:`findinfile.search.walker.walk`
    options : SearchOptions
        Configuration used for the search
    sink : ResultSink
        Destination for the summary and rows

    Returns
    -------
    SearchSummary
        The summary that was written

    """
    summary = summarize(report, options)
    sink.write_summary(summary)
    if summary.has_matches:
        sink.write_rows(build_rows(build_groups(report.matches, options), options))
    sink.finish()
    return summary


__all__ = [
    "HIGHLIGHT_STYLE",
    "build_groups",
    "build_rows",
    "choose_base_directory",
    "group_matches",
    "highlight_match",
    "present",
    "resolve_display_path",
    "summarize",
]
