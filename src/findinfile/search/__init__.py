"""Search engine: traversal, binary probing, scanning and presentation."""

from __future__ import annotations

from findinfile.search.binary import is_binary
from findinfile.search.presenter import (
    build_groups,
    build_rows,
    choose_base_directory,
    highlight_match,
    present,
    resolve_display_path,
)
from findinfile.search.scanner import find_first_match, scan_file
from findinfile.search.sinks import JsonSink, PlainTextSink, ResultSink, RichTableSink, create_sink
from findinfile.search.types import (
    DirectoryOutcome,
    FileGroup,
    FileOutcome,
    FileStatus,
    MatchRecord,
    ResultRow,
    SearchReport,
    SearchSummary,
)
from findinfile.search.walker import walk

__all__ = [
    "DirectoryOutcome",
    "FileGroup",
    "FileOutcome",
    "FileStatus",
    "JsonSink",
    "MatchRecord",
    "PlainTextSink",
    "ResultRow",
    "ResultSink",
    "RichTableSink",
    "SearchReport",
    "SearchSummary",
    "build_groups",
    "build_rows",
    "choose_base_directory",
    "create_sink",
    "find_first_match",
    "highlight_match",
    "is_binary",
    "present",
    "resolve_display_path",
    "scan_file",
    "walk",
]
