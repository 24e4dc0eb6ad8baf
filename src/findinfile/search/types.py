"""Shared data structures for the search engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from findinfile.exceptions import DirectoryAccessError, FileReadError

if TYPE_CHECKING:
    from rich.text import Text


@dataclass(frozen=True)
class MatchRecord:
    """First occurrence of the search string on one line of a file."""

    file_path: str
    line_number: int
    line_content: str
    match_index: int

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-serializable mapping."""
        return {
            "file_path": self.file_path,
            "line_number": self.line_number,
            "line_content": self.line_content,
            "match_index": self.match_index,
        }


class FileStatus(str, Enum):
    """What happened to a file the walker discovered."""

    SCANNED = "scanned"
    SKIPPED_EXTENSION = "skipped_extension"
    SKIPPED_BINARY = "skipped_binary"
    FAILED = "failed"


@dataclass(frozen=True)
class FileOutcome:
    """Result of considering a single file."""

    path: str
    status: FileStatus
    matches: tuple[MatchRecord, ...] = ()
    error: FileReadError | None = None

    @property
    def ok(self) -> bool:
        return self.status is not FileStatus.FAILED


@dataclass(frozen=True)
class DirectoryOutcome:
    """Result of walking one configured root directory.

    A directory outcome can carry several errors: one for the root itself
    when it vanished, or one per nested subtree that could not be listed.
    """

    directory: str
    files_considered: int = 0
    errors: tuple[DirectoryAccessError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass
class SearchReport:
    """Everything the walker produced for one search.

    The walker owns the report while traversing and hands it to the caller
    when done. ``total_files`` counts every discovered file, including those
    later skipped by the extension or binary filters.
    """

    matches: list[MatchRecord] = field(default_factory=list)
    total_files: int = 0
    file_outcomes: list[FileOutcome] = field(default_factory=list)
    directory_outcomes: list[DirectoryOutcome] = field(default_factory=list)

    def add_file_outcome(self, outcome: FileOutcome) -> None:
        self.total_files += 1
        self.file_outcomes.append(outcome)
        self.matches.extend(outcome.matches)

    def add_directory_outcome(self, outcome: DirectoryOutcome) -> None:
        self.directory_outcomes.append(outcome)

    @property
    def file_errors(self) -> list[FileReadError]:
        return [outcome.error for outcome in self.file_outcomes if outcome.error is not None]

    @property
    def directory_errors(self) -> list[DirectoryAccessError]:
        return [error for outcome in self.directory_outcomes for error in outcome.errors]

    @property
    def files_scanned(self) -> int:
        return sum(1 for outcome in self.file_outcomes if outcome.status is FileStatus.SCANNED)

    @property
    def matched_files(self) -> list[str]:
        """Distinct file paths with at least one match, in first-seen order."""
        return list(dict.fromkeys(record.file_path for record in self.matches))


@dataclass(frozen=True)
class ResultRow:
    """One rendered row: file label, line number and highlighted content."""

    file_label: str
    line_number: int
    content: Text
    record: MatchRecord


@dataclass(frozen=True)
class FileGroup:
    """Matches of one file, ordered by line number, with its display path."""

    file_path: str
    display_path: str
    records: tuple[MatchRecord, ...]


@dataclass(frozen=True)
class SearchSummary:
    """Numbers shown in the summary line above the result rows."""

    search_string: str
    match_count: int
    file_count: int
    total_files: int
    unreadable_files: int = 0
    inaccessible_directories: int = 0

    @property
    def has_matches(self) -> bool:
        return self.match_count > 0
