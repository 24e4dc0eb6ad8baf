#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Search configuration for findinfile.

:class:`SearchOptions` is the immutable value object every component reads.
The command-line layer builds it through :func:`build_search_options`, which
also normalizes the comma-separated list arguments and checks that every
configured directory exists.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any, Iterable, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from findinfile.constants import (
    DEFAULT_EXCLUDE_BINARY,
    DEFAULT_FULL_PATH,
    DEFAULT_IGNORE_CASE,
    DEFAULT_JOBS,
    DEFAULT_VERBOSE,
    LIST_SEPARATOR,
)
from findinfile.exceptions import ConfigurationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


def parse_directories(value: str | Iterable[str] | None) -> list[str]:
    """Split a comma-separated directory argument.

    Entries are trimmed and empty entries dropped; order is preserved.

    Examples
    --------
    >>> parse_directories(" ./src , ,../other")
    ['./src', '../other']

    """
    if value is None:
        return []
    raw_items = value.split(LIST_SEPARATOR) if isinstance(value, str) else list(value)
    return [item.strip() for item in raw_items if item and item.strip()]


def parse_extensions(value: str | Iterable[str] | None) -> frozenset[str] | None:
    """Normalize an extension filter.

    Each entry is trimmed, prefixed with a dot when missing and lower-cased so
    membership tests are case-insensitive. Returns None when no extension is
    given, which means "all files".

    Examples
    --------
    >>> sorted(parse_extensions("txt, .LOG"))
    ['.log', '.txt']

    """
    if value is None:
        return None
    raw_items = value.split(LIST_SEPARATOR) if isinstance(value, str) else list(value)
    normalized = set()
    for item in raw_items:
        ext = item.strip() if item else ""
        if not ext:
            continue
        if not ext.startswith("."):
            ext = f".{ext}"
        normalized.add(ext.lower())
    return frozenset(normalized) or None


@dataclass(frozen=True)
class SearchOptions(CloneFrozenMixin):
    """Validated search parameters shared by the walker, scanner and presenter."""

    search_string: str = field(
        metadata={"help": "The string to search for in files", "importance": "core"},
    )
    directories: tuple[str, ...] = field(
        metadata={"help": "Directories to search recursively, in order", "importance": "core"},
    )
    extensions: frozenset[str] | None = field(
        default=None,
        metadata={"help": "File extensions to search; None searches all files", "importance": "core"},
    )
    ignore_case: bool = field(
        default=DEFAULT_IGNORE_CASE,
        metadata={"help": "Perform case-insensitive search", "importance": "core"},
    )
    exclude_binary: bool = field(
        default=DEFAULT_EXCLUDE_BINARY,
        metadata={"help": "Skip files whose first 1024 bytes contain a NUL byte", "importance": "core"},
    )
    full_path: bool = field(
        default=DEFAULT_FULL_PATH,
        metadata={"help": "Display full file paths instead of relative paths", "importance": "core"},
    )
    verbose: bool = field(
        default=DEFAULT_VERBOSE,
        metadata={"help": "Emit per-file diagnostics", "importance": "core"},
    )
    jobs: int = field(
        default=DEFAULT_JOBS,
        metadata={"help": "Number of worker threads used to scan files", "type": int, "importance": "advanced"},
    )
    encoding: str | None = field(
        default=None,
        metadata={"help": "Decode every file with this encoding instead of the fallback chain", "importance": "advanced"},
    )
    detect_encoding: bool = field(
        default=False,
        metadata={"help": "Use chardet to guess each file's encoding before the fallbacks", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Normalize collection fields and validate required values."""
        if isinstance(self.directories, str):
            object.__setattr__(self, "directories", tuple(parse_directories(self.directories)))
        elif not isinstance(self.directories, tuple):
            object.__setattr__(self, "directories", tuple(self.directories))
        if self.extensions is not None and not isinstance(self.extensions, frozenset):
            object.__setattr__(self, "extensions", parse_extensions(self.extensions))

        if not self.search_string or not self.search_string.strip():
            raise ConfigurationError(
                "Search string cannot be empty", parameter_name="search_string", parameter_value=self.search_string
            )
        if not self.directories:
            raise ConfigurationError(
                "Directory cannot be empty", parameter_name="directories", parameter_value=self.directories
            )
        if self.jobs < 1:
            raise ConfigurationError("jobs must be at least 1", parameter_name="jobs", parameter_value=self.jobs)

    @property
    def show_full_path(self) -> bool:
        """Whether raw paths are displayed.

        Forced on when more than one directory is configured, since relative
        paths would be ambiguous between roots.
        """
        return self.full_path or len(self.directories) > 1

    def extension_allowed(self, path: str) -> bool:
        """Return True when ``path`` passes the extension filter."""
        if self.extensions is None:
            return True
        return os.path.splitext(path)[1].lower() in self.extensions


def missing_directories(directories: Iterable[str]) -> list[str]:
    """Return the configured directories that do not exist."""
    return [directory for directory in directories if not os.path.isdir(directory)]


def build_search_options(
    search_string: str | None,
    directories: str | Iterable[str] | None,
    extensions: str | Iterable[str] | None = None,
    **flags: Any,
) -> SearchOptions:
    """Build and fully validate a :class:`SearchOptions`.

    Parameters
    ----------
    search_string : str or None
        Literal text to look for; must not be empty or whitespace
    directories : str or iterable of str
        Comma-separated string or sequence of directories
    extensions : str or iterable of str, optional
        Comma-separated string or sequence of extensions
    **flags
        Remaining :class:`SearchOptions` fields (``ignore_case``, ``jobs``, ...)

    Returns
    -------
    SearchOptions
        Options whose directories all exist at the time of the call

    Raises
    ------
    ConfigurationError
        If a required value is empty or a directory does not exist

    """
    if search_string is None or not search_string.strip():
        raise ConfigurationError(
            "Search string cannot be empty", parameter_name="search_string", parameter_value=search_string
        )

    parsed_directories = parse_directories(directories)
    if not parsed_directories:
        raise ConfigurationError("Directory cannot be empty", parameter_name="directories", parameter_value=directories)

    missing = missing_directories(parsed_directories)
    if missing:
        raise ConfigurationError(
            f"Directory '{missing[0]}' does not exist", parameter_name="directories", parameter_value=missing[0]
        )

    return SearchOptions(
        search_string=search_string,
        directories=tuple(parsed_directories),
        extensions=parse_extensions(extensions),
        **flags,
    )


def options_from_mapping(values: Mapping[str, Any]) -> dict[str, Any]:
    """Keep only the keys of ``values`` that are SearchOptions fields."""
    valid_fields = {option_field.name for option_field in fields(SearchOptions)}
    return {key: value for key, value in values.items() if key in valid_fields}


__all__ = [
    "SearchOptions",
    "build_search_options",
    "missing_directories",
    "options_from_mapping",
    "parse_directories",
    "parse_extensions",
]
