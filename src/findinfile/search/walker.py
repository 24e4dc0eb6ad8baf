#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Recursive directory traversal and per-file dispatch.

:func:`walk` visits every configured root directory in order, applies the
extension and binary filters to each discovered file, scans the admitted
files and returns a :class:`~findinfile.search.types.SearchReport`.

Failures never abort the walk. A directory that cannot be listed becomes a
:class:`~findinfile.exceptions.DirectoryAccessError` on its
:class:`~findinfile.search.types.DirectoryOutcome`; a file that cannot be read
becomes a failed :class:`~findinfile.search.types.FileOutcome`. Both are
logged as warnings.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Iterator, Sequence

from findinfile.exceptions import DirectoryAccessError, FileReadError
from findinfile.options import SearchOptions
from findinfile.progress import ProgressCallback, ProgressEvent, emit_progress
from findinfile.search.binary import is_binary
from findinfile.search.scanner import scan_file
from findinfile.search.types import DirectoryOutcome, FileOutcome, FileStatus, SearchReport

logger = logging.getLogger(__name__)


def iter_files(directory: str, onerror: Callable[[OSError], None] | None = None) -> Iterator[str]:
    """Yield every file below ``directory``, depth first, in sorted name order.

    Paths are built by joining ``directory`` with the relative location, so a
    relative root yields relative paths. Symlinked directories are listed but
    not descended into.
    """
    for root, dirnames, filenames in os.walk(directory, onerror=onerror):
        dirnames.sort()
        for name in sorted(filenames):
            yield os.path.join(root, name)


def consider_file(path: str, options: SearchOptions) -> FileOutcome:
    """Filter and scan a single discovered file."""
    if not options.extension_allowed(path):
        logger.debug("Skipping %s (extension filter)", path)
        return FileOutcome(path=path, status=FileStatus.SKIPPED_EXTENSION)

    if os.path.exists(path) and not os.path.isfile(path):
        error = FileReadError(path, message=f"Error reading file {path}: not a regular file")
        logger.warning("%s", error.message)
        return FileOutcome(path=path, status=FileStatus.FAILED, error=error)

    if options.exclude_binary and is_binary(path):
        logger.debug("Skipping %s (binary file)", path)
        return FileOutcome(path=path, status=FileStatus.SKIPPED_BINARY)

    try:
        matches = scan_file(path, options)
    except FileReadError as exc:
        logger.warning("%s", exc.message)
        return FileOutcome(path=path, status=FileStatus.FAILED, error=exc)

    if matches:
        logger.debug("Found %d match(es) in %s", len(matches), path)
    return FileOutcome(path=path, status=FileStatus.SCANNED, matches=tuple(matches))


def _file_event(outcome: FileOutcome, current: int) -> ProgressEvent:
    if outcome.error is not None:
        return ProgressEvent(
            "error",
            outcome.error.message,
            current=current,
            metadata={"error": str(outcome.error.original_error or outcome.error), "stage": "scan", "path": outcome.path},
        )
    return ProgressEvent(
        "item_done",
        f"Searching: {os.path.basename(outcome.path)}",
        current=current,
        metadata={"item_type": "file", "status": outcome.status.value, "path": outcome.path},
    )


def _consider_files(
    paths: Sequence[str],
    options: SearchOptions,
    progress_callback: ProgressCallback | None,
    considered_before: int,
) -> list[FileOutcome]:
    """Consider ``paths`` and return their outcomes in the order given."""
    if options.jobs <= 1 or len(paths) <= 1:
        outcomes: list[FileOutcome] = []
        for path in paths:
            outcome = consider_file(path, options)
            outcomes.append(outcome)
            emit_progress(progress_callback, _file_event(outcome, considered_before + len(outcomes)))
        return outcomes

    results: list[FileOutcome | None] = [None] * len(paths)
    with ThreadPoolExecutor(max_workers=options.jobs) as executor:
        futures = {executor.submit(consider_file, path, options): index for index, path in enumerate(paths)}
        done = 0
        for future in as_completed(futures):
            outcome = future.result()
            results[futures[future]] = outcome
            done += 1
            emit_progress(progress_callback, _file_event(outcome, considered_before + done))
    return [outcome for outcome in results if outcome is not None]


def walk_directory(
    directory: str,
    options: SearchOptions,
    progress_callback: ProgressCallback | None = None,
    considered_before: int = 0,
) -> tuple[DirectoryOutcome, list[FileOutcome]]:
    """Walk one root directory.

    Parameters
    ----------
    directory : str
        Root to enumerate recursively
    options : SearchOptions
        Filters and scanner settings
    progress_callback : ProgressCallback, optional
        Receives one event per considered file
    considered_before : int, default 0
        Files considered in earlier roots, used for progress numbering

    Returns
    -------
    tuple[DirectoryOutcome, list[FileOutcome]]
        The directory outcome and the outcome of every discovered file

    """
    errors: list[DirectoryAccessError] = []

    def on_error(exc: OSError) -> None:
        failed = exc.filename if exc.filename is not None else directory
        error = DirectoryAccessError(os.fspath(failed), original_error=exc)
        errors.append(error)
        logger.warning("%s", error.message)
        emit_progress(
            progress_callback,
            ProgressEvent("error", error.message, metadata={"error": str(exc), "stage": "walk", "path": error.directory}),
        )

    paths = list(iter_files(directory, onerror=on_error))
    logger.debug("Found %d files in %s", len(paths), directory)

    outcomes = _consider_files(paths, options, progress_callback, considered_before)
    return DirectoryOutcome(directory=directory, files_considered=len(paths), errors=tuple(errors)), outcomes


def walk(options: SearchOptions, progress_callback: ProgressCallback | None = None) -> SearchReport:
    """Search every configured directory and collect the results.

    Parameters
    ----------
    options : SearchOptions
        Validated search configuration
    progress_callback : ProgressCallback, optional
        Best-effort progress side channel

    Returns
    -------
    SearchReport
        Matches, the number of files considered and every per-file and
        per-directory outcome

    """
    report = SearchReport()

    for directory in options.directories:
        emit_progress(
            progress_callback,
            ProgressEvent(
                "started",
                f"Searching directory: {directory}",
                current=report.total_files,
                metadata={"directory": directory},
            ),
        )
        directory_outcome, file_outcomes = walk_directory(directory, options, progress_callback, report.total_files)
        report.add_directory_outcome(directory_outcome)
        for outcome in file_outcomes:
            report.add_file_outcome(outcome)

    emit_progress(
        progress_callback,
        ProgressEvent(
            "finished",
            f"Searched {report.total_files} files",
            current=report.total_files,
            total=report.total_files,
            metadata={"matches": len(report.matches)},
        ),
    )
    return report


__all__ = ["consider_file", "iter_files", "walk", "walk_directory"]
