"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/findinfile/cli/output.py
import sys
from typing import IO

from findinfile.search.sinks import ResultSink, create_sink


def stream_is_terminal(stream: IO[str] | None = None) -> bool:
    """Return True if ``stream`` (stderr by default) is attached to a TTY."""
    target = stream or sys.stderr
    isatty = getattr(target, "isatty", None)
    if not callable(isatty):
        return False
    try:
        return bool(isatty())
    except (OSError, ValueError):
        # closed or detached streams
        return False


def should_show_status(output_format: str, stream: IO[str] | None = None) -> bool:
    """Determine whether the search spinner should be drawn.

    The spinner is shown only for table output and only when stderr is a
    terminal, so redirected or machine-readable runs stay clean.
    """
    return output_format == "table" and stream_is_terminal(stream)


def build_result_sink(output_format: str) -> ResultSink:
    """Create the stdout sink for ``output_format``."""
    return create_sink(output_format, stream=sys.stdout)
