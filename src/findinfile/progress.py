#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/findinfile/progress.py
"""Progress callback system for directory searches.

The directory walker reports what it is doing through an optional callback so
that a front end can show a spinner or status line. Progress is a side
channel: callbacks never influence the search result, and an exception raised
by a callback is logged and ignored.

Examples
--------
    >>> from findinfile import find_in_files
    >>> from findinfile.progress import ProgressEvent
    >>>
    >>> def show(event: ProgressEvent) -> None:
    ...     print(event)
    >>>
    >>> report = find_in_files("TODO", ["."], progress_callback=show)

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Literal

logger = logging.getLogger(__name__)

EventType = Literal["started", "item_done", "finished", "error"]


@dataclass
class ProgressEvent:
    """Progress event emitted by the directory walker.

    Parameters
    ----------
    event_type : EventType
        Type of progress event:

        - "started": a configured root directory is about to be walked.
          ``metadata["directory"]`` names it.
        - "item_done": a file was considered. ``metadata["item_type"]`` is
          ``"file"`` and ``metadata["status"]`` holds the outcome status.
        - "error": a file or directory failed. ``metadata["error"]`` holds the
          message and ``metadata["stage"]`` is ``"scan"`` or ``"walk"``.
        - "finished": all directories were walked. ``current`` is the number
          of files considered.

    message : str
        Human-readable description of the event
    current : int, default 0
        Files considered so far
    total : int, default 0
        Total items when known, 0 otherwise
    metadata : dict, default empty
        Additional event-specific information

    """

    event_type: EventType
    message: str
    current: int = 0
    total: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Return human-readable string representation."""
        progress = f"({self.current}/{self.total})" if self.total > 0 else ""
        return f"[{self.event_type.upper()}] {self.message} {progress}".strip()


ProgressCallback = Callable[[ProgressEvent], None]


def emit_progress(callback: ProgressCallback | None, event: ProgressEvent) -> None:
    """Deliver ``event`` to ``callback`` without letting it break the search."""
    if callback is None:
        return
    try:
        callback(event)
    except Exception as exc:
        logger.debug("Progress callback failed for %s: %s", event.event_type, exc)
