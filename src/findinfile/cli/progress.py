#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Status spinner shown on stderr while a search runs."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape

from findinfile.progress import ProgressEvent


class StatusProgress:
    """Spinner with a one-line status message, driven by progress events.

    The spinner writes to its own stderr console so it never mixes with the
    result rows on stdout. When disabled the context does nothing.

    Parameters
    ----------
    enabled : bool
        Whether to show the spinner at all
    description : str
        Initial status text
    console : rich.console.Console, optional
        Console to draw on, stderr by default

    Examples
    --------
    >>> with StatusProgress(enabled=True, description="Searching files...") as progress:
    ...     report = walk(options, progress_callback=progress.callback)

    """

    def __init__(self, enabled: bool, description: str = "Searching files...", console: Console | None = None):
        """Initialize the status context."""
        self.enabled = enabled
        self.description = description
        self._console = console
        self._status: Any = None
        self.files_seen = 0

    def __enter__(self) -> StatusProgress:
        """Start the spinner when enabled."""
        if self.enabled:
            console = self._console or Console(stderr=True)
            self._status = console.status(escape(self.description))
            self._status.__enter__()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Stop the spinner."""
        if self._status is not None:
            self._status.__exit__(exc_type, exc_val, exc_tb)
            self._status = None

    def update(self, message: str) -> None:
        """Replace the status text."""
        if self._status is not None:
            self._status.update(escape(message))

    def callback(self, event: ProgressEvent) -> None:
        """Progress callback that mirrors walker events into the status line."""
        if event.event_type == "started":
            self.update(event.message)
        elif event.event_type in ("item_done", "error"):
            self.files_seen = max(self.files_seen, event.current)
            if event.metadata.get("stage") != "walk":
                self.update(f"{event.message} ({self.files_seen} files)")
        elif event.event_type == "finished":
            self.files_seen = event.current
            self.update(event.message)


__all__ = ["StatusProgress"]
