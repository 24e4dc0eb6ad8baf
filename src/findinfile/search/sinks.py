"""Result sinks: where the summary and result rows are written.

Sinks only ever receive results. Diagnostics go through :mod:`logging`, so
the two streams can be redirected independently.
"""

from __future__ import annotations

import json
import sys
from typing import IO, Any, Protocol, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from findinfile.options import SearchOptions
from findinfile.search.types import ResultRow, SearchSummary


def summary_message(summary: SearchSummary) -> str:
    """Return the plain summary sentence for ``summary``."""
    if not summary.has_matches:
        return f"No matches found for '{summary.search_string}' in {summary.total_files} files."
    return (
        f"Found {summary.match_count} matches in {summary.file_count} files "
        f"(searched {summary.total_files} total files)"
    )


def problems_message(summary: SearchSummary) -> str | None:
    """Return a note about unreadable files and directories, if any."""
    parts = []
    if summary.unreadable_files:
        parts.append(f"{summary.unreadable_files} file(s) could not be read")
    if summary.inaccessible_directories:
        parts.append(f"{summary.inaccessible_directories} director(ies) could not be accessed")
    return "; ".join(parts) if parts else None


class ResultSink(Protocol):
    """Destination for search results."""

    def write_header(self, options: SearchOptions) -> None: ...

    def write_summary(self, summary: SearchSummary) -> None: ...

    def write_rows(self, rows: Sequence[ResultRow]) -> None: ...

    def finish(self) -> None: ...


class RichTableSink:
    """Render results as a rich table with highlighted matches."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def write_header(self, options: SearchOptions) -> None:
        self.console.print(f"[green]Searching for:[/] [yellow]{escape(options.search_string)}[/]")
        self.console.print(f"[green]Directories:[/] [blue]{escape(', '.join(options.directories))}[/]")
        self.console.print(f"[green]Case sensitive:[/] {'[red]No[/]' if options.ignore_case else '[green]Yes[/]'}")
        if options.verbose:
            self.console.print("[green]Verbose mode:[/] [cyan]Enabled[/]")
        if options.extensions:
            self.console.print(f"[green]Extensions:[/] [cyan]{escape(', '.join(sorted(options.extensions)))}[/]")
        self.console.print()

    def write_summary(self, summary: SearchSummary) -> None:
        style = "green" if summary.has_matches else "yellow"
        self.console.print(Text(summary_message(summary), style=style))
        note = problems_message(summary)
        if note:
            self.console.print(Text(note, style="red"))
        if summary.has_matches:
            self.console.print()

    def write_rows(self, rows: Sequence[ResultRow]) -> None:
        table = Table()
        table.add_column("File")
        table.add_column("Line")
        table.add_column("Content")
        for row in rows:
            table.add_row(Text(row.file_label, style="blue"), Text(str(row.line_number), style="dim"), row.content)
        self.console.print(table)

    def finish(self) -> None:
        pass


class PlainTextSink:
    """Render results as grouped plain text, one ``line: content`` per match."""

    def __init__(self, stream: IO[str] | None = None):
        self.stream = stream or sys.stdout

    def _print(self, text: str = "") -> None:
        print(text, file=self.stream)

    def write_header(self, options: SearchOptions) -> None:
        self._print(f"Searching for: {options.search_string}")
        self._print(f"Directories: {', '.join(options.directories)}")
        self._print()

    def write_summary(self, summary: SearchSummary) -> None:
        self._print(summary_message(summary))
        note = problems_message(summary)
        if note:
            self._print(note)

    def write_rows(self, rows: Sequence[ResultRow]) -> None:
        for row in rows:
            if row.file_label:
                self._print()
                self._print(row.file_label)
            self._print(f"  {row.line_number}: {row.content.plain}")

    def finish(self) -> None:
        self.stream.flush()


class JsonSink:
    """Collect the summary and rows and write them as one JSON document."""

    def __init__(self, stream: IO[str] | None = None):
        self.stream = stream or sys.stdout
        self._payload: dict[str, Any] = {"summary": None, "results": []}

    def write_header(self, options: SearchOptions) -> None:
        self._payload["search_string"] = options.search_string
        self._payload["directories"] = list(options.directories)

    def write_summary(self, summary: SearchSummary) -> None:
        self._payload["summary"] = {
            "matches": summary.match_count,
            "files": summary.file_count,
            "total_files": summary.total_files,
            "unreadable_files": summary.unreadable_files,
            "inaccessible_directories": summary.inaccessible_directories,
        }

    def write_rows(self, rows: Sequence[ResultRow]) -> None:
        display_path = ""
        for row in rows:
            if row.file_label:
                display_path = row.file_label
            entry = row.record.to_dict()
            entry["display_path"] = display_path
            self._payload["results"].append(entry)

    def finish(self) -> None:
        json.dump(self._payload, self.stream, indent=2, ensure_ascii=False)
        self.stream.write("\n")
        self.stream.flush()


def create_sink(output_format: str, console: Console | None = None, stream: IO[str] | None = None) -> ResultSink:
    """Return the sink for ``output_format`` ("table", "plain" or "json")."""
    if output_format == "table":
        return RichTableSink(console=console)
    if output_format == "plain":
        return PlainTextSink(stream=stream)
    if output_format == "json":
        return JsonSink(stream=stream)
    raise ValueError(f"Unknown output format: {output_format}")


__all__ = [
    "JsonSink",
    "PlainTextSink",
    "ResultSink",
    "RichTableSink",
    "create_sink",
    "problems_message",
    "summary_message",
]
