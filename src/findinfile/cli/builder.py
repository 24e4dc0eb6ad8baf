#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Argument parser and exit codes for the findinfile CLI."""

from __future__ import annotations

import argparse

from findinfile import __version__
from findinfile.constants import OUTPUT_FORMATS
from findinfile.exceptions import ValidationError

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3

EPILOG = """\
examples:
  findinfile --string TODO --directory /projects,/source --full-path
  findinfile -s print -d .,../other_project
  findinfile -s error -d . -e log,txt -i -v
"""


def create_parser() -> argparse.ArgumentParser:
    """Build the command-line parser.

    Optional flags default to None so that values from a config file can fill
    in whatever was not given on the command line.
    """
    parser = argparse.ArgumentParser(
        prog="findinfile",
        description="Recursively search files for a literal string and show matches grouped by file.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("-s", "--string", dest="search_string", help="The string to search for in files")
    parser.add_argument(
        "-d",
        "--directory",
        dest="directory",
        help="The directory or directories to search in (searches recursively). "
        "Use comma-separated values for multiple directories.",
    )
    parser.add_argument(
        "-e",
        "--extensions",
        dest="extensions",
        help="File extensions to search (comma-separated, e.g. '.py,.txt,json'). If not given, searches all files.",
    )
    parser.add_argument(
        "-i",
        "--ignore-case",
        dest="ignore_case",
        action="store_true",
        default=None,
        help="Perform case-insensitive search",
    )
    parser.add_argument(
        "--exclude-binary",
        dest="exclude_binary",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Skip binary files (a NUL byte in the first 1024 bytes). Enabled by default",
    )
    parser.add_argument(
        "--full-path",
        dest="full_path",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Display full file paths instead of relative paths "
        "(automatically enabled when multiple directories are given)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        action="store_true",
        default=None,
        help="Enable verbose output with per-file diagnostics",
    )
    parser.add_argument("-j", "--jobs", dest="jobs", type=int, help="Number of worker threads used to scan files")
    parser.add_argument("--encoding", dest="encoding", help="Decode every file with this encoding")
    parser.add_argument(
        "--detect-encoding",
        dest="detect_encoding",
        action="store_true",
        default=None,
        help="Guess each file's encoding with chardet before trying the fallbacks",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        help="Result output format (default: table)",
    )
    parser.add_argument("--config", help="Configuration file providing defaults for the optional flags")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for diagnostics on stderr",
    )
    parser.add_argument("--log-file", help="Also write diagnostics to this file")
    parser.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (ValidationError, argparse.ArgumentTypeError)):
        return EXIT_VALIDATION_ERROR

    return EXIT_ERROR
