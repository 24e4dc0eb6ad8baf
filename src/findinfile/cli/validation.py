"""Argument checks run before any directory is walked.

Each check looks at the parsed namespace and yields
:class:`ValidationProblem` values. Errors stop the run with the validation
exit code; warnings are only logged.
"""

from __future__ import annotations

import argparse
import codecs
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Iterator, Optional

from findinfile.options import missing_directories, parse_directories


class ValidationSeverity(str, Enum):
    """How serious a validation problem is."""

    WARNING = "warning"
    ERROR = "error"


@dataclass(slots=True)
class ValidationProblem:
    """A single message produced by an argument check."""

    message: str
    severity: ValidationSeverity

    @property
    def is_error(self) -> bool:
        return self.severity is ValidationSeverity.ERROR

    def log(self, logger: logging.Logger) -> None:
        """Log the message at ERROR or WARNING according to severity."""
        level = logging.ERROR if self.is_error else logging.WARNING
        logger.log(level, self.message)


def _error(message: str) -> ValidationProblem:
    return ValidationProblem(message, ValidationSeverity.ERROR)


def _warning(message: str) -> ValidationProblem:
    return ValidationProblem(message, ValidationSeverity.WARNING)


def _check_search_string(parsed_args: argparse.Namespace) -> Iterator[ValidationProblem]:
    search_string = getattr(parsed_args, "search_string", None)
    if search_string is None or not search_string.strip():
        yield _error("Search string cannot be empty")


def _check_directories(parsed_args: argparse.Namespace) -> Iterator[ValidationProblem]:
    directories = parse_directories(getattr(parsed_args, "directory", None))
    if not directories:
        yield _error("Directory cannot be empty")
        return
    for directory in missing_directories(directories):
        yield _error(f"Directory '{directory}' does not exist")
    if len(directories) > 1 and getattr(parsed_args, "full_path", None) is False:
        yield _warning("--no-full-path is ignored when more than one directory is searched")


def _check_jobs(parsed_args: argparse.Namespace) -> Iterator[ValidationProblem]:
    jobs = getattr(parsed_args, "jobs", None)
    if jobs is not None and jobs < 1:
        yield _error("--jobs must be at least 1")


def _check_encoding(parsed_args: argparse.Namespace) -> Iterator[ValidationProblem]:
    encoding = getattr(parsed_args, "encoding", None)
    if not encoding:
        return
    try:
        codecs.lookup(encoding)
    except LookupError:
        yield _error(f"Unknown encoding: {encoding}")
    if getattr(parsed_args, "detect_encoding", None):
        yield _warning("--detect-encoding is ignored when --encoding is given")


ARGUMENT_CHECKS: tuple[Callable[[argparse.Namespace], Iterator[ValidationProblem]], ...] = (
    _check_search_string,
    _check_directories,
    _check_jobs,
    _check_encoding,
)


def collect_argument_problems(parsed_args: argparse.Namespace) -> list[ValidationProblem]:
    """Run every argument check and return the problems in check order.

    The only filesystem access is the existence test for each configured
    directory.
    """
    return [problem for check in ARGUMENT_CHECKS for problem in check(parsed_args)]


def report_validation_problems(
    problems: Iterable[ValidationProblem],
    *,
    logger: Optional[logging.Logger] = None,
) -> bool:
    """Log ``problems`` and return True if any of them is an error."""
    target = logger or logging.getLogger(__name__)
    found_error = False
    for problem in problems:
        problem.log(target)
        found_error = found_error or problem.is_error
    return found_error


def validate_arguments(
    parsed_args: argparse.Namespace,
    *,
    logger: Optional[logging.Logger] = None,
) -> bool:
    """Check ``parsed_args`` and log the outcome; True means the run may proceed."""
    return not report_validation_problems(collect_argument_problems(parsed_args), logger=logger)
