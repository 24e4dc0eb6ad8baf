"""Logging setup for the findinfile diagnostics stream.

Diagnostics (skip notices, per-file match counts, read and access failures)
are emitted through :mod:`logging` to stderr. Search results never pass
through here; they are written to a result sink on stdout.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PLAIN_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(log_level: int | str, verbose: bool = False, trace: bool = False) -> int:
    """Resolve the effective level from --log-level, --verbose and --trace.

    ``--trace`` wins, then ``--verbose`` (only when the level was left at its
    WARNING default), then the explicit ``--log-level``.
    """
    if trace:
        return logging.DEBUG

    resolved = log_level if isinstance(log_level, int) else getattr(logging, str(log_level).upper(), logging.WARNING)
    if verbose and resolved == logging.WARNING:
        return logging.DEBUG
    return resolved


def _attach(root_logger: logging.Logger, handler: logging.Handler, level: int, formatter: logging.Formatter) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Route diagnostics to stderr and, optionally, to a log file.

    Any handlers already on the root logger are replaced.

    Parameters
    ----------
    log_level : int | str
        Level number or name such as ``"DEBUG"``; see :func:`resolve_log_level`
    log_file : str, optional
        File that receives a copy of every diagnostic, appended to
    trace_mode : bool, default False
        Prefix each line with a timestamp and the logger name

    Returns
    -------
    logging.Logger
        The root logger

    """
    level = log_level if isinstance(log_level, int) else getattr(logging, str(log_level).upper(), logging.INFO)
    formatter = (
        logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT) if trace_mode else logging.Formatter(PLAIN_FORMAT)
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    _attach(root_logger, logging.StreamHandler(sys.stderr), level, formatter)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            _attach(root_logger, file_handler, level, formatter)
            root_logger.info("Logging to file: %s", log_file)

    return root_logger
