"""Binary file detection.

A file is treated as binary when a NUL byte appears in its first
:data:`~findinfile.constants.BINARY_PROBE_SIZE` bytes. This is a heuristic:
binary files without an early NUL byte are reported as text.
"""

from __future__ import annotations

import logging
import os

from findinfile.constants import BINARY_PROBE_SIZE
from findinfile.exceptions import BinaryProbeError

logger = logging.getLogger(__name__)


def read_probe(path: str | os.PathLike[str], size: int = BINARY_PROBE_SIZE) -> bytes:
    """Read up to ``size`` bytes from the start of ``path``.

    Raises
    ------
    BinaryProbeError
        If the file cannot be opened or read

    """
    try:
        with open(path, "rb") as handle:
            return handle.read(size)
    except OSError as exc:
        raise BinaryProbeError(os.fspath(path), original_error=exc) from exc


def is_binary(path: str | os.PathLike[str], size: int = BINARY_PROBE_SIZE) -> bool:
    """Return True if the first ``size`` bytes of ``path`` contain a NUL byte.

    Unreadable files are reported as not binary so that they reach the
    scanner, where the read failure is surfaced as a per-file error.
    """
    try:
        probe = read_probe(path, size)
    except BinaryProbeError as exc:
        logger.debug("%s; treating as text", exc.message)
        return False
    return b"\x00" in probe
