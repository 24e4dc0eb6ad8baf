#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/findinfile/utils/encoding.py
"""Character encoding detection for scanned files.

The file scanner reads raw bytes and turns them into text here, trying an
optional chardet guess first and then a fixed chain of fallback encodings.
"""

from __future__ import annotations

import logging

import chardet

from findinfile.constants import (
    DEFAULT_CHARDET_CONFIDENCE,
    DEFAULT_CHARDET_SAMPLE_SIZE,
    DEFAULT_FALLBACK_ENCODINGS,
)

logger = logging.getLogger(__name__)


def detect_encoding(
    data: bytes,
    sample_size: int = DEFAULT_CHARDET_SAMPLE_SIZE,
    confidence_threshold: float = DEFAULT_CHARDET_CONFIDENCE,
) -> str | None:
    """Guess the encoding of a file's bytes with chardet.

    Parameters
    ----------
    data : bytes
        Raw file content
    sample_size : int, default 8192
        Only this many leading bytes are given to chardet
    confidence_threshold : float, default 0.7
        Guesses below this confidence are discarded

    Returns
    -------
    str | None
        Detected encoding name, or None when detection fails or the
        confidence is below the threshold

    """
    if not data:
        return None

    sample = data[:sample_size]
    result = chardet.detect(sample)

    encoding = result.get("encoding") if result else None
    if not encoding:
        logger.debug("chardet: No encoding detected")
        return None

    confidence = result.get("confidence") or 0.0
    logger.debug("chardet detected encoding: %s (confidence: %.2f)", encoding, confidence)
    if confidence < confidence_threshold:
        logger.debug("chardet confidence %.2f below threshold %s", confidence, confidence_threshold)
        return None
    return encoding


def read_text_with_encoding_detection(
    data: bytes,
    fallback_encodings: list[str] | None = None,
    use_chardet: bool = False,
    encoding: str | None = None,
) -> str:
    """Decode bytes as text.

    Strategies, in order:

    1. ``encoding`` when given (strict, no fallback)
    2. chardet-based detection when ``use_chardet`` is set
    3. ``fallback_encodings`` in order (default utf-8-sig, utf-8, latin-1)

    Parameters
    ----------
    data : bytes
        Raw file content
    fallback_encodings : list[str] | None, default None
        Encodings tried in order; the utf-8-sig, utf-8, latin-1 chain when None
    use_chardet : bool, default False
        Try the chardet guess before the fallbacks
    encoding : str | None, default None
        Forced encoding

    Returns
    -------
    str
        The decoded text

    Raises
    ------
    UnicodeDecodeError
        If a forced encoding cannot decode the data
    LookupError
        If a forced encoding is unknown

    Examples
    --------
    >>> read_text_with_encoding_detection("café".encode("latin-1"))
    'café'

    """
    if encoding is not None:
        return data.decode(encoding)

    if fallback_encodings is None:
        fallback_encodings = DEFAULT_FALLBACK_ENCODINGS

    if use_chardet:
        detected_encoding = detect_encoding(data)
        if detected_encoding:
            try:
                return data.decode(detected_encoding)
            except (UnicodeDecodeError, LookupError) as e:
                logger.debug("Failed to decode with chardet-detected encoding %s: %s", detected_encoding, e)

    for candidate in fallback_encodings:
        try:
            return data.decode(candidate)
        except UnicodeDecodeError as e:
            logger.debug("Failed to decode with %s: %s", candidate, e)
        except LookupError as e:
            logger.debug("Unknown encoding %s: %s", candidate, e)

    logger.warning("All encoding attempts failed, using utf-8 with error replacement")
    return data.decode("utf-8", errors="replace")
