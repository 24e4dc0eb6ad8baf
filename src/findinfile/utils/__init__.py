#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/findinfile/utils/__init__.py
"""Utility modules for the findinfile package."""

from findinfile.utils.encoding import detect_encoding, read_text_with_encoding_detection

__all__ = ["detect_encoding", "read_text_with_encoding_detection"]
