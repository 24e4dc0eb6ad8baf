#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for findinfile.

Constants are organized by category:
1. Type Definitions - Literal types shared by the CLI and the sinks
2. Search Behavior - Defaults for the search engine
3. Text Decoding - Encoding fallbacks used by the file scanner
4. Configuration Files - Names searched during config discovery
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

OutputFormat = Literal["table", "plain", "json"]
OUTPUT_FORMATS: tuple[OutputFormat, ...] = ("table", "plain", "json")

# =============================================================================
# Search Behavior
# =============================================================================

# Number of leading bytes inspected when deciding whether a file is binary
BINARY_PROBE_SIZE = 1024

DEFAULT_IGNORE_CASE = False
DEFAULT_EXCLUDE_BINARY = True
DEFAULT_FULL_PATH = False
DEFAULT_VERBOSE = False
DEFAULT_JOBS = 1
DEFAULT_OUTPUT_FORMAT: OutputFormat = "table"

# Separator for the --directory and --extensions list arguments
LIST_SEPARATOR = ","

# =============================================================================
# Text Decoding
# =============================================================================

# utf-8-sig strips a leading BOM; latin-1 accepts any byte sequence
DEFAULT_FALLBACK_ENCODINGS = ["utf-8-sig", "utf-8", "latin-1"]
DEFAULT_CHARDET_SAMPLE_SIZE = 8192
DEFAULT_CHARDET_CONFIDENCE = 0.7

# =============================================================================
# Configuration Files
# =============================================================================

CONFIG_ENV_VAR = "FINDINFILE_CONFIG"
CONFIG_FILENAMES = [".findinfile.toml", ".findinfile.yaml", ".findinfile.yml", ".findinfile.json"]
PYPROJECT_TOOL_SECTION = "findinfile"
