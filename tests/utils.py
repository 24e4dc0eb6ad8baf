"""Test utilities for the findinfile test suite.

Helpers for building small directory trees on disk.
"""

import shutil
import tempfile
from pathlib import Path
from typing import Mapping, Union

FileContent = Union[str, bytes]


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp())


def cleanup_test_dir(temp_dir: Path) -> None:
    """Clean up test directory and files."""
    if temp_dir.exists():
        shutil.rmtree(temp_dir)


def build_tree(root: Path, files: Mapping[str, FileContent]) -> Path:
    """Create ``files`` below ``root``.

    Keys are POSIX-style relative paths; ``str`` values are written as UTF-8
    text with no newline translation, ``bytes`` values are written verbatim.
    """
    for relative, content in files.items():
        target = root.joinpath(*relative.split("/"))
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_bytes(content.encode("utf-8"))
    return root
