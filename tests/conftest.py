"""Pytest configuration and shared fixtures for the findinfile test suite."""

import logging
from pathlib import Path
from typing import Generator

import pytest
from utils import build_tree, cleanup_test_dir, create_test_temp_dir


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files.

    Yields
    ------
    Path
        Temporary directory path that will be cleaned up after test.

    """
    temp_path = create_test_temp_dir()
    try:
        yield temp_path
    finally:
        cleanup_test_dir(temp_path)


@pytest.fixture
def project_tree(tmp_path: Path) -> Path:
    """Provide a small project tree with matches in several files.

    Layout::

        proj/
            README.md            "TODO: write docs"
            src/main.txt         two matching lines, one with two occurrences
            src/util.TXT         "todo lower case"
            src/notes.log        "TODO in a log"
            data/blob.bin        NUL bytes followed by "TODO"

    """
    root = tmp_path / "proj"
    build_tree(
        root,
        {
            "README.md": "TODO: write docs\n",
            "src/main.txt": "first line\nTODO one TODO two\nnothing here\nlast TODO\n",
            "src/util.TXT": "todo lower case\n",
            "src/notes.log": "TODO in a log\n",
            "data/blob.bin": b"\x00\x01\x02TODO\n",
        },
    )
    return root


@pytest.fixture(autouse=True)
def _reset_root_logger() -> Generator[None, None, None]:
    """Remove handlers installed by configure_logging during a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        yield
    finally:
        for handler in list(root.handlers):
            if handler not in handlers and type(handler) in (logging.StreamHandler, logging.FileHandler):
                root.removeHandler(handler)
                handler.close()
        root.setLevel(level)
