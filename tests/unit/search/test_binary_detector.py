"""Unit tests for NUL-byte based binary detection."""

from pathlib import Path

import pytest

from findinfile.constants import BINARY_PROBE_SIZE
from findinfile.exceptions import BinaryProbeError
from findinfile.search.binary import is_binary, read_probe


@pytest.mark.unit
class TestIsBinary:
    """Test cases for is_binary."""

    def test_text_file_is_not_binary(self, tmp_path: Path):
        path = tmp_path / "plain.txt"
        path.write_text("just some text\nacross lines\n", encoding="utf-8")
        assert is_binary(path) is False

    def test_nul_byte_marks_file_binary(self, tmp_path: Path):
        path = tmp_path / "data.bin"
        path.write_bytes(b"header\x00payload")
        assert is_binary(path) is True

    def test_nul_byte_at_last_probed_position(self, tmp_path: Path):
        path = tmp_path / "edge.bin"
        path.write_bytes(b"a" * (BINARY_PROBE_SIZE - 1) + b"\x00")
        assert is_binary(path) is True

    def test_nul_byte_beyond_probe_is_not_detected(self, tmp_path: Path):
        path = tmp_path / "late.bin"
        path.write_bytes(b"a" * BINARY_PROBE_SIZE + b"\x00")
        assert is_binary(path) is False

    def test_empty_file_is_not_binary(self, tmp_path: Path):
        path = tmp_path / "empty"
        path.write_bytes(b"")
        assert is_binary(path) is False

    def test_missing_file_fails_open(self, tmp_path: Path):
        assert is_binary(tmp_path / "does-not-exist") is False

    def test_accepts_string_paths(self, tmp_path: Path):
        path = tmp_path / "data.bin"
        path.write_bytes(b"\x00")
        assert is_binary(str(path)) is True


@pytest.mark.unit
class TestReadProbe:
    """Test cases for read_probe."""

    def test_reads_at_most_probe_size(self, tmp_path: Path):
        path = tmp_path / "big.txt"
        path.write_bytes(b"x" * (BINARY_PROBE_SIZE * 3))
        assert len(read_probe(path)) == BINARY_PROBE_SIZE

    def test_missing_file_raises_probe_error(self, tmp_path: Path):
        missing = tmp_path / "gone.txt"
        with pytest.raises(BinaryProbeError) as exc_info:
            read_probe(missing)
        assert exc_info.value.file_path == str(missing)
        assert isinstance(exc_info.value.original_error, OSError)
