"""Tests for encoding detection utilities."""

import pytest

from findinfile.utils.encoding import detect_encoding, read_text_with_encoding_detection


@pytest.mark.unit
class TestDetectEncoding:
    """Tests for detect_encoding function."""

    def test_detect_utf8(self):
        data = ("Hello, world! Unicode text: café, naïve, résumé. " * 20).encode("utf-8")

        assert detect_encoding(data).lower() in ("utf-8", "utf8")

    def test_detect_empty_data(self):
        assert detect_encoding(b"") is None

    def test_confidence_threshold(self):
        data = "Hello world".encode("utf-8")

        assert detect_encoding(data, confidence_threshold=1.01) is None

    def test_sample_size_limits_input(self, monkeypatch):
        seen = []

        def fake_detect(sample):
            seen.append(sample)
            return {"encoding": "ascii", "confidence": 1.0}

        monkeypatch.setattr("findinfile.utils.encoding.chardet.detect", fake_detect)

        assert detect_encoding(b"x" * 100, sample_size=10) == "ascii"
        assert seen == [b"x" * 10]


@pytest.mark.unit
class TestReadTextWithEncodingDetection:
    """Tests for read_text_with_encoding_detection function."""

    def test_utf8_text(self):
        assert read_text_with_encoding_detection("Hello, 世界".encode("utf-8")) == "Hello, 世界"

    def test_bom_is_stripped(self):
        assert read_text_with_encoding_detection(b"\xef\xbb\xbfabc") == "abc"

    def test_latin1_fallback(self):
        assert read_text_with_encoding_detection("Café".encode("latin-1")) == "Café"

    def test_custom_fallbacks(self):
        data = "Привет".encode("cp1251")

        assert read_text_with_encoding_detection(data, fallback_encodings=["utf-8", "cp1251"]) == "Привет"

    def test_unknown_fallback_is_skipped(self):
        assert read_text_with_encoding_detection(b"abc", fallback_encodings=["no-such-codec", "ascii"]) == "abc"

    def test_replacement_when_all_fallbacks_fail(self):
        result = read_text_with_encoding_detection(b"ok \xff", fallback_encodings=["ascii"])

        assert result == "ok �"

    def test_forced_encoding(self):
        assert read_text_with_encoding_detection("wide".encode("utf-16"), encoding="utf-16") == "wide"

    def test_forced_encoding_is_strict(self):
        with pytest.raises(UnicodeDecodeError):
            read_text_with_encoding_detection(b"\xff", encoding="ascii")

    def test_forced_unknown_encoding(self):
        with pytest.raises(LookupError):
            read_text_with_encoding_detection(b"abc", encoding="no-such-codec")

    def test_chardet_result_used_first(self, monkeypatch):
        monkeypatch.setattr("findinfile.utils.encoding.detect_encoding", lambda data: "cp1251")
        data = "Привет".encode("cp1251")

        assert read_text_with_encoding_detection(data, use_chardet=True) == "Привет"

    def test_bad_chardet_guess_falls_back(self, monkeypatch):
        monkeypatch.setattr("findinfile.utils.encoding.detect_encoding", lambda data: "no-such-codec")

        assert read_text_with_encoding_detection(b"plain", use_chardet=True) == "plain"
