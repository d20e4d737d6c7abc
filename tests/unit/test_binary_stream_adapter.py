from pathlib import Path

import pytest

from fara_tracker.pdf.binary_stream_adapter import BinaryStreamAdapter
from fara_tracker.pdf.exceptions import PdfExtractionError


def _write(tmp_path: Path, content: bytes) -> Path:
    path = tmp_path / "raw.pdf"
    path.write_bytes(content)
    return path


class TestBinaryStreamAdapter:
    def test_recovers_text_inside_streams(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            b"%PDF-1.4\n1 0 obj\n<< /Length 44 >>\nstream\n"
            b"BT (Hello Registrant) Tj ET\nendstream\nendobj\n",
        )
        result = BinaryStreamAdapter().extract(path)
        assert "Hello Registrant" in result

    def test_strips_dictionaries_and_name_operators(self, tmp_path: Path) -> None:
        path = _write(tmp_path, b"stream\n<< /Filter /Raw >> /F1 Agent text\nendstream")
        result = BinaryStreamAdapter().extract(path)
        assert "Filter" not in result
        assert "F1" not in result
        assert "Agent text" in result

    def test_replaces_non_printable_bytes(self, tmp_path: Path) -> None:
        path = _write(tmp_path, b"\x00\x01Hello\x02\x03World")
        assert BinaryStreamAdapter().extract(path) == "Hello World"

    def test_compensation_pages_survive_size_cap(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            b"Page 1 Introduction text Page 2 The fee is a monthly retainer of 5000 dollars",
        )
        result = BinaryStreamAdapter(max_chars=10).extract(path)
        assert result.startswith("Page 1 Int")
        assert "monthly retainer of 5000 dollars" in result
        assert "Introduction text" not in result

    def test_pages_without_keywords_are_not_repeated(self, tmp_path: Path) -> None:
        path = _write(tmp_path, b"Page 1 Nothing relevant here")
        assert BinaryStreamAdapter().extract(path) == "Page 1 Nothing relevant here"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(PdfExtractionError, match="Cannot read"):
            BinaryStreamAdapter().extract(tmp_path / "missing.pdf")
