from pathlib import Path
from unittest.mock import MagicMock

from fara_tracker.pdf.exceptions import PdfExtractionError
from fara_tracker.pdf.text_extractor import TextExtractor

PDF_PATH = Path("/tmp/filing.pdf")


def _make_extractor(min_text_bytes: int = 100) -> tuple[TextExtractor, MagicMock, MagicMock]:
    primary = MagicMock()
    fallback = MagicMock()
    return TextExtractor(primary, fallback, min_text_bytes=min_text_bytes), primary, fallback


class TestTextExtractor:
    def test_uses_primary_text_above_threshold(self) -> None:
        extractor, primary, fallback = _make_extractor()
        primary.extract.return_value = "x" * 101

        assert extractor.extract_text(PDF_PATH) == "x" * 101
        fallback.extract.assert_not_called()

    def test_short_primary_text_uses_fallback(self) -> None:
        extractor, primary, fallback = _make_extractor()
        primary.extract.return_value = "x" * 100
        fallback.extract.return_value = "recovered"

        assert extractor.extract_text(PDF_PATH) == "recovered"
        fallback.extract.assert_called_once_with(PDF_PATH)

    def test_threshold_counts_utf8_bytes(self) -> None:
        extractor, primary, fallback = _make_extractor(min_text_bytes=4)
        primary.extract.return_value = "éé"

        assert extractor.extract_text(PDF_PATH) is fallback.extract.return_value

    def test_primary_failure_uses_fallback(self) -> None:
        extractor, primary, fallback = _make_extractor()
        primary.extract.side_effect = PdfExtractionError("pdftotext not available")
        fallback.extract.return_value = "recovered"

        assert extractor.extract_text(PDF_PATH) == "recovered"

    def test_both_failing_returns_none(self) -> None:
        extractor, primary, fallback = _make_extractor()
        primary.extract.side_effect = PdfExtractionError("boom")
        fallback.extract.side_effect = PdfExtractionError("unreadable")

        assert extractor.extract_text(PDF_PATH) is None
