from unittest.mock import MagicMock

import pytest

from fara_tracker.pdf.binary_stream_adapter import BinaryStreamAdapter
from fara_tracker.pdf.factory import PdfExtractorFactory
from fara_tracker.pdf.pdfplumber_adapter import PdfPlumberAdapter
from fara_tracker.pdf.pdftotext_adapter import PdfToTextAdapter
from fara_tracker.pdf.pymupdf_adapter import PyMuPdfAdapter
from fara_tracker.pdf.text_extractor import TextExtractor


def _make_settings(pdf_engine: str) -> MagicMock:
    settings = MagicMock()
    settings.pdf_engine = pdf_engine
    settings.pdftotext_binary = "pdftotext"
    settings.pdf_timeout_seconds = 30
    settings.pdf_min_text_bytes = 100
    settings.pdf_fallback_max_chars = 20000
    return settings


class TestPdfExtractorFactory:
    def test_creates_pdftotext_adapter(self) -> None:
        adapter = PdfExtractorFactory.create_primary(_make_settings("pdftotext"))
        assert isinstance(adapter, PdfToTextAdapter)

    def test_creates_pdfplumber_adapter(self) -> None:
        adapter = PdfExtractorFactory.create_primary(_make_settings("pdfplumber"))
        assert isinstance(adapter, PdfPlumberAdapter)

    def test_creates_pymupdf_adapter(self) -> None:
        adapter = PdfExtractorFactory.create_primary(_make_settings("pymupdf"))
        assert isinstance(adapter, PyMuPdfAdapter)

    def test_is_case_insensitive(self) -> None:
        adapter = PdfExtractorFactory.create_primary(_make_settings("PdfPlumber"))
        assert isinstance(adapter, PdfPlumberAdapter)

    def test_raises_for_unknown_engine(self) -> None:
        with pytest.raises(ValueError, match="Unknown PDF engine"):
            PdfExtractorFactory.create_primary(_make_settings("unknown"))

    def test_create_chains_binary_fallback(self) -> None:
        extractor = PdfExtractorFactory.create(_make_settings("pdftotext"))
        assert isinstance(extractor, TextExtractor)
        assert isinstance(extractor._primary, PdfToTextAdapter)
        assert isinstance(extractor._fallback, BinaryStreamAdapter)
