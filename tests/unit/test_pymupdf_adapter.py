from pathlib import Path

import pytest

from fara_tracker.pdf.exceptions import PdfExtractionError
from fara_tracker.pdf.pymupdf_adapter import PyMuPdfAdapter


class TestPyMuPdfAdapter:
    def test_extract_returns_text(self, sample_pdf_path: Path) -> None:
        result = PyMuPdfAdapter().extract(sample_pdf_path)
        assert "Hello PDF World" in result

    def test_extract_multi_page_in_order(self, multi_page_pdf_path: Path) -> None:
        result = PyMuPdfAdapter().extract(multi_page_pdf_path)
        assert result.index("Page one content") < result.index("Page two content")

    def test_extract_result_is_stripped(self, sample_pdf_path: Path) -> None:
        result = PyMuPdfAdapter().extract(sample_pdf_path)
        assert result == result.strip()

    def test_extract_raises_on_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(PdfExtractionError):
            PyMuPdfAdapter().extract(tmp_path / "missing.pdf")
