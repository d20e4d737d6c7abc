from typing import ClassVar

from fara_tracker.config.settings import Settings
from fara_tracker.pdf.base import BasePdfExtractor
from fara_tracker.pdf.binary_stream_adapter import BinaryStreamAdapter
from fara_tracker.pdf.pdfplumber_adapter import PdfPlumberAdapter
from fara_tracker.pdf.pdftotext_adapter import PdfToTextAdapter
from fara_tracker.pdf.pymupdf_adapter import PyMuPdfAdapter
from fara_tracker.pdf.text_extractor import TextExtractor


class PdfExtractorFactory:
    """Creates the text extractor chain based on settings."""

    ENGINES: ClassVar[tuple[str, ...]] = ("pdftotext", "pdfplumber", "pymupdf")

    @classmethod
    def create(cls, settings: Settings) -> TextExtractor:
        return TextExtractor(
            primary=cls.create_primary(settings),
            fallback=BinaryStreamAdapter(max_chars=settings.pdf_fallback_max_chars),
            min_text_bytes=settings.pdf_min_text_bytes,
        )

    @classmethod
    def create_primary(cls, settings: Settings) -> BasePdfExtractor:
        engine = settings.pdf_engine.lower()
        if engine == "pdftotext":
            return PdfToTextAdapter(
                binary=settings.pdftotext_binary,
                timeout_seconds=settings.pdf_timeout_seconds,
            )
        if engine == "pdfplumber":
            return PdfPlumberAdapter()
        if engine == "pymupdf":
            return PyMuPdfAdapter()
        raise ValueError(
            f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ENGINES)}"
        )
