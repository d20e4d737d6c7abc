from pathlib import Path

import pymupdf

from fara_tracker.pdf.base import BasePdfExtractor
from fara_tracker.pdf.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    """Reads the text layer with PyMuPDF, in natural reading order."""

    name = "pymupdf"

    def extract(self, pdf_path: Path) -> str:
        try:
            with pymupdf.open(pdf_path) as doc:  # type: ignore[no-untyped-call]
                if doc.needs_pass:
                    raise PdfExtractionError(f"{pdf_path.name} is password protected")
                page_texts = [page.get_text("text", sort=True) for page in doc]
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf could not read {pdf_path.name}: {exc}") from exc
        return "\n".join(page_texts).strip()
