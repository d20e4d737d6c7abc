from pathlib import Path

import pdfplumber

from fara_tracker.logging.logger import Log
from fara_tracker.pdf.base import BasePdfExtractor
from fara_tracker.pdf.exceptions import PdfExtractionError


class PdfPlumberAdapter(BasePdfExtractor):
    name = "pdfplumber"

    def extract(self, pdf_path: Path) -> str:
        try:
            with pdfplumber.open(pdf_path) as pdf:
                page_texts = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber could not read {pdf_path.name}: {exc}") from exc

        blank = sum(1 for text in page_texts if not text.strip())
        if blank:
            Log.debug(f"{pdf_path.name}: {blank}/{len(page_texts)} pages without a text layer")
        return "\n".join(page_texts).strip()
