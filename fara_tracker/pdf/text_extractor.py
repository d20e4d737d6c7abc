from pathlib import Path

from fara_tracker.logging.logger import Log
from fara_tracker.pdf.base import BasePdfExtractor
from fara_tracker.pdf.exceptions import PdfExtractionError


class TextExtractor:
    """Runs the primary extractor and falls back to the binary parser.

    ``extract_text`` never raises: a total failure yields ``None`` and the
    extraction client falls back to manifest metadata.
    """

    def __init__(
        self,
        primary: BasePdfExtractor,
        fallback: BasePdfExtractor,
        min_text_bytes: int = 100,
    ) -> None:
        self._primary = primary
        self._fallback = fallback
        self._min_text_bytes = min_text_bytes

    def extract_text(self, pdf_path: Path) -> str | None:
        try:
            text = self._primary.extract(pdf_path)
        except PdfExtractionError as exc:
            Log.debug(f"{self._primary.name} failed for {pdf_path.name}: {exc}")
        else:
            size = len(text.encode("utf-8"))
            if size > self._min_text_bytes:
                Log.debug(f"{self._primary.name} read {size} bytes from {pdf_path.name}")
                return text
            Log.debug(
                f"{self._primary.name} output for {pdf_path.name} too short ({size} bytes), "
                f"trying {self._fallback.name}"
            )

        try:
            return self._fallback.extract(pdf_path)
        except PdfExtractionError as exc:
            Log.warning(f"Text extraction failed for {pdf_path.name}: {exc}")
            return None
