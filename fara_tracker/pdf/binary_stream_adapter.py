"""Last-resort text recovery that reads PDF content streams as raw bytes.

No decompression or font decoding happens here: the parser only keeps the
printable residue of each ``stream ... endstream`` block. That is enough for
uncompressed filings, and the compensation scan below recovers fee language
that would otherwise fall outside the size cap.
"""

import re
from pathlib import Path
from typing import ClassVar

from fara_tracker.logging.logger import Log
from fara_tracker.pdf.base import BasePdfExtractor
from fara_tracker.pdf.exceptions import PdfExtractionError

_STREAM_START = re.compile(r"(?<!end)stream")
_DICTIONARY = re.compile(r"<<[^>]*>>")
_OPERATOR = re.compile(r"/[A-Za-z]+")
_NON_PRINTABLE = re.compile(r"[^\x20-\x7E\s]")
_WHITESPACE = re.compile(r"\s+")
_PAGE_MARKER = re.compile(r"page \d+", re.IGNORECASE)


class BinaryStreamAdapter(BasePdfExtractor):
    """Recovers printable text from raw PDF bytes without a PDF library."""

    name = "binary-stream"

    COMPENSATION_KEYWORDS: ClassVar[tuple[str, ...]] = (
        "compensation",
        "paid",
        "sum of",
        "month",
        "monthly",
        "annual",
        "yearly",
        "quarter",
        "quarterly",
        "fee",
        "retainer",
        "salary",
        "payment",
    )

    def __init__(self, max_chars: int = 20000) -> None:
        self._max_chars = max_chars

    def extract(self, pdf_path: Path) -> str:
        try:
            raw = pdf_path.read_bytes()
        except OSError as exc:
            raise PdfExtractionError(f"Cannot read {pdf_path}: {exc}") from exc

        # latin-1 maps every byte to one character, so offsets stay aligned.
        content = raw.decode("latin-1")
        general = self._extract_general_text(content)
        compensation = self._extract_compensation_sections(content)
        combined = f"{general} {compensation}".strip()
        Log.debug(f"Binary parse of {pdf_path.name} (first 500 chars): {combined[:500]}")
        return combined

    def _extract_general_text(self, content: str) -> str:
        chunks = [self._clean_chunk(chunk) for chunk in _STREAM_START.split(content)]
        return self._to_printable(" ".join(chunks))[: self._max_chars]

    def _extract_compensation_sections(self, content: str) -> str:
        pages = _PAGE_MARKER.split(content)
        matching = [
            self._clean_chunk(page)
            for page in pages
            if any(keyword in page.lower() for keyword in self.COMPENSATION_KEYWORDS)
        ]
        return self._to_printable(" ".join(matching))

    @staticmethod
    def _clean_chunk(chunk: str) -> str:
        body = chunk.split("endstream", 1)[0]
        body = _DICTIONARY.sub("", body)
        body = _OPERATOR.sub("", body)
        return body.strip()

    @staticmethod
    def _to_printable(text: str) -> str:
        text = _NON_PRINTABLE.sub(" ", text)
        return _WHITESPACE.sub(" ", text).strip()
