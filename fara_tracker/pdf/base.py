from abc import ABC, abstractmethod
from pathlib import Path


class BasePdfExtractor(ABC):
    """A single strategy for turning a cached FARA filing into plain text.

    Strategies are tried in order by ``TextExtractor``; each one either
    returns the text it found (possibly empty for scanned exhibits) or
    raises ``PdfExtractionError`` so the next strategy gets a turn.
    """

    name: str = "base"

    @abstractmethod
    def extract(self, pdf_path: Path) -> str:
        """Return the filing's text, pages joined by newlines."""
