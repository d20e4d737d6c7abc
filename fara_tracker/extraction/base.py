from abc import ABC, abstractmethod
from collections import Counter

from fara_tracker.extraction.models import ExtractionResult
from fara_tracker.manifest.models import DocumentRecord


class BaseExtractor(ABC):
    """Contract for filing fact extractors."""

    @abstractmethod
    def extract(self, text: str | None, document: DocumentRecord) -> ExtractionResult:
        """Extract structured facts from filing text.

        Args:
            text: Document text, or None when text extraction failed.
            document: Manifest metadata for the filing.

        Returns:
            ExtractionResult. Implementations never raise; failures degrade to
            a result built from ``document``.
        """

    @property
    def unrecognized_periods(self) -> Counter[str]:
        """Compensation periods seen but not understood, with their counts."""
        return Counter()
