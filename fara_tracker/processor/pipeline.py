from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from fara_tracker.extraction.models import ExtractionResult
from fara_tracker.manifest.models import DocumentRecord


@dataclass(slots=True)
class PipelineContext:
    """State carried through the steps for one manifest document."""

    document: DocumentRecord
    local_path: Path | None = None
    extracted_text: str | None = None
    result: ExtractionResult | None = None
    error_message: str = ""

    @property
    def failed(self) -> bool:
        return bool(self.error_message)


class PipelineStep(ABC):
    """A stage of document processing.

    Steps must not raise for expected failures; they record an
    ``error_message`` on the context and let later steps decide whether to
    skip. The extraction step always leaves a result behind.
    """

    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext: ...
