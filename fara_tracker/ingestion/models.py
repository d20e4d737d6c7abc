from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from pathlib import Path

from fara_tracker.extraction.models import ExtractionResult
from fara_tracker.manifest.models import DocumentRecord

REGISTRATION_STATUSES = frozenset({"active", "inactive", "terminated"})


@dataclass(frozen=True)
class ProcessedDocument:
    """A manifest row together with the facts extracted from its PDF."""

    document: DocumentRecord
    result: ExtractionResult
    local_path: Path | None = None


@dataclass(frozen=True)
class Registration:
    """Aggregated registration ready to be upserted."""

    agent_name: str
    foreign_principal: str
    country: str
    registration_date: date | None = None
    total_compensation: Decimal = Decimal("0")
    agent_address: str | None = None
    latest_period_start: date | None = None
    latest_period_end: date | None = None
    services_description: str | None = None
    status: str = "active"
    document_urls: list[str] = field(default_factory=list)


@dataclass
class IngestSummary:
    """Counts from one ingest call."""

    created: int = 0
    updated: int = 0
    failed: int = 0

    @property
    def stored(self) -> int:
        return self.created + self.updated
