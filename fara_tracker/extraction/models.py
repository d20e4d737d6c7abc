from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class CompensationEntry:
    """A single compensation figure as reported in a filing."""

    amount: Decimal = Decimal("0")
    period: str | None = None  # monthly, quarterly, annual, one-time
    description: str | None = None


@dataclass(frozen=True)
class ExtractionResult:
    """Structured facts for one filing."""

    agent_name: str
    foreign_principal: str
    country: str
    registration_date: date
    latest_period_start: date
    latest_period_end: date
    total_compensation: Decimal = Decimal("0")
    agent_address: str | None = None
    compensation_entries: list[CompensationEntry] = field(default_factory=list)
    services_description: str | None = None
    status: str = "active"
    fallback_reason: str | None = None

    @property
    def used_fallback(self) -> bool:
        return self.fallback_reason is not None
