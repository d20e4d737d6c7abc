from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal


@dataclass
class RegistrationRecord:
    """Represents a row from the fara_registrations table."""

    id: int
    agent_name: str
    foreign_principal: str
    country: str
    status: str
    total_compensation: Decimal = Decimal("0")
    agent_address: str | None = None
    registration_date: date | None = None
    latest_period_start: date | None = None
    latest_period_end: date | None = None
    services_description: str | None = None
    document_urls: list[str] = field(default_factory=list)
    inserted_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class CountrySummaryRow:
    """Represents a row from the country_summary view."""

    country: str
    agent_count: int
    total_spending: Decimal
    last_updated: datetime | None = None
