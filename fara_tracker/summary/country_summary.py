"""Read-side aggregation behind the country dashboard."""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from fara_tracker.database.models import CountrySummaryRow
from fara_tracker.database.repositories.registration_repository import (
    RegistrationRepository,
)


@dataclass(frozen=True)
class DashboardTotals:
    """Headline figures shown above the country table."""

    total_countries: int = 0
    total_agents: int = 0
    total_spending: Decimal = Decimal("0")


def dashboard_totals(rows: Sequence[CountrySummaryRow]) -> DashboardTotals:
    return DashboardTotals(
        total_countries=len(rows),
        total_agents=sum(row.agent_count for row in rows),
        total_spending=sum((row.total_spending for row in rows), Decimal("0")),
    )


class CountrySummaryView:
    """Per-country counts and spending over active registrations."""

    def __init__(self, repository: RegistrationRepository) -> None:
        self._repository = repository

    def rows(self) -> list[CountrySummaryRow]:
        return self._repository.country_summary()

    def totals(self) -> DashboardTotals:
        return dashboard_totals(self.rows())

    def format_table(self) -> str:
        """Render the summary as a plain-text table for the CLI."""
        rows = self.rows()
        totals = dashboard_totals(rows)
        lines = [f"{'Country':<40} {'Agents':>8} {'Total spending':>18}"]
        for row in rows:
            lines.append(
                f"{row.country[:40]:<40} {row.agent_count:>8} {row.total_spending:>18,.2f}"
            )
        lines.append(
            f"{totals.total_countries} countries, {totals.total_agents} agents, "
            f"{totals.total_spending:,.2f} total"
        )
        return "\n".join(lines)
