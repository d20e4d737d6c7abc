"""Folds per-document extraction results into one registration per agent."""

from collections.abc import Sequence
from decimal import Decimal

from fara_tracker.ingestion.models import ProcessedDocument, Registration


def group_by_agent(
    processed: Sequence[ProcessedDocument],
) -> dict[str, list[ProcessedDocument]]:
    """Group documents by extracted agent name, keeping first-seen order."""
    groups: dict[str, list[ProcessedDocument]] = {}
    for item in processed:
        groups.setdefault(item.result.agent_name, []).append(item)
    return groups


def aggregate(processed: Sequence[ProcessedDocument]) -> list[Registration]:
    """Build one Registration per agent.

    The document with the latest registration date supplies the descriptive
    fields. Compensation is summed over every document in the group and the
    document URLs are unioned.
    """
    return [_aggregate_group(group) for group in group_by_agent(processed).values()]


def _aggregate_group(group: list[ProcessedDocument]) -> Registration:
    # max() keeps the first of equal dates.
    latest = max(group, key=lambda item: item.result.registration_date).result
    urls = list(dict.fromkeys(item.document.url for item in group if item.document.url))
    total = sum((item.result.total_compensation for item in group), Decimal("0"))
    return Registration(
        agent_name=latest.agent_name,
        foreign_principal=latest.foreign_principal,
        country=latest.country,
        registration_date=latest.registration_date,
        total_compensation=total,
        agent_address=latest.agent_address,
        latest_period_start=latest.latest_period_start,
        latest_period_end=latest.latest_period_end,
        services_description=latest.services_description,
        status=latest.status,
        document_urls=urls,
    )
