"""Maps the model's untyped JSON onto an ExtractionResult, field by field.

Every field has its own fallback so one malformed value never discards the
rest of the response.
"""

import json
import re
from datetime import date, timedelta
from typing import Any

from fara_tracker.extraction.compensation import CompensationNormalizer, coerce_amount
from fara_tracker.extraction.exceptions import ExtractionParseError
from fara_tracker.extraction.models import CompensationEntry, ExtractionResult
from fara_tracker.manifest.models import DocumentRecord

REPORTING_PERIOD_DAYS = 90

UNKNOWN_AGENT = "Unknown Agent"
UNKNOWN_PRINCIPAL = "Unknown Principal"
UNKNOWN_COUNTRY = "Unknown"

SERVICES_BY_DOCUMENT_TYPE: dict[str, str] = {
    "Registration Statement": "Government relations and lobbying services",
    "Supplemental Statement": "Ongoing government affairs consulting",
    "Informational Materials": "Public relations and media services",
    "Exhibit AB": "Legal and regulatory consulting",
}
DEFAULT_SERVICES = "Foreign agent services"

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)
_BRACED = re.compile(r"\{.*\}", re.DOTALL)


def extract_json_object(raw: str) -> dict[str, Any]:
    """Locate and decode the JSON object in a model response.

    Fenced code block content wins; otherwise the span from the first ``{``
    to the last ``}`` is used.

    Raises:
        ExtractionParseError: if no JSON object can be decoded.
    """
    candidate = raw.strip()
    fenced = _FENCED_BLOCK.search(candidate)
    if fenced is not None and fenced.group(1).lstrip().startswith("{"):
        candidate = fenced.group(1)
    else:
        braced = _BRACED.search(candidate)
        if braced is not None:
            candidate = braced.group(0)

    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as exc:
        raise ExtractionParseError(f"Invalid JSON response: {exc}") from exc

    if not isinstance(parsed, dict):
        raise ExtractionParseError("JSON response must be an object")
    return parsed


def build_result(
    data: dict[str, Any],
    document: DocumentRecord,
    normalizer: CompensationNormalizer,
) -> ExtractionResult:
    """Build an ExtractionResult from parsed model output and manifest metadata."""
    raw_entries = data.get("compensation_entries")
    entries = _build_entries(raw_entries)
    total = normalizer.normalize(
        entries if isinstance(raw_entries, list) else None,
        data.get("total_compensation"),
    )
    return ExtractionResult(
        agent_name=(
            string_value(data, "agent_name")
            or _non_empty(document.registrant_name)
            or UNKNOWN_AGENT
        ),
        agent_address=string_value(data, "agent_address"),
        foreign_principal=(
            string_value(data, "foreign_principal")
            or _non_empty(document.foreign_principal_name)
            or UNKNOWN_PRINCIPAL
        ),
        country=(
            string_value(data, "country")
            or _non_empty(document.foreign_principal_country)
            or UNKNOWN_COUNTRY
        ),
        compensation_entries=entries,
        total_compensation=total,
        services_description=string_value(data, "services_description"),
        registration_date=parse_date_value(data.get("registration_date"))
        or document.date_stamped,
        latest_period_start=parse_date_value(data.get("latest_period_start"))
        or document.date_stamped - timedelta(days=REPORTING_PERIOD_DAYS),
        latest_period_end=parse_date_value(data.get("latest_period_end"))
        or document.date_stamped,
        status="active",
    )


def build_fallback_result(document: DocumentRecord, reason: str) -> ExtractionResult:
    """Build a result from manifest metadata alone."""
    return ExtractionResult(
        agent_name=_non_empty(document.registrant_name) or UNKNOWN_AGENT,
        agent_address=None,
        foreign_principal=_non_empty(document.foreign_principal_name) or UNKNOWN_PRINCIPAL,
        country=_non_empty(document.foreign_principal_country) or UNKNOWN_COUNTRY,
        compensation_entries=[],
        services_description=SERVICES_BY_DOCUMENT_TYPE.get(
            document.document_type, DEFAULT_SERVICES
        ),
        registration_date=document.date_stamped,
        latest_period_start=document.date_stamped - timedelta(days=REPORTING_PERIOD_DAYS),
        latest_period_end=document.date_stamped,
        status="active",
        fallback_reason=reason,
    )


def string_value(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if isinstance(value, str):
        return _non_empty(value)
    return None


def parse_date_value(value: Any) -> date | None:
    if not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def _non_empty(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _build_entries(raw: Any) -> list[CompensationEntry]:
    if not isinstance(raw, list):
        return []
    return [_build_entry(item) for item in raw]


def _build_entry(raw: Any) -> CompensationEntry:
    if not isinstance(raw, dict):
        return CompensationEntry()
    return CompensationEntry(
        amount=coerce_amount(raw.get("amount")),
        period=string_value(raw, "period"),
        description=string_value(raw, "description"),
    )
