"""Reads the FARA document manifest and selects filings worth processing."""

import csv
import re
from datetime import date, timedelta
from pathlib import Path

from fara_tracker.logging.logger import Log
from fara_tracker.manifest.exceptions import ManifestNotFoundError
from fara_tracker.manifest.models import DocumentRecord

_US_DATE_PATTERN = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})")

# Allow-list is checked before the deny-list; unknown types are included.
SUBSTANTIVE_URL_TOKENS = (
    "-Exhibit-AB-",
    "-Registration-Statement-",
    "-Amendment-",
    "-Supplemental-Statement-",
    "-Short-Form-",
)
EXCLUDED_URL_TOKENS = (
    "-Informational-Materials-",
    "-Dissemination-",
    "-Conflict-",
)

_COLUMNS = {
    "date_stamped": "date stamped",
    "registrant_name": "registrant name",
    "registration_number": "registration number",
    "document_type": "document type",
    "foreign_principal_name": "foreign principal name",
    "foreign_principal_country": "foreign principal country",
    "url": "url",
}


def parse_manifest_line(line: str) -> list[str]:
    """Split one manifest line into trimmed fields.

    Fully quoted lines are split on the ``","`` separator so stray quotes
    inside a value cannot shift columns.
    """
    cleaned = line.replace("\r", "").strip()
    if cleaned.startswith('"') and '","' in cleaned:
        fields = cleaned.split('","')
    else:
        fields = next(csv.reader([cleaned]), [])
    return [field.strip().strip('"').strip() for field in fields]


def parse_date(raw: str | None, today: date | None = None) -> date:
    """Parse ISO-8601 or M/D/YYYY; anything else becomes today."""
    fallback = today or date.today()
    if not raw:
        return fallback
    try:
        return date.fromisoformat(raw.strip())
    except ValueError:
        pass
    match = _US_DATE_PATTERN.search(raw)
    if match is None:
        return fallback
    month, day, year = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return fallback


def is_substantive_document_type(url: str | None) -> bool:
    """Classify a filing by the document type token embedded in its URL."""
    if not url:
        return False
    if any(token in url for token in SUBSTANTIVE_URL_TOKENS):
        return True
    if any(token in url for token in EXCLUDED_URL_TOKENS):
        return False
    return True


class DocumentSelector:
    """Parses the manifest and filters it down to substantive filings."""

    def __init__(self, today: date | None = None) -> None:
        self._today = today

    def select(
        self,
        manifest_path: Path,
        max_results: int,
        agent_filter: str | None = None,
        years_back: int = 10,
        target_year: int | None = None,
    ) -> list[DocumentRecord]:
        """Return manifest rows passing every filter, in manifest order.

        Args:
            manifest_path: CSV manifest with a header row.
            max_results: Cap on returned rows; 0 means unlimited.
            agent_filter: Case-insensitive substring of the registrant name.
            years_back: Recency window in years of 365 days.
            target_year: When set, only rows stamped in this year pass the
                date filter (replaces the recency window).

        Raises:
            ManifestNotFoundError: if the manifest cannot be read.
        """
        today = self._today or date.today()
        cutoff = today - timedelta(days=years_back * 365)
        Log.info(f"Reading manifest: {manifest_path}")

        selected: list[DocumentRecord] = []
        for document in self._read(manifest_path, today):
            if not self._matches(document, cutoff, agent_filter, target_year):
                continue
            selected.append(document)
            if max_results > 0 and len(selected) >= max_results:
                break
        return selected

    def _read(self, manifest_path: Path, today: date) -> list[DocumentRecord]:
        try:
            content = manifest_path.read_text(encoding="utf-8-sig", errors="replace")
        except OSError as exc:
            raise ManifestNotFoundError(
                f"Cannot read manifest {manifest_path}: {exc}"
            ) from exc

        lines = [line for line in content.split("\n") if line.strip()]
        if not lines:
            return []
        headers = [header.lower() for header in parse_manifest_line(lines[0])]
        return [
            self._build_record(headers, parse_manifest_line(line), today)
            for line in lines[1:]
        ]

    @staticmethod
    def _build_record(headers: list[str], row: list[str], today: date) -> DocumentRecord:
        values = dict(zip(headers, row))

        def column(name: str) -> str:
            return values.get(_COLUMNS[name], "")

        return DocumentRecord(
            date_stamped=parse_date(column("date_stamped"), today),
            registrant_name=column("registrant_name"),
            registration_number=column("registration_number"),
            document_type=column("document_type"),
            foreign_principal_name=column("foreign_principal_name"),
            foreign_principal_country=column("foreign_principal_country"),
            url=column("url"),
        )

    @staticmethod
    def _matches(
        document: DocumentRecord,
        cutoff: date,
        agent_filter: str | None,
        target_year: int | None,
    ) -> bool:
        if target_year is not None:
            date_ok = document.date_stamped.year == target_year
        else:
            date_ok = document.date_stamped >= cutoff

        agent_ok = True
        if agent_filter:
            agent_ok = bool(document.registrant_name) and (
                agent_filter.lower() in document.registrant_name.lower()
            )

        has_foreign_principal = bool(
            document.foreign_principal_name and document.foreign_principal_country
        )
        return (
            date_ok
            and agent_ok
            and bool(document.url)
            and is_substantive_document_type(document.url)
            and has_foreign_principal
        )
