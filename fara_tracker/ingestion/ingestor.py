from collections.abc import Sequence

import psycopg

from fara_tracker.database.repositories.registration_repository import (
    RegistrationRepository,
)
from fara_tracker.ingestion.aggregator import aggregate
from fara_tracker.ingestion.exceptions import RegistrationValidationError
from fara_tracker.ingestion.models import IngestSummary, ProcessedDocument
from fara_tracker.ingestion.validator import validate_registration
from fara_tracker.logging.logger import Log


class RegistrationIngestor:
    """Aggregates processed documents and upserts them one registration at a time."""

    def __init__(self, repository: RegistrationRepository) -> None:
        self._repository = repository

    def ingest(self, processed: Sequence[ProcessedDocument]) -> IngestSummary:
        """Store every aggregated registration; invalid ones are skipped and counted."""
        registrations = aggregate(processed)
        Log.info(
            f"Storing {len(registrations)} registrations from {len(processed)} documents"
        )
        summary = IngestSummary()
        for registration in registrations:
            try:
                validate_registration(registration)
                outcome = self._repository.upsert(registration)
            except RegistrationValidationError as exc:
                summary.failed += 1
                Log.warning(f"Skipping {registration.agent_name!r}: {exc}")
                continue
            except (psycopg.DataError, psycopg.IntegrityError) as exc:
                summary.failed += 1
                Log.warning(f"Store rejected {registration.agent_name!r}: {exc}")
                continue

            if outcome == "created":
                summary.created += 1
            else:
                summary.updated += 1
            Log.debug(
                f"Stored {registration.agent_name} / {registration.foreign_principal} "
                f"({outcome}): {len(registration.document_urls)} documents, "
                f"compensation {registration.total_compensation}"
            )

        Log.info(
            f"Stored {summary.stored}/{len(registrations)} registrations "
            f"({summary.created} created, {summary.updated} updated, {summary.failed} failed)"
        )
        return summary
