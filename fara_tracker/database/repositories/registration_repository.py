from decimal import Decimal
from typing import Any, Literal

from psycopg.rows import dict_row

from fara_tracker.database.connection import get_connection
from fara_tracker.database.models import CountrySummaryRow, RegistrationRecord
from fara_tracker.ingestion.models import Registration

UpsertOutcome = Literal["created", "updated"]

_REGISTRATION_COLUMNS = """
    id, agent_name, agent_address, foreign_principal, country,
    registration_date, total_compensation, latest_period_start,
    latest_period_end, services_description, status, document_urls,
    inserted_at, updated_at
"""


class RegistrationRepository:
    """Database operations for the fara_registrations table and country_summary view."""

    def upsert(self, registration: Registration) -> UpsertOutcome:
        """Insert or update the row keyed by (agent_name, foreign_principal).

        The lookup and write share one transaction guarded by an advisory lock
        on the key, so concurrent upserts of the same pair serialize. Existing
        rows get every mutable field overwritten and their document URLs
        unioned with the new ones.
        """
        lock_key = f"{registration.agent_name}\x1f{registration.foreign_principal}"
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute("SELECT pg_advisory_xact_lock(hashtext(%s))", (lock_key,))
                cur.execute(
                    """
                    SELECT id, document_urls
                    FROM fara_registrations
                    WHERE agent_name = %s AND foreign_principal = %s
                    FOR UPDATE
                    """,
                    (registration.agent_name, registration.foreign_principal),
                )
                row = cur.fetchone()

                outcome: UpsertOutcome
                if row is None:
                    cur.execute(
                        """
                        INSERT INTO fara_registrations
                        (agent_name, agent_address, foreign_principal, country,
                         registration_date, total_compensation, latest_period_start,
                         latest_period_end, services_description, status, document_urls)
                        VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                        """,
                        (
                            registration.agent_name,
                            registration.agent_address,
                            registration.foreign_principal,
                            registration.country,
                            registration.registration_date,
                            registration.total_compensation,
                            registration.latest_period_start,
                            registration.latest_period_end,
                            registration.services_description,
                            registration.status,
                            list(dict.fromkeys(registration.document_urls)),
                        ),
                    )
                    outcome = "created"
                else:
                    urls = list(
                        dict.fromkeys([*(row["document_urls"] or []), *registration.document_urls])
                    )
                    cur.execute(
                        """
                        UPDATE fara_registrations
                        SET agent_address = %s,
                            country = %s,
                            registration_date = %s,
                            total_compensation = %s,
                            latest_period_start = %s,
                            latest_period_end = %s,
                            services_description = %s,
                            status = %s,
                            document_urls = %s,
                            updated_at = NOW()
                        WHERE id = %s
                        """,
                        (
                            registration.agent_address,
                            registration.country,
                            registration.registration_date,
                            registration.total_compensation,
                            registration.latest_period_start,
                            registration.latest_period_end,
                            registration.services_description,
                            registration.status,
                            urls,
                            row["id"],
                        ),
                    )
                    outcome = "updated"
            conn.commit()
        return outcome

    def find_by_key(
        self, agent_name: str, foreign_principal: str
    ) -> RegistrationRecord | None:
        """Find a registration by its business key."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_REGISTRATION_COLUMNS}
                    FROM fara_registrations
                    WHERE agent_name = %s AND foreign_principal = %s
                    """,
                    (agent_name, foreign_principal),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return _to_record(row)

    def list_registrations(self) -> list[RegistrationRecord]:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_REGISTRATION_COLUMNS}
                    FROM fara_registrations
                    ORDER BY agent_name, foreign_principal
                    """
                )
                rows = cur.fetchall()
        return [_to_record(row) for row in rows]

    def agents_by_country(self, country: str) -> list[RegistrationRecord]:
        """Active registrations for one country, newest registration first."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_REGISTRATION_COLUMNS}
                    FROM fara_registrations
                    WHERE country = %s AND status = 'active'
                    ORDER BY registration_date DESC NULLS LAST, agent_name
                    """,
                    (country,),
                )
                rows = cur.fetchall()
        return [_to_record(row) for row in rows]

    def country_summary(self) -> list[CountrySummaryRow]:
        """Per-country totals over active registrations, biggest spend first."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT country, agent_count, total_spending, last_updated
                    FROM country_summary
                    ORDER BY total_spending DESC, country
                    """
                )
                rows = cur.fetchall()
        return [
            CountrySummaryRow(
                country=row["country"],
                agent_count=int(row["agent_count"]),
                total_spending=Decimal(row["total_spending"] or 0),
                last_updated=row["last_updated"],
            )
            for row in rows
        ]

    def count(self) -> int:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT COUNT(*) FROM fara_registrations")
                row = cur.fetchone()
        return int(row[0]) if row is not None else 0


def _to_record(row: dict[str, Any]) -> RegistrationRecord:
    return RegistrationRecord(
        id=row["id"],
        agent_name=row["agent_name"],
        agent_address=row["agent_address"],
        foreign_principal=row["foreign_principal"],
        country=row["country"],
        registration_date=row["registration_date"],
        total_compensation=Decimal(row["total_compensation"] or 0),
        latest_period_start=row["latest_period_start"],
        latest_period_end=row["latest_period_end"],
        services_description=row["services_description"],
        status=row["status"],
        document_urls=list(row["document_urls"] or []),
        inserted_at=row["inserted_at"],
        updated_at=row["updated_at"],
    )
