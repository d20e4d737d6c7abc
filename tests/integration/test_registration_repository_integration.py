from datetime import date
from decimal import Decimal
from typing import Any

import psycopg
import pytest

from fara_tracker.database.repositories.registration_repository import (
    RegistrationRepository,
)
from fara_tracker.ingestion.models import Registration


def _registration(**overrides: Any) -> Registration:
    fields: dict[str, Any] = {
        "agent_name": "Acme LLP",
        "foreign_principal": "Province of Ontario",
        "country": "CANADA",
        "registration_date": date(2024, 3, 15),
        "total_compensation": Decimal("30000"),
        "document_urls": ["https://efile.fara.gov/docs/7001-Exhibit-AB-1.pdf"],
    }
    fields.update(overrides)
    return Registration(**fields)


@pytest.mark.integration
class TestRegistrationRepositoryUpsert:
    def test_insert_then_find(self, db_conn: psycopg.Connection[Any]) -> None:
        repo = RegistrationRepository()

        assert repo.upsert(_registration()) == "created"

        record = repo.find_by_key("Acme LLP", "Province of Ontario")
        assert record is not None
        assert record.country == "CANADA"
        assert record.total_compensation == Decimal("30000.00")
        assert record.status == "active"
        assert record.inserted_at is not None

    def test_same_key_updates_in_place(self, db_conn: psycopg.Connection[Any]) -> None:
        repo = RegistrationRepository()
        repo.upsert(_registration())

        outcome = repo.upsert(
            _registration(
                total_compensation=Decimal("45000"),
                services_description="Trade advocacy",
                document_urls=[
                    "https://efile.fara.gov/docs/7001-Exhibit-AB-1.pdf",
                    "https://efile.fara.gov/docs/7001-Amendment-2.pdf",
                ],
            )
        )

        assert outcome == "updated"
        assert repo.count() == 1
        record = repo.find_by_key("Acme LLP", "Province of Ontario")
        assert record is not None
        assert record.total_compensation == Decimal("45000.00")
        assert record.services_description == "Trade advocacy"
        assert record.document_urls == [
            "https://efile.fara.gov/docs/7001-Exhibit-AB-1.pdf",
            "https://efile.fara.gov/docs/7001-Amendment-2.pdf",
        ]

    def test_reingesting_same_url_keeps_it_once(self, db_conn: psycopg.Connection[Any]) -> None:
        repo = RegistrationRepository()
        repo.upsert(_registration())
        repo.upsert(_registration())

        record = repo.find_by_key("Acme LLP", "Province of Ontario")
        assert record is not None
        assert record.document_urls == ["https://efile.fara.gov/docs/7001-Exhibit-AB-1.pdf"]

    def test_different_principal_is_separate_row(self, db_conn: psycopg.Connection[Any]) -> None:
        repo = RegistrationRepository()
        repo.upsert(_registration())
        repo.upsert(_registration(foreign_principal="Government of Quebec"))

        assert repo.count() == 2

    def test_negative_compensation_rejected_by_store(
        self, db_conn: psycopg.Connection[Any]
    ) -> None:
        with pytest.raises(psycopg.IntegrityError):
            RegistrationRepository().upsert(_registration(total_compensation=Decimal("-1")))


@pytest.mark.integration
class TestCountrySummaryView:
    def test_groups_active_registrations_by_country(
        self, db_conn: psycopg.Connection[Any]
    ) -> None:
        repo = RegistrationRepository()
        repo.upsert(_registration(total_compensation=Decimal("600000")))
        repo.upsert(
            _registration(foreign_principal="Government of Quebec", total_compensation=Decimal("30000"))
        )
        repo.upsert(
            _registration(
                agent_name="Globex Partners",
                foreign_principal="Ministry of Trade",
                country="JAPAN",
                total_compensation=Decimal("900000"),
            )
        )
        repo.upsert(
            _registration(
                agent_name="Dormant Co",
                foreign_principal="Old Client",
                country="JAPAN",
                total_compensation=Decimal("5000000"),
                status="terminated",
            )
        )

        rows = repo.country_summary()

        assert [(r.country, r.agent_count, r.total_spending) for r in rows] == [
            ("JAPAN", 1, Decimal("900000.00")),
            ("CANADA", 2, Decimal("630000.00")),
        ]
        assert all(r.last_updated is not None for r in rows)

    def test_agents_by_country_newest_first(self, db_conn: psycopg.Connection[Any]) -> None:
        repo = RegistrationRepository()
        repo.upsert(_registration(agent_name="Older LLP", registration_date=date(2020, 1, 1)))
        repo.upsert(_registration(agent_name="Newer LLP", registration_date=date(2023, 1, 1)))
        repo.upsert(_registration(agent_name="Gone LLP", status="inactive"))

        records = repo.agents_by_country("CANADA")

        assert [r.agent_name for r in records] == ["Newer LLP", "Older LLP"]
