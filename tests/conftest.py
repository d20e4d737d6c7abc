import io
from dataclasses import replace
from datetime import date
from pathlib import Path

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from fara_tracker.ingestion.models import Registration
from fara_tracker.manifest.models import DocumentRecord


def _render_pdf(pages: list[list[str]]) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for lines in pages:
        y = 720
        for line in lines:
            c.drawString(72, y, line)
            y -= 16
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_path(tmp_path: Path) -> Path:
    """A single-page PDF with known text content."""
    path = tmp_path / "sample.pdf"
    path.write_bytes(_render_pdf([["Hello PDF World"]]))
    return path


@pytest.fixture()
def multi_page_pdf_path(tmp_path: Path) -> Path:
    """A two-page PDF with known text on each page."""
    path = tmp_path / "multi.pdf"
    path.write_bytes(_render_pdf([["Page one content"], ["Page two content"]]))
    return path


@pytest.fixture()
def empty_pdf_path(tmp_path: Path) -> Path:
    """A valid PDF with a blank page."""
    path = tmp_path / "empty.pdf"
    path.write_bytes(_render_pdf([[]]))
    return path


@pytest.fixture()
def exhibit_document() -> DocumentRecord:
    return DocumentRecord(
        date_stamped=date(2024, 3, 15),
        registrant_name="Acme LLP",
        registration_number="7001",
        document_type="Exhibit AB",
        foreign_principal_name="Province of Ontario",
        foreign_principal_country="CANADA",
        url="https://efile.fara.gov/docs/7001-Exhibit-AB-20240315-1.pdf",
    )


class InMemoryRegistrationRepository:
    """Stores registrations keyed like the fara_registrations unique index."""

    def __init__(self) -> None:
        self.rows: dict[tuple[str, str], Registration] = {}

    def upsert(self, registration: Registration) -> str:
        key = (registration.agent_name, registration.foreign_principal)
        existing = self.rows.get(key)
        if existing is None:
            self.rows[key] = registration
            return "created"
        urls = list(dict.fromkeys([*existing.document_urls, *registration.document_urls]))
        self.rows[key] = replace(registration, document_urls=urls)
        return "updated"


@pytest.fixture()
def memory_repository() -> InMemoryRegistrationRepository:
    return InMemoryRegistrationRepository()
