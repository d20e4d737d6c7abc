from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DocumentRecord:
    """One manifest row that survived filtering."""

    date_stamped: date
    registrant_name: str
    registration_number: str
    document_type: str
    foreign_principal_name: str
    foreign_principal_country: str
    url: str
