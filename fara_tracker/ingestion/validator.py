"""Store-level checks applied to a registration before it is written."""

from fara_tracker.ingestion.exceptions import RegistrationValidationError
from fara_tracker.ingestion.models import REGISTRATION_STATUSES, Registration


def validate_registration(registration: Registration) -> Registration:
    """Return the registration unchanged if it can be stored.

    Raises:
        RegistrationValidationError: on a blank key field, negative
            compensation, or unknown status.
    """
    for field_name in ("agent_name", "foreign_principal", "country"):
        value = getattr(registration, field_name)
        if not isinstance(value, str) or not value.strip():
            raise RegistrationValidationError(f"'{field_name}' must be a non-empty string")
    if registration.total_compensation < 0:
        raise RegistrationValidationError(
            f"'total_compensation' must be >= 0, got {registration.total_compensation}"
        )
    if registration.status not in REGISTRATION_STATUSES:
        raise RegistrationValidationError(
            f"'status' must be one of {sorted(REGISTRATION_STATUSES)}, "
            f"got {registration.status!r}"
        )
    return registration
