class IngestionError(Exception):
    """Base exception for storing extraction results."""


class RegistrationValidationError(IngestionError):
    """Raised when an aggregated registration fails required-field or range checks."""
