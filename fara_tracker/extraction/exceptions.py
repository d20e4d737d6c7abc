class ExtractionError(Exception):
    """Raised when model-based extraction fails."""


class ExtractionNetworkError(ExtractionError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class ExtractionParseError(ExtractionError):
    """Raised when the model response does not contain a usable JSON object."""
