class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class DownloadError(ProcessorError):
    """Raised when a filing cannot be fetched or is not a PDF."""
