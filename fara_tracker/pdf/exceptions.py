class PdfExtractionError(Exception):
    """Raised when a PDF extraction strategy cannot produce text."""
