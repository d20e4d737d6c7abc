class ManifestError(Exception):
    """Base exception for manifest reading errors."""


class ManifestNotFoundError(ManifestError):
    """Raised when the manifest file does not exist or cannot be read."""
