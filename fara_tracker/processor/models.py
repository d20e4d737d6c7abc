from dataclasses import dataclass


@dataclass
class RunSummary:
    """Counts reported at the end of one ingestion run."""

    selected: int = 0
    processed: int = 0
    fallbacks: int = 0
    stored: int = 0
    failed: int = 0
