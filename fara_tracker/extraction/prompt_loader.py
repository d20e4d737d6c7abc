from pathlib import Path

from fara_tracker.extraction.exceptions import ExtractionError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_system_prompt(path: Path | None = None) -> str:
    """Load the system prompt that fixes the output JSON shape.

    Args:
        path: Path to the prompt file.
              Defaults to the bundled system_prompt.txt.

    Raises:
        ExtractionError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "system_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ExtractionError(f"Failed to load system prompt: {exc}") from exc


def load_document_prompt_template(path: Path | None = None) -> str:
    """Load the per-document user prompt template.

    Placeholders: ``{document_type}``, ``{registrant_name}``,
    ``{foreign_principal_name}``, ``{foreign_principal_country}``,
    ``{date_stamped}``, ``{document_text}``.

    Raises:
        ExtractionError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "document_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ExtractionError(f"Failed to load document prompt: {exc}") from exc
