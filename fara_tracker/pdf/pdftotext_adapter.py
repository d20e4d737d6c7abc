import subprocess
from pathlib import Path

from fara_tracker.pdf.base import BasePdfExtractor
from fara_tracker.pdf.exceptions import PdfExtractionError


class PdfToTextAdapter(BasePdfExtractor):
    """Extracts text by running the poppler ``pdftotext`` tool."""

    name = "pdftotext"

    def __init__(self, binary: str = "pdftotext", timeout_seconds: int = 30) -> None:
        self._binary = binary
        self._timeout_seconds = timeout_seconds

    def extract(self, pdf_path: Path) -> str:
        try:
            completed = subprocess.run(
                [self._binary, str(pdf_path), "-"],
                capture_output=True,
                timeout=self._timeout_seconds,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise PdfExtractionError(
                f"pdftotext timed out after {self._timeout_seconds}s"
            ) from exc
        except OSError as exc:
            raise PdfExtractionError(f"pdftotext not available: {exc}") from exc

        if completed.returncode != 0:
            stderr = completed.stderr.decode("utf-8", errors="replace").strip()
            raise PdfExtractionError(
                f"pdftotext exited with status {completed.returncode}: {stderr}"
            )
        return completed.stdout.decode("utf-8", errors="replace")
