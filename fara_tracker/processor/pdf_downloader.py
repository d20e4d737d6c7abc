import re
import time
from collections.abc import Callable
from pathlib import Path, PurePosixPath
from urllib.parse import urlparse

import httpx

from fara_tracker.logging.logger import Log
from fara_tracker.manifest.models import DocumentRecord
from fara_tracker.processor.exceptions import DownloadError

DEFAULT_USER_AGENT = "FARA-Transparency-Tool/1.0 (Public Interest Research)"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.\-]")
_UNDERSCORE_RUNS = re.compile(r"_+")


def sanitize_filename(name: str) -> str:
    """Replace characters outside [A-Za-z0-9_.-] with '_' and collapse repeats."""
    return _UNDERSCORE_RUNS.sub("_", _UNSAFE_CHARS.sub("_", name))


class RateLimiter:
    """Enforces a minimum interval between consecutive calls to ``wait``."""

    def __init__(
        self,
        min_interval_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._min_interval = min_interval_seconds
        self._clock = clock
        self._sleep = sleep
        self._last_call: float | None = None

    def wait(self) -> None:
        if self._last_call is not None:
            remaining = self._min_interval - (self._clock() - self._last_call)
            if remaining > 0:
                self._sleep(remaining)
        self._last_call = self._clock()


class PdfDownloader:
    """Fetches filings by URL into a per-agent cache directory."""

    def __init__(
        self,
        downloads_dir: Path,
        client: httpx.Client | None = None,
        rate_limiter: RateLimiter | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout_seconds: float = 30,
    ) -> None:
        self._downloads_dir = downloads_dir
        self._client = client or httpx.Client()
        self._rate_limiter = rate_limiter or RateLimiter(2.0)
        self._headers = {"User-Agent": user_agent, "Accept": "application/pdf,*/*"}
        self._timeout = timeout_seconds

    def cache_path(self, document: DocumentRecord) -> Path:
        """Path the document is stored at: <downloads_dir>/<agent>/<file name>."""
        filename = PurePosixPath(urlparse(document.url).path).name or "document.pdf"
        return (
            self._downloads_dir
            / sanitize_filename(document.registrant_name or "unknown")
            / sanitize_filename(filename)
        )

    def fetch(self, document: DocumentRecord) -> Path:
        """Return the local path of the document, downloading it if needed.

        Raises:
            DownloadError: on transport failure, non-200 status, or a body
                that is not a PDF.
        """
        path = self.cache_path(document)
        if path.exists():
            Log.debug(f"Using cached {path}")
            return path

        self._rate_limiter.wait()
        Log.info(f"Downloading {document.url}")
        try:
            response = self._client.get(
                document.url,
                headers=self._headers,
                timeout=self._timeout,
                follow_redirects=True,
            )
        except httpx.HTTPError as exc:
            raise DownloadError(f"Request for {document.url} failed: {exc}") from exc

        if response.status_code != 200:
            raise DownloadError(f"HTTP {response.status_code} for {document.url}")
        content = response.content
        if not content.startswith(b"%PDF"):
            raise DownloadError(f"Response for {document.url} is not a PDF")

        path.parent.mkdir(parents=True, exist_ok=True)
        partial = path.with_name(path.name + ".part")
        partial.write_bytes(content)
        partial.replace(path)
        Log.info(f"Saved {len(content)} bytes to {path}")
        return path

    def close(self) -> None:
        self._client.close()
