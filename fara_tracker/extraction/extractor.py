"""AI-powered extraction of registration facts from filing text."""

from collections import Counter
from pathlib import Path

from fara_tracker.extraction.base import BaseExtractor
from fara_tracker.extraction.client_base import BaseExtractionClient
from fara_tracker.extraction.compensation import CompensationNormalizer
from fara_tracker.extraction.exceptions import ExtractionError
from fara_tracker.extraction.models import ExtractionResult
from fara_tracker.extraction.prompt_loader import (
    load_document_prompt_template,
    load_system_prompt,
)
from fara_tracker.extraction.response_parser import (
    build_fallback_result,
    build_result,
    extract_json_object,
)
from fara_tracker.logging.logger import Log
from fara_tracker.manifest.models import DocumentRecord


class Extractor(BaseExtractor):
    """Extracts filing facts with a chat model, falling back to manifest metadata."""

    def __init__(
        self,
        *,
        client: BaseExtractionClient,
        model: str,
        temperature: float = 0.1,
        max_tokens: int = 2000,
        min_text_bytes: int = 100,
        system_prompt_path: Path | None = None,
        document_prompt_path: Path | None = None,
        normalizer: CompensationNormalizer | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        if self._temperature != temperature:
            Log.warning(
                f"Temperature {temperature} is outside [0.0, 0.2], using {self._temperature}"
            )
        self._max_tokens = max_tokens
        self._min_text_bytes = min_text_bytes
        self._system_prompt = load_system_prompt(system_prompt_path)
        self._document_prompt = load_document_prompt_template(document_prompt_path)
        self._normalizer = normalizer or CompensationNormalizer()

    @property
    def unrecognized_periods(self) -> Counter[str]:
        return self._normalizer.unrecognized_periods

    def extract(self, text: str | None, document: DocumentRecord) -> ExtractionResult:
        if text is None or len(text.encode("utf-8")) <= self._min_text_bytes:
            Log.warning(
                f"Text too short for {document.url or document.registrant_name}, "
                "using metadata fallback"
            )
            return build_fallback_result(document, "text too short")

        prompt = self._build_prompt(text, document)
        Log.debug(f"Extraction prompt ({len(prompt)} chars) for {document.url}")

        try:
            raw_response = self._call_ai(prompt)
        except ExtractionError as exc:
            Log.error(f"Model call failed for {document.url}: {exc}")
            return build_fallback_result(document, f"model call failed: {exc}")
        Log.debug(f"AI raw response:\n{raw_response}")

        try:
            data = extract_json_object(raw_response)
        except ExtractionError as exc:
            Log.warning(f"Unparseable model response for {document.url}: {exc}")
            return build_fallback_result(document, f"unparseable response: {exc}")

        result = build_result(data, document, self._normalizer)
        Log.info(
            f"Extracted {result.agent_name} -> {result.foreign_principal} "
            f"({result.country}), compensation {result.total_compensation}"
        )
        return result

    def _build_prompt(self, text: str, document: DocumentRecord) -> str:
        return self._document_prompt.format(
            document_type=document.document_type,
            registrant_name=document.registrant_name,
            foreign_principal_name=document.foreign_principal_name,
            foreign_principal_country=document.foreign_principal_country,
            date_stamped=document.date_stamped.isoformat(),
            document_text=text,
        )

    def _call_ai(self, prompt: str) -> str:
        return self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
        )
