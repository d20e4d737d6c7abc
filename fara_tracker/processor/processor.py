from collections.abc import Sequence

from fara_tracker.config.settings import Settings
from fara_tracker.database.repositories.registration_repository import (
    RegistrationRepository,
)
from fara_tracker.extraction.base import BaseExtractor
from fara_tracker.extraction.factory import ExtractorFactory
from fara_tracker.extraction.response_parser import build_fallback_result
from fara_tracker.ingestion.ingestor import RegistrationIngestor
from fara_tracker.ingestion.models import ProcessedDocument
from fara_tracker.logging.logger import Log
from fara_tracker.manifest.models import DocumentRecord
from fara_tracker.pdf.factory import PdfExtractorFactory
from fara_tracker.pdf.text_extractor import TextExtractor
from fara_tracker.processor.models import RunSummary
from fara_tracker.processor.pdf_downloader import PdfDownloader, RateLimiter
from fara_tracker.processor.pipeline import PipelineContext, PipelineStep
from fara_tracker.processor.steps import DownloadStep, ExtractFactsStep, ExtractTextStep


class Processor:
    """Orchestrates the ingestion pipeline for a batch of selected filings.

    Pipeline per document: download -> extract text -> extract facts.
    Results for the whole batch are then aggregated and stored.
    """

    def __init__(
        self,
        downloader: PdfDownloader,
        text_extractor: TextExtractor,
        extractor: BaseExtractor,
        ingestor: RegistrationIngestor,
    ) -> None:
        self._downloader = downloader
        self._extractor = extractor
        self._ingestor = ingestor
        self._steps: list[PipelineStep] = [
            DownloadStep(downloader),
            ExtractTextStep(text_extractor),
            ExtractFactsStep(extractor),
        ]

    def process_document(self, document: DocumentRecord) -> ProcessedDocument:
        """Run every step for one document; never raises."""
        context = PipelineContext(document=document)
        try:
            for step in self._steps:
                context = step.run(context)
        except Exception as exc:  # noqa: BLE001
            Log.exception(f"Unexpected error processing {document.url}: {exc}")
            context.result = build_fallback_result(document, f"unexpected error: {exc}")

        result = context.result
        if result is None:
            result = build_fallback_result(document, "no extraction result")
        if result.used_fallback:
            Log.warning(f"Fallback for {document.url}: {result.fallback_reason}")
        else:
            Log.info(f"Processed {document.url}")
        return ProcessedDocument(document=document, result=result, local_path=context.local_path)

    def run(self, documents: Sequence[DocumentRecord]) -> RunSummary:
        """Process the documents in order, then store the aggregated registrations."""
        summary = RunSummary(selected=len(documents))
        processed: list[ProcessedDocument] = []
        for index, document in enumerate(documents, start=1):
            Log.info(
                f"[{index}/{len(documents)}] {document.registrant_name}: {document.url}"
            )
            item = self.process_document(document)
            processed.append(item)
            summary.processed += 1
            if item.result.used_fallback:
                summary.fallbacks += 1

        ingest_summary = self._ingestor.ingest(processed)
        summary.stored = ingest_summary.stored
        summary.failed = ingest_summary.failed

        unrecognized = self._extractor.unrecognized_periods
        if unrecognized:
            Log.debug(f"Unrecognized compensation periods: {dict(unrecognized)}")
        Log.info(
            f"Run complete: {summary.selected} selected, {summary.processed} processed, "
            f"{summary.fallbacks} fallbacks, {summary.stored} stored, {summary.failed} failed"
        )
        return summary

    def close(self) -> None:
        self._downloader.close()


def build_processor(settings: Settings) -> Processor:
    """Build a Processor with all required adapters."""
    downloader = PdfDownloader(
        downloads_dir=settings.downloads_dir,
        rate_limiter=RateLimiter(settings.download_rate_limit_seconds),
        user_agent=settings.download_user_agent,
        timeout_seconds=settings.download_timeout_seconds,
    )
    return Processor(
        downloader=downloader,
        text_extractor=PdfExtractorFactory.create(settings),
        extractor=ExtractorFactory.create(settings),
        ingestor=RegistrationIngestor(RegistrationRepository()),
    )
