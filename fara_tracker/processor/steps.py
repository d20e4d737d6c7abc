from fara_tracker.extraction.base import BaseExtractor
from fara_tracker.extraction.response_parser import build_fallback_result
from fara_tracker.logging.logger import Log
from fara_tracker.pdf.text_extractor import TextExtractor
from fara_tracker.processor.exceptions import DownloadError
from fara_tracker.processor.pdf_downloader import PdfDownloader
from fara_tracker.processor.pipeline import PipelineContext, PipelineStep


class DownloadStep(PipelineStep):
    def __init__(self, downloader: PdfDownloader) -> None:
        self._downloader = downloader

    def run(self, context: PipelineContext) -> PipelineContext:
        try:
            context.local_path = self._downloader.fetch(context.document)
        except DownloadError as exc:
            context.error_message = str(exc)
            Log.warning(f"Download failed, continuing without text: {exc}")
        return context


class ExtractTextStep(PipelineStep):
    def __init__(self, text_extractor: TextExtractor) -> None:
        self._text_extractor = text_extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.failed or context.local_path is None:
            return context
        context.extracted_text = self._text_extractor.extract_text(context.local_path)
        size = len(context.extracted_text) if context.extracted_text else 0
        Log.info(f"Extracted {size} chars from {context.local_path.name}")
        return context


class ExtractFactsStep(PipelineStep):
    def __init__(self, extractor: BaseExtractor) -> None:
        self._extractor = extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.failed:
            context.result = build_fallback_result(
                context.document, f"download failed: {context.error_message}"
            )
            return context
        context.result = self._extractor.extract(context.extracted_text, context.document)
        return context
