from fara_tracker.extraction.base import BaseExtractor
from fara_tracker.extraction.extractor import Extractor
from fara_tracker.extraction.factory import ExtractorFactory

__all__ = ["BaseExtractor", "Extractor", "ExtractorFactory"]
