from finextract.extraction.base import BaseExtractor
from finextract.extraction.exceptions import ExtractionFailure
from finextract.extraction.extractor import Extractor
from finextract.extraction.factory import ExtractorFactory

__all__ = ["BaseExtractor", "ExtractionFailure", "Extractor", "ExtractorFactory"]
