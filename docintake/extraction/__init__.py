from docintake.extraction.base import BaseExtractor
from docintake.extraction.extractor import Extractor
from docintake.extraction.factory import ExtractorFactory

__all__ = ["BaseExtractor", "Extractor", "ExtractorFactory"]
