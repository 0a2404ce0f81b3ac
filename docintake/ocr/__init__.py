from docintake.ocr.engine import OcrEngine
from docintake.ocr.exceptions import (
    AllPagesFailedError,
    CorruptDocumentError,
    DocumentTooLargeError,
    EmptyDocumentError,
    OcrBackendError,
    OcrError,
    UnsupportedFormatError,
)
from docintake.ocr.models import KeyValuePair, PageResults, Transcript
from docintake.ocr.page_splitter import PageSplitter
from docintake.ocr.service import OcrService

__all__ = [
    "AllPagesFailedError",
    "CorruptDocumentError",
    "DocumentTooLargeError",
    "EmptyDocumentError",
    "KeyValuePair",
    "OcrBackendError",
    "OcrEngine",
    "OcrError",
    "OcrService",
    "PageResults",
    "PageSplitter",
    "Transcript",
    "UnsupportedFormatError",
]
