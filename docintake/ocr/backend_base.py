from abc import ABC, abstractmethod

from docintake.ocr.models import Block, TextLine


class BaseOcrBackend(ABC):
    """Contract for OCR services operating on raw document bytes."""

    @abstractmethod
    def detect_text(self, data: bytes) -> list[TextLine]:
        """Detect line-level text only.

        Returns:
            Lines in reading order with confidences in [0, 1].

        Raises:
            UnsupportedFormatError, DocumentTooLargeError, CorruptDocumentError:
                when the backend rejects the input.
            OcrBackendError: for any other backend failure.
        """

    @abstractmethod
    def analyze_forms(self, data: bytes) -> list[Block]:
        """Detect lines, words and key/value entities with their relationships.

        Raises:
            Same as detect_text.
        """
