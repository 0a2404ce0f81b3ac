from abc import ABC, abstractmethod

from docintake.extraction.models import ExtractionContext, ExtractionResult


class BaseExtractor(ABC):
    """Contract for all structured extraction adapters."""

    @abstractmethod
    def extract(self, context: ExtractionContext) -> ExtractionResult:
        """Turn a document transcript into typed fields.

        Args:
            context: Transcript plus document metadata (category, media type,
                filename, owning user, document id).

        Returns:
            ExtractionResult with one ExtractedField per value found.

        Raises:
            ExtractionError: on any failure.
        """
