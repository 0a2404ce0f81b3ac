from abc import ABC, abstractmethod


class BasePdfExtractor(ABC):
    """Contract for all PDF text-layer extraction adapters."""

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> str:
        """Extract the embedded text layer from PDF bytes.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            Extracted text as a single normalized string. Empty for scanned
            documents without a text layer.

        Raises:
            PdfExtractionError: if extraction fails for any reason.
        """


class BasePdfPageUtils(ABC):
    """Contract for splitting a PDF into standalone single-page documents."""

    @abstractmethod
    def page_count(self, pdf_bytes: bytes) -> int:
        """Return the number of pages.

        Raises:
            PdfPageError: if the bytes are not a readable PDF.
        """

    @abstractmethod
    def extract_page(self, pdf_bytes: bytes, index: int) -> bytes:
        """Copy page ``index`` (zero-based) into a new one-page PDF.

        Raises:
            PdfPageError: if the page cannot be copied.
        """
