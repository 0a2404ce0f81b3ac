class PdfError(Exception):
    """Base exception for all PDF-related errors."""


class PdfExtractionError(PdfError):
    """Raised when the text layer of a PDF cannot be extracted."""


class PdfPageError(PdfError):
    """Raised when a PDF cannot be opened or a page cannot be copied out of it."""
