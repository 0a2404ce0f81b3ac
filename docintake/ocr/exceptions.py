class OcrError(Exception):
    """Base exception for OCR failures.

    Subclasses carry a default user-facing message, since each calls for a
    different remedy from the uploader.
    """

    default_message = "OCR processing failed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class UnsupportedFormatError(OcrError):
    """Raised when the media type or byte format cannot be processed."""

    default_message = "Unsupported document format. Supported formats: PDF, JPEG, PNG, TIFF."


class DocumentTooLargeError(OcrError):
    """Raised when the input exceeds the synchronous OCR size ceiling."""

    default_message = "Document is too large. Maximum size for synchronous OCR is 5MB."


class CorruptDocumentError(OcrError):
    """Raised when the input is malformed or unreadable."""

    default_message = "Document is corrupted or unreadable. Please try with a different file."


class EmptyDocumentError(OcrError):
    """Raised when a PDF has no pages."""

    default_message = "PDF has no pages."


class AllPagesFailedError(OcrError):
    """Raised when no page of a split PDF produced text."""

    default_message = "Failed to process any pages of the PDF."


class OcrBackendError(OcrError):
    """Raised for backend transport or service failures (throttling, network)."""
