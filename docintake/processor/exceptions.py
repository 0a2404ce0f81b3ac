class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class DocumentNotFoundError(ProcessorError):
    """Raised when a document cannot be found in the database."""


class ConflictError(ProcessorError):
    """Raised when a document already has an active processing session."""


class PersistenceError(ProcessorError):
    """Raised when a record store write fails mid-run."""


class NoReadableTextError(ProcessorError):
    """Raised when OCR finished but produced no usable text."""


class ProcessingCancelledError(ProcessorError):
    """Raised when a cancellation token is triggered during processing."""
