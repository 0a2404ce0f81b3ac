from dataclasses import dataclass


class ProcessingStatus:
    """Values of the processing_status column shared by documents and sessions."""

    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    PAUSED = "paused"


@dataclass(frozen=True)
class Document:
    """Domain model for an uploaded document (subset of DB columns)."""

    id: str
    user_id: str
    filename: str
    file_path: str
    file_type: str
    file_size: int
    document_category: str = "other"
    upload_status: str = "completed"
    processing_status: str = ProcessingStatus.QUEUED


@dataclass(frozen=True)
class ProcessingOutcome:
    """Terminal result of one process_document() call."""

    document_id: str
    session_id: str
    status: str
    error_message: str | None = None
    transcript_text: str = ""
    transcript_confidence: float = 0.0
    fields_saved: int = 0

    @property
    def succeeded(self) -> bool:
        return self.status == ProcessingStatus.COMPLETED
