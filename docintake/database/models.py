from dataclasses import dataclass
from datetime import datetime


@dataclass
class ProcessingSessionRecord:
    """Represents a row from the processing_sessions table."""

    id: str
    document_id: str
    status: str
    started_at: datetime | None = None
    completed_at: datetime | None = None
    error_message: str | None = None
    ocr_text: str | None = None
    created_at: datetime | None = None


@dataclass
class ExtractedDataRecord:
    """Represents a row from the extracted_data table."""

    id: str
    document_id: str
    field_name: str
    field_value: str | None
    confidence_score: float
    field_category: str
    validation_status: str = "pending"
    created_at: datetime | None = None
