from dataclasses import dataclass, field

FIELD_CATEGORIES = frozenset(
    {
        "personal",
        "contact",
        "address",
        "education",
        "employment",
        "financial",
        "travel",
        "identification",
    }
)

VALIDATION_STATUSES = frozenset({"pending", "validated", "flagged", "corrected"})


@dataclass(frozen=True)
class ExtractionContext:
    """Everything the extraction service is told about one document."""

    document_category: str
    document_text: str
    file_type: str
    filename: str
    user_id: str
    document_id: str


@dataclass(frozen=True)
class ExtractedField:
    """A single typed value read from the transcript."""

    field_name: str
    field_value: str
    confidence_score: float
    field_category: str
    source_text: str | None = None
    validation_status: str = "pending"


@dataclass(frozen=True)
class ConfidenceSummary:
    high_confidence: int = 0
    medium_confidence: int = 0
    low_confidence: int = 0
    overall_confidence: float = 0.0


@dataclass(frozen=True)
class ExtractionResult:
    """Output of the extraction step."""

    document_type: str
    extracted_fields: list[ExtractedField] = field(default_factory=list)
    confidence_summary: ConfidenceSummary = field(default_factory=ConfidenceSummary)
    extraction_notes: list[str] = field(default_factory=list)
    processing_time_ms: int = 0


@dataclass(frozen=True)
class FieldDefinition:
    name: str
    description: str
    category: str
    examples: list[str] = field(default_factory=list)
    required: bool = False


@dataclass(frozen=True)
class DocumentTemplate:
    """Fields and hints the prompt offers for one document category."""

    name: str
    description: str
    fields: list[FieldDefinition] = field(default_factory=list)
    examples: list[str] = field(default_factory=list)
