"""Validates the parsed provider response and builds typed fields."""

from typing import Any

from docintake.extraction.exceptions import ExtractionValidationError
from docintake.extraction.models import (
    FIELD_CATEGORIES,
    VALIDATION_STATUSES,
    ConfidenceSummary,
    ExtractedField,
    ExtractionResult,
)

_MAX_FIELDS = 200
HIGH_CONFIDENCE = 0.8
MEDIUM_CONFIDENCE = 0.6


def validate_and_build(data: dict[str, Any], default_document_type: str) -> ExtractionResult:
    """Validate raw parsed JSON and build an ExtractionResult.

    Raises:
        ExtractionValidationError: on any validation failure.
    """
    document_type = data.get("document_type") or default_document_type
    if not isinstance(document_type, str):
        raise ExtractionValidationError("'document_type' must be a string")
    fields = _build_fields(data.get("extracted_fields"))
    notes = _build_notes(data.get("extraction_notes"))
    return ExtractionResult(
        document_type=document_type,
        extracted_fields=fields,
        confidence_summary=summarize_confidence(fields),
        extraction_notes=notes,
    )


def summarize_confidence(fields: list[ExtractedField]) -> ConfidenceSummary:
    high = sum(1 for f in fields if f.confidence_score >= HIGH_CONFIDENCE)
    medium = sum(1 for f in fields if MEDIUM_CONFIDENCE <= f.confidence_score < HIGH_CONFIDENCE)
    overall = sum(f.confidence_score for f in fields) / len(fields) if fields else 0.0
    return ConfidenceSummary(
        high_confidence=high,
        medium_confidence=medium,
        low_confidence=len(fields) - high - medium,
        overall_confidence=overall,
    )


def _build_fields(raw: Any) -> list[ExtractedField]:
    if not isinstance(raw, list):
        raise ExtractionValidationError("'extracted_fields' must be a list")
    if len(raw) > _MAX_FIELDS:
        raise ExtractionValidationError(f"Too many fields: {len(raw)} (max {_MAX_FIELDS})")
    return [_build_field(item, i) for i, item in enumerate(raw)]


def _build_field(raw: Any, index: int) -> ExtractedField:
    if not isinstance(raw, dict):
        raise ExtractionValidationError(f"Field at index {index} must be an object")

    name = raw.get("field_name")
    if not name or not isinstance(name, str):
        raise ExtractionValidationError(
            f"Field at index {index}: 'field_name' must be a non-empty string"
        )

    value = raw.get("field_value")
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ExtractionValidationError(f"Field '{name}': 'field_value' must be a string")

    confidence = raw.get("confidence_score")
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        raise ExtractionValidationError(f"Field '{name}': 'confidence_score' must be a number")
    if not 0.0 <= confidence <= 1.0:
        raise ExtractionValidationError(
            f"Field '{name}': 'confidence_score' must be between 0 and 1, got {confidence}"
        )

    category = raw.get("field_category")
    if category not in FIELD_CATEGORIES:
        raise ExtractionValidationError(
            f"Field '{name}': 'field_category' must be one of "
            f"{sorted(FIELD_CATEGORIES)}, got {category!r}"
        )

    status = raw.get("validation_status") or "pending"
    if status not in VALIDATION_STATUSES:
        raise ExtractionValidationError(
            f"Field '{name}': 'validation_status' must be one of "
            f"{sorted(VALIDATION_STATUSES)}, got {status!r}"
        )

    source_text = raw.get("source_text")
    if source_text is not None and not isinstance(source_text, str):
        raise ExtractionValidationError(f"Field '{name}': 'source_text' must be a string or null")

    return ExtractedField(
        field_name=name,
        field_value=str(value),
        confidence_score=float(confidence),
        field_category=category,
        source_text=source_text,
        validation_status=status,
    )


def _build_notes(raw: Any) -> list[str]:
    if raw is None:
        return []
    if not isinstance(raw, list) or not all(isinstance(n, str) for n in raw):
        raise ExtractionValidationError("'extraction_notes' must be a list of strings")
    return list(raw)
