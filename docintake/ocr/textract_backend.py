from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from docintake.logging.logger import Log
from docintake.ocr.backend_base import BaseOcrBackend
from docintake.ocr.exceptions import (
    CorruptDocumentError,
    DocumentTooLargeError,
    OcrBackendError,
    UnsupportedFormatError,
)
from docintake.ocr.models import Block, BlockType, BoundingBox, Relationship, TextLine

DEFAULT_MAX_DOCUMENT_BYTES = 5 * 1024 * 1024
VALID_FEATURE_TYPES = ("FORMS", "TABLES", "SIGNATURES", "LAYOUT")

_ERROR_MAP: dict[str, type[Exception]] = {
    "UnsupportedDocumentException": UnsupportedFormatError,
    "DocumentTooLargeException": DocumentTooLargeError,
    "BadDocumentException": CorruptDocumentError,
}


class TextractBackend(BaseOcrBackend):
    """AWS Textract synchronous API (DetectDocumentText / AnalyzeDocument)."""

    def __init__(
        self,
        client: Any,
        feature_types: list[str] | None = None,
        max_document_bytes: int = DEFAULT_MAX_DOCUMENT_BYTES,
    ) -> None:
        features = [f.upper() for f in (feature_types or ["FORMS", "TABLES"])]
        invalid = [f for f in features if f not in VALID_FEATURE_TYPES]
        if invalid:
            raise ValueError(
                f"Invalid Textract feature(s): {invalid}. Valid features: {list(VALID_FEATURE_TYPES)}"
            )
        self._client = client
        self._feature_types = features
        self._max_document_bytes = max_document_bytes

    def detect_text(self, data: bytes) -> list[TextLine]:
        self._check_size(data)
        response = self._call("detect_document_text", Document={"Bytes": data})
        return [
            TextLine(
                text=raw.get("Text", ""),
                confidence=raw.get("Confidence", 0.0) / 100,
                bounding_box=_bounding_box(raw),
            )
            for raw in response.get("Blocks", [])
            if raw.get("BlockType") == BlockType.LINE
        ]

    def analyze_forms(self, data: bytes) -> list[Block]:
        self._check_size(data)
        response = self._call(
            "analyze_document",
            Document={"Bytes": data},
            FeatureTypes=self._feature_types,
        )
        return [_to_block(raw) for raw in response.get("Blocks", [])]

    def _check_size(self, data: bytes) -> None:
        if len(data) > self._max_document_bytes:
            limit_mb = self._max_document_bytes / (1024 * 1024)
            raise DocumentTooLargeError(
                f"Document is too large. Maximum size for synchronous OCR is {limit_mb:g}MB."
            )

    def _call(self, operation: str, **kwargs: Any) -> dict[str, Any]:
        try:
            return getattr(self._client, operation)(**kwargs)
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "")
            error_cls = _ERROR_MAP.get(code)
            if error_cls is not None:
                raise error_cls() from exc
            Log.warning(f"Textract {operation} failed with {code or 'unknown error'}")
            raise OcrBackendError(f"Textract {operation} failed: {code or exc}") from exc
        except BotoCoreError as exc:
            raise OcrBackendError(f"Textract {operation} failed: {exc}") from exc


def _bounding_box(raw: dict[str, Any]) -> BoundingBox | None:
    box = raw.get("Geometry", {}).get("BoundingBox")
    if not box:
        return None
    return BoundingBox(
        left=box.get("Left", 0.0),
        top=box.get("Top", 0.0),
        width=box.get("Width", 0.0),
        height=box.get("Height", 0.0),
    )


def _to_block(raw: dict[str, Any]) -> Block:
    return Block(
        id=raw["Id"],
        block_type=raw.get("BlockType", ""),
        text=raw.get("Text"),
        confidence=raw.get("Confidence", 0.0) / 100,
        entity_types=tuple(raw.get("EntityTypes", [])),
        relationships=tuple(
            Relationship(type=rel.get("Type", ""), ids=tuple(rel.get("Ids", [])))
            for rel in raw.get("Relationships", [])
        ),
    )
