from abc import ABC, abstractmethod
from dataclasses import dataclass

from docintake.logging.logger import Log
from docintake.ocr.backend_base import BaseOcrBackend
from docintake.ocr.exceptions import OcrBackendError, OcrError
from docintake.ocr.models import (
    Block,
    BlockType,
    KeyValuePair,
    Transcript,
    TranscriptSource,
)

# Fixed transcript confidence for any successful form analysis. Per-entity
# confidences only feed the key/value pairs.
FORM_ANALYSIS_CONFIDENCE = 0.9

_KEY = "KEY"
_VALUE = "VALUE"
_CHILD = "CHILD"


@dataclass(frozen=True)
class StrategyOutcome:
    """Result of one strategy attempt: a transcript, an error, or neither.

    Neither means the strategy did not apply (e.g. no text blocks found).
    """

    strategy: str
    transcript: Transcript | None = None
    error: OcrError | None = None

    @property
    def succeeded(self) -> bool:
        return self.transcript is not None


class OcrStrategy(ABC):
    name: str = ""

    def __init__(self, backend: BaseOcrBackend) -> None:
        self._backend = backend

    def attempt(self, data: bytes) -> StrategyOutcome:
        try:
            transcript = self._run(data)
        except OcrError as exc:
            return StrategyOutcome(strategy=self.name, error=exc)
        except Exception as exc:
            Log.exception(f"OCR strategy {self.name} raised unexpectedly: {exc}")
            error = OcrBackendError(f"{exc.__class__.__name__}: {exc}")
            error.__cause__ = exc
            return StrategyOutcome(strategy=self.name, error=error)
        return StrategyOutcome(strategy=self.name, transcript=transcript)

    @abstractmethod
    def _run(self, data: bytes) -> Transcript | None:
        raise NotImplementedError


class FormAnalysisStrategy(OcrStrategy):
    """Lines plus key/value pairs from a single structured analysis call."""

    name = TranscriptSource.FORM_ANALYSIS

    def _run(self, data: bytes) -> Transcript | None:
        blocks = self._backend.analyze_forms(data)
        lines = [b for b in blocks if b.block_type == BlockType.LINE]
        if not lines:
            return None
        return Transcript(
            text=" ".join(line.text or "" for line in lines),
            confidence=FORM_ANALYSIS_CONFIDENCE,
            key_value_pairs=tuple(extract_key_value_pairs(blocks)),
            source=TranscriptSource.FORM_ANALYSIS,
        )


class TextDetectionStrategy(OcrStrategy):
    """Line text only; confidence is the mean line confidence."""

    name = TranscriptSource.TEXT_DETECTION

    def _run(self, data: bytes) -> Transcript | None:
        lines = self._backend.detect_text(data)
        if not lines:
            return Transcript.empty()
        return Transcript(
            text=" ".join(line.text for line in lines),
            confidence=sum(line.confidence for line in lines) / len(lines),
            source=TranscriptSource.TEXT_DETECTION,
        )


def extract_key_value_pairs(blocks: list[Block]) -> list[KeyValuePair]:
    """Match KEY entities to VALUE entities through the relationship graph.

    The pair confidence is the minimum of the two entity confidences.
    """
    by_id = {block.id: block for block in blocks}
    entities = [b for b in blocks if b.block_type == BlockType.KEY_VALUE_SET]
    values = [b for b in entities if _VALUE in b.entity_types]

    pairs = []
    for key in entities:
        if _KEY not in key.entity_types:
            continue
        value = _find_value(key, by_id, values)
        if value is None:
            continue
        pairs.append(
            KeyValuePair(
                key=_entity_text(key, by_id),
                value=_entity_text(value, by_id),
                confidence=min(key.confidence, value.confidence),
            )
        )
    return pairs


def _find_value(key: Block, by_id: dict[str, Block], values: list[Block]) -> Block | None:
    for value_id in key.related_ids(_VALUE):
        candidate = by_id.get(value_id)
        if candidate is not None and _VALUE in candidate.entity_types:
            return candidate
    # some responses only link the value back to its key
    for candidate in values:
        if key.id in candidate.related_ids(_VALUE):
            return candidate
    return None


def _entity_text(block: Block, by_id: dict[str, Block]) -> str:
    if block.text:
        return block.text
    words = []
    for child_id in block.related_ids(_CHILD):
        child = by_id.get(child_id)
        if child is not None and child.block_type == BlockType.WORD and child.text:
            words.append(child.text)
    return " ".join(words)
