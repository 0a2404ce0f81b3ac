from unittest.mock import MagicMock

import pytest

from docintake.ocr.backend_base import BaseOcrBackend
from docintake.ocr.exceptions import OcrBackendError
from docintake.ocr.models import Block, Relationship, TextLine, TranscriptSource
from docintake.ocr.strategies import (
    FORM_ANALYSIS_CONFIDENCE,
    FormAnalysisStrategy,
    TextDetectionStrategy,
    extract_key_value_pairs,
)


def _line(block_id: str, text: str, confidence: float = 0.95) -> Block:
    return Block(id=block_id, block_type="LINE", text=text, confidence=confidence)


def _word(block_id: str, text: str) -> Block:
    return Block(id=block_id, block_type="WORD", text=text, confidence=0.9)


def _key(block_id: str, confidence: float, value_id: str | None, child_ids: tuple[str, ...]) -> Block:
    relationships = [Relationship(type="CHILD", ids=child_ids)]
    if value_id is not None:
        relationships.append(Relationship(type="VALUE", ids=(value_id,)))
    return Block(
        id=block_id,
        block_type="KEY_VALUE_SET",
        confidence=confidence,
        entity_types=("KEY",),
        relationships=tuple(relationships),
    )


def _value(block_id: str, confidence: float, child_ids: tuple[str, ...]) -> Block:
    return Block(
        id=block_id,
        block_type="KEY_VALUE_SET",
        confidence=confidence,
        entity_types=("VALUE",),
        relationships=(Relationship(type="CHILD", ids=child_ids),),
    )


def _backend() -> MagicMock:
    return MagicMock(spec=BaseOcrBackend)


class TestExtractKeyValuePairs:
    def test_pair_confidence_is_minimum_not_average(self) -> None:
        blocks = [
            _word("w1", "Surname"),
            _word("w2", "DOE"),
            _key("k1", 0.99, "v1", ("w1",)),
            _value("v1", 0.40, ("w2",)),
        ]

        pairs = extract_key_value_pairs(blocks)

        assert len(pairs) == 1
        assert pairs[0].key == "Surname"
        assert pairs[0].value == "DOE"
        assert pairs[0].confidence == 0.40

    def test_multi_word_entities_join_children(self) -> None:
        blocks = [
            _word("w1", "Given"),
            _word("w2", "Names"),
            _word("w3", "JANE"),
            _word("w4", "MARY"),
            _key("k1", 0.9, "v1", ("w1", "w2")),
            _value("v1", 0.8, ("w3", "w4")),
        ]

        pairs = extract_key_value_pairs(blocks)

        assert (pairs[0].key, pairs[0].value) == ("Given Names", "JANE MARY")

    def test_value_pointing_back_at_key_is_matched(self) -> None:
        value = Block(
            id="v1",
            block_type="KEY_VALUE_SET",
            text="1985-03-15",
            confidence=0.7,
            entity_types=("VALUE",),
            relationships=(Relationship(type="VALUE", ids=("k1",)),),
        )
        key = Block(
            id="k1",
            block_type="KEY_VALUE_SET",
            text="Date of birth",
            confidence=0.95,
            entity_types=("KEY",),
        )

        pairs = extract_key_value_pairs([key, value])

        assert pairs[0].value == "1985-03-15"
        assert pairs[0].confidence == 0.7

    def test_key_without_value_is_skipped(self) -> None:
        blocks = [_word("w1", "Signature"), _key("k1", 0.9, None, ("w1",))]
        assert extract_key_value_pairs(blocks) == []


class TestFormAnalysisStrategy:
    def test_builds_transcript_with_fixed_confidence(self) -> None:
        backend = _backend()
        backend.analyze_forms.return_value = [
            _line("l1", "UNITED STATES", 0.5),
            _line("l2", "PASSPORT", 0.6),
            _word("w1", "Surname"),
            _word("w2", "DOE"),
            _key("k1", 0.99, "v1", ("w1",)),
            _value("v1", 0.40, ("w2",)),
        ]

        outcome = FormAnalysisStrategy(backend).attempt(b"img")

        assert outcome.succeeded
        assert outcome.transcript is not None
        assert outcome.transcript.text == "UNITED STATES PASSPORT"
        assert outcome.transcript.confidence == FORM_ANALYSIS_CONFIDENCE == 0.9
        assert outcome.transcript.source == TranscriptSource.FORM_ANALYSIS
        assert len(outcome.transcript.key_value_pairs) == 1

    def test_no_lines_means_not_applicable(self) -> None:
        backend = _backend()
        backend.analyze_forms.return_value = [_word("w1", "x")]

        outcome = FormAnalysisStrategy(backend).attempt(b"img")

        assert not outcome.succeeded
        assert outcome.error is None

    def test_backend_error_is_captured_in_outcome(self) -> None:
        backend = _backend()
        backend.analyze_forms.side_effect = OcrBackendError("throttled")

        outcome = FormAnalysisStrategy(backend).attempt(b"img")

        assert not outcome.succeeded
        assert isinstance(outcome.error, OcrBackendError)

    def test_unexpected_adapter_error_is_wrapped(self) -> None:
        backend = _backend()
        backend.analyze_forms.side_effect = KeyError("Blocks")

        outcome = FormAnalysisStrategy(backend).attempt(b"img")

        assert not outcome.succeeded
        assert isinstance(outcome.error, OcrBackendError)
        assert isinstance(outcome.error.__cause__, KeyError)


class TestTextDetectionStrategy:
    def test_confidence_is_mean_of_lines(self) -> None:
        backend = _backend()
        backend.detect_text.return_value = [
            TextLine(text="NAME", confidence=0.9),
            TextLine(text="JANE DOE", confidence=0.7),
        ]

        outcome = TextDetectionStrategy(backend).attempt(b"img")

        assert outcome.transcript is not None
        assert outcome.transcript.text == "NAME JANE DOE"
        assert outcome.transcript.confidence == pytest.approx(0.8)
        assert outcome.transcript.key_value_pairs == ()

    def test_zero_lines_gives_empty_zero_confidence(self) -> None:
        backend = _backend()
        backend.detect_text.return_value = []

        outcome = TextDetectionStrategy(backend).attempt(b"img")

        assert outcome.transcript is not None
        assert outcome.transcript.is_empty
        assert outcome.transcript.confidence == 0.0
