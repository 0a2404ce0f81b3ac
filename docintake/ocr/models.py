from dataclasses import dataclass, field


class TranscriptSource:
    """Evidence path that produced a transcript."""

    TEXT_LAYER = "text_layer"
    FORM_ANALYSIS = "form_analysis"
    TEXT_DETECTION = "text_detection"
    PAGES = "pages"
    NONE = "none"


class BlockType:
    LINE = "LINE"
    WORD = "WORD"
    KEY_VALUE_SET = "KEY_VALUE_SET"


@dataclass(frozen=True)
class BoundingBox:
    """Normalized page coordinates (0..1) of a detected element."""

    left: float
    top: float
    width: float
    height: float


@dataclass(frozen=True)
class TextLine:
    """One detected line of text with confidence in [0, 1]."""

    text: str
    confidence: float
    bounding_box: BoundingBox | None = None


@dataclass(frozen=True)
class Relationship:
    type: str
    ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class Block:
    """A layout element returned by structured form analysis."""

    id: str
    block_type: str
    text: str | None = None
    confidence: float = 0.0
    entity_types: tuple[str, ...] = ()
    relationships: tuple[Relationship, ...] = ()

    def related_ids(self, relationship_type: str) -> list[str]:
        return [
            block_id
            for rel in self.relationships
            if rel.type == relationship_type
            for block_id in rel.ids
        ]


@dataclass(frozen=True)
class KeyValuePair:
    """A form label and its value; confidence is the weaker of the two."""

    key: str
    value: str
    confidence: float


@dataclass(frozen=True)
class Transcript:
    """OCR output for one unit or a whole document."""

    text: str
    confidence: float
    key_value_pairs: tuple[KeyValuePair, ...] = ()
    source: str = TranscriptSource.NONE

    @classmethod
    def empty(cls) -> "Transcript":
        return cls(text="", confidence=0.0)

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()


@dataclass(frozen=True)
class PageResults:
    """Per-page outcomes of a split document, kept in page-index order."""

    succeeded: list[tuple[int, Transcript]] = field(default_factory=list)
    failed_indices: list[int] = field(default_factory=list)
    blank_indices: list[int] = field(default_factory=list)

    def to_transcript(self) -> Transcript:
        """Join succeeded pages by newline; confidence is their mean.

        Failed and blank pages contribute neither text nor confidence.
        """
        ordered = [transcript for _, transcript in sorted(self.succeeded, key=lambda p: p[0])]
        if not ordered:
            return Transcript.empty()
        pairs = tuple(pair for transcript in ordered for pair in transcript.key_value_pairs)
        return Transcript(
            text="\n".join(transcript.text for transcript in ordered),
            confidence=sum(t.confidence for t in ordered) / len(ordered),
            key_value_pairs=pairs,
            source=TranscriptSource.PAGES,
        )
