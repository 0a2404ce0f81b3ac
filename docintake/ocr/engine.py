from docintake.logging.logger import Log
from docintake.ocr.backend_base import BaseOcrBackend
from docintake.ocr.exceptions import (
    CorruptDocumentError,
    DocumentTooLargeError,
    OcrError,
    UnsupportedFormatError,
)
from docintake.ocr.models import Transcript
from docintake.ocr.strategies import FormAnalysisStrategy, OcrStrategy, TextDetectionStrategy

# Errors describing the input itself; retrying another strategy cannot fix them.
INPUT_ERRORS = (UnsupportedFormatError, DocumentTooLargeError, CorruptDocumentError)


class OcrEngine:
    """Transcribes one page or one raster image by trying strategies in order."""

    def __init__(self, strategies: list[OcrStrategy]) -> None:
        if not strategies:
            raise ValueError("OcrEngine needs at least one strategy")
        self._strategies = strategies

    @classmethod
    def with_default_strategies(cls, backend: BaseOcrBackend) -> "OcrEngine":
        return cls([FormAnalysisStrategy(backend), TextDetectionStrategy(backend)])

    def transcribe(self, data: bytes) -> Transcript:
        """Return the first transcript any strategy produces.

        An empty zero-confidence transcript means nothing readable was found.

        Raises:
            UnsupportedFormatError, DocumentTooLargeError, CorruptDocumentError:
                if every strategy failed and the last failure was one of these.
        """
        last_error: OcrError | None = None
        for strategy in self._strategies:
            outcome = strategy.attempt(data)
            if outcome.succeeded and outcome.transcript is not None:
                Log.debug(
                    f"OCR strategy {outcome.strategy} produced "
                    f"{len(outcome.transcript.text)} chars"
                )
                return outcome.transcript
            if outcome.error is not None:
                Log.warning(f"OCR strategy {outcome.strategy} failed: {outcome.error}")
                last_error = outcome.error
            else:
                Log.debug(f"OCR strategy {outcome.strategy} found no text, falling back")

        if isinstance(last_error, INPUT_ERRORS):
            raise last_error
        return Transcript.empty()
