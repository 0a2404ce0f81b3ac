from docintake.logging.logger import Log
from docintake.ocr.backend_base import BaseOcrBackend
from docintake.ocr.engine import OcrEngine
from docintake.ocr.exceptions import (
    AllPagesFailedError,
    CorruptDocumentError,
    EmptyDocumentError,
    OcrError,
)
from docintake.ocr.models import PageResults, Transcript, TranscriptSource
from docintake.ocr.strategies import TextDetectionStrategy
from docintake.pdf.base import BasePdfExtractor, BasePdfPageUtils
from docintake.pdf.exceptions import PdfError, PdfExtractionError, PdfPageError
from docintake.processor.cancellation import CancellationToken

TEXT_LAYER_CONFIDENCE = 1.0


class PageSplitter:
    """Transcribes a PDF, splitting it into single pages only when needed.

    Order of attempts:
        1. embedded text layer (when a text extractor is configured)
        2. whole-document text detection
        3. page-by-page OCR through the engine
    """

    def __init__(
        self,
        engine: OcrEngine,
        backend: BaseOcrBackend,
        page_utils: BasePdfPageUtils,
        text_extractor: BasePdfExtractor | None = None,
    ) -> None:
        self._engine = engine
        self._whole_document = TextDetectionStrategy(backend)
        self._page_utils = page_utils
        self._text_extractor = text_extractor

    def transcribe(
        self,
        pdf_bytes: bytes,
        cancel_token: CancellationToken | None = None,
    ) -> Transcript:
        """Return one transcript for the whole PDF.

        Raises:
            CorruptDocumentError: if the PDF cannot be opened for splitting.
            EmptyDocumentError: if the PDF has no pages.
            AllPagesFailedError: if no page produced text.
            ProcessingCancelledError: if cancel_token fires between pages.
        """
        transcript = self._read_text_layer(pdf_bytes)
        if transcript is not None:
            return transcript

        transcript = self._detect_whole_document(pdf_bytes)
        if transcript is not None:
            return transcript

        page_count = self._page_count(pdf_bytes)
        Log.info(f"No text found without splitting, OCR-ing {page_count} page(s)")
        results = self.process_pages(pdf_bytes, page_count, cancel_token)
        if not results.succeeded:
            raise AllPagesFailedError()
        if results.failed_indices:
            Log.warning(
                f"{len(results.failed_indices)} of {page_count} page(s) failed: "
                f"{results.failed_indices}"
            )
        return results.to_transcript()

    def process_pages(
        self,
        pdf_bytes: bytes,
        page_count: int,
        cancel_token: CancellationToken | None = None,
    ) -> PageResults:
        """OCR every page in index order, collecting successes and failures."""
        succeeded: list[tuple[int, Transcript]] = []
        failed: list[int] = []
        blank: list[int] = []
        for index in range(page_count):
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()
            try:
                page_bytes = self._page_utils.extract_page(pdf_bytes, index)
                transcript = self._engine.transcribe(page_bytes)
            except (OcrError, PdfError) as exc:
                Log.error(f"Error processing page {index + 1}: {exc}")
                failed.append(index)
                continue
            if transcript.is_empty:
                blank.append(index)
            else:
                succeeded.append((index, transcript))
        return PageResults(succeeded=succeeded, failed_indices=failed, blank_indices=blank)

    def _read_text_layer(self, pdf_bytes: bytes) -> Transcript | None:
        if self._text_extractor is None:
            return None
        try:
            text = self._text_extractor.extract(pdf_bytes)
        except PdfExtractionError as exc:
            Log.warning(f"PDF text layer unreadable, falling back to OCR: {exc}")
            return None
        if not text.strip():
            return None
        return Transcript(
            text=text.strip(),
            confidence=TEXT_LAYER_CONFIDENCE,
            source=TranscriptSource.TEXT_LAYER,
        )

    def _detect_whole_document(self, pdf_bytes: bytes) -> Transcript | None:
        outcome = self._whole_document.attempt(pdf_bytes)
        if outcome.error is not None:
            Log.info(f"Whole-document text detection failed, splitting pages: {outcome.error}")
            return None
        if outcome.transcript is None or outcome.transcript.is_empty:
            return None
        return Transcript(
            text=outcome.transcript.text.strip(),
            confidence=outcome.transcript.confidence,
            source=TranscriptSource.TEXT_DETECTION,
        )

    def _page_count(self, pdf_bytes: bytes) -> int:
        try:
            page_count = self._page_utils.page_count(pdf_bytes)
        except PdfPageError as exc:
            raise CorruptDocumentError() from exc
        if page_count == 0:
            raise EmptyDocumentError()
        return page_count
