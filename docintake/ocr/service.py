from docintake.logging.logger import Log
from docintake.ocr.engine import OcrEngine
from docintake.ocr.format_classifier import DocumentFormat, require_supported_format
from docintake.ocr.models import Transcript
from docintake.ocr.page_splitter import PageSplitter
from docintake.processor.cancellation import CancellationToken


class OcrService:
    """Routes a document to the raster or the PDF path by media type."""

    def __init__(self, engine: OcrEngine, page_splitter: PageSplitter) -> None:
        self._engine = engine
        self._page_splitter = page_splitter

    def transcribe(
        self,
        data: bytes,
        media_type: str,
        cancel_token: CancellationToken | None = None,
    ) -> Transcript:
        document_format = require_supported_format(media_type)
        if document_format == DocumentFormat.PDF:
            transcript = self._page_splitter.transcribe(data, cancel_token)
        else:
            transcript = self._engine.transcribe(data)
        Log.info(
            f"OCR produced {len(transcript.text)} chars via {transcript.source} "
            f"(confidence {transcript.confidence:.2f}, "
            f"{len(transcript.key_value_pairs)} key/value pairs)"
        )
        return transcript
