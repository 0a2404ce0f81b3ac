from abc import ABC, abstractmethod
from dataclasses import dataclass

from docintake.extraction.models import ExtractionResult
from docintake.ocr.models import Transcript
from docintake.processor.cancellation import CancellationToken
from docintake.processor.models import Document


@dataclass(slots=True)
class PipelineContext:
    document_id: str
    session_id: str = ""
    cancel_token: CancellationToken | None = None
    document: Document | None = None
    document_format: str = ""
    raw_bytes: bytes = b""
    transcript: Transcript | None = None
    extraction_result: ExtractionResult | None = None
    fields_saved: int = 0
    error_message: str = ""

    def require_document(self) -> Document:
        if self.document is None:
            raise ValueError("PipelineContext.document must be set before this step")
        return self.document

    def require_transcript(self) -> Transcript:
        if self.transcript is None:
            raise ValueError("PipelineContext.transcript must be set before this step")
        return self.transcript


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
