from docintake.config.settings import Settings
from docintake.database.repositories.documents_repository import DocumentsRepository
from docintake.database.repositories.extracted_data_repository import ExtractedDataRepository
from docintake.database.repositories.processing_sessions_repository import (
    ProcessingSessionsRepository,
)
from docintake.extraction.factory import ExtractorFactory
from docintake.logging.logger import Log
from docintake.ocr.factory import OcrServiceFactory
from docintake.processor.cancellation import CancellationToken
from docintake.processor.models import ProcessingOutcome, ProcessingStatus
from docintake.processor.pipeline import PipelineContext, PipelineStep
from docintake.processor.steps import (
    ClassifyFormatStep,
    DownloadStep,
    ExtractFieldsStep,
    MarkCompletedStep,
    MarkFailedStep,
    MarkProcessingStep,
    OcrStep,
    PersistFieldsStep,
    PersistTranscriptStep,
    RequireTextStep,
)
from docintake.storage.factory import BlobStoreFactory


class DocumentProcessor:
    """Owns one end-to-end run per document and all error-to-status mapping.

    Flow: load document -> open session -> steps -> (completed | failed).
    Ordinary failures inside the steps are recorded on the document and its
    session and returned as a failed outcome. Only a missing document, an
    already active session, or a failure while recording a failure raise.
    """

    def __init__(
        self,
        *,
        doc_repo: DocumentsRepository,
        session_repo: ProcessingSessionsRepository,
        steps: list[PipelineStep],
        failed_step: PipelineStep,
    ) -> None:
        self._doc_repo = doc_repo
        self._session_repo = session_repo
        self._steps = steps
        self._failed_step = failed_step

    def process_document(
        self,
        document_id: str,
        cancel_token: CancellationToken | None = None,
    ) -> ProcessingOutcome:
        """Run the pipeline for one document.

        Raises:
            DocumentNotFoundError: if the document does not exist (nothing is written).
            ConflictError: if the document already has an active session.
        """
        document = self._doc_repo.find_by_id(document_id)
        session = self._session_repo.create(document_id)
        Log.info(
            f"Processing {document.filename} ({document.file_type})",
            document_id=document_id,
            session_id=session.id,
        )

        context = PipelineContext(
            document_id=document_id,
            session_id=session.id,
            cancel_token=cancel_token,
            document=document,
        )
        try:
            for step in self._steps:
                if cancel_token is not None:
                    cancel_token.raise_if_cancelled()
                context = step.run(context)
        except Exception as exc:
            context.error_message = str(exc) or exc.__class__.__name__
            Log.warning(
                f"Step failed with {exc.__class__.__name__}: {context.error_message}",
                document_id=document_id,
                session_id=session.id,
            )
            self._failed_step.run(context)
            return self._outcome(context, ProcessingStatus.FAILED)

        return self._outcome(context, ProcessingStatus.COMPLETED)

    def _outcome(self, context: PipelineContext, status: str) -> ProcessingOutcome:
        transcript = context.transcript
        return ProcessingOutcome(
            document_id=context.document_id,
            session_id=context.session_id,
            status=status,
            error_message=context.error_message or None,
            transcript_text=transcript.text if transcript is not None else "",
            transcript_confidence=transcript.confidence if transcript is not None else 0.0,
            fields_saved=context.fields_saved,
        )


def build_processor(settings: Settings) -> DocumentProcessor:
    """Build a DocumentProcessor with all production adapters."""
    doc_repo = DocumentsRepository()
    session_repo = ProcessingSessionsRepository()
    extracted_repo = ExtractedDataRepository()
    steps: list[PipelineStep] = [
        MarkProcessingStep(doc_repo),
        ClassifyFormatStep(),
        DownloadStep(BlobStoreFactory.create(settings)),
        OcrStep(OcrServiceFactory.create(settings)),
        PersistTranscriptStep(session_repo),
        RequireTextStep(),
        ExtractFieldsStep(ExtractorFactory.create(settings)),
        PersistFieldsStep(extracted_repo),
        MarkCompletedStep(doc_repo, session_repo),
    ]
    return DocumentProcessor(
        doc_repo=doc_repo,
        session_repo=session_repo,
        steps=steps,
        failed_step=MarkFailedStep(doc_repo, session_repo),
    )
