from docintake.database.repositories.documents_repository import DocumentsRepository
from docintake.database.repositories.extracted_data_repository import ExtractedDataRepository
from docintake.database.repositories.processing_sessions_repository import (
    ProcessingSessionsRepository,
)
from docintake.extraction.base import BaseExtractor
from docintake.extraction.models import ExtractionContext
from docintake.logging.logger import Log
from docintake.ocr.format_classifier import require_supported_format
from docintake.ocr.service import OcrService
from docintake.processor.exceptions import NoReadableTextError
from docintake.processor.models import ProcessingStatus
from docintake.processor.pipeline import PipelineContext, PipelineStep
from docintake.storage.base import BaseBlobStore

NO_READABLE_TEXT_MESSAGE = "No readable text found in the document."


class MarkProcessingStep(PipelineStep):
    def __init__(self, doc_repo: DocumentsRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        self._doc_repo.update_processing_status(context.document_id, ProcessingStatus.PROCESSING)
        Log.info(f"Document {context.document_id} marked as processing")
        return context


class ClassifyFormatStep(PipelineStep):
    """Rejects unsupported media types before any bytes are fetched."""

    def run(self, context: PipelineContext) -> PipelineContext:
        document = context.require_document()
        context.document_format = require_supported_format(document.file_type)
        Log.info(
            f"Document {context.document_id} ({document.file_type}) "
            f"classified as {context.document_format}"
        )
        return context


class DownloadStep(PipelineStep):
    def __init__(self, blob_store: BaseBlobStore) -> None:
        self._blob_store = blob_store

    def run(self, context: PipelineContext) -> PipelineContext:
        document = context.require_document()
        context.raw_bytes = self._blob_store.download(document.file_path)
        Log.info(f"Downloaded {len(context.raw_bytes)} bytes for document {context.document_id}")
        return context


class OcrStep(PipelineStep):
    def __init__(self, ocr_service: OcrService) -> None:
        self._ocr_service = ocr_service

    def run(self, context: PipelineContext) -> PipelineContext:
        document = context.require_document()
        context.transcript = self._ocr_service.transcribe(
            context.raw_bytes,
            document.file_type,
            context.cancel_token,
        )
        return context


class PersistTranscriptStep(PipelineStep):
    """Saves the transcript on the session so a later run can skip OCR."""

    def __init__(self, session_repo: ProcessingSessionsRepository) -> None:
        self._session_repo = session_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        transcript = context.require_transcript()
        self._session_repo.update_ocr_text(context.session_id, transcript.text)
        Log.info(
            f"Persisted {len(transcript.text)} chars of OCR text on session {context.session_id}"
        )
        return context


class RequireTextStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        if context.require_transcript().is_empty:
            raise NoReadableTextError(NO_READABLE_TEXT_MESSAGE)
        return context


class ExtractFieldsStep(PipelineStep):
    def __init__(self, extractor: BaseExtractor) -> None:
        self._extractor = extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        document = context.require_document()
        extraction_context = ExtractionContext(
            document_category=document.document_category,
            document_text=context.require_transcript().text,
            file_type=document.file_type,
            filename=document.filename,
            user_id=document.user_id,
            document_id=document.id,
        )
        context.extraction_result = self._extractor.extract(extraction_context)
        Log.info(
            f"Extracted {len(context.extraction_result.extracted_fields)} fields "
            f"from document {context.document_id}"
        )
        return context


class PersistFieldsStep(PipelineStep):
    def __init__(self, extracted_repo: ExtractedDataRepository) -> None:
        self._extracted_repo = extracted_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extraction_result is None:
            raise ValueError("PipelineContext.extraction_result must be set before persist")
        context.fields_saved = self._extracted_repo.insert_fields(
            context.document_id,
            context.extraction_result.extracted_fields,
        )
        Log.info(f"Saved {context.fields_saved} fields for document {context.document_id}")
        return context


class MarkCompletedStep(PipelineStep):
    def __init__(
        self,
        doc_repo: DocumentsRepository,
        session_repo: ProcessingSessionsRepository,
    ) -> None:
        self._doc_repo = doc_repo
        self._session_repo = session_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        self._doc_repo.update_processing_status(context.document_id, ProcessingStatus.COMPLETED)
        self._session_repo.mark_completed(context.session_id)
        Log.info(f"Document {context.document_id} completed (session {context.session_id})")
        return context


class MarkFailedStep(PipelineStep):
    def __init__(
        self,
        doc_repo: DocumentsRepository,
        session_repo: ProcessingSessionsRepository,
    ) -> None:
        self._doc_repo = doc_repo
        self._session_repo = session_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        self._doc_repo.update_processing_status(context.document_id, ProcessingStatus.FAILED)
        self._session_repo.mark_failed_for_document(context.document_id, context.error_message)
        Log.error(f"Document {context.document_id} marked as failed: {context.error_message}")
        return context
