from docintake.database.repositories.documents_repository import DocumentsRepository
from docintake.logging.logger import Log
from docintake.processor.cancellation import CancellationToken
from docintake.processor.exceptions import ConflictError, DocumentNotFoundError
from docintake.processor.models import ProcessingOutcome, ProcessingStatus
from docintake.processor.processor import DocumentProcessor


class DocumentRunner:
    """Run one claimed document and log how it ended."""

    def __init__(self, processor: DocumentProcessor, doc_repo: DocumentsRepository) -> None:
        self._processor = processor
        self._doc_repo = doc_repo

    def run(
        self,
        document_id: str,
        cancel_token: CancellationToken | None = None,
    ) -> ProcessingOutcome | None:
        """Process a document; never raises for per-document failures."""
        Log.info(f"Running document {document_id}")
        try:
            outcome = self._processor.process_document(document_id, cancel_token)
        except DocumentNotFoundError as exc:
            Log.warning(f"Skipping document {document_id}: {exc}")
            return None
        except ConflictError as exc:
            Log.warning(f"Skipping document {document_id}: {exc}")
            return None
        except Exception as exc:
            Log.exception(f"Document {document_id} crashed: {exc}")
            self._mark_failed(document_id)
            return None

        if outcome.succeeded:
            Log.info(
                f"Document {document_id} completed: {outcome.fields_saved} fields, "
                f"OCR confidence {outcome.transcript_confidence:.2f}"
            )
        else:
            Log.warning(f"Document {document_id} failed: {outcome.error_message}")
        return outcome

    def _mark_failed(self, document_id: str) -> None:
        try:
            self._doc_repo.update_processing_status(document_id, ProcessingStatus.FAILED)
        except Exception as exc:
            Log.error(f"Could not mark document {document_id} as failed: {exc}")
