import threading

from docintake.config.settings import Settings
from docintake.database.connection import get_connection
from docintake.database.repositories.documents_repository import DocumentsRepository
from docintake.logging.logger import Log
from docintake.processor.cancellation import CancellationToken
from docintake.processor.models import Document
from docintake.worker.document_runner import DocumentRunner
from docintake.worker.session_reaper import SessionReaper


class Worker:
    """Poll loop: claim -> dispatch -> sleep when idle, reaping stale sessions."""

    def __init__(
        self,
        doc_repo: DocumentsRepository,
        runner: DocumentRunner,
        reaper: SessionReaper,
        settings: Settings,
    ) -> None:
        self._doc_repo = doc_repo
        self._runner = runner
        self._reaper = reaper
        self._settings = settings
        self._stopping = threading.Event()
        self._current_token: CancellationToken | None = None

    def run(self, max_documents: int | None = None) -> None:
        """Main poll loop. Runs until stop() or KeyboardInterrupt.

        If max_documents is set, stop after processing that many documents (for testing).
        """
        Log.info("Worker started, polling for documents")
        documents_done = 0
        polls = 0
        try:
            while not self._stopping.is_set():
                if max_documents is not None and documents_done >= max_documents:
                    break
                if polls % max(1, self._settings.reaper_interval_polls) == 0:
                    self._try_reap()
                polls += 1

                document = self._try_claim_document()
                if document:
                    self._dispatch(document)
                    documents_done += 1
                else:
                    Log.debug("No documents queued, sleeping")
                    self._stopping.wait(self._settings.poll_interval_seconds)
        except KeyboardInterrupt:
            Log.info("Worker shutting down gracefully")
        Log.info(f"Worker stopped after {documents_done} document(s)")

    def stop(self) -> None:
        """Stop polling and cancel the document in flight, if any."""
        self._stopping.set()
        token = self._current_token
        if token is not None:
            token.cancel()

    def _dispatch(self, document: Document) -> None:
        self._current_token = CancellationToken()
        try:
            self._runner.run(document.id, self._current_token)
        finally:
            self._current_token = None

    def _try_claim_document(self) -> Document | None:
        """Attempt to claim the next queued document. Gracefully handle DB errors."""
        try:
            with get_connection() as conn:
                return self._doc_repo.claim_next_queued(conn)
        except Exception as exc:
            Log.warning(f"Database error, will retry: {exc}")
            return None

    def _try_reap(self) -> None:
        try:
            self._reaper.reap()
        except Exception as exc:
            Log.warning(f"Stale session reaping failed, will retry: {exc}")
