from docintake.database.repositories.processing_sessions_repository import (
    ProcessingSessionsRepository,
)
from docintake.logging.logger import Log

TIMED_OUT_MESSAGE = "Processing timed out"


class SessionReaper:
    """Fails sessions left in 'processing' by a crashed worker."""

    def __init__(self, session_repo: ProcessingSessionsRepository, timeout_seconds: int) -> None:
        self._session_repo = session_repo
        self._timeout_seconds = timeout_seconds

    def reap(self) -> list[str]:
        """Return the ids of documents whose stale sessions were failed."""
        document_ids = self._session_repo.fail_stale_sessions(
            self._timeout_seconds, TIMED_OUT_MESSAGE
        )
        if document_ids:
            Log.warning(
                f"Reaped {len(document_ids)} stale session(s) older than "
                f"{self._timeout_seconds}s: {document_ids}"
            )
        return document_ids
