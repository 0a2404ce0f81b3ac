import signal
from types import FrameType

from docintake.config.settings import Settings
from docintake.database.connection import close_pool, init_pool
from docintake.database.repositories.documents_repository import DocumentsRepository
from docintake.database.repositories.processing_sessions_repository import (
    ProcessingSessionsRepository,
)
from docintake.logging.logger import Log
from docintake.processor.processor import build_processor
from docintake.worker.document_runner import DocumentRunner
from docintake.worker.session_reaper import SessionReaper
from docintake.worker.worker import Worker


def main() -> None:
    """Entry point: initialize pool -> build dependencies -> start worker loop."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        processor = build_processor(settings)
        doc_repo = DocumentsRepository()
        runner = DocumentRunner(processor, doc_repo)
        reaper = SessionReaper(
            ProcessingSessionsRepository(), settings.stale_session_timeout_seconds
        )
        worker = Worker(doc_repo, runner, reaper, settings)

        def _handle_sigterm(signum: int, frame: FrameType | None) -> None:
            Log.info(f"Received signal {signum}, stopping worker")
            worker.stop()

        signal.signal(signal.SIGTERM, _handle_sigterm)
        worker.run()
    finally:
        close_pool()


if __name__ == "__main__":
    main()
