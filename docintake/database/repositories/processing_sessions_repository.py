from typing import Any

import psycopg
from psycopg.rows import dict_row

from docintake.database.connection import get_connection
from docintake.database.models import ProcessingSessionRecord
from docintake.processor.exceptions import ConflictError
from docintake.processor.models import ProcessingStatus

_SESSION_COLUMNS = """
    id, document_id, status, started_at, completed_at,
    error_message, ocr_text, created_at
"""


def _to_record(row: dict[str, Any]) -> ProcessingSessionRecord:
    return ProcessingSessionRecord(
        id=str(row["id"]),
        document_id=str(row["document_id"]),
        status=row["status"],
        started_at=row["started_at"],
        completed_at=row["completed_at"],
        error_message=row["error_message"],
        ocr_text=row["ocr_text"],
        created_at=row["created_at"],
    )


class ProcessingSessionsRepository:
    """Database operations for the processing_sessions table."""

    def create(self, document_id: str) -> ProcessingSessionRecord:
        """Open a new session in 'processing' status stamped with the start time.

        Raises:
            ConflictError: if the document already has a session in 'processing'
                (enforced by the uq_processing_sessions_active index).
        """
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        f"""
                        INSERT INTO processing_sessions (document_id, status, started_at)
                        VALUES (%s, %s, NOW())
                        RETURNING {_SESSION_COLUMNS}
                        """,
                        (document_id, ProcessingStatus.PROCESSING),
                    )
                    row = cur.fetchone()
                conn.commit()
        except psycopg.errors.UniqueViolation as exc:
            raise ConflictError(
                f"Document {document_id} already has an active processing session"
            ) from exc

        if row is None:
            raise RuntimeError(f"Session insert for document {document_id} returned no row")
        return _to_record(row)

    def update_ocr_text(self, session_id: str, ocr_text: str) -> None:
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE processing_sessions
                SET ocr_text = %s, updated_at = NOW()
                WHERE id = %s
                """,
                (ocr_text, session_id),
            )
            conn.commit()

    def mark_completed(self, session_id: str) -> None:
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE processing_sessions
                SET status = %s, completed_at = NOW(), updated_at = NOW()
                WHERE id = %s
                """,
                (ProcessingStatus.COMPLETED, session_id),
            )
            conn.commit()

    def mark_failed_for_document(self, document_id: str, error_message: str) -> int:
        """Fail the open session(s) of a document, matched by document id.

        Only sessions still in 'processing' are touched, so finished sessions
        from earlier runs keep their history.

        Returns:
            Number of sessions updated.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE processing_sessions
                    SET status = %s, error_message = %s,
                        completed_at = NOW(), updated_at = NOW()
                    WHERE document_id = %s AND status = %s
                    """,
                    (
                        ProcessingStatus.FAILED,
                        error_message,
                        document_id,
                        ProcessingStatus.PROCESSING,
                    ),
                )
                updated = cur.rowcount
            conn.commit()
        return updated

    def find_latest_for_document(self, document_id: str) -> ProcessingSessionRecord | None:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_SESSION_COLUMNS}
                    FROM processing_sessions
                    WHERE document_id = %s
                    ORDER BY created_at DESC
                    LIMIT 1
                    """,
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return _to_record(row)

    def fail_stale_sessions(self, max_age_seconds: int, error_message: str) -> list[str]:
        """Fail sessions stuck in 'processing' longer than max_age_seconds.

        The owning documents are moved to 'failed' in the same transaction.

        Returns:
            IDs of the affected documents.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE processing_sessions
                    SET status = %s, error_message = %s,
                        completed_at = NOW(), updated_at = NOW()
                    WHERE status = %s
                      AND started_at < NOW() - make_interval(secs => %s)
                    RETURNING document_id
                    """,
                    (
                        ProcessingStatus.FAILED,
                        error_message,
                        ProcessingStatus.PROCESSING,
                        max_age_seconds,
                    ),
                )
                document_ids = [str(row[0]) for row in cur.fetchall()]
                if document_ids:
                    cur.execute(
                        """
                        UPDATE documents
                        SET processing_status = %s, updated_at = NOW()
                        WHERE id = ANY(%s::uuid[]) AND processing_status = %s
                        """,
                        (
                            ProcessingStatus.FAILED,
                            document_ids,
                            ProcessingStatus.PROCESSING,
                        ),
                    )
            conn.commit()
        return document_ids
