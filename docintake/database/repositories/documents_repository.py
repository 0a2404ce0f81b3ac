from typing import Any

import psycopg
from psycopg.rows import dict_row

from docintake.database.connection import get_connection
from docintake.processor.exceptions import DocumentNotFoundError
from docintake.processor.models import Document, ProcessingStatus

_DOCUMENT_COLUMNS = """
    id, user_id, filename, file_path, file_type, file_size,
    document_category, upload_status, processing_status
"""


def _to_document(row: dict[str, Any]) -> Document:
    return Document(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        filename=row["filename"],
        file_path=row["file_path"],
        file_type=row["file_type"],
        file_size=row["file_size"],
        document_category=row["document_category"],
        upload_status=row["upload_status"],
        processing_status=row["processing_status"],
    )


class DocumentsRepository:
    """Database operations for the documents table."""

    def find_by_id(self, document_id: str) -> Document:
        """Find a document by ID.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_DOCUMENT_COLUMNS} FROM documents WHERE id = %s",
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return _to_document(row)

    def update_processing_status(self, document_id: str, status: str) -> None:
        """Set documents.processing_status, the only column the worker mutates.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET processing_status = %s, updated_at = NOW()
                    WHERE id = %s
                    """,
                    (status, document_id),
                )
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
            conn.commit()

    def claim_next_queued(self, conn: psycopg.Connection[Any]) -> Document | None:
        """Claim the oldest queued document using SELECT FOR UPDATE SKIP LOCKED."""
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(
                f"""
                SELECT {_DOCUMENT_COLUMNS}
                FROM documents
                WHERE processing_status = %s
                ORDER BY created_at
                LIMIT 1
                FOR UPDATE SKIP LOCKED
                """,
                (ProcessingStatus.QUEUED,),
            )
            row = cur.fetchone()

        if row is None:
            conn.rollback()
            return None

        conn.execute(
            """
            UPDATE documents
            SET processing_status = %s, updated_at = NOW()
            WHERE id = %s
            """,
            (ProcessingStatus.PROCESSING, row["id"]),
        )
        conn.commit()

        row["processing_status"] = ProcessingStatus.PROCESSING
        return _to_document(row)
