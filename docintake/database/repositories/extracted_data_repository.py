from typing import Any

import psycopg
from psycopg.rows import dict_row

from docintake.database.connection import get_connection
from docintake.database.models import ExtractedDataRecord
from docintake.extraction.models import ExtractedField
from docintake.processor.exceptions import PersistenceError


class ExtractedDataRepository:
    """Database operations for the extracted_data table."""

    def insert_fields(self, document_id: str, fields: list[ExtractedField]) -> int:
        """Insert one row per field in a single transaction.

        Each row keeps the validation_status the field carries ("pending"
        unless the extractor said otherwise). Either every field is committed
        or none is.

        Returns:
            Number of rows inserted.

        Raises:
            PersistenceError: if any insert fails.
        """
        if not fields:
            return 0

        params = [
            (
                document_id,
                item.field_name,
                item.field_value,
                item.confidence_score,
                item.field_category,
                item.validation_status,
            )
            for item in fields
        ]
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.executemany(
                        """
                        INSERT INTO extracted_data
                            (document_id, field_name, field_value,
                             confidence_score, field_category, validation_status)
                        VALUES (%s, %s, %s, %s, %s, %s)
                        """,
                        params,
                    )
                conn.commit()
        except psycopg.Error as exc:
            raise PersistenceError(
                f"Failed to save extracted data for document {document_id}: {exc}"
            ) from exc
        return len(params)

    def find_by_document(self, document_id: str) -> list[ExtractedDataRecord]:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, document_id, field_name, field_value,
                           confidence_score, field_category, validation_status,
                           created_at
                    FROM extracted_data
                    WHERE document_id = %s
                    ORDER BY created_at, field_name
                    """,
                    (document_id,),
                )
                rows = cur.fetchall()

        return [self._to_record(row) for row in rows]

    def _to_record(self, row: dict[str, Any]) -> ExtractedDataRecord:
        return ExtractedDataRecord(
            id=str(row["id"]),
            document_id=str(row["document_id"]),
            field_name=row["field_name"],
            field_value=row["field_value"],
            confidence_score=float(row["confidence_score"]),
            field_category=row["field_category"],
            validation_status=row["validation_status"],
            created_at=row["created_at"],
        )
