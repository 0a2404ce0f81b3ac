import os
import uuid
from collections.abc import Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest

from docintake.config.settings import Settings
from docintake.database.connection import close_pool, get_connection, init_pool

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "docintake" / "database" / "schema.sql"


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "docintake_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
            conn.commit()
    except Exception as e:
        close_pool()
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. "
            "Set DB_* env to point at a disposable database"
        )
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[str], None, None]:
    document_ids: list[str] = []
    yield document_ids
    if not document_ids:
        return
    with get_connection() as conn:
        # sessions and extracted_data cascade
        conn.execute("DELETE FROM documents WHERE id = ANY(%s::uuid[])", (document_ids,))
        conn.commit()


def _insert_document(
    conn: psycopg.Connection[Any],
    file_type: str,
    file_path: str,
    processing_status: str = "queued",
    document_category: str = "passport",
) -> str:
    with conn.cursor() as cur:
        cur.execute(
            """
            INSERT INTO documents
            (user_id, filename, file_path, file_type, file_size,
             document_category, processing_status)
            VALUES (%s, %s, %s, %s, %s, %s, %s)
            RETURNING id
            """,
            (
                str(uuid.uuid4()),
                Path(file_path).name,
                file_path,
                file_type,
                1024,
                document_category,
                processing_status,
            ),
        )
        row = cur.fetchone()
        assert row is not None
    conn.commit()
    return str(row[0])


@pytest.fixture
def seed_document(
    db_conn: psycopg.Connection[Any],
    integration_cleanup: list[str],
) -> str:
    document_id = _insert_document(db_conn, "image/png", f"documents/{uuid.uuid4()}.png")
    integration_cleanup.append(document_id)
    return document_id


@pytest.fixture
def make_document(
    db_conn: psycopg.Connection[Any],
    integration_cleanup: list[str],
) -> Any:
    def _make(file_type: str, file_path: str, processing_status: str = "queued") -> str:
        document_id = _insert_document(db_conn, file_type, file_path, processing_status)
        integration_cleanup.append(document_id)
        return document_id

    return _make


@pytest.fixture
def files_root(tmp_path: Path) -> Path:
    return tmp_path
