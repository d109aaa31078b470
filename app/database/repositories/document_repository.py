from collections.abc import Callable
from typing import Any, TypeVar

import psycopg
from psycopg.rows import dict_row

from app.database.connection import get_connection
from app.database.models import (
    DOCUMENT_COLUMNS,
    STATUS_CURRENT,
    STATUS_REJECTED,
    STATUS_SUPERSEDED,
    DocumentRecord,
)
from app.database.repositories.base import BaseDocumentRepository, CurrentSave
from app.documents.models import CompanyCategory, Document, DocumentType, IdentityKey
from app.processor.exceptions import DocumentNotFoundError, StorageError

T = TypeVar("T")

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS documents (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    locator TEXT NOT NULL,
    uploaded_at TIMESTAMPTZ NOT NULL,
    is_valid BOOLEAN NOT NULL,
    validation_message TEXT,
    document_type TEXT NOT NULL,
    company_category TEXT,
    document_year INTEGER,
    identity_key TEXT NOT NULL,
    status TEXT NOT NULL
);
CREATE UNIQUE INDEX IF NOT EXISTS documents_current_key
    ON documents (identity_key) WHERE status = 'current';
CREATE UNIQUE INDEX IF NOT EXISTS documents_rejected_key
    ON documents (identity_key) WHERE status = 'rejected';
"""

_INSERT_SQL = f"""
INSERT INTO documents ({DOCUMENT_COLUMNS}, identity_key, status)
VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
"""


def _insert_params(document: Document, key: IdentityKey, status: str) -> tuple[object, ...]:
    record = DocumentRecord.from_document(document)
    return (
        record.id,
        record.name,
        record.locator,
        record.uploaded_at,
        record.is_valid,
        record.validation_message,
        record.document_type,
        record.company_category,
        record.document_year,
        key.as_string(),
        status,
    )


def _delete_rejection(cur: psycopg.Cursor[Any], key: IdentityKey) -> Document | None:
    cur.execute(
        f"""
        DELETE FROM documents
        WHERE status = %s AND identity_key = %s
        RETURNING {DOCUMENT_COLUMNS}
        """,
        (STATUS_REJECTED, key.as_string()),
    )
    row = cur.fetchone()
    return DocumentRecord.from_row(row).to_document() if row else None


class PostgresDocumentRepository(BaseDocumentRepository):
    """Database operations for the documents table."""

    def ensure_schema(self) -> None:
        """Create the documents table and its key indexes if missing."""
        self._run(lambda conn: conn.execute(SCHEMA_SQL), commit=True)

    def list_current(self) -> list[Document]:
        return self._select_by_status(STATUS_CURRENT)

    def list_rejections(self) -> list[Document]:
        return self._select_by_status(STATUS_REJECTED)

    def get_current(self, key: IdentityKey) -> Document | None:
        def query(conn: psycopg.Connection[Any]) -> Document | None:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {DOCUMENT_COLUMNS}
                    FROM documents
                    WHERE status = %s AND identity_key = %s
                    """,
                    (STATUS_CURRENT, key.as_string()),
                )
                row = cur.fetchone()
            return DocumentRecord.from_row(row).to_document() if row else None

        return self._run(query)

    def save_current(self, key: IdentityKey, document: Document) -> CurrentSave:
        def write(conn: psycopg.Connection[Any]) -> CurrentSave:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {DOCUMENT_COLUMNS}
                    FROM documents
                    WHERE status = %s AND identity_key = %s
                    FOR UPDATE
                    """,
                    (STATUS_CURRENT, key.as_string()),
                )
                row = cur.fetchone()
                if row is not None:
                    cur.execute(
                        "UPDATE documents SET status = %s WHERE id = %s",
                        (STATUS_SUPERSEDED, row["id"]),
                    )
                cur.execute(_INSERT_SQL, _insert_params(document, key, STATUS_CURRENT))
                cleared = _delete_rejection(cur, key)
            return CurrentSave(
                replaced=DocumentRecord.from_row(row).to_document() if row else None,
                cleared_rejection=cleared,
            )

        return self._run(write, commit=True)

    def save_rejection(self, key: IdentityKey, document: Document) -> Document | None:
        def write(conn: psycopg.Connection[Any]) -> Document | None:
            with conn.cursor(row_factory=dict_row) as cur:
                overwritten = _delete_rejection(cur, key)
                cur.execute(_INSERT_SQL, _insert_params(document, key, STATUS_REJECTED))
            return overwritten

        return self._run(write, commit=True)

    def drop_rejection(self, key: IdentityKey) -> Document | None:
        def write(conn: psycopg.Connection[Any]) -> Document | None:
            with conn.cursor(row_factory=dict_row) as cur:
                return _delete_rejection(cur, key)

        return self._run(write, commit=True)

    def count_accepted(
        self,
        document_type: DocumentType,
        company_category: CompanyCategory | None,
    ) -> int:
        def query(conn: psycopg.Connection[Any]) -> int:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT COUNT(*)
                    FROM documents
                    WHERE is_valid
                      AND status IN (%s, %s)
                      AND document_type = %s
                      AND company_category IS NOT DISTINCT FROM %s
                    """,
                    (
                        STATUS_CURRENT,
                        STATUS_SUPERSEDED,
                        document_type.value,
                        company_category.value if company_category else None,
                    ),
                )
                row = cur.fetchone()
            return int(row[0]) if row else 0

        return self._run(query)

    def delete_by_id(self, document_id: str) -> Document:
        def write(conn: psycopg.Connection[Any]) -> Document | None:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {DOCUMENT_COLUMNS}, identity_key, status
                    FROM documents
                    WHERE id = %s AND status IN (%s, %s)
                    """,
                    (document_id, STATUS_CURRENT, STATUS_REJECTED),
                )
                row = cur.fetchone()
                if row is None:
                    return None
                cur.execute("DELETE FROM documents WHERE id = %s", (document_id,))
                if row["status"] == STATUS_CURRENT:
                    cur.execute(
                        "DELETE FROM documents WHERE status = %s AND identity_key = %s",
                        (STATUS_SUPERSEDED, row["identity_key"]),
                    )
            return DocumentRecord.from_row(row).to_document()

        deleted = self._run(write, commit=True)
        if deleted is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return deleted

    def clear(self) -> None:
        self._run(lambda conn: conn.execute("DELETE FROM documents"), commit=True)

    def _select_by_status(self, status: str) -> list[Document]:
        def query(conn: psycopg.Connection[Any]) -> list[Document]:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {DOCUMENT_COLUMNS}
                    FROM documents
                    WHERE status = %s
                    ORDER BY uploaded_at DESC
                    """,
                    (status,),
                )
                rows = cur.fetchall()
            return [DocumentRecord.from_row(row).to_document() for row in rows]

        return self._run(query)

    @staticmethod
    def _run(work: Callable[[psycopg.Connection[Any]], T], commit: bool = False) -> T:
        try:
            with get_connection() as conn:
                result = work(conn)
                if commit:
                    conn.commit()
                return result
        except psycopg.Error as exc:
            raise StorageError(f"Document store query failed: {exc}") from exc
