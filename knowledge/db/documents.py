"""Database operations for documents and their file versions."""

import logging
import uuid
from typing import Optional
from uuid import UUID

from psycopg.types.json import Jsonb

from knowledge.access import normalize_visibility, visibility_filter_sql
from knowledge.models import Document, DocumentVersion, User
from .connection import get_db_connection, get_db_cursor

logger = logging.getLogger(__name__)

_DOCUMENT_COLUMNS = """
    id, title, description, s3_key, content_text, created_by, created_at,
    updated_at, is_public, version_number, filename, mime_type, file_size,
    uploaded_by
"""
_VERSION_COLUMNS = """
    id, document_id, version_number, s3_key, filename, mime_type, file_size,
    uploaded_by, created_at
"""


def get_visible_documents(viewer: User, limit: int = 100) -> list[Document]:
    """Get the documents `viewer` may see, newest first.

    The query filters on visibility, but the result still has to go through
    knowledge.access.list_visible before it is served.
    """
    filter_sql, filter_params = visibility_filter_sql(viewer)
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            SELECT {_DOCUMENT_COLUMNS}
            FROM documents
            WHERE {filter_sql}
            ORDER BY created_at DESC
            LIMIT %s
            """,
            (*filter_params, limit),
        )
        return [_row_to_document(row) for row in cursor.fetchall()]


def get_document_by_id(document_id: UUID) -> Optional[Document]:
    """Get a single document by id, regardless of visibility."""
    with get_db_cursor() as cursor:
        cursor.execute(
            f"SELECT {_DOCUMENT_COLUMNS} FROM documents WHERE id = %s",
            (document_id,),
        )
        row = cursor.fetchone()
        return _row_to_document(row) if row else None


def search_documents(query: str, viewer: User) -> list[Document]:
    """Get documents whose title, content text or description contain `query`.

    Matching is a case-insensitive substring match. Ranking is left to
    knowledge.search.rank_documents.
    """
    pattern = f"%{_escape_like(query)}%"
    filter_sql, filter_params = visibility_filter_sql(viewer)
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            SELECT {_DOCUMENT_COLUMNS}
            FROM documents
            WHERE (title ILIKE %s OR content_text ILIKE %s OR description ILIKE %s)
              AND {filter_sql}
            ORDER BY created_at DESC
            """,
            (pattern, pattern, pattern, *filter_params),
        )
        return [_row_to_document(row) for row in cursor.fetchall()]


def create_document(
    title: str,
    s3_key: str,
    created_by: UUID,
    description: Optional[str] = None,
    content_text: Optional[str] = None,
    is_public: bool = True,
    filename: Optional[str] = None,
    mime_type: Optional[str] = None,
    file_size: Optional[int] = None,
) -> Document:
    """Save the metadata of an uploaded document.

    Raises:
        ValueError: If title or s3_key is empty.
    """
    if not title or not title.strip():
        raise ValueError("Document title is required")
    if not s3_key:
        raise ValueError("Document s3_key is required")

    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            INSERT INTO documents (
                id, title, description, s3_key, content_text, created_by,
                is_public, filename, mime_type, file_size, uploaded_by
            )
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING {_DOCUMENT_COLUMNS}
            """,
            (
                uuid.uuid4(),
                title,
                description or None,
                s3_key,
                content_text or None,
                created_by,
                Jsonb(is_public),
                filename,
                mime_type,
                file_size,
                created_by,
            ),
        )
        document = _row_to_document(cursor.fetchone())
        logger.info(f"Created document id={document.id} by user {created_by}")
        return document


def update_document(
    document_id: UUID,
    title: str,
    description: Optional[str] = None,
) -> Optional[Document]:
    """Update a document's title and description.

    An empty description clears it. Visibility is only set at creation.
    Returns None if the document does not exist.
    """
    if not title or not title.strip():
        raise ValueError("Document title is required")

    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            UPDATE documents
            SET title = %s, description = %s, updated_at = NOW()
            WHERE id = %s
            RETURNING {_DOCUMENT_COLUMNS}
            """,
            (title, description or None, document_id),
        )
        row = cursor.fetchone()
        return _row_to_document(row) if row else None


def delete_document(document_id: UUID) -> Optional[list[str]]:
    """Delete a document and its archived versions.

    Returns:
        The storage keys the deleted rows pointed at, so the caller can remove
        the objects, or None if the document did not exist.
    """
    with get_db_connection() as conn:
        with conn.transaction():
            with conn.cursor() as cursor:
                cursor.execute(
                    "DELETE FROM document_versions WHERE document_id = %s RETURNING s3_key",
                    (document_id,),
                )
                version_keys = [row[0] for row in cursor.fetchall()]
                cursor.execute(
                    "DELETE FROM documents WHERE id = %s RETURNING s3_key",
                    (document_id,),
                )
                row = cursor.fetchone()
                if row is None:
                    return None
    logger.info(f"Deleted document {document_id}")
    return [row[0], *version_keys]


def get_document_versions(document_id: UUID) -> list[DocumentVersion]:
    """Get the archived (non-current) versions of a document, newest first."""
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            SELECT {_VERSION_COLUMNS}
            FROM document_versions
            WHERE document_id = %s
            ORDER BY version_number DESC
            """,
            (document_id,),
        )
        return [_row_to_version(row) for row in cursor.fetchall()]


def add_document_version(
    document_id: UUID,
    s3_key: str,
    uploaded_by: UUID,
    filename: Optional[str] = None,
    mime_type: Optional[str] = None,
    file_size: Optional[int] = None,
) -> Optional[Document]:
    """Replace a document's file, archiving the current one as a version.

    Returns the updated document, or None if it does not exist.
    """
    if not s3_key:
        raise ValueError("Document s3_key is required")

    with get_db_connection() as conn:
        with conn.transaction():
            with conn.cursor() as cursor:
                cursor.execute(
                    """
                    SELECT version_number, s3_key, filename, mime_type, file_size,
                           COALESCE(uploaded_by, created_by), COALESCE(updated_at, created_at)
                    FROM documents
                    WHERE id = %s
                    FOR UPDATE
                    """,
                    (document_id,),
                )
                current = cursor.fetchone()
                if current is None:
                    return None
                (
                    version_number,
                    old_key,
                    old_filename,
                    old_mime_type,
                    old_size,
                    old_uploader,
                    old_created_at,
                ) = current

                cursor.execute(
                    """
                    INSERT INTO document_versions (
                        id, document_id, version_number, s3_key, filename,
                        mime_type, file_size, uploaded_by, created_at
                    )
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
                    """,
                    (
                        uuid.uuid4(),
                        document_id,
                        version_number or 1,
                        old_key,
                        old_filename,
                        old_mime_type,
                        old_size,
                        old_uploader,
                        old_created_at,
                    ),
                )
                cursor.execute(
                    f"""
                    UPDATE documents
                    SET s3_key = %s, filename = %s, mime_type = %s, file_size = %s,
                        uploaded_by = %s,
                        version_number = COALESCE(version_number, 1) + 1,
                        updated_at = NOW()
                    WHERE id = %s
                    RETURNING {_DOCUMENT_COLUMNS}
                    """,
                    (s3_key, filename, mime_type, file_size, uploaded_by, document_id),
                )
                document = _row_to_document(cursor.fetchone())
    logger.info(
        f"Document {document_id} is now at version {document.version_number}"
    )
    return document


def current_version_of(document: Document) -> DocumentVersion:
    """Describe a document's live file as a version entry."""
    return DocumentVersion(
        id=document.id,
        document_id=document.id,
        version_number=document.version_number,
        s3_key=document.s3_key,
        filename=document.filename,
        mime_type=document.mime_type,
        file_size=document.file_size,
        uploaded_by=document.uploaded_by or document.created_by,
        created_at=document.updated_at or document.created_at,
        is_current=True,
    )


def _escape_like(text: str) -> str:
    """Escape LIKE wildcards so the query matches literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _row_to_document(row) -> Document:
    """Convert a database row to a Document, normalizing its visibility flag."""
    (
        id,
        title,
        description,
        s3_key,
        content_text,
        created_by,
        created_at,
        updated_at,
        is_public,
        version_number,
        filename,
        mime_type,
        file_size,
        uploaded_by,
    ) = row
    return Document(
        id=id,
        title=title,
        description=description,
        s3_key=s3_key,
        content_text=content_text,
        created_by=created_by,
        created_at=created_at,
        updated_at=updated_at,
        visibility=normalize_visibility(is_public),
        version_number=version_number or 1,
        filename=filename,
        mime_type=mime_type,
        file_size=file_size,
        uploaded_by=uploaded_by,
    )


def _row_to_version(row) -> DocumentVersion:
    (
        id,
        document_id,
        version_number,
        s3_key,
        filename,
        mime_type,
        file_size,
        uploaded_by,
        created_at,
    ) = row
    return DocumentVersion(
        id=id,
        document_id=document_id,
        version_number=version_number,
        s3_key=s3_key,
        filename=filename,
        mime_type=mime_type,
        file_size=file_size,
        uploaded_by=uploaded_by,
        created_at=created_at,
        is_current=False,
    )
