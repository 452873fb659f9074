"""Database operations for personal notes."""

import logging
import uuid
from typing import Optional
from uuid import UUID

from knowledge.models import Note
from .connection import get_db_cursor

logger = logging.getLogger(__name__)

_NOTE_COLUMNS = "id, title, content, user_id, created_at, updated_at"


def get_notes_for_user(user_id: UUID) -> list[Note]:
    """Get a user's notes, most recently updated first."""
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            SELECT {_NOTE_COLUMNS}
            FROM personal_notes
            WHERE user_id = %s
            ORDER BY updated_at DESC
            """,
            (user_id,),
        )
        return [_row_to_note(row) for row in cursor.fetchall()]


def get_note_by_id(note_id: UUID) -> Optional[Note]:
    with get_db_cursor() as cursor:
        cursor.execute(
            f"SELECT {_NOTE_COLUMNS} FROM personal_notes WHERE id = %s",
            (note_id,),
        )
        row = cursor.fetchone()
        return _row_to_note(row) if row else None


def create_note(user_id: UUID, title: str, content: str) -> Note:
    """Create a note owned by `user_id`."""
    _validate(title, content)
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            INSERT INTO personal_notes (id, title, content, user_id)
            VALUES (%s, %s, %s, %s)
            RETURNING {_NOTE_COLUMNS}
            """,
            (uuid.uuid4(), title, content, user_id),
        )
        return _row_to_note(cursor.fetchone())


def update_note(note_id: UUID, title: str, content: str) -> Optional[Note]:
    """Replace a note's title and content. Returns None if not found."""
    _validate(title, content)
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            UPDATE personal_notes
            SET title = %s, content = %s, updated_at = NOW()
            WHERE id = %s
            RETURNING {_NOTE_COLUMNS}
            """,
            (title, content, note_id),
        )
        row = cursor.fetchone()
        return _row_to_note(row) if row else None


def delete_note(note_id: UUID) -> bool:
    """Delete a note. Returns False if it did not exist."""
    with get_db_cursor() as cursor:
        cursor.execute("DELETE FROM personal_notes WHERE id = %s", (note_id,))
        return cursor.rowcount > 0


def _validate(title: str, content: str) -> None:
    if not title or not content:
        raise ValueError("Title and content are required")


def _row_to_note(row) -> Note:
    id, title, content, user_id, created_at, updated_at = row
    return Note(
        id=id,
        title=title,
        content=content,
        user_id=user_id,
        created_at=created_at,
        updated_at=updated_at,
    )
