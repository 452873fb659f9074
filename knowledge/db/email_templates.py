"""Database operations for shared email templates."""

import logging
import uuid
from typing import Optional
from uuid import UUID

from knowledge.models import EmailTemplate
from .connection import get_db_cursor

logger = logging.getLogger(__name__)

_TEMPLATE_COLUMNS = "id, name, subject, body, created_by, created_at, updated_at"


def get_all_email_templates() -> list[EmailTemplate]:
    """Get all templates, newest first."""
    with get_db_cursor() as cursor:
        cursor.execute(
            f"SELECT {_TEMPLATE_COLUMNS} FROM email_templates ORDER BY created_at DESC"
        )
        return [_row_to_template(row) for row in cursor.fetchall()]


def get_email_template_by_id(template_id: UUID) -> Optional[EmailTemplate]:
    with get_db_cursor() as cursor:
        cursor.execute(
            f"SELECT {_TEMPLATE_COLUMNS} FROM email_templates WHERE id = %s",
            (template_id,),
        )
        row = cursor.fetchone()
        return _row_to_template(row) if row else None


def create_email_template(
    name: str, subject: str, body: str, created_by: UUID
) -> EmailTemplate:
    _validate(name, subject, body)
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            INSERT INTO email_templates (id, name, subject, body, created_by)
            VALUES (%s, %s, %s, %s, %s)
            RETURNING {_TEMPLATE_COLUMNS}
            """,
            (uuid.uuid4(), name, subject, body, created_by),
        )
        template = _row_to_template(cursor.fetchone())
        logger.info(f"Created email template {template.id} by user {created_by}")
        return template


def update_email_template(
    template_id: UUID, name: str, subject: str, body: str
) -> Optional[EmailTemplate]:
    """Replace a template's fields. Returns None if not found."""
    _validate(name, subject, body)
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            UPDATE email_templates
            SET name = %s, subject = %s, body = %s, updated_at = NOW()
            WHERE id = %s
            RETURNING {_TEMPLATE_COLUMNS}
            """,
            (name, subject, body, template_id),
        )
        row = cursor.fetchone()
        return _row_to_template(row) if row else None


def delete_email_template(template_id: UUID) -> bool:
    with get_db_cursor() as cursor:
        cursor.execute("DELETE FROM email_templates WHERE id = %s", (template_id,))
        return cursor.rowcount > 0


def _validate(name: str, subject: str, body: str) -> None:
    if not name or not subject or not body:
        raise ValueError("Name, subject, and body are required")


def _row_to_template(row) -> EmailTemplate:
    id, name, subject, body, created_by, created_at, updated_at = row
    return EmailTemplate(
        id=id,
        name=name,
        subject=subject,
        body=body,
        created_by=created_by,
        created_at=created_at,
        updated_at=updated_at,
    )
