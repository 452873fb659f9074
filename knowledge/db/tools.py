"""Database operations for the shared tools directory."""

import logging
import uuid
from typing import Optional
from urllib.parse import urlparse
from uuid import UUID

from knowledge.models import Tool
from .connection import get_db_cursor

logger = logging.getLogger(__name__)

_TOOL_COLUMNS = """
    t.id, t.name, t.url, t.description, t.created_by, u.full_name,
    t.created_at, t.updated_at
"""


def get_all_tools() -> list[Tool]:
    """Get all tools with their creator's name, newest first."""
    with get_db_cursor() as cursor:
        cursor.execute(f"""
            SELECT {_TOOL_COLUMNS}
            FROM tools t
            LEFT JOIN users u ON u.id = t.created_by
            ORDER BY t.created_at DESC
        """)
        return [_row_to_tool(row) for row in cursor.fetchall()]


def get_tool_by_id(tool_id: UUID) -> Optional[Tool]:
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            SELECT {_TOOL_COLUMNS}
            FROM tools t
            LEFT JOIN users u ON u.id = t.created_by
            WHERE t.id = %s
            """,
            (tool_id,),
        )
        row = cursor.fetchone()
        return _row_to_tool(row) if row else None


def create_tool(
    name: str, url: str, created_by: UUID, description: Optional[str] = None
) -> Tool:
    """Add a tool to the directory.

    Raises:
        ValueError: If name or url is missing, or url is not an absolute http(s) URL.
    """
    validate_tool_fields(name, url)
    tool_id = uuid.uuid4()
    with get_db_cursor() as cursor:
        cursor.execute(
            """
            INSERT INTO tools (id, name, url, description, created_by)
            VALUES (%s, %s, %s, %s, %s)
            """,
            (tool_id, name, url, description or None, created_by),
        )
    logger.info(f"Created tool {tool_id} by user {created_by}")
    return _require(get_tool_by_id(tool_id))


def update_tool(
    tool_id: UUID, name: str, url: str, description: Optional[str] = None
) -> Optional[Tool]:
    """Replace a tool's fields. Returns None if not found."""
    validate_tool_fields(name, url)
    with get_db_cursor() as cursor:
        cursor.execute(
            """
            UPDATE tools
            SET name = %s, url = %s, description = %s, updated_at = NOW()
            WHERE id = %s
            """,
            (name, url, description or None, tool_id),
        )
        if cursor.rowcount == 0:
            return None
    return get_tool_by_id(tool_id)


def delete_tool(tool_id: UUID) -> bool:
    with get_db_cursor() as cursor:
        cursor.execute("DELETE FROM tools WHERE id = %s", (tool_id,))
        return cursor.rowcount > 0


def validate_tool_fields(name: str, url: str) -> None:
    if not name or not url:
        raise ValueError("Name and URL are required")
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("Invalid URL format")


def _require(tool: Optional[Tool]) -> Tool:
    if tool is None:
        raise RuntimeError("Tool disappeared right after it was written")
    return tool


def _row_to_tool(row) -> Tool:
    id, name, url, description, created_by, creator_name, created_at, updated_at = row
    return Tool(
        id=id,
        name=name,
        url=url,
        description=description,
        created_by=created_by,
        creator_name=creator_name,
        created_at=created_at,
        updated_at=updated_at,
    )
