"""Dashboard counts."""

from knowledge.access import visibility_filter_sql
from knowledge.models import User
from .connection import get_db_cursor


def get_counts(viewer: User) -> dict[str, int]:
    """Count users, documents visible to `viewer`, email templates and tools."""
    filter_sql, filter_params = visibility_filter_sql(viewer)
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            SELECT
                (SELECT COUNT(*) FROM users),
                (SELECT COUNT(*) FROM documents WHERE {filter_sql}),
                (SELECT COUNT(*) FROM email_templates),
                (SELECT COUNT(*) FROM tools)
            """,
            filter_params,
        )
        users, documents, email_templates, tools = cursor.fetchone()
    return {
        "users": users or 0,
        "documents": documents or 0,
        "email_templates": email_templates or 0,
        "tools": tools or 0,
    }
