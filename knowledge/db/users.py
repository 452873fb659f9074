"""Database operations for user management."""

import logging
from typing import Optional
from uuid import UUID

from knowledge.models.user import User, Role, ROLES
from .connection import get_db_cursor

logger = logging.getLogger(__name__)

_USER_COLUMNS = "id, email, full_name, role, created_at, updated_at"


def get_user_by_id(user_id: UUID) -> Optional[User]:
    """Get a user by id (the identity provider's 'sub' claim)."""
    with get_db_cursor() as cursor:
        cursor.execute(
            f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s",
            (str(user_id),),
        )
        row = cursor.fetchone()
        return _row_to_user(row) if row else None


def get_all_users() -> list[User]:
    """Get every user, most recently created first."""
    with get_db_cursor() as cursor:
        cursor.execute(f"SELECT {_USER_COLUMNS} FROM users ORDER BY created_at DESC")
        return [_row_to_user(row) for row in cursor.fetchall()]


def create_user(
    user_id: UUID,
    email: Optional[str],
    full_name: Optional[str],
    role: Role = "viewer",
) -> User:
    """Create a new user record.

    Args:
        user_id: The 'sub' claim from the JWT token.
        email: User's email (cached from JWT, may be None).
        full_name: User's display name (cached from JWT, may be None).
        role: User's role, defaults to 'viewer'.

    Returns:
        The created User object.
    """
    logger.info(f"Creating new user with id={user_id}, email={email}")

    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            INSERT INTO users (id, email, full_name, role)
            VALUES (%s, %s, %s, %s)
            ON CONFLICT (id) DO UPDATE SET email = EXCLUDED.email
            RETURNING {_USER_COLUMNS}
            """,
            (str(user_id), email, full_name, role),
        )
        row = cursor.fetchone()
        return _row_to_user(row)


def update_user_profile(
    user_id: UUID,
    email: Optional[str],
    full_name: Optional[str],
) -> Optional[User]:
    """Refresh a user's cached profile from the identity provider.

    A missing full_name in the token keeps the stored one.

    Returns:
        The updated User object, or None if user not found.
    """
    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            UPDATE users
            SET email = %s, full_name = COALESCE(%s, full_name)
            WHERE id = %s
            RETURNING {_USER_COLUMNS}
            """,
            (email, full_name, str(user_id)),
        )
        row = cursor.fetchone()
        return _row_to_user(row) if row else None


def update_user_role(user_id: UUID, role: Role) -> Optional[User]:
    """Set a user's role. Returns None if the user does not exist.

    Raises:
        ValueError: If `role` is not a known role.
    """
    if role not in ROLES:
        raise ValueError(f"Invalid role: {role}")

    with get_db_cursor() as cursor:
        cursor.execute(
            f"""
            UPDATE users SET role = %s
            WHERE id = %s
            RETURNING {_USER_COLUMNS}
            """,
            (role, str(user_id)),
        )
        row = cursor.fetchone()
        if row:
            logger.info(f"Changed role of user {user_id} to {role}")
        return _row_to_user(row) if row else None


def get_or_create_user(
    user_id: UUID,
    email: Optional[str],
    full_name: Optional[str],
) -> User:
    """Get an existing user or create a new one.

    This is the main entry point for user management during authentication.
    Existing users get their profile refreshed if it changed; new users are
    created with the 'viewer' role.
    """
    existing_user = get_user_by_id(user_id)

    if existing_user:
        if existing_user.email != email or (
            full_name is not None and existing_user.full_name != full_name
        ):
            logger.debug(f"Updating profile for user {user_id}")
            updated_user = update_user_profile(user_id, email, full_name)
            if updated_user:
                return updated_user
        return existing_user

    return create_user(user_id, email, full_name, role="viewer")


def _row_to_user(row) -> User:
    """Convert a database row to a User object."""
    id, email, full_name, role, created_at, updated_at = row
    return User(
        id=id,
        email=email,
        full_name=full_name,
        # Rows created before roles existed have no role; they are viewers.
        role=role or "viewer",
        created_at=created_at,
        updated_at=updated_at,
    )
