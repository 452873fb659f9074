"""User model for application-level user management."""

from __future__ import annotations
from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel


Role = Literal["admin", "editor", "viewer"]
ROLES: tuple[Role, ...] = ("admin", "editor", "viewer")


class User(BaseModel):
    """Application user with role-based access control.

    Users are created automatically on first login via the identity provider.
    The id is the 'sub' claim from the JWT token.
    """

    id: UUID
    email: str | None
    full_name: str | None = None
    role: Role = "viewer"
    created_at: datetime
    updated_at: datetime

    @property
    def is_admin(self) -> bool:
        """Check if user has admin role."""
        return self.role == "admin"
