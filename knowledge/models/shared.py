"""Models for personal notes and the shared email-template and tool directories."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class Note(BaseModel):
    """A personal note. Only its owner can see or change it."""

    id: UUID
    title: str
    content: str
    user_id: UUID
    created_at: datetime
    updated_at: datetime

    @property
    def owner_id(self) -> UUID:
        return self.user_id


class EmailTemplate(BaseModel):
    """An email template shared by all users."""

    id: UUID
    name: str
    subject: str
    body: str
    created_by: UUID
    created_at: datetime
    updated_at: datetime

    @property
    def owner_id(self) -> UUID:
        return self.created_by


class Tool(BaseModel):
    """An entry in the shared tools directory."""

    id: UUID
    name: str
    url: str
    description: Optional[str] = None
    created_by: UUID
    creator_name: Optional[str] = Field(
        default=None, description="Display name of the creator, when known"
    )
    created_at: datetime
    updated_at: datetime

    @property
    def owner_id(self) -> UUID:
        return self.created_by
