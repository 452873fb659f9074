from __future__ import annotations
from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field


# Normalized form of the loosely stored `documents.is_public` flag.
# See knowledge.access.visibility.normalize_visibility.
Visibility = Literal["public", "private", "unknown"]


class Document(BaseModel):
    """A document's metadata. The bytes live in the object store under `s3_key`."""

    id: UUID
    title: str
    description: str | None = None
    s3_key: str
    content_text: str | None = None
    created_by: UUID
    created_at: datetime
    updated_at: datetime | None = None
    visibility: Visibility = "public"
    version_number: int = 1
    filename: str | None = None
    mime_type: str | None = None
    file_size: int | None = None
    uploaded_by: UUID | None = None

    @property
    def owner_id(self) -> UUID:
        return self.created_by


class DocumentVersion(BaseModel):
    """One file version of a document, either the current one or an archived one."""

    id: UUID
    document_id: UUID
    version_number: int
    s3_key: str
    filename: str | None = None
    mime_type: str | None = None
    file_size: int | None = None
    uploaded_by: UUID | None = None
    created_at: datetime
    is_current: bool = Field(
        default=False, description="Whether this is the document's live version"
    )


class SearchResult(Document):
    """A document matched by a search, with its rank (3=title, 2=content, 1=description)."""

    relevance: int | None = None
