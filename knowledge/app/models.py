from typing import Optional

from pydantic import BaseModel, Field

from knowledge.models import CapabilitySet, Role
from .env_loader import EnvironmentName


class CreateDocumentRequest(BaseModel):
    """Metadata saved after the client has uploaded the file to its presigned URL."""

    title: str = Field(min_length=1)
    s3_key: str = Field(min_length=1)
    description: Optional[str] = None
    content_text: Optional[str] = None
    is_public: bool = True
    filename: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = Field(default=None, ge=0)


class UpdateDocumentRequest(BaseModel):
    """Request model for editing a document via PATCH.

    Only the title and description can change. Visibility is fixed at creation.
    """

    title: str = Field(min_length=1)
    description: Optional[str] = None


class NewVersionRequest(BaseModel):
    """A replacement file, already uploaded to its presigned URL."""

    s3_key: str = Field(min_length=1)
    filename: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = Field(default=None, ge=0)


class UploadUrlRequest(BaseModel):
    filename: str
    mime_type: str
    file_size: Optional[int] = None


class UploadUrlResponse(BaseModel):
    signed_url: str
    key: str
    bucket: str


class DownloadUrlResponse(BaseModel):
    url: str
    filename: str


class NoteRequest(BaseModel):
    title: str
    content: str


class EmailTemplateRequest(BaseModel):
    name: str
    subject: str
    body: str


class ToolRequest(BaseModel):
    name: str
    url: str
    description: Optional[str] = None


class UpdateRoleRequest(BaseModel):
    role: Role


class PermissionsResponse(BaseModel):
    """The caller's role and what it allows."""

    role: Optional[Role]
    permissions: CapabilitySet


class AnalyticsResponse(BaseModel):
    users: int
    documents: int
    email_templates: int
    tools: int


class DeleteResponse(BaseModel):
    success: bool = True


class EnvironmentResponse(BaseModel):
    """Response model for the environment endpoint."""

    environment: EnvironmentName
