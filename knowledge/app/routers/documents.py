"""Document routes: listing, metadata CRUD and file versions."""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from knowledge.access import (
    authorize_delete,
    authorize_edit,
    can_view,
    list_visible,
)
from knowledge.app.auth import (
    require_reader,
    require_uploader,
    require_editor,
    require_deleter,
)
from knowledge.app.dependencies import optional_storage_client
from knowledge.app.models import (
    CreateDocumentRequest,
    UpdateDocumentRequest,
    NewVersionRequest,
    DeleteResponse,
)
from knowledge.db.documents import (
    get_visible_documents,
    get_document_by_id,
    create_document,
    update_document,
    delete_document,
    get_document_versions,
    add_document_version,
    current_version_of,
)
from knowledge.integrations.s3 import S3Client
from knowledge.models import Document, DocumentVersion, User
from knowledge.utils.files import is_own_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.get("", response_model=list[Document])
def read_documents(
    limit: int = Query(default=100, ge=1, le=500),
    user: User = Depends(require_reader),
) -> list[Document]:
    """Get the documents the caller may see, newest first."""
    return list_visible(get_visible_documents(user, limit=limit), user)


@router.get("/{document_id}", response_model=Document)
def read_document(
    document_id: UUID,
    user: User = Depends(require_reader),
) -> Document:
    return _get_visible_document(document_id, user)


@router.post("", status_code=201, response_model=Document)
def create_document_endpoint(
    request: CreateDocumentRequest,
    user: User = Depends(require_uploader),
    storage: Optional[S3Client] = Depends(optional_storage_client),
) -> Document:
    """Save metadata for a file the caller uploaded through /files/upload-url.

    Documents are public unless `is_public` is false. The key must be one
    issued to the caller.
    """
    _require_own_upload(request.s3_key, user, storage)
    try:
        return create_document(
            title=request.title,
            s3_key=request.s3_key,
            created_by=user.id,
            description=request.description,
            content_text=request.content_text,
            is_public=request.is_public,
            filename=request.filename,
            mime_type=request.mime_type,
            file_size=request.file_size,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{document_id}", response_model=Document)
def update_document_endpoint(
    document_id: UUID,
    request: UpdateDocumentRequest,
    user: User = Depends(require_editor),
) -> Document:
    """Edit a document's title or description.

    Private documents can only be edited by their owner or an admin.
    """
    document = _get_visible_document(document_id, user)
    authorize_edit(document, user)

    try:
        updated = update_document(
            document_id,
            title=request.title,
            description=request.description,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if updated is None:
        raise _not_found(document_id)
    return updated


@router.delete("/{document_id}", response_model=DeleteResponse)
def delete_document_endpoint(
    document_id: UUID,
    user: User = Depends(require_deleter),
    storage: Optional[S3Client] = Depends(optional_storage_client),
) -> DeleteResponse:
    """Delete a document, its archived versions and their stored files.

    Failing to remove a stored file does not fail the request.
    """
    document = get_document_by_id(document_id)
    if document is None:
        raise _not_found(document_id)
    authorize_delete(document, user)

    keys = delete_document(document_id)
    if keys is None:
        raise _not_found(document_id)

    if storage is not None:
        for key in keys:
            storage.delete_object(key)
    return DeleteResponse()


@router.get("/{document_id}/versions", response_model=list[DocumentVersion])
def read_document_versions(
    document_id: UUID,
    user: User = Depends(require_reader),
) -> list[DocumentVersion]:
    """Get the current and archived versions of a document, newest first."""
    document = _get_visible_document(document_id, user)
    versions = [current_version_of(document), *get_document_versions(document_id)]
    return sorted(versions, key=lambda v: v.version_number, reverse=True)


@router.post("/{document_id}/versions", status_code=201, response_model=Document)
def create_document_version(
    document_id: UUID,
    request: NewVersionRequest,
    user: User = Depends(require_editor),
    storage: Optional[S3Client] = Depends(optional_storage_client),
) -> Document:
    """Replace a document's file. The previous file is kept as an archived version."""
    document = _get_visible_document(document_id, user)
    authorize_edit(document, user)
    _require_own_upload(request.s3_key, user, storage)

    try:
        updated = add_document_version(
            document_id,
            s3_key=request.s3_key,
            uploaded_by=user.id,
            filename=request.filename,
            mime_type=request.mime_type,
            file_size=request.file_size,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if updated is None:
        raise _not_found(document_id)
    return updated


def _get_visible_document(document_id: UUID, user: User) -> Document:
    """Fetch a document, answering 404 both when it is missing and when it is hidden."""
    document = get_document_by_id(document_id)
    if document is None or not can_view(document, user):
        raise _not_found(document_id)
    return document


def _not_found(document_id: UUID) -> HTTPException:
    return HTTPException(
        status_code=404, detail=f"Document with ID '{document_id}' not found"
    )


def _require_own_upload(s3_key: str, user: User, storage: Optional[S3Client]) -> None:
    """Answer 400 unless the key lies under the caller's own upload prefix."""
    bucket = storage.bucket if storage else None
    if not is_own_upload(s3_key, user.id, bucket):
        logger.warning(f"User {user.id} tried to register foreign key {s3_key}")
        raise HTTPException(
            status_code=400, detail="File key does not belong to one of your uploads"
        )
