"""Presigned URLs for moving document files in and out of the object store."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from knowledge.access import can_view
from knowledge.app.auth import require_reader, require_uploader
from knowledge.app.dependencies import storage_client
from knowledge.app.models import (
    UploadUrlRequest,
    UploadUrlResponse,
    DownloadUrlResponse,
)
from knowledge.db.documents import get_document_by_id
from knowledge.integrations.s3 import S3Client
from knowledge.models import User
from knowledge.utils.files import (
    build_upload_key,
    download_filename,
    validate_upload,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/files", tags=["files"])


@router.post("/upload-url", response_model=UploadUrlResponse)
def create_upload_url(
    request: UploadUrlRequest,
    user: User = Depends(require_uploader),
    storage: S3Client = Depends(storage_client),
) -> UploadUrlResponse:
    """Issue a short-lived URL the client can PUT a new file to.

    The returned key is what the client then passes to POST /documents.
    """
    try:
        validate_upload(request.filename, request.mime_type, request.file_size)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    key = build_upload_key(user.id, request.filename)
    signed_url = storage.presigned_upload_url(key, request.mime_type)
    logger.info(f"Issued upload URL for {key}")
    return UploadUrlResponse(signed_url=signed_url, key=key, bucket=storage.bucket)


@router.get("/download-url", response_model=DownloadUrlResponse)
def create_download_url(
    id: UUID,
    user: User = Depends(require_reader),
    storage: S3Client = Depends(storage_client),
) -> DownloadUrlResponse:
    """Issue a short-lived URL that downloads a document's current file."""
    document = get_document_by_id(id)
    if document is None or not can_view(document, user):
        raise HTTPException(status_code=404, detail="Document not found")

    filename = download_filename(storage.object_key(document.s3_key), document.title)
    url = storage.presigned_download_url(document.s3_key, filename)
    return DownloadUrlResponse(url=url, filename=filename)
