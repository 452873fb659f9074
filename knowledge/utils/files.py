"""Helpers for naming, validating and locating uploaded files in the object store."""

import re
import time
from typing import Optional
from uuid import UUID

MAX_FILE_SIZE = 50 * 1024 * 1024  # 50 MiB
ALLOWED_MIME_TYPES = frozenset(
    {
        "image/jpeg",
        "image/png",
        "image/gif",
        "image/webp",
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "text/plain",
        "text/csv",
        "application/vnd.ms-excel",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "application/zip",
        "application/x-zip-compressed",
        "application/x-zip",
    }
)

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.-]")
_TIMESTAMP_PREFIX = re.compile(r"^\d+-(.+)$")


def validate_upload(filename: str, mime_type: str, file_size: Optional[int]) -> None:
    """Check an upload request before a URL is issued for it.

    Raises:
        ValueError: With a message suitable for the client.
    """
    if not filename or not mime_type:
        raise ValueError("Filename and mimeType are required")
    if file_size is not None and file_size > MAX_FILE_SIZE:
        raise ValueError(
            f"File size exceeds maximum of {MAX_FILE_SIZE // (1024 * 1024)}MB"
        )
    if mime_type not in ALLOWED_MIME_TYPES:
        raise ValueError("File type not allowed")


def sanitize_filename(filename: str) -> str:
    return _UNSAFE_CHARS.sub("_", filename)


def build_upload_key(
    user_id: UUID | str, filename: str, timestamp_ms: Optional[int] = None
) -> str:
    """Build the storage key for a new upload: uploads/<user>/<ms>-<safe name>."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{upload_prefix(user_id)}{timestamp_ms}-{sanitize_filename(filename)}"


def strip_bucket_prefix(key: str, bucket: str) -> str:
    """Drop a leading '<bucket>/' that some stored keys carry."""
    prefix = f"{bucket}/"
    if key.startswith(prefix):
        return key[len(prefix) :]
    return key


def upload_prefix(user_id: UUID | str) -> str:
    return f"uploads/{user_id}/"


def is_own_upload(key: str, user_id: UUID | str, bucket: Optional[str] = None) -> bool:
    """Check that a key lies under the upload prefix issued to `user_id`.

    A leading '<bucket>/' is ignored when `bucket` is given.
    """
    if bucket:
        key = strip_bucket_prefix(key, bucket)
    prefix = upload_prefix(user_id)
    return key.startswith(prefix) and len(key) > len(prefix)


def download_filename(key: str, title: Optional[str] = None) -> str:
    """Recover the original filename from a storage key.

    Keys look like uploads/<user>/<ms>-<name>; the timestamp prefix is removed.
    Falls back to the title, then to 'document'.
    """
    basename = key.rsplit("/", 1)[-1]
    match = _TIMESTAMP_PREFIX.match(basename)
    original = match.group(1) if match else basename
    return original or title or "document"
