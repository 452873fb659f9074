import logging
from typing import Optional

from fastapi import HTTPException

from knowledge.integrations.s3 import S3Client, StorageNotConfiguredError

logger = logging.getLogger(__name__)

_storage: Optional[S3Client] = None


def _get_storage() -> S3Client:
    global _storage
    if _storage is None:
        _storage = S3Client.from_env()
    return _storage


def storage_client() -> S3Client:
    """The document bucket client. Responds 500 if no bucket is configured."""
    try:
        return _get_storage()
    except StorageNotConfiguredError as e:
        logger.error(str(e))
        raise HTTPException(status_code=500, detail=str(e))


def optional_storage_client() -> Optional[S3Client]:
    """The document bucket client, or None if no bucket is configured."""
    try:
        return _get_storage()
    except StorageNotConfiguredError:
        logger.warning("S3 bucket not configured; stored objects will not be touched")
        return None
