from .client import (
    S3Client,
    StorageNotConfiguredError,
    UPLOAD_URL_EXPIRES_SECONDS,
    DOWNLOAD_URL_EXPIRES_SECONDS,
)

__all__ = [
    "S3Client",
    "StorageNotConfiguredError",
    "UPLOAD_URL_EXPIRES_SECONDS",
    "DOWNLOAD_URL_EXPIRES_SECONDS",
]
