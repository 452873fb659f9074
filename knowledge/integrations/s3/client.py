import logging
import os
from dataclasses import dataclass, field
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from knowledge.utils.files import strip_bucket_prefix

logger = logging.getLogger(__name__)

UPLOAD_URL_EXPIRES_SECONDS = 300  # 5 minutes
DOWNLOAD_URL_EXPIRES_SECONDS = 3600  # 1 hour


class StorageNotConfiguredError(Exception):
    """Raised when no bucket is configured for document storage."""

    pass


@dataclass
class S3Client:
    """Issues presigned URLs for the document bucket and removes stored objects.

    The service never moves file bytes itself; clients PUT and GET directly
    against the object store using the URLs issued here.
    """

    bucket: str
    region: str = "us-east-1"
    endpoint_url: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    _client: Any = field(default=None, repr=False)

    @classmethod
    def from_env(cls) -> "S3Client":
        """Build a client from S3_BUCKET, AWS_REGION, S3_ENDPOINT_URL and AWS credentials.

        Raises:
            StorageNotConfiguredError: If S3_BUCKET is not set.
        """
        bucket = os.getenv("S3_BUCKET")
        if not bucket:
            raise StorageNotConfiguredError("S3 bucket not configured")
        return cls(
            bucket=bucket,
            region=os.getenv("AWS_REGION", "us-east-1"),
            endpoint_url=os.getenv("S3_ENDPOINT_URL") or None,
            access_key_id=os.getenv("AWS_ACCESS_KEY_ID"),
            secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY"),
        )

    def _get_client(self):
        """Lazily create the boto3 S3 client."""
        if self._client is None:
            kwargs: dict[str, Any] = {"region_name": self.region}
            if self.endpoint_url:
                kwargs["endpoint_url"] = self.endpoint_url
            if self.access_key_id and self.secret_access_key:
                kwargs["aws_access_key_id"] = self.access_key_id
                kwargs["aws_secret_access_key"] = self.secret_access_key
            self._client = boto3.client("s3", **kwargs)
        return self._client

    def object_key(self, stored_key: str) -> str:
        """Turn a key as stored on a document row into the key inside the bucket."""
        return strip_bucket_prefix(stored_key, self.bucket)

    def presigned_upload_url(
        self,
        key: str,
        content_type: str,
        expires_in: int = UPLOAD_URL_EXPIRES_SECONDS,
    ) -> str:
        """Get a URL the client can PUT the file to."""
        return self._get_client().generate_presigned_url(
            "put_object",
            Params={"Bucket": self.bucket, "Key": key, "ContentType": content_type},
            ExpiresIn=expires_in,
        )

    def presigned_download_url(
        self,
        stored_key: str,
        filename: str,
        expires_in: int = DOWNLOAD_URL_EXPIRES_SECONDS,
    ) -> str:
        """Get a URL that downloads the object as an attachment named `filename`."""
        return self._get_client().generate_presigned_url(
            "get_object",
            Params={
                "Bucket": self.bucket,
                "Key": self.object_key(stored_key),
                "ResponseContentDisposition": f'attachment; filename="{filename}"',
            },
            ExpiresIn=expires_in,
        )

    def delete_object(self, stored_key: str) -> bool:
        """Delete an object. Failures are logged and reported, not raised."""
        key = self.object_key(stored_key)
        try:
            self._get_client().delete_object(Bucket=self.bucket, Key=key)
            return True
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to delete s3://{self.bucket}/{key}: {e}")
            return False
