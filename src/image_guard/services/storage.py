"""S3 Storage service for accepted uploads."""

import io
import secrets
import string
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

import aioboto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import ClientError

from image_guard.config import S3Settings, get_settings
from image_guard.utils.exceptions import StorageError

_KEY_ALPHABET = string.ascii_lowercase + string.digits


class StorageService:
    """Service for S3/MinIO storage operations."""

    def __init__(self, s3_settings: S3Settings | None = None) -> None:
        self._settings = s3_settings or get_settings().s3
        self._session = aioboto3.Session()
        self._config = BotoConfig(
            signature_version="s3v4",
            retries={"max_attempts": 3, "mode": "adaptive"},
        )

    @asynccontextmanager
    async def _get_client(self) -> AsyncGenerator[Any, None]:
        """Get an S3 client."""
        async with self._session.client(
            "s3",
            endpoint_url=self._settings.endpoint_url,
            aws_access_key_id=self._settings.access_key_id,
            aws_secret_access_key=self._settings.secret_access_key,
            region_name=self._settings.region,
            config=self._config,
        ) as client:
            yield client

    async def check_bucket(self) -> None:
        """Verify the upload bucket is reachable. Buckets are provisioned elsewhere."""
        async with self._get_client() as client:
            try:
                await client.head_bucket(Bucket=self._settings.bucket_name)
            except ClientError as e:
                error_code = e.response.get("Error", {}).get("Code", "")
                raise StorageError(
                    f"Bucket {self._settings.bucket_name} unavailable: {error_code or e}"
                ) from e

    async def upload_file(
        self,
        key: str,
        data: bytes,
        content_type: str,
    ) -> str:
        """Upload a file to S3.

        Args:
            key: S3 object key
            data: File content
            content_type: Detected MIME type

        Returns:
            The S3 key of the uploaded file
        """
        async with self._get_client() as client:
            try:
                await client.upload_fileobj(
                    io.BytesIO(data),
                    self._settings.bucket_name,
                    key,
                    ExtraArgs={"ContentType": content_type},
                )
                return key
            except ClientError as e:
                raise StorageError(f"Failed to upload file: {e}") from e

    def get_public_url(self, key: str) -> str:
        """Public URL of an object in the bucket."""
        base = self._settings.public_base_url
        if not base:
            if self._settings.endpoint_url:
                base = f"{self._settings.endpoint_url}/{self._settings.bucket_name}"
            else:
                base = (
                    f"https://{self._settings.bucket_name}.s3."
                    f"{self._settings.region}.amazonaws.com"
                )
        return f"{base.rstrip('/')}/{key}"

    @staticmethod
    def generate_upload_key(prefix: str, extension: str) -> str:
        """Generate a unique key like 'uploads/1700000000000-k3j9x0a.png'."""
        suffix = "".join(secrets.choice(_KEY_ALPHABET) for _ in range(7))
        return f"{prefix}/{int(time.time() * 1000)}-{suffix}.{extension}"


# Singleton instance
storage_service = StorageService()
