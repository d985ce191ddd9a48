"""Project image storage on S3-compatible object storage (AWS S3 or MinIO).

boto3 is synchronous, so every call runs in a worker thread.
"""

import asyncio
import time
from typing import Protocol
from urllib.parse import unquote, urlparse
from uuid import UUID

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from src.projecthub.core.config import Settings, get_settings
from src.projecthub.core.logging import get_logger

logger = get_logger(__name__)

_NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


class ImageStorage(Protocol):
    """Object storage operations used by project handling."""

    async def upload_image(
        self, project_id: UUID, filename: str, content: bytes, content_type: str
    ) -> str: ...

    async def delete_object(self, reference: str) -> None: ...


class S3ImageStorage:
    """Stores project images under ``projects/<project_id>/`` in one bucket.

    The reference stored on a project is the object's public URL; deletion
    accepts either that URL or a bare object key.
    """

    def __init__(self, settings: Settings, client=None):
        self.bucket = settings.storage_bucket
        self.public_base_url = (
            settings.storage_public_base_url
            or _default_public_base_url(settings)
        ).rstrip("/")
        self._settings = settings
        self._client = client

    def _get_client(self):
        """Lazy initialization of the S3 client."""
        if self._client is None:
            settings = self._settings
            self._client = boto3.client(
                "s3",
                endpoint_url=settings.storage_endpoint_url,
                aws_access_key_id=settings.storage_access_key_id,
                aws_secret_access_key=settings.storage_secret_access_key,
                region_name=settings.storage_region,
                config=Config(signature_version="s3v4", s3={"addressing_style": "path"}),
            )
        return self._client

    def object_key(self, project_id: UUID, filename: str) -> str:
        safe_name = filename.replace("/", "_").replace("\\", "_") or "image"
        return f"projects/{project_id}/{int(time.time() * 1000)}_{safe_name}"

    def key_from_reference(self, reference: str) -> str:
        """Resolve a stored URL (or raw key) to the object key."""
        if reference.startswith(self.public_base_url + "/"):
            return unquote(reference[len(self.public_base_url) + 1 :])
        parsed = urlparse(reference)
        if parsed.scheme in ("http", "https"):
            path = unquote(parsed.path.lstrip("/"))
            # Path-style URLs carry the bucket as the first segment
            if path.startswith(f"{self.bucket}/"):
                path = path[len(self.bucket) + 1 :]
            return path
        return reference

    async def upload_image(
        self, project_id: UUID, filename: str, content: bytes, content_type: str
    ) -> str:
        key = self.object_key(project_id, filename)
        client = self._get_client()
        await asyncio.to_thread(
            client.put_object,
            Bucket=self.bucket,
            Key=key,
            Body=content,
            ContentType=content_type,
        )
        logger.info("Project image uploaded", project_id=str(project_id), key=key)
        return f"{self.public_base_url}/{key}"

    async def delete_object(self, reference: str) -> None:
        """Delete the object at reference. A missing object is not an error."""
        key = self.key_from_reference(reference)
        client = self._get_client()
        try:
            await asyncio.to_thread(client.delete_object, Bucket=self.bucket, Key=key)
        except ClientError as e:
            code = str(e.response.get("Error", {}).get("Code", ""))
            if code in _NOT_FOUND_CODES:
                logger.info("Image already absent from storage", key=key)
                return
            raise
        logger.info("Project image deleted", key=key)


def _default_public_base_url(settings: Settings) -> str:
    if settings.storage_endpoint_url:
        return f"{settings.storage_endpoint_url.rstrip('/')}/{settings.storage_bucket}"
    return f"https://{settings.storage_bucket}.s3.{settings.storage_region}.amazonaws.com"


def create_image_storage(settings: Settings | None = None) -> S3ImageStorage:
    """Build the storage component installed on app.state at startup."""
    return S3ImageStorage(settings or get_settings())
