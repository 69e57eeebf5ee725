# app/aws_client.py
import logging
import os
import secrets

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from starlette.concurrency import run_in_threadpool

from facilitiease.core.config import settings
from facilitiease.core.exceptions import Internal

logger = logging.getLogger(__name__)


class ObjectStorage:
    """S3 bucket holding uploaded facility images; only the returned URL is stored."""

    def __init__(self, bucket: str | None = None, region: str | None = None, prefix: str | None = None, client=None):
        self.bucket = bucket or settings.BUCKET_NAME
        self.region = region or settings.AWS_REGION
        self.prefix = (prefix or settings.UPLOAD_PREFIX).strip("/")
        self._client = client

    @property
    def client(self):
        if self._client is None:
            if not self.bucket:
                raise Internal("Object storage is not configured")
            self._client = boto3.client(
                "s3",
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
                region_name=self.region,
            )
        return self._client

    def object_key(self, filename: str) -> str:
        ext = os.path.splitext(filename or "")[1].lower()
        return f"{self.prefix}/{secrets.token_hex(16)}{ext}"

    def public_url(self, key: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def put(self, content: bytes, key: str, content_type: str) -> None:
        self.client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=content,
            ContentType=content_type,
        )

    async def upload(self, content: bytes, content_type: str, filename: str) -> str:
        """Upload a blob and return its durable URL."""
        key = self.object_key(filename)
        try:
            await run_in_threadpool(self.put, content, key, content_type)
        except (BotoCoreError, ClientError):
            logger.exception("Failed to upload %s to S3", key)
            raise Internal()
        logger.info("Uploaded %s (%d bytes)", key, len(content))
        return self.public_url(key)


object_storage = ObjectStorage()


def get_object_storage() -> ObjectStorage:
    return object_storage
