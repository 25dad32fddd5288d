import io
from datetime import UTC, datetime
from typing import Any

from boto3.exceptions import Boto3Error
from botocore.exceptions import BotoCoreError, ClientError

from planning_scraper.logging.logger import Log
from planning_scraper.storage.base import BaseStorageBackend
from planning_scraper.storage.content_types import content_type_for
from planning_scraper.storage.exceptions import RemoteUploadError


class S3StorageBackend(BaseStorageBackend):
    """Uploads documents to an S3 bucket under {prefix}/{application_id}/."""

    def __init__(
        self,
        *,
        client: Any,
        bucket: str,
        region: str = "us-east-1",
        prefix: str = "planning-docs",
        source_tag: str = "meath-planning-scraper",
    ) -> None:
        self._client = client
        self._bucket = bucket
        self._region = region
        self._prefix = prefix.strip("/")
        self._source_tag = source_tag

    @property
    def bucket(self) -> str:
        return self._bucket

    def object_key(self, filename: str, application_id: str) -> str:
        return f"{self._prefix}/{application_id}/{filename}"

    def object_url(self, filename: str, application_id: str) -> str:
        return f"s3://{self._bucket}/{self.object_key(filename, application_id)}"

    def public_url(self, filename: str, application_id: str) -> str:
        key = self.object_key(filename, application_id)
        return f"https://{self._bucket}.s3.{self._region}.amazonaws.com/{key}"

    def location_for(self, application_id: str) -> str:
        return f"s3://{self._bucket}/{self._prefix}/{application_id}/"

    def store(self, content: bytes, filename: str, application_id: str) -> str:
        """Upload bytes with content type and provenance metadata.

        Raises:
            RemoteUploadError: on any boto3/botocore failure.
        """
        key = self.object_key(filename, application_id)
        Log.info(f"Uploading to S3: s3://{self._bucket}/{key}")
        extra_args = {
            "ContentType": content_type_for(filename),
            "Metadata": {
                "application-id": application_id,
                "uploaded-at": datetime.now(UTC).isoformat(),
                "source": self._source_tag,
                "file-size": str(len(content)),
            },
        }
        try:
            self._client.upload_fileobj(
                io.BytesIO(content),
                self._bucket,
                key,
                ExtraArgs=extra_args,
            )
        except (Boto3Error, BotoCoreError, ClientError) as exc:
            raise RemoteUploadError(f"S3 upload failed for {filename}: {exc}") from exc
        Log.info(f"S3 upload complete: {filename}")
        return self.object_url(filename, application_id)
