from pathlib import Path

import boto3

from planning_scraper.config.settings import Settings
from planning_scraper.logging.logger import Log
from planning_scraper.storage.local_backend import LocalStorageBackend
from planning_scraper.storage.models import StorageMode
from planning_scraper.storage.s3_backend import S3StorageBackend
from planning_scraper.storage.sink import PersistenceSink


class PersistenceSinkFactory:
    """Creates the persistence sink for the configured storage mode."""

    @classmethod
    def create(
        cls,
        settings: Settings,
        mode: StorageMode | None = None,
        s3_client: object | None = None,
    ) -> PersistenceSink:
        """Build backends once for the whole run.

        ``mode`` overrides ``settings.storage_mode`` (the CLI flag wins).
        """
        storage_mode = mode or StorageMode.parse(settings.storage_mode)
        local = LocalStorageBackend(downloads_root=Path(settings.downloads_root))
        remote = None
        if storage_mode.uses_remote:
            remote = cls._create_remote(settings, s3_client)
            Log.info(f"S3 storage enabled: s3://{settings.s3_bucket}/{settings.s3_prefix}/")
        Log.info(f"Keep local files: {storage_mode.keeps_local}")
        return PersistenceSink(mode=storage_mode, local=local, remote=remote)

    @classmethod
    def _create_remote(cls, settings: Settings, s3_client: object | None) -> S3StorageBackend:
        bucket = settings.s3_bucket.strip()
        if not bucket:
            raise ValueError("s3_bucket is required for remote storage modes (set S3_BUCKET)")
        client = s3_client or boto3.client("s3", region_name=settings.s3_region)
        return S3StorageBackend(
            client=client,
            bucket=bucket,
            region=settings.s3_region,
            prefix=settings.s3_prefix,
            source_tag=settings.s3_source_tag,
        )
