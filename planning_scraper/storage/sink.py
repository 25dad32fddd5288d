from pathlib import Path

from planning_scraper.logging.logger import Log
from planning_scraper.resolver.models import ResolvedDocument
from planning_scraper.storage.exceptions import (
    LocalStorageError,
    PersistenceError,
    RemoteUploadError,
)
from planning_scraper.storage.local_backend import LocalStorageBackend
from planning_scraper.storage.models import PersistenceResult, StorageMode, UploadStatistics
from planning_scraper.storage.s3_backend import S3StorageBackend


class PersistenceSink:
    """Stores resolved documents according to the run's storage mode.

    local:  filesystem only.
    remote: object store; a failed upload falls back to the filesystem.
    both:   filesystem and object store, each attempted regardless of the other.
    """

    def __init__(
        self,
        mode: StorageMode,
        local: LocalStorageBackend,
        remote: S3StorageBackend | None = None,
    ) -> None:
        if mode.uses_remote and remote is None:
            raise ValueError(f"Storage mode '{mode.value}' requires a remote backend")
        self._mode = mode
        self._local = local
        self._remote = remote
        self._stats = UploadStatistics()

    @property
    def mode(self) -> StorageMode:
        return self._mode

    @property
    def statistics(self) -> UploadStatistics:
        return self._stats

    @property
    def local(self) -> LocalStorageBackend:
        return self._local

    @property
    def remote(self) -> S3StorageBackend | None:
        return self._remote

    def persist(self, document: ResolvedDocument, application_id: str) -> PersistenceResult:
        """Store one document.

        Raises:
            PersistenceError: if the document ended up stored nowhere.
        """
        result = PersistenceResult()
        if self._mode.uses_remote:
            self._upload(document, application_id, result)

        if self._mode.keeps_local or not result.stored_remotely:
            if not self._mode.keeps_local:
                Log.warning(
                    f"S3 upload failed, continuing with local storage: {document.filename}"
                )
            self._write_local(document, application_id, result)

        if not result.stored:
            raise PersistenceError(
                f"Document {document.filename} was not stored: {'; '.join(result.errors)}"
            )
        self._log_outcome(document, result)
        return result

    def remote_address(self, filename: str, application_id: str) -> str | None:
        if self._remote is None:
            return None
        return self._remote.object_url(filename, application_id)

    def public_address(self, filename: str, application_id: str) -> str | None:
        if self._remote is None:
            return None
        return self._remote.public_url(filename, application_id)

    def _upload(
        self,
        document: ResolvedDocument,
        application_id: str,
        result: PersistenceResult,
    ) -> None:
        if self._remote is None:
            raise ValueError("Remote backend is not configured")
        try:
            location = self._remote.store(document.content, document.filename, application_id)
        except RemoteUploadError as exc:
            self._stats.record_failure()
            result.errors.append(str(exc))
            Log.error(f"S3 upload failed for {document.filename}: {exc}")
            return
        self._stats.record_success(document.size_bytes)
        result.stored_remotely = True
        result.remote_location = location

    def _write_local(
        self,
        document: ResolvedDocument,
        application_id: str,
        result: PersistenceResult,
    ) -> None:
        try:
            path = self._local.store(document.content, document.filename, application_id)
        except LocalStorageError as exc:
            result.errors.append(str(exc))
            Log.error(f"Local write failed for {document.filename}: {exc}")
            if self._mode is StorageMode.LOCAL:
                raise
            return
        result.stored_locally = True
        result.local_path = Path(path)

    def _log_outcome(self, document: ResolvedDocument, result: PersistenceResult) -> None:
        size = document.size_bytes
        if result.stored_remotely and result.stored_locally:
            Log.info(f"Saved locally + S3: {document.filename} ({size} bytes)")
        elif result.stored_remotely:
            Log.info(f"Uploaded to S3 only: {document.filename} ({size} bytes)")
        else:
            Log.info(f"Saved locally: {document.filename} ({size} bytes)")
