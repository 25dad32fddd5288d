from pathlib import Path

from planning_scraper.logging.logger import Log
from planning_scraper.storage.base import BaseStorageBackend
from planning_scraper.storage.exceptions import LocalStorageError


def application_directory(downloads_root: Path, application_id: str) -> Path:
    """Build the per-application folder: {downloads_root}/downloads_{application_id}"""
    return downloads_root / f"downloads_{application_id}"


class LocalStorageBackend(BaseStorageBackend):
    """Writes documents into one folder per planning application."""

    def __init__(self, downloads_root: Path | None = None) -> None:
        self._downloads_root = downloads_root if downloads_root is not None else Path(".")

    def directory_for(self, application_id: str) -> Path:
        return application_directory(self._downloads_root, application_id)

    def store(self, content: bytes, filename: str, application_id: str) -> str:
        """Write bytes to disk, creating the application folder on first use.

        Raises:
            LocalStorageError: if the folder or the file cannot be written.
        """
        directory = self.directory_for(application_id)
        path = directory / filename
        try:
            if not directory.exists():
                directory.mkdir(parents=True, exist_ok=True)
                Log.info(f"Created folder: {directory}")
            path.write_bytes(content)
        except OSError as exc:
            raise LocalStorageError(f"Failed to write {path}: {exc}") from exc
        Log.info(f"Saved locally: {filename} ({len(content)} bytes)")
        return str(path)
