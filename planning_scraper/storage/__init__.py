from planning_scraper.storage.exceptions import (
    LocalStorageError,
    PersistenceError,
    RemoteUploadError,
)
from planning_scraper.storage.factory import PersistenceSinkFactory
from planning_scraper.storage.models import PersistenceResult, StorageMode, UploadStatistics
from planning_scraper.storage.sink import PersistenceSink

__all__ = [
    "LocalStorageError",
    "PersistenceError",
    "PersistenceResult",
    "PersistenceSink",
    "PersistenceSinkFactory",
    "RemoteUploadError",
    "StorageMode",
    "UploadStatistics",
]
