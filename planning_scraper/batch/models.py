from dataclasses import dataclass, field

from planning_scraper.storage.models import StorageMode, UploadStatistics


@dataclass
class BatchSummary:
    """Outcome of one run over an application's document list."""

    application_id: str
    storage_mode: StorageMode
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    upload_statistics: UploadStatistics = field(default_factory=UploadStatistics)
    local_directory: str | None = None
    remote_location: str | None = None
    failures: list[tuple[str, str]] = field(default_factory=list)
