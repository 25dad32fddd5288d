from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path


class StorageMode(StrEnum):
    """Run-wide choice of which backend(s) receive documents."""

    LOCAL = "local"
    REMOTE = "remote"
    BOTH = "both"

    @classmethod
    def parse(cls, value: str) -> "StorageMode":
        """Parse a CLI/env value; ``s3`` is accepted as an alias for ``remote``."""
        normalized = value.strip().lower()
        if normalized == "s3":
            return cls.REMOTE
        try:
            return cls(normalized)
        except ValueError:
            supported = [mode.value for mode in cls] + ["s3"]
            raise ValueError(
                f"Unknown storage mode '{value}'. Choose from: {supported}"
            ) from None

    @property
    def uses_remote(self) -> bool:
        return self is not StorageMode.LOCAL

    @property
    def keeps_local(self) -> bool:
        return self is not StorageMode.REMOTE


@dataclass
class UploadStatistics:
    """Remote upload accounting for the whole run."""

    succeeded: int = 0
    failed: int = 0
    total_bytes: int = 0

    @property
    def total_megabytes(self) -> float:
        return round(self.total_bytes / 1024 / 1024, 2)

    def record_success(self, size_bytes: int) -> None:
        self.succeeded += 1
        self.total_bytes += size_bytes

    def record_failure(self) -> None:
        self.failed += 1


@dataclass
class PersistenceResult:
    stored_locally: bool = False
    stored_remotely: bool = False
    remote_location: str | None = None
    local_path: Path | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def stored(self) -> bool:
        return self.stored_locally or self.stored_remotely
