from pathlib import Path

from planning_scraper.logging.logger import Log


class DiagnosticsWriter:
    """Dumps raw pages and payloads that could not be resolved, for later inspection."""

    def __init__(self, directory: Path, enabled: bool = True) -> None:
        self._directory = directory
        self._enabled = enabled

    @property
    def directory(self) -> Path:
        return self._directory

    def write_text(self, name: str, content: str) -> Path | None:
        return self.write_bytes(name, content.encode("utf-8"))

    def write_bytes(self, name: str, content: bytes) -> Path | None:
        """Write a diagnostic artifact; returns its path, or None when disabled.

        A failing dump is logged and never masks the error being diagnosed.
        """
        if not self._enabled:
            return None
        path = self._directory / name
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as exc:
            Log.warning(f"Could not write diagnostic artifact {path}: {exc}")
            return None
        Log.info(f"Diagnostic artifact saved to {path}")
        return path
