from planning_scraper.batch.models import BatchSummary
from planning_scraper.logging.logger import Log


def summary_line(summary: BatchSummary) -> str:
    return f"{summary.succeeded} successful, {summary.failed} failed"


def log_summary(summary: BatchSummary) -> None:
    """Log the end-of-run report; always called, even when every document failed."""
    mode = summary.storage_mode.value.upper()
    Log.info(f"Download summary ({mode} mode): {summary_line(summary)}")
    if summary.storage_mode.uses_remote:
        stats = summary.upload_statistics
        Log.info(f"S3 uploads: {stats.succeeded} successful, {stats.failed} failed")
        Log.info(f"Total uploaded: {stats.total_megabytes} MB")
        if summary.remote_location:
            Log.info(f"S3 location: {summary.remote_location}")
    if summary.local_directory:
        Log.info(f"Files saved to: {summary.local_directory}")
    for url, title in summary.failures:
        Log.warning(f"Not retrieved: {url} - {title}")
