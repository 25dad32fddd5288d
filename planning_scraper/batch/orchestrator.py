import time
from collections.abc import Callable, Sequence

from planning_scraper.batch.models import BatchSummary
from planning_scraper.logging.logger import Log
from planning_scraper.portal.models import DocumentReference
from planning_scraper.resolver.document_resolver import DocumentResolver
from planning_scraper.resolver.exceptions import ResolutionError
from planning_scraper.resolver.naming import derive_filename
from planning_scraper.storage.exceptions import PersistenceError
from planning_scraper.storage.sink import PersistenceSink


class BatchOrchestrator:
    """Resolve and persist references one at a time: pause -> resolve -> persist -> count."""

    def __init__(
        self,
        resolver: DocumentResolver,
        sink: PersistenceSink,
        politeness_delay_seconds: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._resolver = resolver
        self._sink = sink
        self._delay = politeness_delay_seconds
        self._sleep = sleep

    def run(
        self,
        application_id: str,
        references: Sequence[DocumentReference],
    ) -> BatchSummary:
        """Process every reference in order; one failure never stops the batch."""
        summary = BatchSummary(
            application_id=application_id,
            storage_mode=self._sink.mode,
            total=len(references),
            upload_statistics=self._sink.statistics,
        )
        if self._sink.mode.keeps_local:
            summary.local_directory = str(self._sink.local.directory_for(application_id))
        if self._sink.remote is not None:
            summary.remote_location = self._sink.remote.location_for(application_id)

        if not references:
            Log.warning("No documents found to download")
            return summary

        Log.info(f"Starting download of {len(references)} documents")
        for index, reference in enumerate(references, start=1):
            if index > 1:
                self._sleep(self._delay)
            if self._process(application_id, reference, index, len(references)):
                summary.succeeded += 1
            else:
                summary.failed += 1
                summary.failures.append((reference.url, reference.title))
        return summary

    def _process(
        self,
        application_id: str,
        reference: DocumentReference,
        index: int,
        total: int,
    ) -> bool:
        filename = derive_filename(reference.url, reference.title)
        Log.info(f"Downloading {index}/{total}: {filename}")
        try:
            document = self._resolver.resolve(reference, index=index, filename=filename)
            self._sink.persist(document, application_id)
        except (ResolutionError, PersistenceError, OSError) as exc:
            Log.error(f"Failed to download file {index} ({filename}): {exc}")
            return False
        return True
