import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from planning_scraper.batch.models import BatchSummary
from planning_scraper.batch.orchestrator import BatchOrchestrator
from planning_scraper.batch.report import log_summary
from planning_scraper.config.settings import Settings
from planning_scraper.diagnostics.writer import DiagnosticsWriter
from planning_scraper.http.session_client import SessionClient
from planning_scraper.logging.logger import Log
from planning_scraper.portal.exceptions import SessionError
from planning_scraper.portal.negotiator import PostbackNegotiator
from planning_scraper.resolver.document_resolver import DocumentResolver
from planning_scraper.storage.factory import PersistenceSinkFactory
from planning_scraper.storage.models import StorageMode
from planning_scraper.storage.sink import PersistenceSink


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="planning-scraper",
        description="Download the documents of one planning application.",
        epilog=(
            "Environment (required for remote storage): S3_BUCKET, S3_REGION, "
            "S3_PREFIX, AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY"
        ),
    )
    parser.add_argument("application_id", help="Planning application ID, e.g. 2461047")
    parser.add_argument(
        "--storage",
        default=None,
        choices=["local", "remote", "s3", "both"],
        help="local (default), remote/s3 (object store only) or both",
    )
    return parser


def build_session(settings: Settings) -> SessionClient:
    return SessionClient(
        user_agent=settings.user_agent,
        accept_language=settings.accept_language,
        page_timeout_seconds=settings.page_timeout_seconds,
        download_timeout_seconds=settings.download_timeout_seconds,
    )


def run_application(
    application_id: str,
    settings: Settings,
    session: SessionClient,
    sink: PersistenceSink,
) -> BatchSummary:
    """Negotiate the session, list documents and download them all.

    Raises:
        SessionError: if the document list could not be obtained.
    """
    diagnostics = DiagnosticsWriter(
        Path(settings.debug_dir), enabled=settings.debug_artifacts_enabled
    )
    negotiator = PostbackNegotiator(session, settings.portal_base_url, diagnostics)
    resolver = DocumentResolver(session, settings.portal_base_url, diagnostics)
    orchestrator = BatchOrchestrator(
        resolver,
        sink,
        politeness_delay_seconds=settings.politeness_delay_seconds,
    )
    references = negotiator.list_documents(application_id)
    return orchestrator.run(application_id, references)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: settings -> storage sink -> session -> negotiate -> download -> report."""
    args = build_parser().parse_args(argv)
    try:
        settings = Settings()
    except ValueError as exc:
        Log.configure("INFO")
        Log.error(f"Invalid configuration: {exc}")
        return 1
    Log.configure(settings.log_level)
    Log.bind_application(args.application_id)

    try:
        mode = StorageMode.parse(args.storage or settings.storage_mode)
        sink = PersistenceSinkFactory.create(settings, mode=mode)
    except ValueError as exc:
        Log.error(str(exc))
        return 1

    Log.info(f"Starting scraper for application {args.application_id}")
    Log.info(f"Storage mode: {mode.value.upper()}")

    with build_session(settings) as session:
        try:
            summary = run_application(args.application_id, settings, session, sink)
        except SessionError as exc:
            Log.error(f"Error: {exc}")
            return 1
    log_summary(summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
