from pathlib import Path

from planning_scraper.diagnostics.writer import DiagnosticsWriter
from planning_scraper.http.session_client import SessionClient
from planning_scraper.portal.models import DocumentReference
from planning_scraper.resolver.models import ResolvedDocument
from planning_scraper.resolver.naming import derive_filename
from planning_scraper.resolver.pipeline import ResolutionContext, ResolutionStep
from planning_scraper.resolver.steps import DownloadStep, ViewerPageStep, ViewFilesStep

DEFAULT_CONTENT_TYPE = "application/pdf"


class DocumentResolver:
    """Turns a view-files link into a verified document payload.

    Pipeline: view-files page -> viewer page -> binary download.
    """

    def __init__(
        self,
        session: SessionClient,
        base_url: str,
        diagnostics: DiagnosticsWriter | None = None,
    ) -> None:
        writer = diagnostics or DiagnosticsWriter(Path("."), enabled=False)
        self._steps: list[ResolutionStep] = [
            ViewFilesStep(session, base_url, writer),
            ViewerPageStep(session, base_url, writer),
            DownloadStep(session, writer),
        ]

    def resolve(
        self,
        reference: DocumentReference,
        index: int = 1,
        filename: str | None = None,
    ) -> ResolvedDocument:
        """Resolve one reference.

        Raises:
            ResolutionError: if any stage cannot produce the next hop or payload.
        """
        context = ResolutionContext(
            reference=reference,
            index=index,
            filename=filename or derive_filename(reference.url, reference.title),
        )
        for step in self._steps:
            context = step.run(context)

        if context.payload is None:
            raise ValueError("Resolution finished without a payload")
        return ResolvedDocument(
            filename=context.filename,
            content=context.payload,
            content_type=_media_type(context.content_type) or DEFAULT_CONTENT_TYPE,
            source_url=context.final_url,
            has_pdf_signature=context.has_pdf_signature,
        )


def _media_type(content_type: str) -> str:
    return content_type.split(";", 1)[0].strip()
