from collections.abc import Mapping

from planning_scraper.diagnostics.writer import DiagnosticsWriter
from planning_scraper.http.exceptions import PortalHttpError, PortalNetworkError
from planning_scraper.http.session_client import PortalResponse, SessionClient
from planning_scraper.logging.logger import Log
from planning_scraper.resolver.exceptions import (
    EmptyPayload,
    NoPdfUrlFound,
    NoRealPdfUrlFound,
    ResolutionNetworkError,
    UnexpectedHtmlPayload,
)
from planning_scraper.resolver.links import find_embedded_pdf_url, find_view_files_pdf_url
from planning_scraper.resolver.pipeline import ResolutionContext, ResolutionStep

PDF_SIGNATURE = b"%PDF-"
HTML_SNIFF_BYTES = 512
HTML_MARKERS = ("<!doctype", "<html")

DOWNLOAD_HEADERS = {
    "Accept": "application/pdf,*/*",
    "Accept-Encoding": "identity",
}


def looks_like_html(payload: bytes) -> bool:
    """True when the leading bytes are an HTML document rather than a binary file."""
    head = payload[:HTML_SNIFF_BYTES].decode("latin-1").lower()
    return any(marker in head for marker in HTML_MARKERS)


def fetch(
    session: SessionClient,
    url: str,
    *,
    headers: Mapping[str, str] | None = None,
    timeout: float | None = None,
) -> PortalResponse:
    """GET a resolution hop, converting transport and status failures."""
    try:
        response = session.get(url, headers=headers, timeout=timeout)
        response.raise_for_status()
    except PortalHttpError as exc:
        Log.error(f"Status: {exc.status_code}")
        Log.error(f"Headers: {exc.headers}")
        raise ResolutionNetworkError(str(exc)) from exc
    except PortalNetworkError as exc:
        raise ResolutionNetworkError(str(exc)) from exc
    return response


class ViewFilesStep(ResolutionStep):
    """Stage 1: find the PDF viewer URL on the view-files page."""

    def __init__(
        self,
        session: SessionClient,
        base_url: str,
        diagnostics: DiagnosticsWriter,
    ) -> None:
        self._session = session
        self._base_url = base_url
        self._diagnostics = diagnostics

    def run(self, context: ResolutionContext) -> ResolutionContext:
        Log.info(f"ViewFiles URL: {context.reference.url}")
        page = fetch(self._session, context.reference.url)
        pdf_url = find_view_files_pdf_url(page.text, self._base_url)
        if pdf_url is None:
            Log.warning("No PDF URL found in ViewFiles page")
            self._diagnostics.write_bytes(f"debug-viewfiles-{context.index}.html", page.body)
            raise NoPdfUrlFound(f"No PDF URL found in ViewFiles page {context.reference.url}")
        Log.info(f"Found PDF URL: {pdf_url}")
        context.pdf_url = pdf_url
        return context


class ViewerPageStep(ResolutionStep):
    """Stage 2: follow the viewer URL, unwrapping one more HTML layer if present."""

    def __init__(
        self,
        session: SessionClient,
        base_url: str,
        diagnostics: DiagnosticsWriter,
    ) -> None:
        self._session = session
        self._base_url = base_url
        self._diagnostics = diagnostics

    def run(self, context: ResolutionContext) -> ResolutionContext:
        if not context.pdf_url:
            raise ValueError("ResolutionContext.pdf_url must be set before the viewer step")
        Log.info(f"Accessing PDF URL: {context.pdf_url}")
        response = fetch(
            self._session,
            context.pdf_url,
            headers={"Referer": context.reference.url},
            timeout=self._session.download_timeout,
        )
        Log.info(f"PDF URL Content-Type: {response.content_type or 'unknown'}")

        if not response.is_html:
            context.final_url = context.pdf_url
            context.payload = response.body
            context.content_type = response.content_type
            return context

        Log.info("PDF URL returned HTML, parsing for real PDF link")
        real_url = find_embedded_pdf_url(response.text, self._base_url)
        if real_url is None:
            Log.warning("No real PDF URL found in ViewPdf page")
            self._diagnostics.write_bytes(f"debug-viewpdf-{context.index}.html", response.body)
            raise NoRealPdfUrlFound(f"No real PDF URL found in ViewPdf page {context.pdf_url}")
        Log.info(f"Found real PDF URL: {real_url}")
        context.final_url = real_url
        return context


class DownloadStep(ResolutionStep):
    """Stage 3: fetch the binary payload and sniff it."""

    def __init__(self, session: SessionClient, diagnostics: DiagnosticsWriter) -> None:
        self._session = session
        self._diagnostics = diagnostics

    def run(self, context: ResolutionContext) -> ResolutionContext:
        if not context.final_url:
            raise ValueError("ResolutionContext.final_url must be set before download")
        if context.payload is None:
            Log.info(f"Downloading final PDF: {context.final_url}")
            response = fetch(
                self._session,
                context.final_url,
                headers={**DOWNLOAD_HEADERS, "Referer": context.pdf_url},
                timeout=self._session.download_timeout,
            )
            context.payload = response.body
            context.content_type = response.content_type
        Log.info(f"Final Content-Type: {context.content_type or 'unknown'}")
        Log.info(f"Final Content-Length: {len(context.payload)}")

        payload = context.payload
        if not payload:
            Log.warning(f"Empty response body from {context.final_url}")
            self._diagnostics.write_bytes(f"debug-final-response-{context.index}.bin", payload)
            raise EmptyPayload(f"Received an empty body from {context.final_url}")

        if payload.startswith(PDF_SIGNATURE):
            context.has_pdf_signature = True
            return context

        if looks_like_html(payload):
            Log.warning("Still got HTML response instead of PDF")
            self._diagnostics.write_bytes(f"debug-final-response-{context.index}.html", payload)
            raise UnexpectedHtmlPayload(
                f"Received HTML instead of a document from {context.final_url}"
            )

        Log.warning(f"Response doesn't start with PDF header. First bytes: {payload[:10]!r}")
        self._diagnostics.write_bytes(f"debug-final-response-{context.index}.bin", payload)
        context.has_pdf_signature = False
        return context
