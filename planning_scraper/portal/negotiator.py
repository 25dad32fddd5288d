from planning_scraper.diagnostics.writer import DiagnosticsWriter
from planning_scraper.http.exceptions import PortalHttpError, PortalNetworkError
from planning_scraper.http.session_client import PortalResponse, SessionClient
from planning_scraper.logging.logger import Log
from planning_scraper.portal.exceptions import FormActionMissing, SessionError
from planning_scraper.portal.forms import (
    AGREEMENT_FIELDS,
    extract_hidden_fields,
    extract_postback_state,
    find_form_action,
    parse_document_listing,
    parse_html,
)
from planning_scraper.portal.models import DocumentReference
from planning_scraper.portal.urls import to_absolute_url

LINKS_ARTIFACT = "debug-links.txt"


class PostbackNegotiator:
    """Accepts the portal disclaimer and lists an application's documents.

    Flow: disclaimer page -> agreement POST -> ``btnViewFiles`` postback ->
    file-listing table.
    """

    def __init__(
        self,
        session: SessionClient,
        base_url: str,
        diagnostics: DiagnosticsWriter | None = None,
    ) -> None:
        self._session = session
        self._base_url = base_url.rstrip("/")
        self._diagnostics = diagnostics

    def disclaimer_url(self, application_id: str) -> str:
        return f"{self._base_url}/copyright.aspx?catalog=planning&id={application_id}"

    def list_documents(self, application_id: str) -> list[DocumentReference]:
        """Run the disclaimer/postback workflow and return references in row order.

        Raises:
            SessionError: if any step of the negotiation fails.
        """
        Log.info("Loading disclaimer page")
        disclaimer = self._fetch(self.disclaimer_url(application_id))
        disclaimer_soup = parse_html(disclaimer.text)

        agreement_form = extract_hidden_fields(disclaimer_soup)
        agreement_form.extend(AGREEMENT_FIELDS)

        action = find_form_action(disclaimer_soup)
        if action is None:
            raise FormActionMissing(
                f"Disclaimer page for application {application_id} has no form action"
            )
        submit_url = to_absolute_url(self._base_url, action)

        Log.info("Submitting disclaimer agreement")
        confirmation = self._submit(submit_url, agreement_form)
        Log.info(f"Submitted 'I Agree' form, status: {confirmation.status}")

        postback_form = extract_postback_state(parse_html(confirmation.text))
        postback_form.append(("__EVENTTARGET", "btnViewFiles"))
        postback_form.append(("__EVENTARGUMENT", ""))

        Log.info("Fetching file list")
        listing = self._submit(submit_url, postback_form)
        references = parse_document_listing(listing.text, self._base_url)

        Log.info(f"Found {len(references)} documents")
        for index, reference in enumerate(references, start=1):
            Log.info(f"{index}. {reference.url} - {reference.title}")
        self._save_links(references)
        return references

    def _fetch(self, url: str) -> PortalResponse:
        try:
            response = self._session.get(url)
            response.raise_for_status()
        except PortalHttpError as exc:
            Log.error(f"Status: {exc.status_code}, headers: {exc.headers}")
            raise SessionError(f"Could not load {url}: {exc}") from exc
        except PortalNetworkError as exc:
            raise SessionError(f"Could not load {url}: {exc}") from exc
        return response

    def _submit(self, url: str, form: list[tuple[str, str]]) -> PortalResponse:
        try:
            response = self._session.post(url, form)
            response.raise_for_status()
        except PortalHttpError as exc:
            Log.error(f"Status: {exc.status_code}, headers: {exc.headers}")
            raise SessionError(f"Postback to {url} failed: {exc}") from exc
        except PortalNetworkError as exc:
            raise SessionError(f"Postback to {url} failed: {exc}") from exc
        return response

    def _save_links(self, references: list[DocumentReference]) -> None:
        if self._diagnostics is None:
            return
        lines = [f"{reference.url} - {reference.title}" for reference in references]
        self._diagnostics.write_text(LINKS_ARTIFACT, "\n".join(lines))
