from pathlib import Path
from urllib.parse import parse_qsl

import httpx
import pytest

from planning_scraper.diagnostics.writer import DiagnosticsWriter
from planning_scraper.http.session_client import SessionClient
from planning_scraper.portal.exceptions import FormActionMissing, SessionError
from planning_scraper.portal.models import DocumentReference
from planning_scraper.portal.negotiator import PostbackNegotiator
from tests.portal_pages import (
    APPLICATION_ID,
    BASE_URL,
    DISCLAIMER_URL,
    FakePortal,
    disclaimer_html,
    html_response,
    install_disclaimer_flow,
)

ROWS = [
    ("ViewFiles.aspx?docid=101&amp;format=djvu", "Application Form"),
    ("ViewFiles.aspx?docid=102&amp;format=djvu", "Site Notice"),
]


def _form(request: httpx.Request) -> list[tuple[str, str]]:
    return parse_qsl(request.content.decode("ascii"), keep_blank_values=True)


class TestPostbackNegotiator:
    def test_disclaimer_url(self, session: SessionClient) -> None:
        negotiator = PostbackNegotiator(session, BASE_URL + "/")
        assert negotiator.disclaimer_url(APPLICATION_ID) == DISCLAIMER_URL

    def test_lists_documents_in_row_order(
        self, session: SessionClient, fake_portal: FakePortal
    ) -> None:
        install_disclaimer_flow(fake_portal, ROWS)

        references = PostbackNegotiator(session, BASE_URL).list_documents(APPLICATION_ID)

        assert references == [
            DocumentReference(
                url=f"{BASE_URL}/ViewFiles.aspx?docid=101&format=djvu",
                title="Application Form",
                docid="101",
            ),
            DocumentReference(
                url=f"{BASE_URL}/ViewFiles.aspx?docid=102&format=djvu",
                title="Site Notice",
                docid="102",
            ),
        ]

    def test_agreement_echoes_hidden_fields(
        self, session: SessionClient, fake_portal: FakePortal
    ) -> None:
        install_disclaimer_flow(fake_portal, ROWS)

        PostbackNegotiator(session, BASE_URL).list_documents(APPLICATION_ID)

        agreement = fake_portal.requests_to(DISCLAIMER_URL)[1]
        assert agreement.method == "POST"
        assert _form(agreement) == [
            ("__VIEWSTATE", "disclaimer-vs"),
            ("__VIEWSTATEGENERATOR", "GEN1"),
            ("__EVENTVALIDATION", "disclaimer-ev"),
            ("antiForgery", "tok+en/="),
            ("chkAgree", "on"),
            ("btnAgree", "I Agree"),
        ]

    def test_postback_sends_only_state_tokens(
        self, session: SessionClient, fake_portal: FakePortal
    ) -> None:
        install_disclaimer_flow(fake_portal, ROWS)

        PostbackNegotiator(session, BASE_URL).list_documents(APPLICATION_ID)

        postback = fake_portal.requests_to(DISCLAIMER_URL)[2]
        assert _form(postback) == [
            ("__VIEWSTATE", "files-vs"),
            ("__VIEWSTATEGENERATOR", "GEN2"),
            ("__EVENTVALIDATION", "files-ev"),
            ("__EVENTTARGET", "btnViewFiles"),
            ("__EVENTARGUMENT", ""),
        ]

    def test_session_cookie_sent_on_postbacks(
        self, session: SessionClient, fake_portal: FakePortal
    ) -> None:
        install_disclaimer_flow(fake_portal, ROWS, session_cookie="ASP.NET_SessionId=xyz789")

        PostbackNegotiator(session, BASE_URL).list_documents(APPLICATION_ID)

        for request in fake_portal.requests_to(DISCLAIMER_URL)[1:]:
            assert "ASP.NET_SessionId=xyz789" in request.headers["Cookie"]

    def test_empty_listing(self, session: SessionClient, fake_portal: FakePortal) -> None:
        install_disclaimer_flow(fake_portal, [])

        references = PostbackNegotiator(session, BASE_URL).list_documents(APPLICATION_ID)

        assert references == []

    def test_saves_links_artifact(
        self, session: SessionClient, fake_portal: FakePortal, tmp_path: Path
    ) -> None:
        install_disclaimer_flow(fake_portal, ROWS)
        negotiator = PostbackNegotiator(session, BASE_URL, DiagnosticsWriter(tmp_path))

        negotiator.list_documents(APPLICATION_ID)

        assert (tmp_path / "debug-links.txt").read_text(encoding="utf-8").splitlines() == [
            f"{BASE_URL}/ViewFiles.aspx?docid=101&format=djvu - Application Form",
            f"{BASE_URL}/ViewFiles.aspx?docid=102&format=djvu - Site Notice",
        ]


class TestPostbackNegotiatorFailures:
    def test_missing_form_action(self, session: SessionClient, fake_portal: FakePortal) -> None:
        fake_portal.html(DISCLAIMER_URL, disclaimer_html(action=None))

        with pytest.raises(FormActionMissing, match=APPLICATION_ID):
            PostbackNegotiator(session, BASE_URL).list_documents(APPLICATION_ID)

        assert all(request.method == "GET" for request in fake_portal.requests)

    def test_form_action_missing_is_session_error(self) -> None:
        assert issubclass(FormActionMissing, SessionError)

    def test_disclaimer_server_error(
        self, session: SessionClient, fake_portal: FakePortal
    ) -> None:
        fake_portal.html(DISCLAIMER_URL, "<html>Server Error</html>", status=500)

        with pytest.raises(SessionError, match="HTTP 500"):
            PostbackNegotiator(session, BASE_URL).list_documents(APPLICATION_ID)

    def test_rejected_postback(self, session: SessionClient, fake_portal: FakePortal) -> None:
        fake_portal.html(DISCLAIMER_URL, disclaimer_html())
        fake_portal.add("POST", DISCLAIMER_URL, lambda _request: html_response("no", status=403))

        with pytest.raises(SessionError, match="Postback"):
            PostbackNegotiator(session, BASE_URL).list_documents(APPLICATION_ID)

    def test_network_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with SessionClient(
            user_agent="Mozilla/5.0 (test)", transport=httpx.MockTransport(handler)
        ) as client:
            with pytest.raises(SessionError, match="connection refused"):
                PostbackNegotiator(client, BASE_URL).list_documents(APPLICATION_ID)
