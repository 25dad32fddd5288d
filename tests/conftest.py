import io
from collections.abc import Generator

import httpx
import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from planning_scraper.http.session_client import SessionClient
from tests.portal_pages import FakePortal


@pytest.fixture()
def fake_portal() -> FakePortal:
    return FakePortal()


@pytest.fixture()
def session(fake_portal: FakePortal) -> Generator[SessionClient, None, None]:
    client = SessionClient(
        user_agent="Mozilla/5.0 (test)",
        transport=httpx.MockTransport(fake_portal.handle),
    )
    try:
        yield client
    finally:
        client.close()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Planning application drawing")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Site layout")
    c.showPage()
    c.drawString(72, 720, "Elevations")
    c.save()
    return buf.getvalue()
