"""HTML form helpers for the ASP.NET disclaimer and file-listing pages."""

from bs4 import BeautifulSoup

from planning_scraper.portal.models import DocumentReference
from planning_scraper.portal.urls import extract_docid, to_absolute_url

POSTBACK_STATE_FIELDS = ("__VIEWSTATE", "__VIEWSTATEGENERATOR", "__EVENTVALIDATION")
AGREEMENT_FIELDS = (("chkAgree", "on"), ("btnAgree", "I Agree"))
VIEW_FILES_MARKER = "ViewFiles.aspx"


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def extract_hidden_fields(soup: BeautifulSoup) -> list[tuple[str, str]]:
    """Return every named hidden input as a (name, value) pair, in page order."""
    fields: list[tuple[str, str]] = []
    for element in soup.find_all("input", attrs={"type": "hidden"}):
        name = element.get("name")
        if not name:
            continue
        fields.append((str(name), str(element.get("value") or "")))
    return fields


def find_form_action(soup: BeautifulSoup) -> str | None:
    form = soup.find("form")
    if form is None:
        return None
    action = form.get("action")
    if not action or not str(action).strip():
        return None
    return str(action).strip()


def extract_postback_state(soup: BeautifulSoup) -> list[tuple[str, str]]:
    """Return the non-empty ASP.NET state tokens that must be echoed back."""
    state: list[tuple[str, str]] = []
    for field_name in POSTBACK_STATE_FIELDS:
        element = soup.find("input", attrs={"name": field_name})
        if element is None:
            continue
        value = element.get("value")
        if value:
            state.append((field_name, str(value)))
    return state


def parse_document_listing(html: str, base_url: str) -> list[DocumentReference]:
    """Extract one DocumentReference per listing row with a view-files link.

    Rows whose link carries no numeric docid are skipped.
    """
    soup = parse_html(html)
    references: list[DocumentReference] = []
    for row in soup.find_all("tr"):
        link = row.find(
            "a", href=lambda href: bool(href) and VIEW_FILES_MARKER in href
        )
        if link is None:
            continue
        href = str(link["href"])
        docid = extract_docid(href)
        if docid is None:
            continue
        cells = row.find_all("td")
        title = cells[1].get_text().strip() if len(cells) >= 2 else ""
        references.append(
            DocumentReference(
                url=to_absolute_url(base_url, href),
                title=title,
                docid=docid,
            )
        )
    return references
