"""Locating the next PDF hop inside portal viewer pages.

Every finder returns an absolute, fragment-free URL or None when the page
holds no candidate. The inline-script lookup is a best-effort regex over the
raw page text; redirects built dynamically in script are not followed.
"""

import re

from bs4 import BeautifulSoup

from planning_scraper.portal.urls import strip_fragment, to_absolute_url

PDF_EXTENSION_MARKER = ".pdf"
PDF_MARKER = "pdf"
GET_DOCUMENT_MARKER = "GetDocument"

SCRIPT_PDF_PATTERN = re.compile(
    r"""(?:window\.open|location\.href|src\s*=\s*['"])(.*?\.pdf.*?)['")]""",
    re.IGNORECASE,
)
_QUOTED_VALUE = re.compile(r"""['"]([^'"]+)['"]""")


def _contains(value: object, marker: str) -> bool:
    return isinstance(value, str) and marker.lower() in value.lower()


def _absolute(base_url: str, path: str) -> str:
    return strip_fragment(to_absolute_url(base_url, path))


def find_view_files_pdf_url(html: str, base_url: str) -> str | None:
    """Stage 1: the viewer iframe, falling back to a direct PDF link."""
    soup = BeautifulSoup(html, "html.parser")
    for iframe in soup.find_all("iframe"):
        src = iframe.get("src")
        if _contains(src, PDF_EXTENSION_MARKER):
            return _absolute(base_url, str(src))
    for anchor in soup.find_all("a"):
        href = anchor.get("href")
        if _contains(href, PDF_EXTENSION_MARKER):
            return _absolute(base_url, str(href))
    return None


def find_embedded_pdf_url(html: str, base_url: str) -> str | None:
    """Stage 2: embedded viewer element, then document link, then inline script."""
    soup = BeautifulSoup(html, "html.parser")
    for element in soup.find_all(["iframe", "embed", "object"]):
        source = element.get("src") or element.get("data")
        if _contains(source, PDF_MARKER):
            return _absolute(base_url, str(source))
    for anchor in soup.find_all("a"):
        href = anchor.get("href")
        if _contains(href, PDF_EXTENSION_MARKER) or (
            isinstance(href, str) and GET_DOCUMENT_MARKER in href
        ):
            return _absolute(base_url, str(href))
    script_url = find_script_pdf_url(html)
    if script_url is None:
        return None
    return _absolute(base_url, script_url)


def find_script_pdf_url(text: str) -> str | None:
    """Pull a PDF URL out of ``window.open(...)``, ``location.href=...`` or ``src="..."``."""
    match = SCRIPT_PDF_PATTERN.search(text)
    if match is None:
        return None
    quoted = _QUOTED_VALUE.findall(match.group(0))
    if quoted:
        return quoted[-1].strip()
    candidate = match.group(1).strip().lstrip("(=").strip().strip("'\"")
    return candidate or None
