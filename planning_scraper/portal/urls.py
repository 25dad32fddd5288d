import re

DOCID_PATTERN = re.compile(r"docid=(\d+)")


def to_absolute_url(base_url: str, path: str) -> str:
    """Resolve a portal-relative path against the portal base URL.

    Handles the forms the portal emits: ``.\\files\\x.pdf``, ``./files/x.pdf``,
    ``/x.aspx`` and bare ``files/x.pdf``. Absolute http(s) URLs pass through.
    """
    candidate = path.strip()
    if candidate.lower().startswith(("http://", "https://")):
        return candidate
    cleaned = candidate.replace("\\", "/")
    while cleaned.startswith("./"):
        cleaned = cleaned[2:]
    cleaned = cleaned.lstrip("/")
    return f"{base_url.rstrip('/')}/{cleaned}"


def strip_fragment(url: str) -> str:
    """Drop a ``#...`` fragment (PDF viewer parameters)."""
    return url.split("#", 1)[0]


def extract_docid(url: str) -> str | None:
    match = DOCID_PATTERN.search(url)
    return match.group(1) if match else None
