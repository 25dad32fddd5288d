"""Deterministic local/remote filenames for portal documents."""

import random
import re
import string
import time

from planning_scraper.portal.urls import extract_docid

MAX_TITLE_LENGTH = 100
PDF_EXTENSION = ".pdf"

_INVALID_CHARS = re.compile(r'[<>:"/\\|?*]')
_WHITESPACE = re.compile(r"\s+")
_SOURCE_EXTENSION = re.compile(r"\.(djvu|pdf)$", re.IGNORECASE)
_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


def clean_title(title: str) -> str:
    """Make a document title safe for use in a filename.

    Characters invalid on common filesystems and runs of whitespace become
    underscores; the result is cut to 100 characters. Case is preserved.
    """
    cleaned = _INVALID_CHARS.sub("_", title.strip())
    cleaned = _WHITESPACE.sub("_", cleaned)
    return cleaned[:MAX_TITLE_LENGTH]


def derive_filename(url: str, title: str = "") -> str:
    """Build the storage filename for a document reference.

    ``{docid}_{title}.pdf`` when both are known, ``document_{docid}.pdf``
    without a title, and a timestamped unique name when the URL carries no
    docid at all.
    """
    docid = extract_docid(url)
    if docid is None:
        return _unique_fallback_name()
    if title and title.strip():
        stem = _SOURCE_EXTENSION.sub("", clean_title(title))
        return f"{docid}_{stem}{PDF_EXTENSION}"
    return f"document_{docid}{PDF_EXTENSION}"


def _unique_fallback_name() -> str:
    timestamp = int(time.time() * 1000)
    suffix = "".join(random.choices(_SUFFIX_ALPHABET, k=9))
    return f"document_{timestamp}_{suffix}{PDF_EXTENSION}"
