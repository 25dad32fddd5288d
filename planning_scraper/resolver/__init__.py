from planning_scraper.resolver.document_resolver import DocumentResolver
from planning_scraper.resolver.exceptions import (
    EmptyPayload,
    NoPdfUrlFound,
    NoRealPdfUrlFound,
    ResolutionError,
    ResolutionNetworkError,
    UnexpectedHtmlPayload,
)
from planning_scraper.resolver.models import ResolvedDocument
from planning_scraper.resolver.naming import clean_title, derive_filename

__all__ = [
    "DocumentResolver",
    "EmptyPayload",
    "NoPdfUrlFound",
    "NoRealPdfUrlFound",
    "ResolutionError",
    "ResolutionNetworkError",
    "ResolvedDocument",
    "UnexpectedHtmlPayload",
    "clean_title",
    "derive_filename",
]
