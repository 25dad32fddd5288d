class ResolutionError(Exception):
    """Base exception for a document that could not be turned into a payload."""


class NoPdfUrlFound(ResolutionError):
    """Raised when the view-files page links to no PDF."""


class NoRealPdfUrlFound(ResolutionError):
    """Raised when the intermediate viewer page links to no PDF."""


class UnexpectedHtmlPayload(ResolutionError):
    """Raised when the final download is an HTML page instead of a document."""


class ResolutionNetworkError(ResolutionError):
    """Raised when a resolution hop fails at the network or HTTP status level."""


class EmptyPayload(ResolutionError):
    """Raised when the final download has no content at all."""
