from collections.abc import Mapping


class PortalNetworkError(Exception):
    """Raised when a portal request fails at the transport level."""


class PortalTimeoutError(PortalNetworkError):
    """Raised when a portal request exceeds its timeout."""


class PortalHttpError(PortalNetworkError):
    """Raised when the portal answers with an error status code."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.headers = dict(headers or {})
