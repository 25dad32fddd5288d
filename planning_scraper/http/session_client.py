"""Cookie-carrying HTTP session shared by every request of one scraper run."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import TracebackType
from urllib.parse import urlencode

import httpx

from planning_scraper.http.exceptions import (
    PortalHttpError,
    PortalNetworkError,
    PortalTimeoutError,
)
from planning_scraper.logging.logger import Log

FormData = Mapping[str, str] | list[tuple[str, str]]

HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


@dataclass(frozen=True)
class PortalResponse:
    """Status, headers and raw body of one portal response."""

    url: str
    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    encoding: str = "utf-8"

    @property
    def content_type(self) -> str:
        for name, value in self.headers.items():
            if name.lower() == "content-type":
                return value
        return ""

    @property
    def is_html(self) -> bool:
        return "text/html" in self.content_type.lower()

    @property
    def text(self) -> str:
        return self.body.decode(self.encoding or "utf-8", errors="replace")

    def raise_for_status(self) -> None:
        """Raise PortalHttpError for 4xx/5xx responses."""
        if self.status >= 400:
            raise PortalHttpError(
                f"HTTP {self.status} for {self.url}",
                status_code=self.status,
                headers=self.headers,
            )


class SessionClient:
    """Single long-lived HTTP session against one portal.

    Cookies set by any response are replayed on every later request, which
    is what keeps the disclaimer agreement and the postback state alive.
    """

    def __init__(
        self,
        *,
        user_agent: str,
        accept_language: str = "en-US,en;q=0.5",
        page_timeout_seconds: float = 30,
        download_timeout_seconds: float = 60,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._page_timeout = page_timeout_seconds
        self._download_timeout = download_timeout_seconds
        self._client = httpx.Client(
            headers={
                "User-Agent": user_agent,
                "Accept": HTML_ACCEPT,
                "Accept-Language": accept_language,
                "Connection": "keep-alive",
            },
            follow_redirects=True,
            transport=transport,
        )

    @property
    def page_timeout(self) -> float:
        return self._page_timeout

    @property
    def download_timeout(self) -> float:
        return self._download_timeout

    @property
    def cookies(self) -> httpx.Cookies:
        return self._client.cookies

    def get(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> PortalResponse:
        return self._send("GET", url, headers=headers, timeout=timeout)

    def post(
        self,
        url: str,
        form: FormData,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> PortalResponse:
        return self._send("POST", url, headers=headers, timeout=timeout, form=form)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "SessionClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def _send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None,
        timeout: float | None,
        form: FormData | None = None,
    ) -> PortalResponse:
        effective_timeout = timeout if timeout is not None else self._page_timeout
        request_headers = dict(headers or {})
        content: bytes | None = None
        if form is not None:
            # httpx data= only takes a mapping; postbacks echo fields in page order
            pairs = list(form.items()) if isinstance(form, Mapping) else list(form)
            content = urlencode(pairs).encode("ascii")
            request_headers.setdefault(
                "Content-Type", "application/x-www-form-urlencoded"
            )
        Log.debug(f"{method} {url} (timeout {effective_timeout}s)")
        try:
            response = self._client.request(
                method,
                url,
                headers=request_headers,
                content=content,
                timeout=effective_timeout,
            )
        except httpx.TimeoutException as exc:
            raise PortalTimeoutError(
                f"Timeout after {effective_timeout}s: {method} {url}"
            ) from exc
        except httpx.HTTPError as exc:
            raise PortalNetworkError(f"Network error on {method} {url}: {exc}") from exc
        except (httpx.InvalidURL, httpx.StreamError) as exc:
            raise PortalNetworkError(f"Cannot request {method} {url}: {exc}") from exc

        Log.debug(
            f"{method} {url} -> {response.status_code}, {len(response.content)} bytes"
        )
        return PortalResponse(
            url=str(response.url),
            status=response.status_code,
            headers=dict(response.headers.items()),
            body=response.content,
            encoding=response.encoding or "utf-8",
        )
