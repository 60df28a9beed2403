"""HTTP fetch used by the host side to retrieve engine URLs."""

from __future__ import annotations

import logging
from types import TracebackType

import httpx
from fake_useragent import UserAgent

from orx_engines.config import Settings
from orx_engines.errors import TransportError

logger = logging.getLogger(__name__)

_H2_ERROR_MARKERS = ("HPACK", "ProtocolError", "table size")


class HttpTransport:
    """Fetches an already-built engine URL and returns the raw body.

    Falls back to HTTP/1.1 when the server trips over HTTP/2.
    """

    def __init__(
        self,
        user_agent: str | None = None,
        proxy: str | None = None,
        timeout: float | None = 10,
        http2: bool = True,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._headers = {"User-Agent": user_agent or UserAgent().random}
        self._proxy = proxy
        self._timeout = timeout
        self._http2 = http2
        self._transport = transport
        self.client = self._build_client()

    @classmethod
    def from_settings(cls, settings: Settings) -> HttpTransport:
        return cls(
            user_agent=settings.user_agent,
            proxy=settings.proxy,
            timeout=settings.timeout_seconds,
            http2=settings.http2,
        )

    def _build_client(self) -> httpx.Client:
        return httpx.Client(
            headers=self._headers,
            proxy=self._proxy,
            timeout=self._timeout,
            follow_redirects=True,
            http2=self._http2,
            transport=self._transport,
        )

    def fetch(self, url: str) -> bytes:
        try:
            resp = self.client.get(url)
        except httpx.HTTPError as ex:
            if self._http2 and any(marker in str(ex) for marker in _H2_ERROR_MARKERS):
                logger.warning(f"H2 protocol error for {url}, falling back to HTTP/1.1")
                self._http2 = False
                self.client.close()
                self.client = self._build_client()
                return self.fetch(url)
            raise TransportError(f"Request failed: {ex}") from ex

        if resp.status_code >= 400:
            raise TransportError(
                f"HTTP error {resp.status_code} for {url}", status_code=resp.status_code
            )
        return resp.content

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> HttpTransport:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
