# file: opencnam/net/http.py
"""
HTTP transport for lookups (httpx).

`LookupRequest` only needs something with `execute(url) -> str`. The httpx
implementation here performs a single blocking GET per call: no retries, no
caching, and no timeout beyond what the shared client is configured with.
"""

from __future__ import annotations

import logging
import ssl
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Protocol

import httpx

from opencnam import __version__

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = f"opencnam-python/{__version__}"


class Transport(Protocol):
    """Anything that can GET a URL and return the body as text."""

    def execute(self, url: str) -> str:  # pragma: no cover - protocol
        ...


@dataclass(frozen=True, slots=True)
class HttpClientConfig:
    timeout_seconds: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    follow_redirects: bool = True
    # None means httpx's default trust store.
    ssl_context: ssl.SSLContext | None = None


@contextmanager
def build_client(config: HttpClientConfig) -> Iterator[httpx.Client]:
    timeout = httpx.Timeout(config.timeout_seconds)
    headers = {"User-Agent": config.user_agent}
    verify: ssl.SSLContext | bool = config.ssl_context if config.ssl_context is not None else True
    with httpx.Client(
        timeout=timeout,
        headers=headers,
        follow_redirects=config.follow_redirects,
        verify=verify,
    ) as client:
        yield client


class HttpxTransport:
    """
    `Transport` backed by a shared `httpx.Client`.

    The client is borrowed, not owned; close it through `build_client` or
    directly when done. Connection, TLS and timeout failures surface as the
    `httpx.TransportError` raised by the client. With `raise_for_status`
    enabled (the default) any non-2xx response raises `httpx.HTTPStatusError`.
    """

    def __init__(self, client: httpx.Client, *, raise_for_status: bool = True) -> None:
        self._client = client
        self._raise_for_status = raise_for_status

    @property
    def client(self) -> httpx.Client:
        return self._client

    def execute(self, url: str) -> str:
        resp = self._client.get(url)
        logger.debug("HTTP %s from %s", resp.status_code, resp.url.host)
        if self._raise_for_status:
            resp.raise_for_status()
        return resp.text
