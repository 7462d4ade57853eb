"""
Transport protocol for verifier POST requests.

Defines the seam where concrete HTTP implementations plug in. The
verifier depends on this protocol, not on httpx directly, so tests can
pass a fake and deployments can add retries, proxies or mTLS without
touching request shaping.

Concrete implementations:
    - HttpxTransport (default, uses httpx.Client)
    - FakeTransport (tests, returns canned status codes)

A transport returns the HTTP status code for any response it received,
including 4xx/5xx. It raises only when no response was received.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Protocol, runtime_checkable

import httpx

from epid_verifier.config import DEFAULT_TIMEOUT_S
from epid_verifier.errors import TransportError

logger = logging.getLogger(__name__)


@runtime_checkable
class VerificationTransport(Protocol):
    """Synchronous transport for verifier POST requests."""

    def post(self, url: str, body: str) -> int:
        """POST a JSON body and return the HTTP status code.

        Args:
            url: Fully resolved verifier endpoint URL.
            body: JSON request body text.

        Returns:
            HTTP status code of the response.

        Raises:
            Exception: On transport-level failures (connection refused,
                timeout, TLS error, invalid URL). The verifier maps these
                to UNKNOWN_ERROR.
        """
        ...


class HttpxTransport:
    """Default transport using httpx.Client.

    Holds one httpx.Client for its lifetime; httpx's connection pool is
    safe to share between threads. Call ``close()`` (or use as a context
    manager) when done.

    Args:
        timeout_s: Request timeout in seconds.
        headers: Additional headers to include in requests.
        transport: Optional httpx transport for the underlying client,
            e.g. httpx.MockTransport in tests. Owned by the caller and
            never closed here.
    """

    def __init__(
        self,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        headers: Mapping[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._timeout_s = timeout_s
        self._headers = dict(headers or {})
        self._owns_transport = transport is None
        self._client = httpx.Client(timeout=timeout_s, transport=transport)

    @property
    def timeout_s(self) -> float:
        return self._timeout_s

    def close(self) -> None:
        """Release the connection pool, unless the caller supplied it."""
        if self._owns_transport:
            self._client.close()

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def post(self, url: str, body: str) -> int:
        """POST the body via httpx and return the status code."""
        try:
            response = self._client.post(
                url,
                content=body.encode("utf-8"),
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                    **self._headers,
                },
            )
        except httpx.TimeoutException as e:
            raise TransportError(
                f"verifier request timed out after {self._timeout_s}s", url=url
            ) from e
        except httpx.ConnectError as e:
            raise TransportError(f"failed to connect to {url}", url=url) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"HTTP error: {e}", url=url) from e

        logger.debug("verifier responded %d for %s", response.status_code, url)
        return response.status_code
