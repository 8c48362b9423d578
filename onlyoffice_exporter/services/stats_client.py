"""HTTP client for the Document Server statistics endpoint."""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from ..utils.errors import RequestConstructionError, UpstreamTransportError


@dataclass(frozen=True)
class StatsResponse:
    """Raw outcome of one GET against the statistics endpoint."""
    status_code: int
    reason: str
    body: bytes

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class StatsClient:
    """
    Issues single GET requests against the statistics URI.

    One attempt per call, no retries; redirects are followed. The underlying
    ``httpx.Client`` keeps its connection pool for the process lifetime and
    is released by :meth:`close`.
    """

    def __init__(
        self,
        uri: str,
        insecure: bool = False,
        timeout: float = 10.0,
        logger: Optional[logging.Logger] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize statistics client.

        Args:
            uri: Statistics endpoint, e.g. http://localhost/info/info.json
            insecure: Skip TLS certificate verification for https targets
            timeout: Request timeout in seconds
            logger: Optional logger instance
            transport: Optional httpx transport (used by tests)
        """
        self.uri = uri
        self.insecure = insecure
        self.logger = logger or logging.getLogger(__name__)
        self.client = httpx.Client(
            verify=not insecure,
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    def fetch(self) -> StatsResponse:
        """
        Fetch the statistics document once.

        Returns:
            StatsResponse: Status code, reason phrase and body, whatever the status

        Raises:
            RequestConstructionError: If the request cannot be built from the URI
            UpstreamTransportError: If no response was received
        """
        try:
            request = self.client.build_request("GET", self.uri)
        except (httpx.InvalidURL, ValueError) as e:
            raise RequestConstructionError(f"error building scraping request: {e}") from e

        try:
            response = self.client.send(request)
        except httpx.RequestError as e:
            raise UpstreamTransportError(f"error scraping onlyoffice: {e}") from e

        self.logger.debug(
            f"GET {self.uri} -> {response.status_code} ({len(response.content)} bytes)"
        )
        return StatsResponse(
            status_code=response.status_code,
            reason=response.reason_phrase,
            body=response.content,
        )

    def close(self) -> None:
        """Close the HTTP connection pool."""
        self.client.close()
