"""Errors raised while scraping the Document Server statistics."""


class ScrapeError(Exception):
    """Base class for failures that abort a scrape cycle."""


class RequestConstructionError(ScrapeError):
    """The GET request could not be built (malformed URI)."""


class UpstreamTransportError(ScrapeError):
    """Network, DNS, TLS or timeout failure before a response arrived."""


class HTTPStatusError(ScrapeError):
    """Upstream answered with a status other than 200."""

    def __init__(self, status_code: int, reason: str, body: str):
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(f"status {status_code} {reason} ({status_code}): {body}")


class DecodeError(ScrapeError):
    """The response body is not valid statistics JSON."""
