"""Scrape cycle states."""

from enum import Enum


class ScrapeState(Enum):
    """Where the collector is in its fetch-decode-emit cycle."""

    IDLE = "idle"
    SCRAPING = "scraping"
    SUCCESS = "success"
    FAILURE = "failure"

    @property
    def is_terminal(self) -> bool:
        """True for the outcome states a finished cycle leaves behind."""
        return self in (ScrapeState.SUCCESS, ScrapeState.FAILURE)
