"""Collector scraping the ONLYOFFICE Document Server statistics endpoint."""

import logging
from typing import Optional

from prometheus_client.core import GaugeMetricFamily

from ..config.models import ExporterConfig
from ..services.stats_client import StatsClient
from ..utils.errors import HTTPStatusError, UpstreamTransportError
from ..utils.metrics import UP
from .base import BaseCollector, safe_collect
from .projector import project_stats
from .stats import decode_stats


class OnlyofficeCollector(BaseCollector):
    """
    Prometheus collector for one Document Server.

    Every call to :meth:`collect` performs a fresh fetch-decode-emit cycle;
    nothing is cached between calls.
    """

    def __init__(
        self,
        config: ExporterConfig,
        logger: logging.Logger,
        client: Optional[StatsClient] = None
    ):
        """
        Initialize collector.

        Args:
            config: Exporter configuration
            logger: Logger instance
            client: Optional statistics client; built from config when omitted
        """
        super().__init__(config, logger)
        self.client = client or StatsClient(
            config.scrape_uri,
            insecure=config.insecure,
            timeout=config.timeout_seconds,
            logger=self.logger,
        )

    @staticmethod
    def _up(value: int) -> GaugeMetricFamily:
        family = UP.family()
        family.add_metric([], value)
        return family

    @safe_collect
    def collect(self):
        """
        Scrape the statistics endpoint once.

        Yields:
            up gauge as soon as the transport outcome is known, then the
            connection, license and server families on success
        """
        # Request construction errors propagate before any up sample
        try:
            response = self.client.fetch()
        except UpstreamTransportError:
            yield self._up(0)
            raise
        yield self._up(1)

        if response.status_code != 200:
            raise HTTPStatusError(response.status_code, response.reason, response.text)

        stats = decode_stats(response.body)
        yield from project_stats(stats)

    def close(self) -> None:
        self.client.close()
