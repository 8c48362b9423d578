"""Projection of decoded statistics onto Prometheus gauge families."""

from typing import Iterator

from prometheus_client.core import GaugeMetricFamily

from ..utils.metrics import (
    CONNECTIONS,
    LICENSE_INFO,
    MODES,
    SERVER_INFO,
    STATISTICS,
    WINDOWS,
)
from .stats import OnlyofficeStats


def _format_label(value) -> str:
    # Booleans render lowercase to match the upstream JSON spelling
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def project_connections(stats: OnlyofficeStats) -> Iterator[GaugeMetricFamily]:
    """Yield one family per (mode, window), each with a min/avr/max sample."""
    for window in WINDOWS:
        for mode in MODES:
            family = CONNECTIONS[(mode, window)].family()
            counts = stats.counts(window, mode)
            for statistic in STATISTICS:
                family.add_metric([statistic], float(getattr(counts, statistic)))
            yield family


def project_license(stats: OnlyofficeStats) -> GaugeMetricFamily:
    info = stats.license_info
    family = LICENSE_INFO.family()
    family.add_metric(
        [
            _format_label(info.connections),
            _format_label(info.has_license),
            info.build_date,
            info.end_date,
        ],
        1,
    )
    return family


def project_server(stats: OnlyofficeStats) -> GaugeMetricFamily:
    info = stats.server_info
    family = SERVER_INFO.family()
    family.add_metric([info.build_version, _format_label(info.build_number)], 1)
    return family


def project_stats(stats: OnlyofficeStats) -> Iterator[GaugeMetricFamily]:
    """
    Yield every gauge family derived from one scrape.

    Args:
        stats: Decoded statistics

    Yields:
        GaugeMetricFamily: Eight connection families (24 samples), then the
        license and server info families (one sample each)
    """
    yield from project_connections(stats)
    yield project_license(stats)
    yield project_server(stats)
