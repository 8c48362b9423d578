"""Metric descriptors exposed by the exporter."""

from dataclasses import dataclass
from typing import Dict, Tuple

from prometheus_client.core import GaugeMetricFamily

NAMESPACE = "onlyoffice"

WINDOWS: Tuple[str, ...] = ("hour", "day", "week", "month")
MODES: Tuple[str, ...] = ("edit", "view")
STATISTICS: Tuple[str, ...] = ("min", "avr", "max")


def build_fq_name(name: str, namespace: str = NAMESPACE) -> str:
    """Join namespace and metric name the way Prometheus client libraries do."""
    return f"{namespace}_{name}" if namespace else name


@dataclass(frozen=True)
class MetricDescriptor:
    """Static name, help text and label names of one gauge family."""

    name: str
    documentation: str
    labels: Tuple[str, ...] = ()

    def family(self) -> GaugeMetricFamily:
        """Create an empty gauge family for this descriptor."""
        return GaugeMetricFamily(self.name, self.documentation, labels=list(self.labels))


def connections_metric_name(mode: str, window: str) -> str:
    return build_fq_name(f"{mode}_connections_last_{window}")


UP = MetricDescriptor(
    name=build_fq_name("up"),
    documentation="Could the OnlyOffice server be reached",
)

CONNECTIONS: Dict[Tuple[str, str], MetricDescriptor] = {
    (mode, window): MetricDescriptor(
        name=connections_metric_name(mode, window),
        documentation=f"Number of {mode} connections during last {window}",
        labels=("type",),
    )
    for window in WINDOWS
    for mode in MODES
}

LICENSE_INFO = MetricDescriptor(
    name=build_fq_name("license_info"),
    documentation="License Information on OnlyOffice",
    labels=("connections", "has_license", "build_date", "end_date"),
)

SERVER_INFO = MetricDescriptor(
    name=build_fq_name("server_info"),
    documentation="Server Information of OnlyOffice",
    labels=("build_version", "build_number"),
)

SCRAPE_FAILURES_NAME = "exporter_scrape_failures"
SCRAPE_FAILURES_HELP = "Number of errors while scraping onlyoffice."
SCRAPE_FAILURES_FQ_NAME = build_fq_name(SCRAPE_FAILURES_NAME)

ALL_DESCRIPTORS: Tuple[MetricDescriptor, ...] = (
    UP,
    *CONNECTIONS.values(),
    LICENSE_INFO,
    SERVER_INFO,
)
