"""Base collector abstract class for Prometheus collectors."""

from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional
import logging
import threading
from functools import wraps

from prometheus_client import Counter
from prometheus_client.core import CounterMetricFamily
from prometheus_client.metrics_core import Metric

from ..utils.errors import ScrapeError
from ..utils.metrics import (
    ALL_DESCRIPTORS,
    NAMESPACE,
    SCRAPE_FAILURES_FQ_NAME,
    SCRAPE_FAILURES_HELP,
    SCRAPE_FAILURES_NAME,
)
from ..utils.status import ScrapeState


class BaseCollector(ABC):
    """Abstract base class for collectors registered with a CollectorRegistry."""

    def __init__(self, config: Any, logger: logging.Logger):
        """
        Initialize base collector.

        Args:
            config: Collector-specific configuration
            logger: Logger instance
        """
        self.config = config
        self.logger = logger.getChild(self.__class__.__name__)
        self.state = ScrapeState.IDLE
        self.last_outcome: Optional[ScrapeState] = None
        self.last_error: Optional[str] = None

        # Serializes scrapes: concurrent collect() calls wait here
        self._lock = threading.Lock()

        # Not registered anywhere; emitted by collect() after a failed cycle
        self.scrape_failures = Counter(
            SCRAPE_FAILURES_NAME,
            SCRAPE_FAILURES_HELP,
            namespace=NAMESPACE,
            registry=None,
        )

    @abstractmethod
    def collect(self) -> List[Metric]:
        """
        Run one scrape cycle and return the resulting metric families.

        Note:
            Implementations are generators decorated with @safe_collect, which
            turns them into list-returning methods that never raise.
        """
        pass

    def describe(self) -> Iterable[Metric]:
        """
        Yield the static metric families without samples.

        Defining this keeps CollectorRegistry.register() from calling
        collect(), which would trigger a scrape at start-up.
        """
        for descriptor in ALL_DESCRIPTORS:
            yield descriptor.family()
        yield CounterMetricFamily(SCRAPE_FAILURES_FQ_NAME, SCRAPE_FAILURES_HELP)

    def failures_family(self) -> CounterMetricFamily:
        """Failure counter as a family with only its _total sample."""
        family = CounterMetricFamily(SCRAPE_FAILURES_FQ_NAME, SCRAPE_FAILURES_HELP)
        for metric in self.scrape_failures.collect():
            for sample in metric.samples:
                if sample.name.endswith("_total"):
                    family.add_metric([], sample.value)
        return family

    def _record_failure(self, error: Exception, metrics: List[Metric]) -> None:
        """Mark the cycle failed, count it and append the failure counter."""
        self.last_outcome = ScrapeState.FAILURE
        self.last_error = str(error)
        self.scrape_failures.inc()
        metrics.append(self.failures_family())


def safe_collect(func):
    """
    Decorator running one locked scrape cycle and absorbing its failures.

    The wrapped generator's output is gathered under the collector lock.
    Families yielded before an exception are kept. On failure the error is
    logged, the failure counter is incremented once and emitted, and the
    cycle ends without raising.

    Args:
        func: Generator method yielding metric families

    Returns:
        Wrapped method returning a list of metric families
    """
    @wraps(func)
    def wrapper(self, *args, **kwargs) -> List[Metric]:
        metrics: List[Metric] = []
        with self._lock:
            self.state = ScrapeState.SCRAPING
            try:
                for metric in func(self, *args, **kwargs):
                    metrics.append(metric)
            except ScrapeError as e:
                self.logger.error(f"Error scraping onlyoffice: {e}")
                self._record_failure(e, metrics)
            except Exception as e:
                self.logger.error(f"Error scraping onlyoffice: {e}", exc_info=True)
                self._record_failure(e, metrics)
            else:
                self.last_outcome = ScrapeState.SUCCESS
                self.last_error = None
            finally:
                self.state = ScrapeState.IDLE
        return metrics
    return wrapper

