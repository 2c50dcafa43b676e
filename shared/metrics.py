"""
Shared metrics configuration for the parameter cache.
"""

from contextlib import contextmanager
import time
from typing import Optional

from prometheus_client import Counter, Histogram, CollectorRegistry


REFRESH_REASONS = ("missing", "expired", "forced")


class CacheMetrics:
    """Prometheus metrics for one cache instance.

    Metrics are only registered when a registry is given, so tests and
    processes holding several caches never collide on metric names.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry

        self.hits_total = Counter(
            "parameter_cache_hits_total",
            "Lookups served from a fresh cache entry",
            registry=self.registry
        )

        self.refreshes_total = Counter(
            "parameter_cache_refreshes_total",
            "Refreshes from the parameter store",
            ["reason"],
            registry=self.registry
        )
        for reason in REFRESH_REASONS:
            self.refreshes_total.labels(reason=reason)

        self.fetch_failures_total = Counter(
            "parameter_cache_fetch_failures_total",
            "Failed fetches from the parameter store",
            registry=self.registry
        )

        self.fetch_duration_seconds = Histogram(
            "parameter_cache_fetch_duration_seconds",
            "Parameter store fetch duration in seconds",
            registry=self.registry
        )

    def record_hit(self):
        """Record a lookup served from cache."""
        self.hits_total.inc()

    def record_refresh(self, reason: str):
        """Record a refresh and what triggered it."""
        self.refreshes_total.labels(reason=reason).inc()

    def record_fetch_failure(self):
        """Record a failed fetch."""
        self.fetch_failures_total.inc()

    @contextmanager
    def time_fetch(self):
        """Time a parameter store call."""
        start_time = time.time()
        try:
            yield
        finally:
            self.fetch_duration_seconds.observe(time.time() - start_time)
