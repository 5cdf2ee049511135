"""
Prometheus metrics for the proxy auction service.

Tracks item creation, bid submission, winner resolution and rejected requests.
"""

from prometheus_client import (
    Counter,
    Histogram,
    Gauge,
    Info,
    generate_latest,
    REGISTRY,
)
import time
from functools import wraps


# ============================================================================
# CORE METRICS
# ============================================================================

items_created_total = Counter(
    "proxy_auction_items_created_total", "Total number of auction items created"
)

bids_submitted_total = Counter(
    "proxy_auction_bids_submitted_total", "Total number of proxy bids submitted"
)

resolutions_total = Counter(
    "proxy_auction_resolutions_total",
    "Total number of winner resolutions",
    ["outcome"],  # 'winner' or 'no_bids'
)

request_errors_total = Counter(
    "proxy_auction_request_errors_total",
    "Total number of rejected requests",
    ["error_type"],
)

resolution_passes = Histogram(
    "proxy_auction_resolution_passes",
    "Number of passes needed to reach a fixed point",
    buckets=[1, 2, 3, 5, 10, 25, 50, 100, 250],
)

resolution_latency = Histogram(
    "proxy_auction_resolution_latency_seconds",
    "Time to resolve the winner of an item",
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
)

system_uptime_seconds = Gauge("proxy_auction_uptime_seconds", "Service uptime in seconds")

system_info = Info("proxy_auction_system", "Service information")


# ============================================================================
# HELPER FUNCTIONS & DECORATORS
# ============================================================================


def track_time(histogram):
    """
    Decorator to automatically track execution time.

    Args:
        histogram: Prometheus Histogram to record time

    Example:
        @track_time(resolution_latency)
        def get_winner(item_id):
            ...
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                histogram.observe(time.perf_counter() - start_time)

        return wrapper

    return decorator


# ============================================================================
# METRICS COLLECTOR
# ============================================================================


class MetricsCollector:
    """
    Centralized metrics recording and export.
    """

    def __init__(self, version: str = "1.0.0"):
        self.start_time = time.time()
        self._update_system_info(version)

    def _update_system_info(self, version: str):
        import platform

        system_info.info(
            {
                "version": version,
                "platform": platform.system(),
                "python_version": platform.python_version(),
            }
        )

    def record_item_created(self):
        items_created_total.inc()

    def record_bid_submitted(self):
        bids_submitted_total.inc()

    def record_resolution(self, passes: int):
        """Record a resolution that produced a winner."""
        resolutions_total.labels(outcome="winner").inc()
        resolution_passes.observe(passes)

    def record_no_bids(self):
        resolutions_total.labels(outcome="no_bids").inc()

    def record_request_error(self, error_type: str):
        """
        Record a rejected request.

        Args:
            error_type: Exception class name, e.g. 'ItemNotFound'
        """
        request_errors_total.labels(error_type=error_type).inc()

    def update_uptime(self):
        system_uptime_seconds.set(time.time() - self.start_time)

    def get_metrics(self) -> bytes:
        """
        Get metrics in Prometheus format.

        Returns:
            Metrics as bytes in Prometheus exposition format
        """
        self.update_uptime()
        return generate_latest(REGISTRY)


# Global metrics collector instance
metrics_collector = MetricsCollector()


def setup_metrics_endpoint_fastapi(app):
    """
    Setup metrics endpoint for FastAPI app.

    Args:
        app: FastAPI application instance
    """
    from fastapi import Response

    @app.get("/metrics", include_in_schema=False)
    def metrics():
        return Response(
            content=metrics_collector.get_metrics(),
            media_type="text/plain; version=0.0.4; charset=utf-8",
        )
