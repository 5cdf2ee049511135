"""
Observability module: Prometheus metrics for the auction service.
"""

from .metrics import (
    metrics_collector,
    track_time,
    resolution_latency,
    setup_metrics_endpoint_fastapi,
)

__all__ = [
    'metrics_collector',
    'track_time',
    'resolution_latency',
    'setup_metrics_endpoint_fastapi',
]
