"""
Prometheus metrics for analytics and precomputation monitoring.
"""

import os
import time
from functools import wraps
from typing import Callable

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
    multiprocess,
)

from jobinsight.config.logging import get_logger

logger = get_logger(__name__)

registry = CollectorRegistry()
prometheus_multiproc_dir = os.getenv("PROMETHEUS_MULTIPROC_DIR")

if prometheus_multiproc_dir and os.path.isdir(prometheus_multiproc_dir):
    try:
        multiprocess.MultiProcessCollector(registry)
    except ValueError as e:
        logger.warning("Failed to initialize multiprocess collector", error=str(e))
        registry = CollectorRegistry()


ANALYTICS_QUERIES = Counter(
    "analytics_queries_total",
    "Total number of analytics operations executed",
    ["operation", "status"],
    registry=registry,
)

ANALYTICS_QUERY_DURATION = Histogram(
    "analytics_query_duration_seconds",
    "Time spent executing analytics operations",
    ["operation"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
    registry=registry,
)

CACHE_LOOKUPS = Counter(
    "metrics_cache_lookups_total",
    "Overview cache lookups by outcome",
    ["result"],
    registry=registry,
)

PRECOMPUTE_RUNS = Counter(
    "precompute_runs_total",
    "Total number of snapshot precomputation runs",
    ["metric_type", "status"],
    registry=registry,
)

PRECOMPUTE_DURATION = Histogram(
    "precompute_duration_seconds",
    "Time spent precomputing a snapshot",
    ["metric_type"],
    buckets=[0.1, 0.5, 1.0, 5.0, 10.0, 30.0, 60.0, 300.0],
    registry=registry,
)

API_REQUESTS = Counter(
    "api_requests_total",
    "Total number of API requests",
    ["method", "endpoint", "status_code"],
    registry=registry,
)

API_REQUEST_DURATION = Histogram(
    "api_request_duration_seconds",
    "Time spent processing API requests",
    ["method", "endpoint"],
    buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0],
    registry=registry,
)

ERRORS_TOTAL = Counter(
    "errors_total",
    "Total number of errors",
    ["error_type", "component"],
    registry=registry,
)


def record_analytics_query(operation: str, status: str, duration: float) -> None:
    """Record an analytics operation run."""
    ANALYTICS_QUERIES.labels(operation=operation, status=status).inc()
    ANALYTICS_QUERY_DURATION.labels(operation=operation).observe(duration)


def record_cache_lookup(result: str) -> None:
    """Record a cache lookup outcome (hit, miss, bypass)."""
    CACHE_LOOKUPS.labels(result=result).inc()


def record_precompute_run(metric_type: str, status: str, duration: float) -> None:
    """Record a precomputation run."""
    PRECOMPUTE_RUNS.labels(metric_type=metric_type, status=status).inc()
    PRECOMPUTE_DURATION.labels(metric_type=metric_type).observe(duration)


def record_api_request(method: str, endpoint: str, status_code: int, duration: float):
    """Record API request metric."""
    API_REQUESTS.labels(
        method=method, endpoint=endpoint, status_code=str(status_code)
    ).inc()
    API_REQUEST_DURATION.labels(method=method, endpoint=endpoint).observe(duration)


def record_error(error_type: str, component: str):
    """Record error metric."""
    ERRORS_TOTAL.labels(error_type=error_type, component=component).inc()


def get_metrics():
    """Get all metrics in Prometheus format."""
    return generate_latest(registry)


def get_metrics_content_type():
    """Get the content type for metrics."""
    return CONTENT_TYPE_LATEST


def track_operation(operation: str):
    """Decorator recording duration and outcome of an async analytics operation."""

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                record_analytics_query(operation, "error", time.time() - start_time)
                record_error(type(e).__name__, operation)
                raise
            record_analytics_query(operation, "success", time.time() - start_time)
            return result

        return wrapper

    return decorator
