"""
Prometheus metrics for system monitoring.
"""

import asyncio
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

from job_allocation.config.logging import get_logger

logger = get_logger(__name__)

registry = CollectorRegistry()
prometheus_multiproc_dir = os.getenv("PROMETHEUS_MULTIPROC_DIR")

if prometheus_multiproc_dir and os.path.isdir(prometheus_multiproc_dir):
    multiprocess.MultiProcessCollector(registry)
    logger.info(
        "Multiprocess metrics collector initialized",
        directory=prometheus_multiproc_dir,
    )


# Allocation metrics
ALLOCATIONS_TOTAL = Counter(
    "job_allocations_total",
    "Total number of allocation attempts by outcome",
    ["kind", "outcome"],
    registry=registry,
)

ALLOCATION_DURATION = Histogram(
    "job_allocation_duration_seconds",
    "Time spent in allocation transactions",
    ["operation"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0],
    registry=registry,
)

UNASSIGNMENTS_TOTAL = Counter(
    "job_unassignments_total",
    "Total number of jobs unassigned",
    ["outcome"],
    registry=registry,
)

# Retry metrics
TRANSACTION_RETRIES = Counter(
    "transaction_retries_total",
    "Total number of transaction retries after transient failures",
    ["operation"],
    registry=registry,
)

TRANSACTION_TIMEOUTS = Counter(
    "transaction_timeouts_total",
    "Total number of transactions that exceeded a budget",
    ["phase"],
    registry=registry,
)

# Notification metrics
NOTIFICATIONS_SENT = Counter(
    "consultant_notifications_total",
    "Total number of consultant notifications by status",
    ["notification_type", "status"],
    registry=registry,
)

# API metrics
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

# Error metrics
ERRORS_TOTAL = Counter(
    "errors_total",
    "Total number of errors",
    ["error_type", "component"],
    registry=registry,
)


def track_duration(operation: str):
    """
    Decorator to observe how long an async operation takes.

    Args:
        operation: Label value for the duration histogram
    """

    def decorator(func: Callable) -> Callable:
        if not asyncio.iscoroutinefunction(func):
            raise TypeError("track_duration only supports coroutine functions")

        @wraps(func)
        async def wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                return await func(*args, **kwargs)
            finally:
                ALLOCATION_DURATION.labels(operation=operation).observe(
                    time.time() - start_time
                )

        return wrapper

    return decorator


def record_allocation(kind: str, outcome: str):
    """Record an allocation attempt."""
    ALLOCATIONS_TOTAL.labels(kind=kind, outcome=outcome).inc()


def record_unassignment(outcome: str):
    """Record an unassignment."""
    UNASSIGNMENTS_TOTAL.labels(outcome=outcome).inc()


def record_retry_attempt(operation_type: str):
    """Record retry attempt metric."""
    TRANSACTION_RETRIES.labels(operation=operation_type).inc()


def record_transaction_timeout(phase: str):
    """Record a transaction budget overrun."""
    TRANSACTION_TIMEOUTS.labels(phase=phase).inc()


def record_notification(notification_type: str, status: str):
    """Record a consultant notification outcome."""
    NOTIFICATIONS_SENT.labels(notification_type=notification_type, status=status).inc()


def record_api_request(method: str, endpoint: str, status_code: int, duration: float):
    """Record an API request."""
    API_REQUESTS.labels(method=method, endpoint=endpoint, status_code=status_code).inc()
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
