"""
Prometheus metrics module for DriveBook.

Service operations are recorded by the @measure_operation decorator;
persistence and notification failures are counted where they are
absorbed, since neither surfaces to callers.
"""

from typing import Optional

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

# Create a custom registry to avoid conflicts with default metrics
REGISTRY = CollectorRegistry()

service_operation_duration_seconds = Histogram(
    "drivebook_service_operation_duration_seconds",
    "Service operation duration in seconds",
    ["service", "operation"],
    registry=REGISTRY,
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

service_operations_total = Counter(
    "drivebook_service_operations_total",
    "Total number of service operations",
    ["service", "operation", "status"],
    registry=REGISTRY,
)

errors_total = Counter(
    "drivebook_errors_total",
    "Total number of errors",
    ["service", "operation", "error_type"],
    registry=REGISTRY,
)

persistence_failures_total = Counter(
    "drivebook_persistence_failures_total",
    "Schedule load/save failures absorbed by the service",
    ["collection", "operation"],
    registry=REGISTRY,
)

notification_failures_total = Counter(
    "drivebook_notification_failures_total",
    "Notification deliveries that raised",
    ["sender"],
    registry=REGISTRY,
)

notifications_sent_total = Counter(
    "drivebook_notifications_sent_total",
    "Notifications handed to a sender successfully",
    ["sender"],
    registry=REGISTRY,
)


class PrometheusMetrics:
    """Helper class for recording metrics."""

    @staticmethod
    def record_service_operation(
        service: str,
        operation: str,
        duration: float,
        status: str = "success",
        error_type: Optional[str] = None,
    ) -> None:
        """
        Record service operation metrics from @measure_operation decorator.

        Args:
            service: Service name (e.g., 'SchedulingService')
            operation: Operation/method name (e.g., 'request_booking')
            duration: Operation duration in seconds
            status: Operation status ('success' or 'error')
            error_type: Type of error if status is 'error'
        """
        service_operation_duration_seconds.labels(service=service, operation=operation).observe(
            duration
        )
        service_operations_total.labels(service=service, operation=operation, status=status).inc()
        if status == "error" and error_type:
            errors_total.labels(service=service, operation=operation, error_type=error_type).inc()

    @staticmethod
    def record_persistence_failure(collection: str, operation: str) -> None:
        persistence_failures_total.labels(collection=collection, operation=operation).inc()

    @staticmethod
    def record_notification(sender: str, success: bool) -> None:
        if success:
            notifications_sent_total.labels(sender=sender).inc()
        else:
            notification_failures_total.labels(sender=sender).inc()

    @staticmethod
    def get_metrics() -> bytes:
        return generate_latest(REGISTRY)

    @staticmethod
    def get_content_type() -> str:
        return CONTENT_TYPE_LATEST


prometheus_metrics = PrometheusMetrics()
