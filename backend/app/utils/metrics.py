"""Prometheus metrics for trip store operations."""

from prometheus_client import Counter, Gauge, Histogram

store_operations_total = Counter(
    "trip_store_operations_total",
    "Total trip store operations",
    ["operation", "outcome"],
)

fetch_latency_ms = Histogram(
    "trip_fetch_latency_ms",
    "Trip backend fetch latency in milliseconds",
    ["outcome"],
    buckets=[10, 50, 100, 200, 500, 1000, 2000, 4000, 8000],
)

trips_stored = Gauge(
    "trips_stored",
    "Number of trips currently held by the store",
)


class PrometheusStoreMetrics:
    """Prometheus-based store metrics implementation."""

    def inc_operation(self, operation: str, outcome: str) -> None:
        """Increment operation counter."""
        store_operations_total.labels(operation=operation, outcome=outcome).inc()

    def record_fetch_latency(self, outcome: str, latency_ms: float) -> None:
        """Record backend fetch latency."""
        fetch_latency_ms.labels(outcome=outcome).observe(latency_ms)

    def set_trip_count(self, count: int) -> None:
        """Publish the current collection size."""
        trips_stored.set(count)
