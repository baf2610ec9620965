"""
Prometheus metrics for the license inventory.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# Inventory metrics
licenses_created_total = Counter(
    "licenses_created_total",
    "Total licenses created",
)

licenses_deleted_total = Counter(
    "licenses_deleted_total",
    "Total licenses deleted",
)

update_conflicts_total = Counter(
    "update_conflicts_total",
    "Writes rejected because of a stale modification timestamp",
    ["entity"],
)

deletions_blocked_total = Counter(
    "deletions_blocked_total",
    "Deletions rejected because the record is still referenced",
    ["entity"],
)

association_drift_total = Counter(
    "association_drift_total",
    "Application license counts found out of agreement with license rows",
)
