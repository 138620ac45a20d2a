"""
Prometheus metrics for booking operations and database access.

Metrics are exposed via the /metrics endpoint for scraping by Prometheus.

Example:
    >>> from wild_oasis.metrics import booking_operations
    >>> booking_operations.labels(operation="create", outcome="success").inc()
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

# =============================================================================
# Booking Metrics
# =============================================================================

booking_operations = Counter(
    "wild_oasis_booking_operations_total",
    "Total booking lifecycle operations (success and rejection)",
    ["operation", "outcome"],
)
"""
Counter for booking lifecycle operations.

Labels:
    operation: create, update, update_status, update_payment_status, delete
    outcome: success or the error class name that rejected it
"""

bookings_priced = Counter(
    "wild_oasis_bookings_priced_total",
    "Bookings validated by the pricing engine",
    ["mode"],
)
"""
Counter for pricing engine runs.

Labels:
    mode: trust (caller-supplied prices) or derive (computed from dates)
"""

status_transitions = Counter(
    "wild_oasis_booking_status_transitions_total",
    "Booking status changes applied",
    ["from_status", "to_status"],
)

# =============================================================================
# Database Metrics
# =============================================================================

db_operations = Counter(
    "wild_oasis_db_operations_total",
    "Total database write operations performed",
    ["operation", "table"],
)
"""
Counter for database operations.

Labels:
    operation: insert, update, delete
    table: cabins, guests, bookings, settings
"""

db_query_duration = Histogram(
    "wild_oasis_db_query_duration_seconds",
    "Database query execution time in seconds",
    ["query"],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, float("inf")),
)
"""Histogram for read-query duration, labelled by reader function name."""
