"""
Prometheus metrics collection.
"""

from prometheus_client import Counter, Gauge, Histogram

# ============================================================
# HTTP Metrics
# ============================================================

http_requests_total = Counter(
    "satstream_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "satstream_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

http_errors_total = Counter(
    "satstream_http_errors_total",
    "Total HTTP errors",
    ["method", "endpoint", "error_type"],
)

# ============================================================
# Ledger Metrics
# ============================================================

tips_total = Counter(
    "satstream_tips_total",
    "Tip attempts by outcome",
    ["outcome"],
)

tip_sats_total = Counter(
    "satstream_tip_sats_total",
    "Sats moved by completed tips",
)

withdrawals_total = Counter(
    "satstream_withdrawals_total",
    "Withdrawal workflow events",
    ["event"],
)

withdrawal_sats_total = Counter(
    "satstream_withdrawal_sats_total",
    "Sats paid out by completed withdrawals",
)

ledger_invariant_violations_total = Counter(
    "satstream_ledger_invariant_violations_total",
    "Units of work rolled back for unbacked balance changes",
)

# ============================================================
# Payment Executor Metrics
# ============================================================

payment_requests_total = Counter(
    "satstream_payment_requests_total",
    "Payment executor requests",
    ["operation", "status"],
)

payment_request_duration_seconds = Histogram(
    "satstream_payment_request_duration_seconds",
    "Payment executor request duration in seconds",
    ["operation"],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
)

circuit_breaker_state = Gauge(
    "satstream_circuit_breaker_state",
    "Circuit breaker state (0=closed, 1=open, 2=half_open)",
    ["service"],
)

# ============================================================
# Relay Metrics
# ============================================================

relay_connections = Gauge(
    "satstream_relay_connections",
    "Connected real-time relay clients",
)

relay_events_total = Counter(
    "satstream_relay_events_total",
    "Relay events published",
    ["event_type"],
)
