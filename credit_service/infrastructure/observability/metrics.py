"""Prometheus metrics for credit creation, settlement outcomes, and storage health"""

from prometheus_client import Counter, Histogram

# Credit lifecycle
credit_created_counter = Counter(
    "credit_created_total",
    "Credit accounts created",
    ["credit_type", "customer_type"],
)

# Settlement
settlement_counter = Counter(
    "credit_settlement_total",
    "Transactions settled against credit accounts",
    ["transaction_type", "outcome"],  # outcome: accepted | rejected | error
)

storage_failures_counter = Counter(
    "credit_storage_failures_total",
    "Operations that failed in the persistence layer",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_credit_created(credit_type: str, customer_type: str) -> None:
    credit_created_counter.labels(credit_type=credit_type, customer_type=customer_type).inc()


def record_settlement(transaction_type: str, outcome: str) -> None:
    """Record settlement outcome for monitoring rejection rates"""
    settlement_counter.labels(
        transaction_type=transaction_type,
        outcome=outcome,
    ).inc()
