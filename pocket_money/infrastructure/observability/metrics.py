"""Prometheus metrics for settlements, deductions, and request latency"""

from decimal import Decimal

from prometheus_client import Counter, Histogram, Gauge

# Settlement metrics
settlement_counter = Counter(
    "pocket_money_settlements_total",
    "Days settled",
    ["action"],  # save | spread | week | month
)

settled_spend_counter = Counter(
    "pocket_money_settled_spend_total",
    "Total amount spent across settled days",
)

month_initialized_counter = Counter(
    "pocket_money_month_initialized_total",
    "Budgeting periods started",
)

# Budget metrics
daily_budget_gauge = Gauge(
    "pocket_money_daily_budget",
    "Most recently computed daily budget",
)

deductions_pruned_counter = Counter(
    "pocket_money_deductions_pruned_total",
    "Temporary deductions removed after expiry",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_settlement(action: str, spent: Decimal) -> None:
    settlement_counter.labels(action=action).inc()
    settled_spend_counter.inc(float(spent))
