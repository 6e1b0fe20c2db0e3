"""Prometheus metrics for export volume, amounts and failures"""

from decimal import Decimal
from prometheus_client import Counter, Histogram

# Export metrics
export_counter = Counter(
    "sepa_export_total",
    "Export attempts by file format and outcome",
    ["format", "outcome"],  # sepa | csv ; success | empty_selection | invalid_input | error
)

exported_transactions_counter = Counter(
    "sepa_exported_transactions_total",
    "Debts included in produced export files",
    ["format"],
)

exported_amount_counter = Counter(
    "sepa_exported_amount_eur_total",
    "Sum of SEPA control sums produced, in EUR",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_export(export_format: str, transaction_count: int, control_sum: Decimal) -> None:
    """Record a successful export"""
    export_counter.labels(format=export_format, outcome="success").inc()
    exported_transactions_counter.labels(format=export_format).inc(transaction_count)
    if export_format == "sepa":
        exported_amount_counter.inc(float(control_sum))


def record_export_failure(export_format: str, outcome: str) -> None:
    export_counter.labels(format=export_format, outcome=outcome).inc()
