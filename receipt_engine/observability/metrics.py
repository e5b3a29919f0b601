"""
Prometheus metrics for the receipt engine.
"""

from prometheus_client import Counter, Histogram


# ── Receipt Building ─────────────────────────────────────────
receipts_built_total = Counter(
    "receipts_built_total",
    "Total receipts normalized into canonical rows",
    ["category"],
)

receipt_payloads_rejected_total = Counter(
    "receipt_payloads_rejected_total",
    "Total receipt payloads that could not be parsed",
    ["reason"],
)

# ── Export / Share ───────────────────────────────────────────
receipt_exports_total = Counter(
    "receipt_exports_total",
    "Total receipts shared, by share channel",
    ["channel"],
)

receipt_export_failures_total = Counter(
    "receipt_export_failures_total",
    "Total receipt exports that failed",
    ["stage"],
)

receipt_export_duration_seconds = Histogram(
    "receipt_export_duration_seconds",
    "Time from share trigger to a terminal state",
    buckets=[0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10],
)
