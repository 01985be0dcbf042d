"""Prometheus metrics for monitoring score distribution and AI service health"""

from prometheus_client import Counter, Histogram

# Scoring metrics
scoring_counter = Counter(
    "agrimrv_scoring_total",
    "Total credit scoring runs",
    ["grade"],  # A | B | C | D | F
)

loan_bucket_counter = Counter(
    "agrimrv_eligible_loan_bucket",
    "Eligible loan amounts issued by bucket",
    ["bucket"],  # 0 | 250 | 500 | 750 | 1000
)

unrecognized_category_counter = Counter(
    "agrimrv_unrecognized_category_total",
    "Breakdown categories classified with the fallback label",
)

# AI service metrics
ai_fetch_failures_counter = Counter(
    "ai_service_fetch_failures_total",
    "Failed AI analysis service calls",
)

ai_fetch_latency_histogram = Histogram(
    "ai_service_latency_seconds",
    "AI analysis service response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_scoring(grade: str, eligible_loan_amount: int, unrecognized_categories: int = 0) -> None:
    """Record scoring metrics for monitoring grade and loan distribution"""
    scoring_counter.labels(grade=grade).inc()
    loan_bucket_counter.labels(bucket=str(eligible_loan_amount)).inc()

    if unrecognized_categories:
        unrecognized_category_counter.inc(unrecognized_categories)
