"""Prometheus metrics definitions."""

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

http_request_duration = Histogram(
    "advisor_http_request_duration_seconds",
    "Duration of HTTP requests in seconds",
    labelnames=["method", "endpoint", "status_code"],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

http_requests_total = Counter(
    "advisor_http_requests_total",
    "Total number of HTTP requests",
    labelnames=["method", "endpoint", "status_code"],
)

analyses_total = Counter(
    "advisor_analyses_total",
    "Analyses by pipeline and result (general, incident, or error kind)",
    labelnames=["pipeline", "outcome"],
)

analysis_duration = Histogram(
    "advisor_analysis_duration_seconds",
    "End-to-end analyze() duration including upstream generation",
    labelnames=["pipeline"],
    buckets=(0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0, 60.0),
)


def get_metrics() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST
