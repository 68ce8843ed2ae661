"""Monitoring utilities leveraging Prometheus client."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

http_requests_total = Counter(
    "wayfinder_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

http_request_latency_seconds = Histogram(
    "wayfinder_http_request_latency_seconds",
    "HTTP request latency",
    ["method", "path"],
)

pod_fetch_outcomes_total = Counter(
    "wayfinder_pod_fetch_outcomes_total",
    "Pod profile fetch outcomes after retries",
    ["kind"],
)

profile_cache_lookups_total = Counter(
    "wayfinder_profile_cache_lookups_total",
    "Profile cache lookups",
    ["result"],
)

pod_proxy_requests_total = Counter(
    "wayfinder_pod_proxy_requests_total",
    "Pod proxy requests by decision",
    ["decision"],
)


def observe_request(method: str, path: str, status: int, duration_seconds: float) -> None:
    http_requests_total.labels(method=method, path=path, status=str(status)).inc()
    http_request_latency_seconds.labels(method=method, path=path).observe(duration_seconds)


def observe_pod_fetch(kind: str) -> None:
    pod_fetch_outcomes_total.labels(kind=kind).inc()


def observe_cache_lookup(hit: bool) -> None:
    profile_cache_lookups_total.labels(result="hit" if hit else "miss").inc()


def observe_proxy_request(decision: str) -> None:
    pod_proxy_requests_total.labels(decision=decision).inc()
