"""Prometheus metrics for proxied backend calls."""

from prometheus_client import Counter, Histogram

proxy_requests_total = Counter(
    "proxy_requests_total",
    "Total backend calls made by the proxy",
    ["method", "outcome"],
)

proxy_upstream_latency_ms = Histogram(
    "proxy_upstream_latency_ms",
    "Backend call latency in milliseconds",
    ["method", "outcome"],
    buckets=[10, 50, 100, 200, 500, 1000, 2000, 5000, 10000, 30000],
)

proxy_credential_failures_total = Counter(
    "proxy_credential_failures_total",
    "Requests rejected before forwarding because no credential could be resolved",
    ["reason"],
)


class PrometheusProxyMetrics:
    """Prometheus-based proxy metrics implementation."""

    def record_call(self, method: str, outcome: str, latency_ms: float) -> None:
        """Record one backend call. Outcome is success, upstream_error or transport_error."""
        proxy_requests_total.labels(method=method, outcome=outcome).inc()
        proxy_upstream_latency_ms.labels(method=method, outcome=outcome).observe(latency_ms)

    def inc_credential_failure(self, reason: str) -> None:
        """Increment credential failure counter."""
        proxy_credential_failures_total.labels(reason=reason).inc()
