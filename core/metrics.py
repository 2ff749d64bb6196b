"""
Prometheus metrics for the PayPal NVP client.

Counters live in the default registry; the embedding application decides
whether and where to expose them.
"""

from prometheus_client import Counter

nvp_requests = Counter(
    "paypal_nvp_requests_total",
    "Total number of NVP API calls",
    ["method", "outcome"],  # outcome: success, failure (remote ack), error (transport)
)


def record_request(method: str, outcome: str) -> None:
    """Count one NVP call by API method and outcome."""
    nvp_requests.labels(method=method or "unknown", outcome=outcome).inc()
