"""
Prometheus Metrics for the dev ticker server.

This module defines all metrics exposed at the /metrics endpoint.
Metrics are categorized into:

1. Ticker Metrics - what the mock served
   - Quotes by API and whether the key had a base price, catalog size

2. Fault Injection Metrics - what sloppy mode did to requests
   - Injected errors, delay buckets, delay durations

3. HTTP Metrics - standard request counts and latencies
"""
from prometheus_client import Counter, Gauge, Histogram, Info

# =============================================================================
# SERVICE INFO
# =============================================================================

SERVICE_INFO = Info(
    "ticker_service",
    "Service information"
)
SERVICE_INFO.info({
    "version": "0.1.0",
    "service": "dev-ticker",
})

# =============================================================================
# TICKER METRICS
# =============================================================================

# Counter: Quotes served by API flavour
QUOTES_TOTAL = Counter(
    "ticker_quotes_total",
    "Total price quotes synthesized",
    ["api", "known"]  # api: coinmarketcap, coingecko. known: true, false
)

# Gauge: Tokens in the loaded catalog
CATALOG_TOKENS = Gauge(
    "ticker_catalog_tokens",
    "Number of tokens in the loaded catalog"
)

# =============================================================================
# FAULT INJECTION METRICS
# =============================================================================

INJECTED_ERRORS = Counter(
    "ticker_injected_errors_total",
    "Requests failed on purpose by sloppy mode"
)

INJECTED_DELAYS = Counter(
    "ticker_injected_delays_total",
    "Requests delayed on purpose by sloppy mode",
    ["bucket"]  # fast, stall, random
)

INJECTED_DELAY_SECONDS = Histogram(
    "ticker_injected_delay_seconds",
    "Artificial delay applied to requests",
    buckets=[0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0, 10.0]
)

# =============================================================================
# HTTP METRICS (Standard)
# =============================================================================

HTTP_REQUESTS = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"]
)

HTTP_REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

# =============================================================================
# HELPER FUNCTIONS
# =============================================================================


def record_quote(api: str, known: bool) -> None:
    """Record a synthesized quote."""
    QUOTES_TOTAL.labels(api=api, known=str(known).lower()).inc()


def set_catalog_size(count: int) -> None:
    """Update the catalog size gauge."""
    CATALOG_TOKENS.set(count)


def record_injected_error() -> None:
    """Record a request failed by the fault injector."""
    INJECTED_ERRORS.inc()


def record_injected_delay(bucket: str, delay_seconds: float) -> None:
    """
    Record a delay applied by the fault injector.

    Args:
        bucket: Delay bucket name ("fast", "stall" or "random")
        delay_seconds: The delay that was applied
    """
    INJECTED_DELAYS.labels(bucket=bucket).inc()
    INJECTED_DELAY_SECONDS.observe(delay_seconds)


def record_http_request(method: str, endpoint: str, status: int, latency_seconds: float) -> None:
    """Record HTTP request count and latency."""
    HTTP_REQUESTS.labels(method=method, endpoint=endpoint, status=status).inc()
    HTTP_REQUEST_LATENCY.labels(method=method, endpoint=endpoint).observe(latency_seconds)
