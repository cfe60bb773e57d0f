"""
Prometheus metrics for analysis, cache and upstream activity.

Centralize metric definitions and helpers here to avoid scattered
instrumentation across modules. Metrics live on a dedicated registry so
embedding applications decide whether and how to expose them.
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    generate_latest,
)

registry = CollectorRegistry()

# ============================================================================
# Counters
# ============================================================================

riftimpact_analyses_total = Counter(
    "riftimpact_analyses_total",
    "Match analyses by outcome status",
    labelnames=("status",),
    registry=registry,
)

riftimpact_cache_lookups_total = Counter(
    "riftimpact_cache_lookups_total",
    "Cache lookups by store and result (hit, miss, stale)",
    labelnames=("store", "result"),
    registry=registry,
)

riftimpact_upstream_requests_total = Counter(
    "riftimpact_upstream_requests_total",
    "Upstream Riot API requests by endpoint and status",
    labelnames=("endpoint", "status"),
    registry=registry,
)

riftimpact_classifications_total = Counter(
    "riftimpact_classifications_total",
    "Newly recorded match classifications by category",
    labelnames=("category",),
    registry=registry,
)


# ============================================================================
# Helpers
# ============================================================================


def mark_analysis(status: str) -> None:
    riftimpact_analyses_total.labels(status=status).inc()


def mark_cache_lookup(store: str, result: str) -> None:
    riftimpact_cache_lookups_total.labels(store=store, result=result).inc()


def mark_upstream_request(endpoint: str, status: int | str) -> None:
    riftimpact_upstream_requests_total.labels(endpoint=endpoint, status=str(status)).inc()


def mark_classification(category: str) -> None:
    riftimpact_classifications_total.labels(category=category).inc()


def render_metrics() -> tuple[bytes, str]:
    """Exposition payload and its content type."""
    return generate_latest(registry), CONTENT_TYPE_LATEST
