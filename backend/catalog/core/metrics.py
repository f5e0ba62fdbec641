"""Prometheus counters for cache behaviour and peer-service calls."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, Counter, generate_latest

CACHE_LABEL = "cache"
RESULT_LABEL = "result"
REASON_LABEL = "reason"
SERVICE_LABEL = "service"
OUTCOME_LABEL = "outcome"

CACHE_REQUESTS_TOTAL = Counter(
    "catalog_cache_requests_total",
    "Cache lookups partitioned by hit or miss.",
    labelnames=(CACHE_LABEL, RESULT_LABEL),
)

CACHE_EVICTIONS_TOTAL = Counter(
    "catalog_cache_evictions_total",
    "Cache entries removed from a local cache, labelled by reason.",
    labelnames=(CACHE_LABEL, REASON_LABEL),
)

PEER_REQUESTS_TOTAL = Counter(
    "catalog_peer_requests_total",
    "Outbound peer-service calls partitioned by outcome.",
    labelnames=(SERVICE_LABEL, OUTCOME_LABEL),
)


def record_cache_lookup(cache: str, *, hit: bool) -> None:
    CACHE_REQUESTS_TOTAL.labels(cache, "hit" if hit else "miss").inc()


def record_cache_eviction(cache: str, reason: str, count: int = 1) -> None:
    if count > 0:
        CACHE_EVICTIONS_TOTAL.labels(cache, reason).inc(count)


def record_peer_call(service: str, outcome: str) -> None:
    PEER_REQUESTS_TOTAL.labels(service, outcome).inc()


def register_metrics_endpoint(app: FastAPI) -> None:
    """Expose /metrics in the Prometheus text format."""

    @app.get("/metrics", include_in_schema=False, tags=["observability"])
    async def metrics_endpoint() -> Response:
        return Response(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)


__all__ = [
    "CACHE_EVICTIONS_TOTAL",
    "CACHE_REQUESTS_TOTAL",
    "PEER_REQUESTS_TOTAL",
    "record_cache_eviction",
    "record_cache_lookup",
    "record_peer_call",
    "register_metrics_endpoint",
]
