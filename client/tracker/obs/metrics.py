"""Central registry for Prometheus metrics used across the client."""

from __future__ import annotations

from prometheus_client import Counter, Histogram


REQUEST_COUNTER = Counter(
	"tracker_http_requests_total",
	"Outbound HTTP requests issued by the gateway",
	["route", "method", "status"],
)

REQUEST_LATENCY = Histogram(
	"tracker_http_request_duration_seconds",
	"Outbound HTTP request latency in seconds",
	["route", "method"],
	buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0),
)

AUTH_INVALIDATIONS = Counter(
	"tracker_auth_invalidations_total",
	"Cached identities cleared after a 401 response",
)

STUB_FALLBACKS = Counter(
	"tracker_stub_fallbacks_total",
	"Facade calls answered with an unavailable listing because the endpoint is absent",
	["verb"],
)

MIRROR_WRITES = Counter(
	"tracker_mirror_writes_total",
	"Local mirror writes to device storage",
	["key"],
)


def observe_request(route: str, method: str, status: int | str, duration: float) -> None:
	REQUEST_COUNTER.labels(route=route, method=method, status=str(status)).inc()
	REQUEST_LATENCY.labels(route=route, method=method).observe(duration)


def inc_auth_invalidation() -> None:
	AUTH_INVALIDATIONS.inc()


def inc_stub_fallback(verb: str) -> None:
	STUB_FALLBACKS.labels(verb=verb).inc()


def inc_mirror_write(key: str) -> None:
	MIRROR_WRITES.labels(key=key).inc()
