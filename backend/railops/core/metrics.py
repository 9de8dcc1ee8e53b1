from __future__ import annotations

from prometheus_client import Counter, Histogram

CACHE_EVENTS = Counter(
    "railops_cache_events_total",
    "Response cache operations recorded by RailOps.",
    labelnames=("cache", "event"),
)
CACHE_REFRESH_LATENCY = Histogram(
    "railops_cache_refresh_seconds",
    "Time spent computing a response on a cache miss.",
    labelnames=("cache",),
)
PROVIDER_REQUESTS = Counter(
    "railops_provider_requests_total",
    "Outbound generative text provider requests.",
    labelnames=("operation", "result"),
)
PROVIDER_REQUEST_LATENCY = Histogram(
    "railops_provider_request_seconds",
    "Latency of outbound generative text provider requests.",
    labelnames=("operation",),
)
RECONCILE_EVENTS = Counter(
    "railops_reconcile_events_total",
    "Outcomes of merging provider updates into the train registry.",
    labelnames=("mode", "result"),
)
RECONCILED_RECORDS = Counter(
    "railops_reconciled_records_total",
    "Train records overlaid with provider fields.",
    labelnames=("mode",),
)
JOB_RUNS = Counter(
    "railops_job_runs_total",
    "Scheduled background job executions.",
    labelnames=("job", "result"),
)


def record_cache_event(cache: str, event: str) -> None:
    """Increment a cache event counter."""
    CACHE_EVENTS.labels(cache=cache, event=event).inc()


def observe_cache_refresh(cache: str, duration_seconds: float) -> None:
    """Record cache refresh latency."""
    CACHE_REFRESH_LATENCY.labels(cache=cache).observe(duration_seconds)


def observe_provider_request(
    operation: str, result: str, duration_seconds: float
) -> None:
    """Record provider request result and latency."""
    PROVIDER_REQUESTS.labels(operation=operation, result=result).inc()
    PROVIDER_REQUEST_LATENCY.labels(operation=operation).observe(duration_seconds)


def record_provider_result(operation: str, result: str) -> None:
    """Record a provider outcome decided after the HTTP call (e.g. parse errors)."""
    PROVIDER_REQUESTS.labels(operation=operation, result=result).inc()


def record_reconcile(mode: str, result: str, merged: int = 0) -> None:
    """Record a reconcile outcome and how many records it touched."""
    RECONCILE_EVENTS.labels(mode=mode, result=result).inc()
    if merged:
        RECONCILED_RECORDS.labels(mode=mode).inc(merged)


def record_job_run(job: str, result: str) -> None:
    """Record a scheduled job execution."""
    JOB_RUNS.labels(job=job, result=result).inc()
