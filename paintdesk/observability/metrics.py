# paintdesk/observability/metrics.py
import time
from contextlib import contextmanager

from fastapi import APIRouter
from starlette.responses import Response

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

router = APIRouter(tags=["observability"])

estimate_counter = Counter(
    "paintdesk_estimates_total",
    "Number of estimates computed",
    ["kind", "result"],  # kind: rooms|hours|gallons|costs|drywall|painting; result: ok|incomplete|error
)

request_counter = Counter(
    "paintdesk_http_requests_total",
    "HTTP requests",
    ["method", "route", "status_code"],
)

estimate_latency = Histogram(
    "paintdesk_estimate_latency_seconds",
    "Time spent computing an estimate",
    ["kind"],
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25),
)


@contextmanager
def track_estimate(kind: str):
    """
    Times the block and counts it under outcome["result"].
    Callers may set "incomplete"; an exception counts as "error".
    """
    start = time.perf_counter()
    outcome = {"result": "ok"}
    try:
        yield outcome
    except Exception:
        outcome["result"] = "error"
        raise
    finally:
        estimate_latency.labels(kind=kind).observe(time.perf_counter() - start)
        estimate_counter.labels(kind=kind, result=outcome["result"]).inc()


@router.get("/metrics", include_in_schema=True)
def metrics() -> Response:
    # Prometheus expects text/plain; version=0.0.4
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
