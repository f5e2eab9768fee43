"""
Prometheus metrics configuration.
"""

import time
from typing import Any, Callable, cast

from fastapi import FastAPI, Request, Response
from loguru import logger
from prometheus_client import REGISTRY, Counter, Gauge, Histogram
from prometheus_client.openmetrics.exposition import CONTENT_TYPE_LATEST, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

REQUEST_COUNT = Counter("http_requests_total", "Total HTTP requests count", ["method", "endpoint", "status_code"])

REQUEST_TIME = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.075, 0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0, 7.5, 10.0, float("inf")),
)

REQUEST_IN_PROGRESS = Gauge("http_requests_in_progress", "Number of HTTP requests in progress", ["method", "endpoint"])

EXCEPTION_COUNT = Counter(
    "http_exceptions_total", "Total HTTP exceptions count", ["method", "endpoint", "exception_type"]
)

INVENTORY_EVENTS = Counter("inventory_events_total", "Inventory changes by kind", ["event_type"])

NOTIFICATION_FAILURES = Counter(
    "restock_notification_failures_total", "Restock lookups that failed and were served empty"
)


def normalize_path(path: str) -> str:
    """
    Replace numeric path segments with ``{id}`` to keep label cardinality bounded.
    """
    return "/".join("{id}" if part.isdigit() else part for part in path.split("/"))


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Middleware that collects Prometheus metrics for HTTP requests.
    """

    def __init__(self, app: ASGIApp) -> None:
        super().__init__(app)

    async def dispatch(self, request: Request, call_next: Callable[[Request], Any]) -> Response:
        method = request.method
        path = request.url.path

        if path == "/metrics" or path.startswith("/static"):
            response = await call_next(request)
            return cast(Response, response)

        path = normalize_path(path)
        start_time = time.time()
        REQUEST_IN_PROGRESS.labels(method=method, endpoint=path).inc()

        try:
            response = cast(Response, await call_next(request))
            REQUEST_COUNT.labels(method=method, endpoint=path, status_code=response.status_code).inc()
            REQUEST_TIME.labels(method=method, endpoint=path).observe(time.time() - start_time)
            return response
        except Exception as e:
            EXCEPTION_COUNT.labels(method=method, endpoint=path, exception_type=type(e).__name__).inc()
            logger.exception(f"Request failed: {str(e)}")
            raise
        finally:
            REQUEST_IN_PROGRESS.labels(method=method, endpoint=path).dec()


async def metrics_endpoint(request: Request) -> Response:
    """
    Endpoint for exposing Prometheus metrics.
    """
    data = generate_latest(REGISTRY)
    return Response(content=data, headers={"Content-Type": CONTENT_TYPE_LATEST})


def setup_metrics(app: FastAPI) -> None:
    """
    Set up Prometheus metrics and middleware for FastAPI application.
    """
    app.add_middleware(PrometheusMiddleware)
    app.add_route("/metrics", metrics_endpoint)

    logger.info("Prometheus metrics configured")


def record_inventory_event(event_type: str) -> None:
    """Count an inventory change (item_created, item_used, category_deleted, ...)."""
    INVENTORY_EVENTS.labels(event_type=event_type).inc()
