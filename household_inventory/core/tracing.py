"""
OpenTelemetry distributed tracing configuration.
"""

from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional

from fastapi import FastAPI
from loguru import logger
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import ParentBasedTraceIdRatio
from opentelemetry.trace import Span, SpanKind, Tracer

from household_inventory.core.config import settings
from household_inventory.db.session import engine


def configure_tracer() -> TracerProvider:
    """
    Configure the global tracer provider.

    Spans go to the console in development and to ``OTLP_ENDPOINT`` when set.
    """
    resource = Resource.create(
        {
            "service.name": settings.PROJECT_NAME,
            "service.version": settings.VERSION,
            "deployment.environment": settings.ENVIRONMENT,
        }
    )

    tracer_provider = TracerProvider(
        resource=resource,
        sampler=ParentBasedTraceIdRatio(0.1),
    )

    if settings.ENVIRONMENT == "development":
        tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    if settings.OTLP_ENDPOINT:
        tracer_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.OTLP_ENDPOINT)))

    trace.set_tracer_provider(tracer_provider)

    return tracer_provider


def setup_tracing(app: FastAPI) -> None:
    """
    Instrument FastAPI and the SQLAlchemy engine.
    """
    if not settings.ENABLE_TRACING:
        return

    try:
        tracer_provider = configure_tracer()

        FastAPIInstrumentor.instrument_app(
            app,
            tracer_provider=tracer_provider,
            excluded_urls="api/health,metrics,static",
        )
        SQLAlchemyInstrumentor().instrument(
            engine=engine.sync_engine,
            tracer_provider=tracer_provider,
        )

        logger.info("OpenTelemetry tracing configured successfully")
    except Exception as e:
        logger.error(f"Failed to setup OpenTelemetry tracing: {e}")


def get_tracer(name: str = "household_inventory") -> Tracer:
    return trace.get_tracer(name)


@contextmanager
def create_span(
    name: str, attributes: Optional[Dict[str, Any]] = None, kind: Optional[SpanKind] = None
) -> Generator[Span, None, None]:
    """
    Create a new span (context manager).

    Example usage:
        with create_span("inventory.group", {"account.id": account_id}) as span:
            grouped = group_by_category(items, categories)
            span.set_attribute("inventory.groups", len(grouped.categorized))
    """
    tracer = get_tracer()
    with tracer.start_as_current_span(
        name, attributes=attributes, kind=kind if kind is not None else SpanKind.INTERNAL
    ) as span:
        yield span
