"""Distributed tracing with OpenTelemetry.

Spans are exported through Loguru in development (``console``), to an OTLP
collector otherwise, or not at all (``none``). FastAPI requests and PyMongo
commands are instrumented automatically once ``instrument_app`` runs.
"""

from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Final

from loguru import logger
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.pymongo import PymongoInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import ReadableSpan, TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    SpanExporter,
    SpanExportResult,
)
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
from opentelemetry.trace import Status, StatusCode

from src.core.context import RequestContext

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from fastapi import FastAPI

    from src.core.config import Settings

SERVICE_NAME_KEY: Final[str] = "service.name"
SERVICE_VERSION_KEY: Final[str] = "service.version"
ENVIRONMENT_KEY: Final[str] = "deployment.environment"
DEFAULT_OTLP_ENDPOINT: Final[str] = "http://localhost:4317"
COLLECTION_ATTRIBUTE: Final[str] = "db.mongodb.collection"
NANOSECONDS_PER_MS: Final[int] = 1_000_000


class LoguruSpanExporter(SpanExporter):
    """Write each finished span as one debug record.

    Used in development so spans show up next to the request logs.
    """

    def export(self, spans: Sequence[ReadableSpan]) -> SpanExportResult:
        for span in spans:
            context = span.get_span_context()
            if context is None:
                continue

            elapsed_ms = None
            if span.start_time and span.end_time:
                elapsed_ms = (span.end_time - span.start_time) / NANOSECONDS_PER_MS

            logger.debug(
                "Span {span_name} finished ({status})",
                span_name=span.name,
                status=span.status.status_code.name,
                trace_id=format(context.trace_id, "032x"),
                span_id=format(context.span_id, "016x"),
                duration_ms=elapsed_ms,
                collection=(span.attributes or {}).get(COLLECTION_ATTRIBUTE),
            )

        return SpanExportResult.SUCCESS


def get_span_exporter(settings: Settings) -> SpanExporter | None:
    """Return the exporter named by ``exporter_type``; ``none`` gives None."""
    config = settings.observability_config

    match config.exporter_type:
        case "console":
            return LoguruSpanExporter()
        case "otlp":
            endpoint = config.exporter_endpoint or DEFAULT_OTLP_ENDPOINT
            logger.info("Exporting spans over OTLP to {}", endpoint)
            # Local collectors run without TLS
            return OTLPSpanExporter(
                endpoint=endpoint, insecure=settings.environment == "development"
            )
        case _:
            return None


def setup_tracing(settings: Settings) -> None:
    """Install the process-wide tracer provider.

    Does nothing when tracing is disabled, leaving OpenTelemetry's no-op
    provider in place.
    """
    config = settings.observability_config
    if not config.enable_tracing:
        return

    provider = TracerProvider(
        resource=Resource.create(
            {
                SERVICE_NAME_KEY: settings.app_name,
                SERVICE_VERSION_KEY: settings.app_version,
                ENVIRONMENT_KEY: settings.environment,
            }
        ),
        sampler=TraceIdRatioBased(config.trace_sample_rate),
    )
    if (exporter := get_span_exporter(settings)) is not None:
        provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)

    logger.info(
        "Tracing enabled with {} exporter at sample rate {}",
        config.exporter_type,
        config.trace_sample_rate,
    )


def add_correlation_id_to_span(span: trace.Span, scope: dict[str, Any]) -> None:
    """Server request hook tagging the span with the request's identifiers.

    The hook runs before ``RequestContextMiddleware``, so the incoming
    headers are consulted when the context is still empty.
    """
    headers = dict(scope.get("headers", []))
    correlation_id = RequestContext.get_correlation_id() or headers.get(
        b"x-correlation-id", b""
    ).decode("utf-8")
    if correlation_id:
        span.set_attribute("correlation_id", correlation_id)

    if request_id := headers.get(b"x-request-id", b"").decode("utf-8"):
        span.set_attribute("request_id", request_id)


@lru_cache(maxsize=8)
def get_tracer(name: str) -> trace.Tracer:
    return trace.get_tracer(name)


@contextmanager
def document_span(collection: str, operation: str) -> Iterator[trace.Span]:
    """Span around one repository call, named ``<collection>.<operation>``.

    Failures are recorded on the span and re-raised unchanged.

    Example:
        >>> with document_span("projects", "find_all"):
        ...     documents = await cursor.to_list(length=None)
    """
    tracer = get_tracer(__name__)
    with tracer.start_as_current_span(
        f"{collection}.{operation}",
        attributes={COLLECTION_ATTRIBUTE: collection, "db.operation": operation},
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        if correlation_id := RequestContext.get_correlation_id():
            span.set_attribute("correlation_id", correlation_id)
        try:
            yield span
        except Exception as exc:
            span.record_exception(exc)
            span.set_status(Status(StatusCode.ERROR, type(exc).__name__))
            raise


def instrument_app(app: FastAPI, settings: Settings) -> None:
    """Instrument the FastAPI application and the PyMongo driver.

    Args:
        app: FastAPI application to instrument.
        settings: Application settings.
    """
    if not settings.observability_config.enable_tracing:
        return

    excluded = ["/health"] + [
        url
        for url in (settings.docs_url, settings.redoc_url, settings.openapi_url)
        if url
    ]
    FastAPIInstrumentor.instrument_app(
        app,
        excluded_urls=",".join(excluded),
        server_request_hook=add_correlation_id_to_span,
    )

    instrumentor = PymongoInstrumentor()
    if not instrumentor.is_instrumented_by_opentelemetry:
        instrumentor.instrument()

    logger.info("Application instrumented for tracing")
