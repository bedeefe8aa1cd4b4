"""OpenTelemetry initialization helpers."""

from __future__ import annotations

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from installer.config import Settings, get_settings


def configure_tracing(settings: Settings | None = None) -> TracerProvider:
    """Configure OpenTelemetry tracing for operator validation.

    Spans are exported over OTLP only when an endpoint is configured; without
    one the provider still assigns trace ids so log records can be correlated.
    """
    settings = settings or get_settings()
    resource = Resource.create({"service.name": settings.otel_service_name})
    tracer_provider = TracerProvider(resource=resource)

    if settings.otel_endpoint:
        exporter = OTLPSpanExporter(endpoint=settings.otel_endpoint, insecure=True)
        tracer_provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(tracer_provider)
    return tracer_provider
