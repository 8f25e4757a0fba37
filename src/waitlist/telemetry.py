# waitlist/telemetry.py
import logging

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from waitlist.config import settings

logger = logging.getLogger(__name__)

SERVICE_NAME = "waitlist"


def setup_telemetry() -> None:
    """Export spans to stdout."""
    provider = TracerProvider(resource=Resource.create({"service.name": SERVICE_NAME}))
    provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(provider)
    logger.info("Tracing enabled (console exporter)")


def setup_tracing() -> None:
    # Only set up tracing if explicitly enabled
    if settings.ENABLE_TRACING:
        setup_telemetry()

    else:
        # Set a no-op tracer provider to disable tracing
        trace.set_tracer_provider(trace.NoOpTracerProvider())
