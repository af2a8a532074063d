"""OpenTelemetry telemetry module for slides-writer observability."""

import logging
import os
import sys

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.semconv.resource import ResourceAttributes

logger = logging.getLogger(__name__)


def init_telemetry(service_name: str = "slides-writer", enable_console: bool = False) -> None:
    """Initialize OpenTelemetry tracing.

    Args:
        service_name: Name of the service for tracing
        enable_console: Whether to export spans to stderr
    """
    resource = Resource.create(
        {ResourceAttributes.SERVICE_NAME: service_name, ResourceAttributes.SERVICE_VERSION: "0.1.0"}
    )

    tracer_provider = TracerProvider(resource=resource)
    trace.set_tracer_provider(tracer_provider)

    # Console output for debugging; stdout belongs to the MCP stdio transport
    if enable_console or os.getenv("OTEL_CONSOLE", "false").lower() == "true":
        exporter = ConsoleSpanExporter(out=sys.stderr)
        tracer_provider.add_span_processor(BatchSpanProcessor(exporter))
        logger.info("Console telemetry enabled")

    logger.debug(f"Telemetry initialized for service: {service_name}")


def get_tracer(name: str) -> trace.Tracer:
    """Get a tracer for a component."""
    return trace.get_tracer(name)
