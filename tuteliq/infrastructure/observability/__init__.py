"""Observability: structlog configuration and OpenTelemetry tracing."""

from tuteliq.infrastructure.observability.setup import (
    configure_logging,
    init_observability,
    init_tracing,
    shutdown_tracing,
)
from tuteliq.infrastructure.observability.structlog_processor import (
    add_request_context,
    add_trace_context,
)
from tuteliq.infrastructure.observability.tracing import (
    REQUEST_SPAN_NAME,
    get_current_trace_id,
    get_tracer,
    traced,
)

__all__ = [
    "REQUEST_SPAN_NAME",
    "add_request_context",
    "add_trace_context",
    "configure_logging",
    "get_current_trace_id",
    "get_tracer",
    "init_observability",
    "init_tracing",
    "shutdown_tracing",
    "traced",
]
