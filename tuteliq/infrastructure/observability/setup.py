"""Logging and tracing setup for host applications."""

import logging

import structlog
from opentelemetry import trace
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import ParentBasedTraceIdRatio

from tuteliq.config import SDK_VERSION, ClientSettings, get_settings
from tuteliq.infrastructure.observability.structlog_processor import (
    add_request_context,
    add_trace_context,
)

# Module-level state for cleanup
_tracer_provider: TracerProvider | None = None
_tracing_initialized: bool = False


def configure_logging(level: str = "INFO", *, json_output: bool = False) -> None:
    """Configure structlog on top of the standard library logger.

    The library itself only calls ``structlog.get_logger()``; host
    applications call this once at startup if they want its output formatted.

    Args:
        level: Minimum log level name.
        json_output: Render JSON lines instead of console output.
    """
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            add_trace_context,
            add_request_context,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
    )


def init_tracing(
    service_name: str,
    service_version: str,
    *,
    console_export: bool = False,
    enabled: bool = True,
    sample_rate: float = 1.0,
) -> None:
    """Install a global OpenTelemetry tracer provider.

    Args:
        service_name: Name of the service for resource attribution.
        service_version: Version of the service.
        console_export: If True, export spans to console (for development).
        enabled: If False, a no-op provider is installed.
        sample_rate: Sampling rate between 0.0 and 1.0.
    """
    global _tracer_provider, _tracing_initialized

    if _tracing_initialized:
        return

    if not enabled:
        trace.set_tracer_provider(trace.NoOpTracerProvider())
        _tracing_initialized = True
        return

    resource = Resource.create(
        {
            SERVICE_NAME: service_name,
            SERVICE_VERSION: service_version,
        }
    )
    _tracer_provider = TracerProvider(
        resource=resource, sampler=ParentBasedTraceIdRatio(sample_rate)
    )

    if console_export:
        _tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(_tracer_provider)
    _tracing_initialized = True


def shutdown_tracing() -> None:
    """Flush pending spans and shut the tracer provider down."""
    global _tracer_provider, _tracing_initialized

    if _tracer_provider is not None:
        _tracer_provider.shutdown()
        _tracer_provider = None

    _tracing_initialized = False


def init_observability(settings: ClientSettings | None = None) -> None:
    """Configure logging and tracing from ``TUTELIQ_*`` settings.

    Uses ``log_level``, ``log_json``, ``tracing_enabled`` and
    ``service_name``. Spans are attributed to the SDK version.

    Args:
        settings: Settings to apply; defaults to the cached ``get_settings()``.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, json_output=settings.log_json)
    init_tracing(
        settings.service_name,
        SDK_VERSION,
        enabled=settings.tracing_enabled,
    )
