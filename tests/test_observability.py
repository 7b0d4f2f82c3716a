"""Tests for the observability module."""

import pytest
import structlog
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from tuteliq.config import SDK_VERSION, ClientSettings
from tuteliq.infrastructure.http import (
    RequestExecutor,
    RetryPolicy,
    ServerError,
    TransportResponse,
)
from tuteliq.infrastructure.observability import (
    REQUEST_SPAN_NAME,
    add_request_context,
    add_trace_context,
    configure_logging,
    get_current_trace_id,
    get_tracer,
    init_observability,
    init_tracing,
    shutdown_tracing,
    traced,
)
from tuteliq.infrastructure.observability import setup as observability_setup

# Module-level setup: configure TracerProvider once before any tests run
_exporter = InMemorySpanExporter()
_provider = TracerProvider()
_provider.add_span_processor(SimpleSpanProcessor(_exporter))
trace.set_tracer_provider(_provider)


@pytest.fixture(autouse=True)
def clear_spans():
    """Clear spans before each test."""
    _exporter.clear()
    yield
    _exporter.clear()


def get_finished_spans():
    """Get finished spans from the module-level exporter."""
    return _exporter.get_finished_spans()


class ScriptedTransport:
    def __init__(self, *responses):
        self.responses = list(responses)

    async def send(self, request):
        return self.responses.pop(0)

    async def close(self):
        pass


class TestGetTracer:
    """Tests for get_tracer function."""

    def test_returns_tracer_instance(self):
        """get_tracer should return a working Tracer."""
        tracer = get_tracer("test_module")

        with tracer.start_as_current_span("test_span"):
            pass

        spans = get_finished_spans()
        assert len(spans) == 1
        assert spans[0].name == "test_span"


class TestTracedDecorator:
    """Tests for the @traced decorator."""

    @pytest.mark.asyncio
    async def test_wraps_coroutine_in_span(self):
        """The decorated coroutine runs inside a named span."""

        @traced("tuteliq.test_call", attributes={"tuteliq.endpoint": "test"})
        async def call(value):
            return value * 2

        result = await call(21)

        assert result == 42
        spans = get_finished_spans()
        assert len(spans) == 1
        assert spans[0].name == "tuteliq.test_call"
        assert spans[0].attributes["tuteliq.endpoint"] == "test"
        assert spans[0].status.status_code == trace.StatusCode.OK

    @pytest.mark.asyncio
    async def test_marks_span_as_error(self):
        """Exceptions set an error status and propagate."""

        @traced("tuteliq.failing_call")
        async def call():
            raise ValueError("test error")

        with pytest.raises(ValueError, match="test error"):
            await call()

        spans = get_finished_spans()
        assert spans[0].status.status_code == trace.StatusCode.ERROR

    def test_preserves_function_metadata(self):
        """functools.wraps keeps the name and docstring."""

        @traced("tuteliq.documented")
        async def documented():
            """Docstring."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring."


class TestExecutorSpans:
    """Tests for spans emitted by the request executor."""

    @pytest.mark.asyncio
    async def test_each_attempt_gets_a_span(self):
        """Each attempt records method, path, attempt and status."""
        transport = ScriptedTransport(
            TransportResponse(500, {}, b""),
            TransportResponse(200, {}, b"{}"),
        )

        async def no_sleep(seconds):
            return None

        executor = RequestExecutor(
            transport,
            api_key="test-api-key-123",
            base_url="https://api.example.com",
            retry_policy=RetryPolicy(max_attempts=2),
            sleep=no_sleep,
        )

        await executor.execute("POST", "/api/v1/safety/unsafe", {})

        spans = [s for s in get_finished_spans() if s.name == "tuteliq.request"]
        assert len(spans) == 2
        first, second = (dict(s.attributes) for s in spans)
        assert first["http.method"] == "POST"
        assert first["tuteliq.path"] == "/api/v1/safety/unsafe"
        assert first["tuteliq.attempt"] == 0
        assert first["http.status_code"] == 500
        assert first["tuteliq.error_kind"] == "server"
        assert second["tuteliq.attempt"] == 1
        assert second["http.status_code"] == 200

    @pytest.mark.asyncio
    async def test_failed_attempt_span_records_error(self):
        """A failing attempt's span ends with an error status."""
        executor = RequestExecutor(
            ScriptedTransport(TransportResponse(503, {}, b"")),
            api_key="test-api-key-123",
            base_url="https://api.example.com",
            retry_policy=RetryPolicy(max_attempts=1),
        )

        with pytest.raises(ServerError):
            await executor.execute("GET", "/x")

        spans = get_finished_spans()
        assert spans[0].status.status_code == trace.StatusCode.ERROR


class TestGetCurrentTraceId:
    """Tests for get_current_trace_id function."""

    def test_returns_trace_id_when_in_span(self):
        tracer = get_tracer("test")

        with tracer.start_as_current_span("test_span") as span:
            trace_id = get_current_trace_id()
            expected = format(span.get_span_context().trace_id, "032x")

        assert trace_id == expected
        assert len(trace_id) == 32

    def test_returns_none_without_span(self):
        assert get_current_trace_id() is None


class TestStructlogProcessor:
    """Tests for the add_trace_context processor."""

    def test_adds_trace_context_when_in_span(self):
        """Inside a span, trace_id and span_id are added."""
        tracer = get_tracer("test")

        with tracer.start_as_current_span("test_span") as span:
            event_dict = add_trace_context(None, "info", {"event": "test"})
            ctx = span.get_span_context()

        assert event_dict["trace_id"] == format(ctx.trace_id, "032x")
        assert event_dict["span_id"] == format(ctx.span_id, "016x")

    def test_does_not_add_context_without_span(self):
        """Outside a span the event is unchanged."""
        event_dict = add_trace_context(None, "info", {"event": "test"})

        assert event_dict == {"event": "test"}


class TestRequestContextProcessor:
    """Tests for the add_request_context processor."""

    def test_copies_attempt_and_request_id_inside_request_span(self):
        tracer = get_tracer("test")

        with tracer.start_as_current_span(REQUEST_SPAN_NAME) as span:
            span.set_attribute("tuteliq.attempt", 2)
            span.set_attribute("tuteliq.request_id", "req-7")
            event_dict = add_request_context(None, "debug", {"event": "usage_updated"})

        assert event_dict == {
            "event": "usage_updated",
            "attempt": 2,
            "request_id": "req-7",
        }

    def test_event_values_take_precedence(self):
        tracer = get_tracer("test")

        with tracer.start_as_current_span(REQUEST_SPAN_NAME) as span:
            span.set_attribute("tuteliq.attempt", 2)
            event_dict = add_request_context(
                None, "debug", {"event": "api_request_retry", "attempt": 3}
            )

        assert event_dict == {"event": "api_request_retry", "attempt": 3}

    def test_ignores_other_spans(self):
        """Endpoint spans are not request spans."""
        tracer = get_tracer("test")

        with tracer.start_as_current_span("tuteliq.detect_bullying") as span:
            span.set_attribute("tuteliq.attempt", 1)
            event_dict = add_request_context(None, "info", {"event": "test"})

        assert event_dict == {"event": "test"}

    def test_does_not_add_context_without_span(self):
        event_dict = add_request_context(None, "info", {"event": "test"})

        assert event_dict == {"event": "test"}

    @pytest.mark.asyncio
    async def test_executor_events_carry_request_id(self):
        """Events logged mid-attempt pick up the response's request id."""
        capture = structlog.testing.LogCapture()
        structlog.configure(processors=[add_request_context, capture])
        transport = ScriptedTransport(
            TransportResponse(
                200,
                {
                    "x-request-id": "req-9",
                    "x-monthly-limit": "10",
                    "x-monthly-used": "1",
                    "x-monthly-remaining": "9",
                },
                b"{}",
            )
        )
        executor = RequestExecutor(
            transport,
            api_key="test-api-key-123",
            base_url="https://api.example.com",
            retry_policy=RetryPolicy(max_attempts=1),
        )

        try:
            await executor.execute("GET", "/api/v1/usage/monthly")
        finally:
            structlog.reset_defaults()

        usage_event = next(
            e for e in capture.entries if e["event"] == "usage_updated"
        )
        assert usage_event["request_id"] == "req-9"
        assert usage_event["attempt"] == 0
        span = next(s for s in get_finished_spans() if s.name == REQUEST_SPAN_NAME)
        assert span.attributes["tuteliq.request_id"] == "req-9"


class TestTracingLifecycle:
    """Tests for init_tracing, shutdown_tracing and init_observability."""

    @pytest.fixture(autouse=True)
    def installed_providers(self, monkeypatch):
        """Record providers instead of replacing the global one."""
        installed = []
        monkeypatch.setattr(trace, "set_tracer_provider", installed.append)
        monkeypatch.setattr(observability_setup, "_tracer_provider", None)
        monkeypatch.setattr(observability_setup, "_tracing_initialized", False)
        yield installed
        shutdown_tracing()
        structlog.reset_defaults()

    def test_init_tracing_installs_provider_with_resource(self, installed_providers):
        init_tracing("tuteliq-test", "9.9.9")

        provider = observability_setup._tracer_provider
        assert installed_providers == [provider]
        assert provider.resource.attributes["service.name"] == "tuteliq-test"
        assert provider.resource.attributes["service.version"] == "9.9.9"

    def test_init_tracing_is_idempotent(self, installed_providers):
        init_tracing("tuteliq-test", "1.0.0")
        first = observability_setup._tracer_provider

        init_tracing("other", "2.0.0")

        assert installed_providers == [first]
        assert observability_setup._tracer_provider is first

    def test_disabled_tracing_installs_no_op_provider(self, installed_providers):
        init_tracing("tuteliq-test", "1.0.0", enabled=False)

        assert len(installed_providers) == 1
        assert isinstance(installed_providers[0], trace.NoOpTracerProvider)
        assert observability_setup._tracer_provider is None

    def test_shutdown_flushes_pending_spans(self):
        """Spans still queued in a batch processor are exported on shutdown."""
        exporter = InMemorySpanExporter()
        init_tracing("tuteliq-test", "1.0.0")
        provider = observability_setup._tracer_provider
        provider.add_span_processor(BatchSpanProcessor(exporter))

        with provider.get_tracer("test").start_as_current_span("pending"):
            pass
        shutdown_tracing()

        assert [s.name for s in exporter.get_finished_spans()] == ["pending"]
        assert observability_setup._tracer_provider is None

    def test_shutdown_allows_reinitialising(self, installed_providers):
        init_tracing("tuteliq-test", "1.0.0")
        shutdown_tracing()

        init_tracing("tuteliq-test", "1.0.0")

        assert len(installed_providers) == 2
        assert observability_setup._tracer_provider is installed_providers[1]

    def test_init_observability_applies_settings(self, installed_providers):
        """Logging and tracing follow the TUTELIQ_* observability fields."""
        settings = ClientSettings(
            log_level="DEBUG",
            log_json=True,
            tracing_enabled=True,
            service_name="moderation-worker",
        )

        init_observability(settings)

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        assert add_request_context in processors
        resource = observability_setup._tracer_provider.resource
        assert resource.attributes["service.name"] == "moderation-worker"
        assert resource.attributes["service.version"] == SDK_VERSION

    def test_init_observability_with_tracing_disabled(self, installed_providers):
        init_observability(ClientSettings(tracing_enabled=False))

        assert isinstance(installed_providers[0], trace.NoOpTracerProvider)
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)


class TestConfigureLogging:
    """Tests for configure_logging."""

    @pytest.fixture(autouse=True)
    def reset_structlog(self):
        yield
        structlog.reset_defaults()

    def test_json_output_includes_trace_processor(self):
        """The processor chain injects trace context and renders JSON."""
        configure_logging("DEBUG", json_output=True)

        processors = structlog.get_config()["processors"]
        assert add_trace_context in processors
        assert add_request_context in processors
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_output_by_default(self):
        configure_logging()

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
