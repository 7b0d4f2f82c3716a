"""Tests for the resilient request executor."""

import asyncio

import pytest
from structlog.testing import capture_logs

from tuteliq.infrastructure.http import (
    AuthenticationError,
    ConfigurationError,
    NetworkError,
    RateLimitError,
    RequestCancelledError,
    RequestExecutor,
    RequestTimeoutError,
    RetryPolicy,
    ServerError,
    TransportConnectionError,
    TransportResponse,
    TransportTimeoutError,
    UsageSnapshot,
    ValidationError,
)

USAGE_HEADERS = {
    "X-Monthly-Limit": "1000",
    "X-Monthly-Used": "10",
    "X-Monthly-Remaining": "990",
}


class FakeTransport:
    """Transport returning scripted responses or raising scripted errors."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.requests = []
        self.closed = False

    async def send(self, request):
        self.requests.append(request)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    async def close(self):
        self.closed = True


class RecordingSleep:
    """Sleep replacement that records requested delays without waiting."""

    def __init__(self):
        self.delays = []

    async def __call__(self, seconds):
        self.delays.append(seconds)


def ok(body='{"ok": true}', headers=None):
    return TransportResponse(200, headers or {}, body.encode())


def error(status, message="boom", headers=None):
    body = f'{{"error": {{"message": "{message}"}}}}'
    return TransportResponse(status, headers or {}, body.encode())


def make_executor(transport, *, max_attempts=3, base_delay=1.0, sleep=None):
    return RequestExecutor(
        transport,
        api_key="test-api-key-123",
        base_url="https://api.example.com/",
        retry_policy=RetryPolicy(max_attempts=max_attempts, base_delay=base_delay),
        user_agent="tuteliq-python/test",
        sleep=sleep or RecordingSleep(),
    )


class TestRetryPolicy:
    """Tests for RetryPolicy validation and timing."""

    def test_defaults(self):
        """Defaults are three attempts starting at one second."""
        policy = RetryPolicy()

        assert policy.max_attempts == 3
        assert policy.base_delay == 1.0

    def test_delay_doubles(self):
        """Each delay is twice the previous one."""
        policy = RetryPolicy(base_delay=0.5)

        assert [policy.delay_for(i) for i in range(4)] == [0.5, 1.0, 2.0, 4.0]

    @pytest.mark.parametrize(
        ("max_attempts", "base_delay"), [(0, 1.0), (-1, 1.0), (3, 0.0), (3, -2.0)]
    )
    def test_invalid_policy_raises(self, max_attempts, base_delay):
        """Out-of-range values are rejected at construction."""
        with pytest.raises(ConfigurationError):
            RetryPolicy(max_attempts=max_attempts, base_delay=base_delay)


class TestUsageSnapshot:
    """Tests for reading usage headers."""

    def test_reads_all_three_headers(self):
        """All three integer headers produce a snapshot."""
        response = ok(headers=USAGE_HEADERS)

        assert UsageSnapshot.from_headers(response.headers) == UsageSnapshot(
            limit=1000, used=10, remaining=990
        )

    def test_missing_header_gives_none(self):
        """Partial usage headers are ignored."""
        headers = {"x-monthly-limit": "1000", "x-monthly-used": "10"}

        assert UsageSnapshot.from_headers(headers) is None

    def test_non_integer_header_gives_none(self):
        """A non-integer value invalidates the snapshot."""
        headers = {
            "x-monthly-limit": "1000",
            "x-monthly-used": "ten",
            "x-monthly-remaining": "990",
        }

        assert UsageSnapshot.from_headers(headers) is None


class TestExecuteSuccess:
    """Tests for successful calls."""

    @pytest.mark.asyncio
    async def test_sends_request_and_parses_body(self):
        """The body is serialized and the response parsed."""
        transport = FakeTransport(ok('{"is_bullying": false}'))
        executor = make_executor(transport)

        response = await executor.execute(
            "post", "/api/v1/safety/bullying", {"text": "hi"}
        )

        assert response.data == {"is_bullying": False}
        request = transport.requests[0]
        assert request.method == "POST"
        assert request.url == "https://api.example.com/api/v1/safety/bullying"
        assert request.content == b'{"text":"hi"}'
        assert request.headers["Authorization"] == "Bearer test-api-key-123"
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers["User-Agent"] == "tuteliq-python/test"

    @pytest.mark.asyncio
    async def test_no_body_sends_no_content(self):
        """Calls without a body send no content."""
        transport = FakeTransport(ok())
        executor = make_executor(transport)

        await executor.execute("GET", "/api/v1/usage/monthly")

        assert transport.requests[0].content is None

    @pytest.mark.asyncio
    async def test_malformed_body_gives_none_data(self):
        """An unparsable success body yields None instead of raising."""
        executor = make_executor(FakeTransport(ok("{not json")))

        response = await executor.execute("GET", "/x")

        assert response.data is None

    @pytest.mark.asyncio
    async def test_records_usage_and_request_id(self):
        """Usage headers and the request id are exposed per call and shared."""
        headers = {**USAGE_HEADERS, "X-Request-ID": "req-123"}
        executor = make_executor(FakeTransport(ok(headers=headers)))

        response = await executor.execute("GET", "/x")

        expected = UsageSnapshot(limit=1000, used=10, remaining=990)
        assert response.usage == expected
        assert response.request_id == "req-123"
        assert executor.usage == expected
        assert executor.last_request_id == "req-123"

    @pytest.mark.asyncio
    async def test_response_usage_is_per_call(self):
        """A later call without headers keeps the shared snapshot but reports none."""
        executor = make_executor(
            FakeTransport(ok(headers={**USAGE_HEADERS, "x-request-id": "a"}), ok())
        )

        await executor.execute("GET", "/first")
        second = await executor.execute("GET", "/second")

        assert second.usage is None
        assert second.request_id is None
        assert executor.usage == UsageSnapshot(limit=1000, used=10, remaining=990)
        assert executor.last_request_id == "a"


class TestExecuteRetries:
    """Tests for retry and backoff behaviour."""

    @pytest.mark.asyncio
    async def test_server_errors_exhaust_attempts(self):
        """Three 500s raise ServerError after backing off 1s then 2s."""
        transport = FakeTransport(error(500), error(500), error(500, "still down"))
        sleep = RecordingSleep()
        executor = make_executor(transport, sleep=sleep)

        with pytest.raises(ServerError) as exc_info:
            await executor.execute("POST", "/x", {})

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "still down"
        assert len(transport.requests) == 3
        assert sleep.delays == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_recovers_after_transient_error(self):
        """A retry that succeeds returns its response."""
        transport = FakeTransport(error(503), ok('{"n": 1}'))
        sleep = RecordingSleep()
        executor = make_executor(transport, sleep=sleep)

        response = await executor.execute("GET", "/x")

        assert response.data == {"n": 1}
        assert sleep.delays == [1.0]

    @pytest.mark.asyncio
    async def test_backoff_scales_with_base_delay(self):
        """Delays start at the configured base."""
        transport = FakeTransport(error(500), error(500), error(500), error(500))
        sleep = RecordingSleep()
        executor = make_executor(
            transport, max_attempts=4, base_delay=0.25, sleep=sleep
        )

        with pytest.raises(ServerError):
            await executor.execute("GET", "/x")

        assert sleep.delays == [0.25, 0.5, 1.0]

    @pytest.mark.asyncio
    async def test_single_attempt_never_sleeps(self):
        """max_attempts=1 fails on the first retryable error."""
        transport = FakeTransport(error(500))
        sleep = RecordingSleep()
        executor = make_executor(transport, max_attempts=1, sleep=sleep)

        with pytest.raises(ServerError):
            await executor.execute("GET", "/x")

        assert sleep.delays == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 401, 402, 403, 404])
    async def test_fatal_errors_are_not_retried(self, status):
        """Caller-correctable errors fail on the first attempt."""
        transport = FakeTransport(error(status), ok())
        sleep = RecordingSleep()
        executor = make_executor(transport, sleep=sleep)

        with pytest.raises(Exception) as exc_info:
            await executor.execute("GET", "/x")

        assert not exc_info.value.retryable
        assert len(transport.requests) == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_unauthorized_raises_authentication_error(self):
        """401 maps to AuthenticationError with the server's message."""
        executor = make_executor(FakeTransport(error(401, "Invalid API key")))

        with pytest.raises(AuthenticationError, match="Invalid API key"):
            await executor.execute("GET", "/x")

    @pytest.mark.asyncio
    async def test_validation_error_keeps_details(self):
        """400 details are carried on the error."""
        body = b'{"error": {"message": "bad", "details": {"field": "text"}}}'
        executor = make_executor(FakeTransport(TransportResponse(400, {}, body)))

        with pytest.raises(ValidationError) as exc_info:
            await executor.execute("POST", "/x", {})

        assert exc_info.value.details == {"field": "text"}

    @pytest.mark.asyncio
    async def test_rate_limit_updates_usage_before_failing(self):
        """429 responses still update the usage snapshot and are retried."""
        headers = {**USAGE_HEADERS, "X-Monthly-Remaining": "0", "X-Request-Id": "r-9"}
        transport = FakeTransport(*(error(429, headers=headers) for _ in range(3)))
        sleep = RecordingSleep()
        executor = make_executor(transport, sleep=sleep)

        with pytest.raises(RateLimitError) as exc_info:
            await executor.execute("POST", "/x", {})

        assert exc_info.value.request_id == "r-9"
        assert executor.usage == UsageSnapshot(limit=1000, used=10, remaining=0)
        assert sleep.delays == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_timeouts_map_to_timeout_error(self):
        """Transport timeouts are retried then raised as RequestTimeoutError."""
        transport = FakeTransport(*(TransportTimeoutError("slow") for _ in range(3)))
        executor = make_executor(transport)

        with pytest.raises(RequestTimeoutError, match="slow"):
            await executor.execute("GET", "/x")

        assert len(transport.requests) == 3

    @pytest.mark.asyncio
    async def test_connection_failures_map_to_network_error(self):
        """Connection failures are retried then raised as NetworkError."""
        transport = FakeTransport(
            TransportConnectionError("refused"),
            TransportConnectionError("refused"),
            TransportConnectionError("refused"),
        )
        executor = make_executor(transport)

        with pytest.raises(NetworkError):
            await executor.execute("GET", "/x")

    @pytest.mark.asyncio
    async def test_unexpected_transport_exception_propagates(self):
        """Exceptions outside the transport contract are not retried."""
        transport = FakeTransport(RuntimeError("bug"), ok())
        executor = make_executor(transport)

        with pytest.raises(RuntimeError):
            await executor.execute("GET", "/x")

        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_retry_and_failure_are_logged(self):
        """Retries and the final failure emit structured events."""
        transport = FakeTransport(error(500), error(500))
        executor = make_executor(transport, max_attempts=2)

        with capture_logs() as logs, pytest.raises(ServerError):
            await executor.execute("GET", "/x")

        events = [entry["event"] for entry in logs]
        assert "api_request_retry" in events
        assert events[-1] == "api_request_failed"
        failed = logs[-1]
        assert failed["error_kind"] == "server"
        assert failed["path"] == "/x"


class TestCancellation:
    """Tests for cancelling through an event."""

    @pytest.mark.asyncio
    async def test_pre_set_event_cancels_without_sending(self):
        """An already-set event fails the call before any request."""
        transport = FakeTransport(ok())
        executor = make_executor(transport)
        cancel_event = asyncio.Event()
        cancel_event.set()

        with pytest.raises(RequestCancelledError):
            await executor.execute("GET", "/x", cancel_event=cancel_event)

        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_cancel_during_backoff_stops_retries(self):
        """Setting the event while backing off ends the call."""
        transport = FakeTransport(error(500), ok())
        cancel_event = asyncio.Event()

        async def sleep(seconds):
            cancel_event.set()
            await asyncio.Event().wait()

        executor = make_executor(transport, sleep=sleep)

        with pytest.raises(RequestCancelledError):
            await executor.execute("GET", "/x", cancel_event=cancel_event)

        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_cancel_during_round_trip(self):
        """Setting the event while the request is in flight ends the call."""
        cancel_event = asyncio.Event()

        class HangingTransport(FakeTransport):
            async def send(self, request):
                self.requests.append(request)
                cancel_event.set()
                await asyncio.Event().wait()

        transport = HangingTransport()
        executor = make_executor(transport)

        with pytest.raises(RequestCancelledError):
            await executor.execute("GET", "/x", cancel_event=cancel_event)

        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_unset_event_does_not_interfere(self):
        """A call with an unset event completes normally."""
        executor = make_executor(FakeTransport(ok('{"a": 1}')))

        response = await executor.execute("GET", "/x", cancel_event=asyncio.Event())

        assert response.data == {"a": 1}
