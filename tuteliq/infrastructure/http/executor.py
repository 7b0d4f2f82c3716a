"""Resilient request executor for the Tuteliq API."""

import asyncio
import inspect
import re
import threading
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, TypeVar

import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from tuteliq.infrastructure.http.exceptions import (
    ConfigurationError,
    NetworkError,
    RequestCancelledError,
    RequestTimeoutError,
    RetriesExhaustedError,
    TuteliqError,
    classify_response,
)
from tuteliq.infrastructure.http.protocol import (
    Transport,
    TransportConnectionError,
    TransportRequest,
    TransportResponse,
    TransportTimeoutError,
)
from tuteliq.infrastructure.jsonvalue import JsonValue, parse, serialize
from tuteliq.infrastructure.observability import REQUEST_SPAN_NAME, get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)

T = TypeVar("T")

REQUEST_ID_HEADER = "x-request-id"
MONTHLY_LIMIT_HEADER = "x-monthly-limit"
MONTHLY_USED_HEADER = "x-monthly-used"
MONTHLY_REMAINING_HEADER = "x-monthly-remaining"

_HEADER_INT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class RetryPolicy:
    """Attempt count and exponential backoff timing.

    Attributes:
        max_attempts: Total attempts per call, including the first.
        base_delay: Delay in seconds before the second attempt. Each later
            delay doubles.
    """

    MULTIPLIER: ClassVar[int] = 2

    max_attempts: int = 3
    base_delay: float = 1.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ConfigurationError("max_attempts must be at least 1")
        if self.base_delay <= 0:
            raise ConfigurationError("base_delay must be greater than 0")

    def delay_for(self, attempt_index: int) -> float:
        """Backoff after the zero-based ``attempt_index`` fails."""
        return float(self.base_delay * self.MULTIPLIER**attempt_index)


@dataclass(frozen=True)
class UsageSnapshot:
    """Monthly quota counters reported by the service."""

    limit: int
    used: int
    remaining: int

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "UsageSnapshot | None":
        """Build a snapshot if all three usage headers hold integers."""
        values = [
            _parse_header_int(headers.get(name))
            for name in (
                MONTHLY_LIMIT_HEADER,
                MONTHLY_USED_HEADER,
                MONTHLY_REMAINING_HEADER,
            )
        ]
        limit, used, remaining = values
        if limit is None or used is None or remaining is None:
            return None
        return cls(limit=limit, used=used, remaining=remaining)


@dataclass(frozen=True)
class RequestAttempt:
    """One try of a request within the retry loop."""

    method: str
    path: str
    body: JsonValue
    index: int


@dataclass(frozen=True)
class ApiResponse:
    """Result of one executed call.

    Attributes:
        data: Parsed response body (None if it was empty or malformed).
        usage: Usage snapshot carried by the final response, if any.
        request_id: Request id of the final response, if any.
    """

    data: JsonValue
    usage: UsageSnapshot | None = None
    request_id: str | None = None


def _parse_header_int(value: str | None) -> int | None:
    if value is None:
        return None
    text = value.strip()
    if not _HEADER_INT_RE.fullmatch(text):
        return None
    return int(text)


def _is_retryable(error: BaseException) -> bool:
    return isinstance(error, TuteliqError) and error.retryable


class RequestExecutor:
    """Executes API calls with retries, error classification and usage tracking.

    Includes resilience patterns:
    - Retries with exponential backoff for transient failures
    - Immediate failure for caller-correctable errors (auth, validation, ...)
    - Cancellation of both the round trip and the backoff sleep
    """

    def __init__(
        self,
        transport: Transport,
        *,
        api_key: str,
        base_url: str,
        retry_policy: RetryPolicy | None = None,
        user_agent: str | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """Initialize the executor.

        Args:
            transport: Transport that performs the HTTP exchange.
            api_key: Bearer token sent with every request.
            base_url: Service root; request paths are appended to it.
            retry_policy: Attempt count and backoff timing.
            user_agent: Optional User-Agent header value.
            sleep: Coroutine used for backoff delays.
        """
        self._transport = transport
        self._base_url = base_url.rstrip("/")
        self._policy = retry_policy or RetryPolicy()
        self._sleep = sleep

        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if user_agent:
            self._headers["User-Agent"] = user_agent

        self._lock = threading.Lock()
        self._usage: UsageSnapshot | None = None
        self._last_request_id: str | None = None

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._policy

    @property
    def usage(self) -> UsageSnapshot | None:
        """Most recent usage snapshot seen by any call through this executor."""
        with self._lock:
            return self._usage

    @property
    def last_request_id(self) -> str | None:
        """Request id of the most recent response that carried one."""
        with self._lock:
            return self._last_request_id

    async def execute(
        self,
        method: str,
        path: str,
        body: JsonValue = None,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> ApiResponse:
        """Execute a call, retrying transient failures.

        Args:
            method: HTTP method.
            path: Path relative to the base URL, including any query string.
            body: Optional JSON body.
            cancel_event: Optional event; setting it cancels the call.

        Returns:
            The parsed response with its usage metadata.

        Raises:
            TuteliqError: The classified error. Fatal kinds are raised on
                first occurrence; retryable kinds once attempts run out.
            RequestCancelledError: If ``cancel_event`` is set.
        """
        method = method.upper()
        content = serialize(body).encode("utf-8") if body is not None else None
        request = TransportRequest(
            method=method,
            url=f"{self._base_url}{path}",
            headers=dict(self._headers),
            content=content,
        )

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._policy.max_attempts),
            wait=wait_exponential(
                multiplier=self._policy.base_delay,
                exp_base=RetryPolicy.MULTIPLIER,
            ),
            retry=retry_if_exception(_is_retryable),
            sleep=self._backoff_sleep(cancel_event),
            before_sleep=self._log_retry(method, path),
            reraise=True,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    return await self._perform(
                        request,
                        RequestAttempt(
                            method=method,
                            path=path,
                            body=body,
                            index=attempt.retry_state.attempt_number - 1,
                        ),
                        cancel_event,
                    )
        except TuteliqError as e:
            logger.warning(
                "api_request_failed",
                method=method,
                path=path,
                error_kind=e.kind.value,
                error=e.message,
                request_id=e.request_id,
            )
            raise

        raise RetriesExhaustedError("Request failed after retries")

    async def _perform(
        self,
        request: TransportRequest,
        attempt: RequestAttempt,
        cancel_event: asyncio.Event | None,
    ) -> ApiResponse:
        """Execute one attempt and classify its outcome."""
        with tracer.start_as_current_span(REQUEST_SPAN_NAME) as span:
            span.set_attribute("http.method", attempt.method)
            span.set_attribute("tuteliq.path", attempt.path)
            span.set_attribute("tuteliq.attempt", attempt.index)

            logger.debug(
                "api_request_start",
                method=attempt.method,
                path=attempt.path,
                attempt=attempt.index,
            )

            try:
                response = await self._run_cancellable(
                    self._transport.send(request), cancel_event
                )
            except TransportTimeoutError as e:
                raise RequestTimeoutError(str(e) or "Request timed out") from e
            except TransportConnectionError as e:
                raise NetworkError(str(e) or "Unable to connect to Tuteliq API") from e

            span.set_attribute("http.status_code", response.status_code)
            request_id = response.header(REQUEST_ID_HEADER)
            if request_id is not None:
                span.set_attribute("tuteliq.request_id", request_id)
            usage = self._record_metadata(response, request_id)

            if not response.is_success:
                error = classify_response(
                    response.status_code, response.text, request_id=request_id
                )
                span.set_attribute("tuteliq.error_kind", error.kind.value)
                raise error

            logger.debug(
                "api_request_success",
                method=attempt.method,
                path=attempt.path,
                status_code=response.status_code,
                request_id=request_id,
            )
            return ApiResponse(
                data=parse(response.text), usage=usage, request_id=request_id
            )

    def _record_metadata(
        self, response: TransportResponse, request_id: str | None
    ) -> UsageSnapshot | None:
        """Update the shared usage snapshot and request id from a response."""
        usage = UsageSnapshot.from_headers(response.headers)

        with self._lock:
            if usage is not None:
                self._usage = usage
            if request_id is not None:
                self._last_request_id = request_id

        if usage is not None:
            logger.debug(
                "usage_updated",
                limit=usage.limit,
                used=usage.used,
                remaining=usage.remaining,
            )
        return usage

    async def _run_cancellable(
        self,
        operation: Awaitable[T],
        cancel_event: asyncio.Event | None,
    ) -> T:
        """Await ``operation`` unless ``cancel_event`` fires first."""
        if cancel_event is None:
            return await operation
        if cancel_event.is_set():
            if inspect.iscoroutine(operation):
                operation.close()
            raise RequestCancelledError("Request cancelled")

        task = asyncio.ensure_future(operation)
        waiter = asyncio.ensure_future(cancel_event.wait())
        try:
            done, _ = await asyncio.wait(
                {task, waiter}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            for pending in (task, waiter):
                if not pending.done():
                    pending.cancel()

        if task in done:
            return task.result()
        raise RequestCancelledError("Request cancelled")

    def _backoff_sleep(
        self, cancel_event: asyncio.Event | None
    ) -> Callable[[float], Awaitable[None]]:
        async def sleep(seconds: float) -> None:
            await self._run_cancellable(self._sleep(seconds), cancel_event)

        return sleep

    def _log_retry(self, method: str, path: str) -> Callable[[RetryCallState], None]:
        def log(retry_state: RetryCallState) -> None:
            error = retry_state.outcome.exception() if retry_state.outcome else None
            logger.info(
                "api_request_retry",
                method=method,
                path=path,
                attempt=retry_state.attempt_number,
                delay_seconds=(
                    retry_state.next_action.sleep if retry_state.next_action else None
                ),
                error_kind=(
                    error.kind.value if isinstance(error, TuteliqError) else None
                ),
                error=str(error) if error else None,
            )

        return log
