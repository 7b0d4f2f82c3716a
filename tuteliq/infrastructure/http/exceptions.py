"""Error taxonomy for Tuteliq API requests."""

from enum import Enum
from typing import ClassVar

from tuteliq.infrastructure.jsonvalue import JsonValue, get_object, get_str, parse


class ErrorKind(str, Enum):
    """Classification of a failed request."""

    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    RATE_LIMIT = "rate_limit"
    QUOTA_EXCEEDED = "quota_exceeded"
    TIER_ACCESS = "tier_access"
    SERVER = "server"
    TIMEOUT = "timeout"
    NETWORK = "network"
    UNKNOWN = "unknown"


# Caller-correctable conditions; retrying cannot succeed without intervention.
FATAL_KINDS: frozenset[ErrorKind] = frozenset(
    {
        ErrorKind.AUTHENTICATION,
        ErrorKind.VALIDATION,
        ErrorKind.NOT_FOUND,
        ErrorKind.QUOTA_EXCEEDED,
        ErrorKind.TIER_ACCESS,
    }
)

DEFAULT_ERROR_MESSAGE = "Request failed"


class TuteliqError(Exception):
    """Base exception for Tuteliq client errors."""

    kind: ClassVar[ErrorKind] = ErrorKind.UNKNOWN

    def __init__(
        self,
        message: str,
        *,
        details: JsonValue = None,
        request_id: str | None = None,
    ) -> None:
        self.message = message
        self.details = details
        self.request_id = request_id
        super().__init__(message)

    @property
    def retryable(self) -> bool:
        """Whether the request executor may retry after this error."""
        return self.kind not in FATAL_KINDS


class AuthenticationError(TuteliqError):
    """Raised when the API key is invalid or missing (401)."""

    kind = ErrorKind.AUTHENTICATION


class ValidationError(TuteliqError):
    """Raised when the request body fails validation (400)."""

    kind = ErrorKind.VALIDATION


class NotFoundError(TuteliqError):
    """Raised when a resource is not found (404)."""

    kind = ErrorKind.NOT_FOUND


class QuotaExceededError(TuteliqError):
    """Raised when the monthly quota is exhausted (402)."""

    kind = ErrorKind.QUOTA_EXCEEDED


class TierAccessError(TuteliqError):
    """Raised when the endpoint is not available on the current tier (403)."""

    kind = ErrorKind.TIER_ACCESS


class RateLimitError(TuteliqError):
    """Raised when rate limited by the service (429)."""

    kind = ErrorKind.RATE_LIMIT


class ServerError(TuteliqError):
    """Raised when the server returns a 5xx status."""

    kind = ErrorKind.SERVER

    def __init__(
        self,
        message: str,
        status_code: int,
        *,
        details: JsonValue = None,
        request_id: str | None = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(message, details=details, request_id=request_id)


class RequestTimeoutError(TuteliqError):
    """Raised when a request times out."""

    kind = ErrorKind.TIMEOUT


class RequestCancelledError(RequestTimeoutError):
    """Raised when the caller cancels a request in flight or during backoff."""

    @property
    def retryable(self) -> bool:
        return False


class NetworkError(TuteliqError):
    """Raised when the service cannot be reached."""

    kind = ErrorKind.NETWORK


class RetriesExhaustedError(TuteliqError):
    """Raised when the retry loop ends without a captured error."""


class ConfigurationError(TuteliqError):
    """Raised when there's a configuration issue (e.g., missing API key)."""

    kind = ErrorKind.VALIDATION


_STATUS_ERRORS: dict[int, type[TuteliqError]] = {
    400: ValidationError,
    401: AuthenticationError,
    402: QuotaExceededError,
    403: TierAccessError,
    404: NotFoundError,
    429: RateLimitError,
}


def extract_error_detail(body_text: str | None) -> tuple[str, JsonValue]:
    """Pull the message and details out of an error response body.

    The expected shape is ``{"error": {"message": ..., "details": ...}}``.
    Anything else yields the default message and no details.

    Returns:
        A ``(message, details)`` tuple.
    """
    message = DEFAULT_ERROR_MESSAGE
    details: JsonValue = None

    data = parse(body_text)
    if not isinstance(data, dict):
        return message, details

    error = get_object(data, "error")
    if error is None:
        return message, details

    if "message" in error and error["message"] is not None:
        message = get_str(error, "message")
    details = error.get("details")
    return message, details


def classify_response(
    status_code: int,
    body_text: str | None,
    *,
    request_id: str | None = None,
) -> TuteliqError:
    """Map a non-2xx response onto the error taxonomy.

    Args:
        status_code: HTTP status of the response.
        body_text: Response body, expected to hold an ``error`` object.
        request_id: Value of the ``x-request-id`` header, if any.

    Returns:
        The error to raise. It is not raised here.
    """
    message, details = extract_error_detail(body_text)

    if status_code >= 500:
        return ServerError(
            message, status_code, details=details, request_id=request_id
        )

    error_cls = _STATUS_ERRORS.get(status_code, TuteliqError)
    return error_cls(message, details=details, request_id=request_id)
