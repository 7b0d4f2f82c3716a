"""HTTP request layer: transport abstraction, error taxonomy and retry executor."""

from tuteliq.infrastructure.http.exceptions import (
    FATAL_KINDS,
    AuthenticationError,
    ConfigurationError,
    ErrorKind,
    NetworkError,
    NotFoundError,
    QuotaExceededError,
    RateLimitError,
    RequestCancelledError,
    RequestTimeoutError,
    RetriesExhaustedError,
    ServerError,
    TierAccessError,
    TuteliqError,
    ValidationError,
    classify_response,
)
from tuteliq.infrastructure.http.executor import (
    ApiResponse,
    RequestAttempt,
    RequestExecutor,
    RetryPolicy,
    UsageSnapshot,
)
from tuteliq.infrastructure.http.httpx_transport import HttpxTransport
from tuteliq.infrastructure.http.protocol import (
    Transport,
    TransportConnectionError,
    TransportError,
    TransportRequest,
    TransportResponse,
    TransportTimeoutError,
)

__all__ = [
    "FATAL_KINDS",
    "ApiResponse",
    "AuthenticationError",
    "ConfigurationError",
    "ErrorKind",
    "HttpxTransport",
    "NetworkError",
    "NotFoundError",
    "QuotaExceededError",
    "RateLimitError",
    "RequestAttempt",
    "RequestCancelledError",
    "RequestExecutor",
    "RequestTimeoutError",
    "RetriesExhaustedError",
    "RetryPolicy",
    "ServerError",
    "TierAccessError",
    "Transport",
    "TransportConnectionError",
    "TransportError",
    "TransportRequest",
    "TransportResponse",
    "TransportTimeoutError",
    "TuteliqError",
    "UsageSnapshot",
    "ValidationError",
    "classify_response",
]
