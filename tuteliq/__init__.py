"""Tuteliq client: child-safety content analysis over a resilient HTTP layer."""

from tuteliq.config import SDK_VERSION, ClientSettings, get_settings
from tuteliq.infrastructure.http import (
    ApiResponse,
    AuthenticationError,
    ConfigurationError,
    ErrorKind,
    NetworkError,
    NotFoundError,
    QuotaExceededError,
    RateLimitError,
    RequestCancelledError,
    RequestTimeoutError,
    RetryPolicy,
    ServerError,
    TierAccessError,
    TuteliqError,
    UsageSnapshot,
    ValidationError,
)
from tuteliq.infrastructure.observability import init_observability
from tuteliq.modules.safety import TuteliqClient

__version__ = SDK_VERSION

__all__ = [
    "ApiResponse",
    "AuthenticationError",
    "ClientSettings",
    "ConfigurationError",
    "ErrorKind",
    "NetworkError",
    "NotFoundError",
    "QuotaExceededError",
    "RateLimitError",
    "RequestCancelledError",
    "RequestTimeoutError",
    "RetryPolicy",
    "ServerError",
    "TierAccessError",
    "TuteliqClient",
    "TuteliqError",
    "UsageSnapshot",
    "ValidationError",
    "__version__",
    "get_settings",
    "init_observability",
]
