"""Protocol definition for HTTP transports."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol


class TransportError(Exception):
    """Base exception for transport-level failures."""


class TransportTimeoutError(TransportError):
    """Raised when the round trip exceeds the transport timeout."""


class TransportConnectionError(TransportError):
    """Raised when the connection cannot be established or is dropped."""


@dataclass(frozen=True)
class TransportRequest:
    """One outgoing HTTP request."""

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    content: bytes | None = None


@dataclass(frozen=True)
class TransportResponse:
    """One HTTP response as seen by the client.

    Attributes:
        status_code: HTTP status code.
        headers: Response headers. Keys are stored lower-cased.
        content: Raw response body.
    """

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    content: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "headers", {k.lower(): v for k, v in self.headers.items()}
        )

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        return self.headers.get(name.lower())

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(Protocol):
    """Protocol for transport implementations.

    This allows swapping the HTTP stack (httpx, a host runtime's own client,
    a test double) without changing the request executor.
    """

    async def send(self, request: TransportRequest) -> TransportResponse:
        """Perform one HTTP exchange.

        Args:
            request: The request to send.

        Returns:
            The response, whatever its status code.

        Raises:
            TransportTimeoutError: If the request times out.
            TransportConnectionError: If the connection fails.
        """
        ...

    async def close(self) -> None:
        """Release any pooled connections."""
        ...
