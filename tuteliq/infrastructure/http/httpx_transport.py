"""Transport implementation backed by httpx."""

import httpx
import structlog

from tuteliq.infrastructure.http.protocol import (
    TransportConnectionError,
    TransportRequest,
    TransportResponse,
    TransportTimeoutError,
)

logger = structlog.get_logger()


class HttpxTransport:
    """Transport using a pooled ``httpx.AsyncClient``."""

    def __init__(
        self,
        *,
        timeout_seconds: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            timeout_seconds: Request timeout in seconds.
            client: Optional preconfigured client. It is not closed by
                ``close()`` when supplied.
        """
        self._timeout = timeout_seconds
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds),
        )

    async def send(self, request: TransportRequest) -> TransportResponse:
        """Send the request and return the response unchanged.

        Raises:
            TransportTimeoutError: If the request times out.
            TransportConnectionError: On any other transport failure.
        """
        try:
            response = await self._client.request(
                request.method,
                request.url,
                headers=dict(request.headers),
                content=request.content,
            )
        except httpx.TimeoutException as e:
            logger.warning(
                "transport_timeout",
                method=request.method,
                url=request.url,
                timeout_seconds=self._timeout,
            )
            raise TransportTimeoutError(
                f"Request timed out after {self._timeout}s"
            ) from e
        except httpx.TransportError as e:
            logger.warning(
                "transport_connection_error",
                method=request.method,
                url=request.url,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise TransportConnectionError(
                str(e) or "Unable to connect to Tuteliq API"
            ) from e

        return TransportResponse(
            status_code=response.status_code,
            headers=dict(response.headers.items()),
            content=response.content,
        )

    async def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()
