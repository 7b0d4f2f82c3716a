"""Tests for the httpx-backed transport."""

import httpx
import pytest

from tuteliq.infrastructure.http import (
    HttpxTransport,
    TransportConnectionError,
    TransportRequest,
    TransportTimeoutError,
)


def make_transport(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpxTransport(timeout_seconds=5.0, client=client), client


class TestHttpxTransportInit:
    """Tests for HttpxTransport initialization."""

    def test_default_timeout(self):
        """A default client is created with the configured timeout."""
        transport = HttpxTransport()

        assert transport._timeout == 30.0
        assert transport._owns_client is True

    def test_supplied_client_is_not_owned(self):
        """A caller-supplied client stays the caller's responsibility."""
        transport, _ = make_transport(lambda request: httpx.Response(200))

        assert transport._owns_client is False


class TestHttpxTransportSend:
    """Tests for HttpxTransport.send."""

    @pytest.mark.asyncio
    async def test_forwards_request_and_returns_response(self):
        """Method, URL, headers and body pass through unchanged."""
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["authorization"]
            seen["body"] = request.content
            return httpx.Response(
                201, headers={"X-Request-ID": "req-7"}, content=b'{"ok":true}'
            )

        transport, client = make_transport(handler)

        response = await transport.send(
            TransportRequest(
                method="POST",
                url="https://api.example.com/api/v1/safety/unsafe",
                headers={"Authorization": "Bearer key"},
                content=b'{"text":"x"}',
            )
        )

        assert seen == {
            "method": "POST",
            "url": "https://api.example.com/api/v1/safety/unsafe",
            "auth": "Bearer key",
            "body": b'{"text":"x"}',
        }
        assert response.status_code == 201
        assert response.header("x-request-id") == "req-7"
        assert response.text == '{"ok":true}'
        await client.aclose()

    @pytest.mark.asyncio
    async def test_error_status_is_returned_not_raised(self):
        """Non-2xx responses come back for the executor to classify."""
        transport, client = make_transport(lambda request: httpx.Response(503))

        response = await transport.send(TransportRequest("GET", "https://x.test/"))

        assert response.status_code == 503
        assert response.is_success is False
        await client.aclose()

    @pytest.mark.asyncio
    async def test_timeout_is_mapped(self):
        """httpx timeouts become TransportTimeoutError."""

        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        transport, client = make_transport(handler)

        with pytest.raises(TransportTimeoutError, match="5.0s"):
            await transport.send(TransportRequest("GET", "https://x.test/"))
        await client.aclose()

    @pytest.mark.asyncio
    async def test_connection_error_is_mapped(self):
        """httpx connection failures become TransportConnectionError."""

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        transport, client = make_transport(handler)

        with pytest.raises(TransportConnectionError, match="connection refused"):
            await transport.send(TransportRequest("GET", "https://x.test/"))
        await client.aclose()


class TestHttpxTransportClose:
    """Tests for HttpxTransport.close."""

    @pytest.mark.asyncio
    async def test_close_owned_client(self):
        """An owned client is closed."""
        transport = HttpxTransport()

        await transport.close()

        assert transport._client.is_closed

    @pytest.mark.asyncio
    async def test_close_leaves_supplied_client_open(self):
        """A supplied client is left open."""
        transport, client = make_transport(lambda request: httpx.Response(200))

        await transport.close()

        assert not client.is_closed
        await client.aclose()
