"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Gitter client, a product of Garudex Labs

Tests for SDK Transport Adapters.
"""

import json

import httpx
import pytest

from gitter.exceptions import TransportError
from gitter.sdk.adapters.base import SDKRequest, SDKResponse
from gitter.sdk.adapters.http import HttpAdapter
from gitter.sdk.adapters.mock import MockAdapter


class TestMockAdapter:
    @pytest.mark.asyncio
    async def test_send_returns_matched_response(self):
        expected = SDKResponse(status_code=200, text='{"ok": true}', elapsed_ms=0.5)
        adapter = MockAdapter(responses={("POST", "/v1/rooms"): expected})

        req = SDKRequest(method="POST", url="https://api.gitter.im/v1/rooms", body={"uri": "a/b"})
        result = await adapter.send(req)
        assert result is expected

    @pytest.mark.asyncio
    async def test_match_includes_query_string(self):
        expected = SDKResponse(status_code=200, text="[]")
        adapter = MockAdapter(responses={("GET", "/v1/rooms?q=x"): expected})

        result = await adapter.send(SDKRequest(method="GET", url="https://h/v1/rooms?q=x"))
        assert result is expected

    @pytest.mark.asyncio
    async def test_send_returns_404_for_unmocked(self):
        adapter = MockAdapter()
        result = await adapter.send(SDKRequest(method="GET", url="https://h/unknown"))
        assert result.status_code == 404
        assert json.loads(result.text) == {"error": "not mocked"}

    @pytest.mark.asyncio
    async def test_scripted_exception_is_raised(self):
        adapter = MockAdapter(responses={("GET", "/x"): TransportError("refused")})
        with pytest.raises(TransportError, match="refused"):
            await adapter.send(SDKRequest(method="GET", url="https://h/x"))

    @pytest.mark.asyncio
    async def test_tracks_sent_requests(self):
        adapter = MockAdapter()
        await adapter.send(SDKRequest(method="DELETE", url="https://h/v1/rooms/1", headers={"X-Test": "1"}))
        assert len(adapter.sent_requests) == 1
        assert adapter.sent_requests[0].url == "https://h/v1/rooms/1"

    @pytest.mark.asyncio
    async def test_stream_yields_scripted_chunks(self):
        adapter = MockAdapter(streams={"/v1/s": ["a", "b"]})
        async with adapter.stream(SDKRequest(method="GET", url="https://h/v1/s")) as response:
            assert response.status_code == 200
            assert await response.read_text() == "ab"

    @pytest.mark.asyncio
    async def test_stream_script_raises_transport_error(self):
        adapter = MockAdapter(streams={"/v1/s": ["a", ConnectionResetError("reset")]})
        received = []
        with pytest.raises(TransportError, match="reset"):
            async with adapter.stream(SDKRequest(method="GET", url="https://h/v1/s")) as response:
                async for chunk in response.chunks:
                    received.append(chunk)
        assert received == ["a"]

    def test_close_clears_state(self):
        adapter = MockAdapter(responses={("GET", "/x"): SDKResponse(status_code=200)})
        adapter.close()
        assert adapter.sent_requests == []
        assert adapter.is_connected is True  # mock is always "connected"


class TestHttpAdapter:
    def test_not_connected_until_first_use(self):
        adapter = HttpAdapter()
        assert adapter.is_connected is False

    @pytest.mark.asyncio
    async def test_send_writes_json_body_and_headers(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["headers"] = dict(request.headers)
            seen["body"] = request.content
            return httpx.Response(201, headers={"x-ratelimit-remaining": "9"}, text='{"id": "m1"}')

        adapter = HttpAdapter(transport=httpx.MockTransport(handler))
        response = await adapter.send(SDKRequest(
            method="POST",
            url="https://api.gitter.im/v1/rooms/r1/chatMessages",
            headers={"Content-Type": "application/json"},
            body={"text": "hi"},
        ))

        assert adapter.is_connected is True
        assert seen["method"] == "POST"
        assert seen["url"] == "https://api.gitter.im/v1/rooms/r1/chatMessages"
        assert json.loads(seen["body"]) == {"text": "hi"}
        assert response.status_code == 201
        assert response.text == '{"id": "m1"}'
        assert response.headers["x-ratelimit-remaining"] == "9"
        await adapter.aclose()

    @pytest.mark.asyncio
    async def test_send_without_body_sends_no_payload(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = request.content
            seen["content_type"] = request.headers.get("content-type")
            return httpx.Response(200, text="[]")

        adapter = HttpAdapter(transport=httpx.MockTransport(handler))
        await adapter.send(SDKRequest(method="GET", url="https://h/v1/rooms"))
        assert seen["body"] == b""
        assert seen["content_type"] is None
        await adapter.aclose()

    @pytest.mark.asyncio
    async def test_connection_failure_becomes_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        adapter = HttpAdapter(transport=httpx.MockTransport(handler))
        with pytest.raises(TransportError, match="connection refused") as exc_info:
            await adapter.send(SDKRequest(method="GET", url="https://h/v1/rooms"))
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        await adapter.aclose()

    @pytest.mark.asyncio
    async def test_stream_preserves_chunk_boundaries(self):
        async def body():
            yield b'{"a":'
            yield b" \n"
            yield b"1}"

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=body())

        adapter = HttpAdapter(transport=httpx.MockTransport(handler))
        async with adapter.stream(SDKRequest(method="GET", url="https://stream/v1/s")) as response:
            chunks = [chunk async for chunk in response.chunks]
        assert chunks == ['{"a":', " \n", "1}"]
        await adapter.aclose()

    @pytest.mark.asyncio
    async def test_undecodable_body_becomes_transport_error(self):
        adapter = HttpAdapter(transport=_bad_gzip_transport())
        with pytest.raises(TransportError) as exc_info:
            await adapter.send(SDKRequest(method="GET", url="https://h/v1/rooms"))
        assert isinstance(exc_info.value.__cause__, httpx.DecodingError)
        await adapter.aclose()

    @pytest.mark.asyncio
    async def test_undecodable_stream_becomes_transport_error(self):
        adapter = HttpAdapter(transport=_bad_gzip_transport())
        with pytest.raises(TransportError) as exc_info:
            async with adapter.stream(SDKRequest(method="GET", url="https://stream/v1/s")) as response:
                async for _ in response.chunks:
                    pass
        assert isinstance(exc_info.value.__cause__, httpx.DecodingError)
        await adapter.aclose()

    @pytest.mark.asyncio
    async def test_aclose(self):
        adapter = HttpAdapter(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        await adapter.send(SDKRequest(method="GET", url="https://h/"))
        await adapter.aclose()
        assert adapter.is_connected is False

    def test_close(self):
        adapter = HttpAdapter()
        adapter.close()
        assert adapter.is_connected is False


def _bad_gzip_transport() -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            headers={"Content-Encoding": "gzip"},
            content=b"this is not gzip",
        )

    return httpx.MockTransport(handler)
