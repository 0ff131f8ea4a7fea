"""Tests for junction.server.sender: Response to ASGI messages."""

from typing import Any

from junction.http.response import Response
from junction.server.sender import send_response


async def _send(response: Response, method: str = "GET") -> list[dict[str, Any]]:
    messages: list[dict[str, Any]] = []

    async def send(message: dict[str, Any]) -> None:
        messages.append(message)

    await send_response(response, send, method=method)
    return messages


class TestSendResponse:
    async def test_start_and_body(self) -> None:
        start, body = await _send(Response("hello"))

        assert start["type"] == "http.response.start"
        assert start["status"] == 200
        headers = dict(start["headers"])
        assert headers[b"content-type"] == b"text/plain; charset=utf-8"
        assert headers[b"content-length"] == b"5"
        assert body == {"type": "http.response.body", "body": b"hello"}

    async def test_custom_headers_lowercased(self) -> None:
        start, _ = await _send(Response("x").with_header("X-Request-Id", "abc"))
        assert (b"x-request-id", b"abc") in start["headers"]

    async def test_content_headers_not_duplicated(self) -> None:
        response = Response("x").with_header("Content-Length", "99").with_header(
            "Content-Type", "text/html"
        )
        start, _ = await _send(response)

        names = [name for name, _ in start["headers"]]
        assert names.count(b"content-length") == 1
        assert names.count(b"content-type") == 1
        assert dict(start["headers"])[b"content-length"] == b"1"

    async def test_head_omits_body(self) -> None:
        start, body = await _send(Response("hello"), method="HEAD")
        assert dict(start["headers"])[b"content-length"] == b"5"
        assert body["body"] == b""

    async def test_no_body_for_204(self) -> None:
        start, body = await _send(Response("ignored", status=204))
        assert dict(start["headers"])[b"content-length"] == b"0"
        assert body["body"] == b""
