"""
Unit tests for the OpenAI relay provider.

The SDK runs for real against an httpx mock transport.
"""

import json
import httpx
import pytest
from openai import AsyncOpenAI

from common.core.exceptions import DownstreamProviderError
from common.providers.chat_completion.openai_provider import OpenAIChatCompletionProvider

COMPLETION = {
    "id": "chatcmpl-1",
    "object": "chat.completion",
    "created": 1_700_000_000,
    "model": "gpt-4o-mini",
    "choices": [
        {
            "index": 0,
            "message": {"role": "assistant", "content": "You spent $42."},
            "finish_reason": "stop",
        }
    ],
}


def _provider(handler) -> OpenAIChatCompletionProvider:
    client = AsyncOpenAI(
        api_key="sk-test",
        max_retries=0,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
    return OpenAIChatCompletionProvider(client=client, model_name="gpt-4o-mini", max_tokens=2000)


async def _read(relay) -> bytes:
    chunks = [chunk async for chunk in relay.body]
    await relay.aclose()
    return b"".join(chunks)


class TestOpenAIChatCompletionProvider:
    async def test_relays_body_verbatim(self):
        raw = json.dumps(COMPLETION).encode()
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, content=raw, headers={"content-type": "application/json"})

        relay = await _provider(handler).open_completion(
            [{"role": "user", "content": "How much?"}]
        )

        assert relay.status_code == 200
        assert relay.content_type == "application/json"
        assert await _read(relay) == raw
        assert seen["body"]["model"] == "gpt-4o-mini"
        assert seen["body"]["temperature"] == 0
        assert seen["body"]["max_tokens"] == 2000
        assert "tools" not in seen["body"]

    async def test_streams_sse_chunks(self):
        stream = (
            b'data: {"choices":[{"delta":{"content":"You"}}]}\n\n'
            b'data: {"choices":[{"delta":{"content":" spent"}}]}\n\n'
            b"data: [DONE]\n\n"
        )

        def handler(request: httpx.Request) -> httpx.Response:
            assert json.loads(request.content)["stream"] is True
            return httpx.Response(
                200, content=stream, headers={"content-type": "text/event-stream"}
            )

        relay = await _provider(handler).open_completion(
            [{"role": "user", "content": "How much?"}], stream=True
        )

        assert relay.content_type.startswith("text/event-stream")
        assert await _read(relay) == stream

    async def test_tools_forwarded(self):
        tools = [{"type": "function", "function": {"name": "ask_database", "parameters": {}}}]
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=COMPLETION)

        relay = await _provider(handler).open_completion(
            [{"role": "user", "content": "How much?"}], tools=tools
        )
        await _read(relay)

        assert seen["body"]["tools"] == tools

    async def test_upstream_status_propagates(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                429, json={"error": {"message": "Rate limit reached", "type": "requests"}}
            )

        with pytest.raises(DownstreamProviderError) as exc_info:
            await _provider(handler).open_completion([{"role": "user", "content": "Hi"}])

        assert exc_info.value.status_code == 429
        assert exc_info.value.context["provider"] == "openai"

    async def test_connection_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(DownstreamProviderError) as exc_info:
            await _provider(handler).open_completion([{"role": "user", "content": "Hi"}])

        assert exc_info.value.status_code == 500
