"""
Tests for the upstream chat completion client.
"""

import json

import httpx
import pytest

from fabricator.models.openai import ChatCompletionMessage, ChatCompletionRequest
from fabricator.services.openai import (
    OpenAIService,
    RateLimitedError,
    UnauthorizedError,
    UpstreamError,
    classify_status,
)

COMPLETION = {
    "id": "chatcmpl-123",
    "object": "chat.completion",
    "created": 1700000000,
    "model": "gpt-5-nano",
    "choices": [
        {
            "index": 0,
            "message": {"role": "assistant", "content": '{"a":1}'},
            "finish_reason": "stop",
        }
    ],
    "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
}

REQUEST = ChatCompletionRequest(
    model="gpt-5-nano",
    messages=[
        ChatCompletionMessage(role="system", content="system"),
        ChatCompletionMessage(role="user", content="user"),
    ],
    temperature=0.8,
    max_tokens=400,
    response_format={"type": "json_object"},
)


def service_for(handler) -> OpenAIService:
    client = httpx.AsyncClient(
        base_url="https://api.openai.test", transport=httpx.MockTransport(handler)
    )
    return OpenAIService(api_key="sk-test", client=client)


def error_body(message: str) -> dict:
    return {"error": {"message": message, "type": "error"}}


@pytest.mark.asyncio
async def test_successful_completion():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["auth"] = request.headers["authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=COMPLETION)

    service = service_for(handler)
    completion = await service.create_chat_completion(REQUEST)
    await service.close()

    assert completion.content == '{"a":1}'
    assert seen["path"] == "/v1/chat/completions"
    assert seen["auth"] == "Bearer sk-test"
    assert seen["body"]["response_format"] == {"type": "json_object"}
    assert seen["body"]["max_tokens"] == 400


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status_code,error_type",
    [
        (429, RateLimitedError),
        (401, UnauthorizedError),
        (500, UpstreamError),
        (503, UpstreamError),
        (400, UpstreamError),
    ],
)
async def test_error_statuses_are_classified(status_code, error_type):
    service = service_for(
        lambda request: httpx.Response(status_code, json=error_body("nope"))
    )

    with pytest.raises(error_type) as exc_info:
        await service.create_chat_completion(REQUEST)

    assert type(exc_info.value) is error_type
    assert exc_info.value.status_code == status_code
    assert str(exc_info.value) == "nope"


@pytest.mark.asyncio
async def test_transport_error_is_an_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    service = service_for(handler)

    with pytest.raises(UpstreamError) as exc_info:
        await service.create_chat_completion(REQUEST)

    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_timeout_is_an_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    service = service_for(handler)

    with pytest.raises(UpstreamError, match="timed out"):
        await service.create_chat_completion(REQUEST)


@pytest.mark.asyncio
async def test_unexpected_payload_is_an_upstream_error():
    service = service_for(lambda request: httpx.Response(200, json={"hello": "world"}))

    with pytest.raises(UpstreamError, match="Unexpected chat completion payload"):
        await service.create_chat_completion(REQUEST)


@pytest.mark.asyncio
async def test_missing_choices_means_no_content():
    payload = dict(COMPLETION, choices=[])
    service = service_for(lambda request: httpx.Response(200, json=payload))

    completion = await service.create_chat_completion(REQUEST)

    assert completion.content is None


def test_classify_status():
    assert isinstance(classify_status(429, "x"), RateLimitedError)
    assert isinstance(classify_status(401, "x"), UnauthorizedError)
    assert type(classify_status(502, "x")) is UpstreamError
