import asyncio
import json

import httpx
import pytest

from domain.agemini import GeminiClient
from domain.errors import (
    ApiKeyRequiredError,
    EmptyResponseError,
    ErrorMessages,
    HttpError,
    NetworkError,
    RecipeServiceError,
    RequestTimeoutError,
)


def completion(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def gemini(handler, **kwargs) -> GeminiClient:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GeminiClient(client=client, **kwargs)


@pytest.mark.asyncio
async def test_fetch_completion() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=completion("{}"))

    got = await gemini(handler, model="test-model").fetch_completion("key", "Hello")

    assert got == "{}"
    assert len(requests) == 1
    request = requests[0]
    assert request.method == "POST"
    assert request.url == (
        "https://generativelanguage.googleapis.com/v1beta/models/"
        "test-model:generateContent"
    )
    assert request.headers["x-goog-api-key"] == "key"
    assert json.loads(request.content) == {"contents": [{"parts": [{"text": "Hello"}]}]}


@pytest.mark.asyncio
async def test_fetch_completion_no_api_key() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=completion("{}"))

    with pytest.raises(ApiKeyRequiredError, match="API Key is required"):
        await gemini(handler).fetch_completion("", "Hello")
    assert requests == []


@pytest.mark.asyncio
async def test_fetch_completion_timeout() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(1)
        return httpx.Response(200, json=completion("{}"))

    with pytest.raises(RequestTimeoutError):
        await gemini(handler, timeout=0.01).fetch_completion("key", "Hello")


@pytest.mark.asyncio
async def test_fetch_completion_transport_timeout() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(RequestTimeoutError):
        await gemini(handler).fetch_completion("key", "Hello")


@pytest.mark.asyncio
async def test_fetch_completion_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("no route", request=request)

    with pytest.raises(NetworkError) as e:
        await gemini(handler).fetch_completion("key", "Hello")
    assert not isinstance(e.value, RequestTimeoutError)


@pytest.mark.asyncio
async def test_fetch_completion_http_error_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": {"message": "API key not valid"}})

    with pytest.raises(HttpError, match="API key not valid") as e:
        await gemini(handler).fetch_completion("bad", "Hello")
    assert e.value.status_code == 400


@pytest.mark.parametrize(
    "response",
    (
        httpx.Response(500, text="Internal error"),
        httpx.Response(503, json={"error": {}}),
        httpx.Response(404, json=["nope"]),
    ),
)
@pytest.mark.asyncio
async def test_fetch_completion_http_error_generic(response: httpx.Response) -> None:
    with pytest.raises(HttpError, match="Failed to fetch recipes"):
        await gemini(lambda request: response).fetch_completion("key", "Hello")


@pytest.mark.parametrize(
    "body",
    (
        {},
        {"candidates": []},
        {"candidates": [{"content": {"parts": []}}]},
        completion(""),
    ),
)
@pytest.mark.asyncio
async def test_fetch_completion_empty(body: dict) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    with pytest.raises(EmptyResponseError, match="No recipes generated"):
        await gemini(handler).fetch_completion("key", "Hello")


@pytest.mark.asyncio
async def test_fetch_completion_not_json() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html></html>")

    with pytest.raises(RecipeServiceError, match="An unexpected error occurred."):
        await gemini(handler).fetch_completion("key", "Hello")


@pytest.mark.asyncio
async def test_fetch_completion_custom_messages() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("no route", request=request)

    messages = ErrorMessages(api_key_required="Custom key", network_error="Custom net")
    client = gemini(handler, messages=messages)

    with pytest.raises(ApiKeyRequiredError, match="Custom key"):
        await client.fetch_completion("", "Hello")
    with pytest.raises(NetworkError, match="Custom net"):
        await client.fetch_completion("key", "Hello")


@pytest.mark.parametrize(
    "error",
    (httpx.TooManyRedirects, httpx.DecodingError, httpx.RemoteProtocolError),
)
@pytest.mark.asyncio
async def test_fetch_completion_request_errors(error: type[httpx.RequestError]) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise error("loop", request=request)

    with pytest.raises(NetworkError):
        await gemini(handler).fetch_completion("key", "Hello")
