import asyncio
import logging
from typing import Any

import httpx

from domain.errors import (
    DEFAULT_MESSAGES,
    ApiKeyRequiredError,
    EmptyResponseError,
    ErrorMessages,
    HttpError,
    NetworkError,
    RecipeServiceError,
    RequestTimeoutError,
)


logger = logging.getLogger(__name__)


BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_MODEL = "gemini-3-flash-preview"
TIMEOUT = 60


def gemini_client_factory(timeout: float = TIMEOUT) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers={"Content-Type": "application/json"},
        timeout=timeout,
    )


def _error_message(resp: httpx.Response) -> str | None:
    try:
        message = resp.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return None
    return message if isinstance(message, str) and message else None


def _completion_text(data: Any) -> str | None:
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None


class GeminiClient:
    def __init__(
        self,
        *,
        model: str = DEFAULT_MODEL,
        base_url: str = BASE_URL,
        timeout: float = TIMEOUT,
        client: httpx.AsyncClient | None = None,
        messages: ErrorMessages | None = None,
    ) -> None:
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = gemini_client_factory(timeout) if client is None else client
        self.messages = DEFAULT_MESSAGES if messages is None else messages

    @property
    def url(self) -> str:
        return f"{self.base_url}/{self.model}:generateContent"

    @staticmethod
    def payload(prompt: str) -> dict[str, Any]:
        return {"contents": [{"parts": [{"text": prompt}]}]}

    async def fetch_completion(self, api_key: str, prompt: str) -> str:
        """Send the prompt and return the model's raw text."""
        if not api_key:
            raise ApiKeyRequiredError(self.messages.api_key_required)

        try:
            async with asyncio.timeout(self.timeout):
                resp = await self._client.post(
                    self.url,
                    headers={"x-goog-api-key": api_key},
                    json=self.payload(prompt),
                )
        except (TimeoutError, httpx.TimeoutException) as e:
            logger.error("Request to %s timed out after %ss", self.model, self.timeout)
            raise RequestTimeoutError(self.messages.timeout) from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            logger.exception("Request to %s failed", self.model)
            raise NetworkError(self.messages.network_error) from e

        if not resp.is_success:
            logger.error("Gemini returned %s: %s", resp.status_code, resp.text)
            raise HttpError(
                _error_message(resp) or self.messages.fetch_failed,
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as e:
            logger.error("Gemini returned a non JSON body: %s", resp.text)
            raise RecipeServiceError(self.messages.unexpected_error) from e

        text = _completion_text(data)
        if not text:
            logger.error("Gemini response held no text: %s", data)
            raise EmptyResponseError(self.messages.empty_response)
        return text

    async def close(self) -> None:
        await self._client.aclose()
