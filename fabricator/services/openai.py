"""
OpenAI service for making chat completion requests.

The service owns one pooled httpx client for the lifetime of the application
and turns every failure into an UpstreamError, so callers only have to tell
rate limits and bad credentials apart from everything else.
"""

from typing import Dict, Optional

import httpx
import structlog
from pydantic import ValidationError

from fabricator.models.openai import ChatCompletionRequest, ChatCompletionResponse

log = structlog.get_logger()

# OpenAI API endpoints
OPENAI_BASE_URL = "https://api.openai.com"
CHAT_COMPLETIONS_ENDPOINT = "/v1/chat/completions"


class UpstreamError(Exception):
    """A chat completion attempt failed and may be retried."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RateLimitedError(UpstreamError):
    """The upstream answered 429."""


class UnauthorizedError(UpstreamError):
    """The upstream rejected our credential (401)."""


def classify_status(status_code: int, message: str) -> UpstreamError:
    """
    Map an upstream HTTP error status to the matching UpstreamError.

    Args:
        status_code: HTTP status returned by the upstream
        message: Error text to carry on the exception

    Returns:
        The exception instance to raise
    """
    if status_code == 429:
        return RateLimitedError(message, status_code)
    if status_code == 401:
        return UnauthorizedError(message, status_code)
    return UpstreamError(message, status_code)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    return response.text


class OpenAIService:
    """Service for interacting with the OpenAI chat completion API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = OPENAI_BASE_URL,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.timeout = timeout
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    def _get_headers(self) -> Dict[str, str]:
        """
        Get the required headers for OpenAI API requests.

        Returns:
            Dictionary of HTTP headers
        """
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def create_chat_completion(
        self, data: ChatCompletionRequest
    ) -> ChatCompletionResponse:
        """
        Create a chat completion with OpenAI.

        Args:
            data: The request data to send

        Returns:
            The parsed chat completion

        Raises:
            RateLimitedError: the upstream answered 429
            UnauthorizedError: the upstream answered 401
            UpstreamError: any other HTTP, transport or decoding failure
        """
        try:
            response = await self._client.post(
                CHAT_COMPLETIONS_ENDPOINT,
                headers=self._get_headers(),
                json=data.model_dump(exclude_none=True),
                timeout=self.timeout,
            )
        except httpx.TimeoutException as e:
            raise UpstreamError(f"Upstream request timed out: {e!r}") from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"Upstream request failed: {e!r}") from e

        if response.status_code >= 400:
            message = _error_message(response)
            log.warning(
                "Upstream returned an error",
                status_code=response.status_code,
                error=message,
            )
            raise classify_status(response.status_code, message)

        try:
            return ChatCompletionResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise UpstreamError(f"Unexpected chat completion payload: {e}") from e

    async def close(self) -> None:
        await self._client.aclose()
