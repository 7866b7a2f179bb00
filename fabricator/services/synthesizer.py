"""
Endpoint synthesis: prompt the model, retry transient failures, and make
sure only syntactically valid JSON leaves the service.
"""

import asyncio
import json
from typing import Awaitable, Callable, List, Optional, Protocol

import structlog

from fabricator.config import Settings
from fabricator.models.errors import ErrorKind, SynthesisError
from fabricator.models.openai import ChatCompletionRequest, ChatCompletionResponse
from fabricator.models.prompts import PromptPair
from fabricator.services.openai import (
    RateLimitedError,
    UnauthorizedError,
    UpstreamError,
)
from fabricator.services.prompts import build_prompts

log = structlog.get_logger()


def _reject_constant(name: str):
    # NaN, Infinity and -Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


Sleep = Callable[[float], Awaitable[None]]


class ChatCompletionClient(Protocol):
    async def create_chat_completion(
        self, data: ChatCompletionRequest
    ) -> ChatCompletionResponse: ...


class EndpointSynthesizer:
    """Generates the JSON body of a made-up endpoint."""

    def __init__(
        self,
        client: ChatCompletionClient,
        settings: Settings,
        sleep: Optional[Sleep] = None,
    ):
        self.client = client
        self.settings = settings
        self.max_retries = settings.MAX_RETRIES
        self._sleep = sleep or asyncio.sleep

    def backoff_delay(self, retry_count: int) -> float:
        """Seconds to wait before retry number ``retry_count`` (1-based)."""
        return (2**retry_count) * self.settings.RETRY_BACKOFF_MS / 1000

    def build_request(self, prompts: PromptPair) -> ChatCompletionRequest:
        return ChatCompletionRequest(
            model=self.settings.OPENAI_MODEL,
            messages=prompts.to_messages(),
            temperature=self.settings.OPENAI_TEMPERATURE,
            max_tokens=self.settings.OPENAI_MAX_TOKENS,
            response_format={"type": "json_object"},
        )

    async def complete(
        self, resource_name: str, request: ChatCompletionRequest
    ) -> ChatCompletionResponse:
        """
        Call the model, retrying generic upstream failures with exponential
        backoff. Rate limits and credential failures end the request at once.

        Args:
            resource_name: Endpoint being synthesized, reported on errors
            request: The chat completion request to send on every attempt

        Returns:
            The first successful completion

        Raises:
            SynthesisError: RATE_LIMITED, UNAUTHORIZED or UPSTREAM_EXHAUSTED
        """
        retry_count = 0

        while True:
            try:
                return await self.client.create_chat_completion(request)
            except RateLimitedError as e:
                log.error("Upstream rate limit hit", attempt=retry_count + 1, error=str(e))
                raise SynthesisError(ErrorKind.RATE_LIMITED, resource_name) from e
            except UnauthorizedError as e:
                log.error("Upstream rejected the API key", attempt=retry_count + 1, error=str(e))
                raise SynthesisError(ErrorKind.UNAUTHORIZED, resource_name) from e
            except UpstreamError as e:
                log.error(
                    "Upstream call failed",
                    attempt=retry_count + 1,
                    status_code=e.status_code,
                    error=str(e),
                )
                retry_count += 1
                if retry_count > self.max_retries:
                    raise SynthesisError(
                        ErrorKind.UPSTREAM_EXHAUSTED, resource_name, details=str(e)
                    ) from e

                delay = self.backoff_delay(retry_count)
                log.info("Retrying upstream call", retry=retry_count, delay=delay)
                await self._sleep(delay)

    @staticmethod
    def validate(resource_name: str, content: Optional[str]) -> str:
        """
        Check the model output is non-empty, syntactically valid JSON.

        The parsed value is thrown away: the caller gets the exact text the
        model produced.
        """
        if content is None or not content.strip():
            log.error("Model returned empty content")
            raise SynthesisError(ErrorKind.AI_RESPONSE_EMPTY, resource_name)

        try:
            json.loads(content, parse_constant=_reject_constant)
        except ValueError as e:
            log.error("Model returned invalid JSON", error=str(e), content=content)
            raise SynthesisError(
                ErrorKind.AI_INVALID_JSON_RESPONSE, resource_name, details=str(e)
            ) from e

        return content

    async def synthesize(
        self, resource_name: str, fields: Optional[List[str]] = None
    ) -> str:
        """Produce the JSON text for ``resource_name``."""
        log.info("Processing endpoint", endpoint=resource_name)
        if fields:
            log.info("Requested fields", fields=fields)

        prompts = build_prompts(
            resource_name,
            fields,
            persona=self.settings.ASSISTANT_PERSONA,
            host=self.settings.API_HOST,
        )
        completion = await self.complete(resource_name, self.build_request(prompts))

        content = completion.content
        log.info("Model raw response", content=content)

        return self.validate(resource_name, content)
