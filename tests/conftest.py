import time
from typing import List, Optional, Union

import pytest
from litestar import Litestar
from litestar.testing import TestClient

from fabricator.config import Settings
from fabricator.main import create_app
from fabricator.models.openai import (
    ChatCompletionChoice,
    ChatCompletionMessage,
    ChatCompletionRequest,
    ChatCompletionResponse,
)

Outcome = Union[str, None, Exception]


def pytest_addoption(parser):
    """Adds --update-snapshots flag to pytest."""
    parser.addoption(
        "--update-snapshots",
        action="store_true",
        default=False,
        help="Record upstream responses from the real API.",
    )


@pytest.fixture(scope="session")
def snapshot_update(request):
    """Fixture to get the value of the --update-snapshots flag."""
    return request.config.getoption("--update-snapshots")


def make_completion(content: Optional[str]) -> ChatCompletionResponse:
    """Build a chat completion whose first choice carries ``content``."""
    return ChatCompletionResponse(
        id="chatcmpl-test",
        object="chat.completion",
        created=int(time.time()),
        model="gpt-5-nano",
        choices=[
            ChatCompletionChoice(
                index=0,
                message=ChatCompletionMessage(role="assistant", content=content),
                finish_reason="stop",
            )
        ],
    )


class FakeCompletionClient:
    """Plays back one outcome per call: a content string or an exception."""

    def __init__(self, outcomes: List[Outcome]):
        self.outcomes = list(outcomes)
        self.requests: List[ChatCompletionRequest] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    async def create_chat_completion(
        self, data: ChatCompletionRequest
    ) -> ChatCompletionResponse:
        self.requests.append(data)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return make_completion(outcome)


class SleepRecorder:
    """Stands in for asyncio.sleep and remembers every delay."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture()
def settings() -> Settings:
    """Settings with a dummy key, independent of any local .env file."""
    return Settings(
        _env_file=None,
        OPENAI_API_KEY="sk-test",
        ENVIRONMENT="production",
        API_PREFIX="/api/",
        MAX_RETRIES=2,
        RETRY_BACKOFF_MS=100,
    )


@pytest.fixture()
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture()
def upstream() -> FakeCompletionClient:
    """Upstream that succeeds once with a small JSON object."""
    return FakeCompletionClient(['{"a":1}'])


@pytest.fixture()
def app(settings: Settings, upstream: FakeCompletionClient, sleeper: SleepRecorder) -> Litestar:
    """Fixture to create the Litestar app around the fake upstream."""
    return create_app(settings=settings, completion_client=upstream, sleep=sleeper)


@pytest.fixture()
def client(app: Litestar) -> TestClient:
    """Fixture to create a TestClient for the app."""
    return TestClient(app)
