"""Shared test fixtures for pytest.

ENVIRONMENT is pinned to `test` before the app is imported so settings load
from defaults only and no `.env` file leaks provider keys into the suite.
"""

from __future__ import annotations

import os
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient


os.environ["ENVIRONMENT"] = "test"

from core.config import get_settings  # noqa: E402
from main import app  # noqa: E402
from services.ai.exceptions import BoundaryCallFailed  # noqa: E402
from services.ai.models import ChatCompletionRequest, ImageRequest  # noqa: E402


class FakePrimary:
    """Chat-completions boundary returning canned text per provider model id.

    Model ids listed in `failing` raise BoundaryCallFailed.
    """

    def __init__(
        self,
        responses: dict[str, str] | None = None,
        failing: set[str] | None = None,
        default: str = "Hello {{name}}",
    ) -> None:
        self.responses = responses or {}
        self.failing = failing or set()
        self.default = default
        self.requests: list[ChatCompletionRequest] = []

    async def complete(self, request: ChatCompletionRequest) -> str:
        self.requests.append(request)
        if request.provider_model_id in self.failing or "*" in self.failing:
            raise BoundaryCallFailed(f"{request.provider_model_id} unavailable")
        return self.responses.get(request.provider_model_id, self.default)


class FakeStandard:
    """Standard text boundary recording prompts and token budgets."""

    def __init__(self, reply: str = "Standard {{name}}", fail: bool = False) -> None:
        self.reply = reply
        self.fail = fail
        self.calls: list[tuple[str, int]] = []

    async def generate_text(self, prompt: str, max_tokens: int) -> str:
        self.calls.append((prompt, max_tokens))
        if self.fail:
            raise BoundaryCallFailed("standard model unavailable")
        return self.reply


class FakeImages:
    def __init__(self, failing_prompts: set[str] | None = None) -> None:
        self.failing_prompts = failing_prompts or set()
        self.requests: list[ImageRequest] = []

    async def generate_images(self, request: ImageRequest) -> list[str]:
        self.requests.append(request)
        if request.prompt in self.failing_prompts:
            raise BoundaryCallFailed("image backend down")
        return [f"https://img.example/{len(self.requests)}.png"]


@pytest.fixture
def fake_primary() -> FakePrimary:
    return FakePrimary()


@pytest.fixture
def fake_standard() -> FakeStandard:
    return FakeStandard()


@pytest.fixture
def fake_images() -> FakeImages:
    return FakeImages()


@pytest.fixture(autouse=True)
def _fresh_settings() -> Generator[None, None, None]:
    """Drop cached settings so env patches in one test cannot leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """
    Create a test client for the FastAPI application.
    """
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
