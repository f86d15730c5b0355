"""Shared fixtures and helpers for tests."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from code_helper.config import Settings
from code_helper.db import InMemoryUserStore
from code_helper.models import CompletionOptions, PromptSpec, PromptStyle

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# StubCompletionClient: records prompts instead of calling a provider
# ---------------------------------------------------------------------------


class StubCompletionClient:
    provider = "stub"

    def __init__(
        self,
        reply: str = "stub answer",
        error: Exception | None = None,
        delay: float = 0.0,
        prompt_style: PromptStyle = PromptStyle.TEXT,
    ) -> None:
        self.reply = reply
        self.error = error
        self.delay = delay
        self.prompt_style = prompt_style
        self.calls: list[tuple[PromptSpec, CompletionOptions]] = []
        self.closed = False

    async def complete(self, prompt: PromptSpec, options: CompletionOptions) -> str:
        self.calls.append((prompt, options))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.reply

    async def aclose(self) -> None:
        self.closed = True


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> Settings:
    """Settings with a fake key and the cheapest bcrypt cost."""
    return Settings(api_key="test-key", user_store="memory", bcrypt_rounds=4, max_code_length=1000)


@pytest.fixture
def stub_client() -> StubCompletionClient:
    return StubCompletionClient()


@pytest.fixture
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def options() -> CompletionOptions:
    return CompletionOptions(model="test-model")
