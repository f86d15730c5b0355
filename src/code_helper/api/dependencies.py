from __future__ import annotations

from collections.abc import AsyncIterator

from code_helper.config import Settings, load_settings
from code_helper.core.ports.completion import CompletionClient
from code_helper.core.ports.users import UserStore
from code_helper.db.factory import create_user_store
from code_helper.llm.factory import create_completion_client

_settings: Settings | None = None
_client: CompletionClient | None = None
_store: UserStore | None = None


def configure(settings: Settings | None = None) -> Settings:
    """Install *settings* (or load them from the environment) for the dependencies below."""
    global _settings  # noqa: PLW0603
    _settings = settings if settings is not None else load_settings()
    return _settings


def get_settings() -> Settings:
    global _settings  # noqa: PLW0603
    if _settings is None:
        _settings = load_settings()
    return _settings


async def get_completion_client() -> AsyncIterator[CompletionClient]:
    """Yield the configured ``CompletionClient``, creating it lazily on first call."""
    global _client  # noqa: PLW0603
    if _client is None:
        _client = create_completion_client(get_settings())
    yield _client


async def get_user_store() -> AsyncIterator[UserStore]:
    """Yield the configured ``UserStore``, creating it lazily on first call."""
    global _store  # noqa: PLW0603
    if _store is None:
        _store = create_user_store(get_settings())
    yield _store


async def shutdown_dependencies() -> None:
    global _client, _store  # noqa: PLW0603
    if _client is not None:
        await _client.aclose()
        _client = None
    if _store is not None:
        await _store.dispose()
        _store = None
