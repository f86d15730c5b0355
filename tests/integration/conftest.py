"""Fixtures for tests that run against a real SQLite database file."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio

from code_helper.db import SqlUserStore, get_engine


@pytest_asyncio.fixture
async def sql_store(tmp_path: Path) -> AsyncGenerator[SqlUserStore, None]:
    """Per-test store so each event loop gets its own connection pool."""
    store = SqlUserStore(get_engine(f"sqlite+aiosqlite:///{tmp_path / 'users.db'}"))
    yield store
    await store.dispose()
