"""Integration tests for the SQLAlchemy user store on SQLite."""

import asyncio

import pytest

from code_helper.core.auth import login, signup
from code_helper.db import SqlUserStore
from code_helper.errors import DuplicateEmailError


@pytest.mark.asyncio
async def test_insert_and_find(sql_store: SqlUserStore) -> None:
    user = await sql_store.insert("Ada", "ada@example.com", "hash")
    assert user.id >= 1

    found = await sql_store.find_by_email("ada@example.com")
    assert found == user
    assert await sql_store.find_by_email("nobody@example.com") is None


@pytest.mark.asyncio
async def test_unique_email_constraint(sql_store: SqlUserStore) -> None:
    await sql_store.insert("Ada", "ada@example.com", "hash")
    with pytest.raises(DuplicateEmailError):
        await sql_store.insert("Ada again", "ada@example.com", "hash")
    assert len(await sql_store.list_users()) == 1


@pytest.mark.asyncio
async def test_list_users_in_insert_order(sql_store: SqlUserStore) -> None:
    for i in range(3):
        await sql_store.insert(f"user{i}", f"user{i}@example.com", "hash")
    users = await sql_store.list_users()
    assert [u.email for u in users] == ["user0@example.com", "user1@example.com", "user2@example.com"]


@pytest.mark.asyncio
async def test_concurrent_inserts_get_distinct_ids(sql_store: SqlUserStore) -> None:
    await sql_store.ensure_ready()
    users = await asyncio.gather(*(sql_store.insert(f"u{i}", f"u{i}@example.com", "h") for i in range(10)))
    assert len({u.id for u in users}) == 10


@pytest.mark.asyncio
async def test_signup_and_login_round_trip(sql_store: SqlUserStore) -> None:
    created = await signup(sql_store, "Ada", "ada@example.com", "s3cret", rounds=4)
    user = await login(sql_store, "ada@example.com", "s3cret")
    assert user.id == created.id


@pytest.mark.asyncio
async def test_ping(sql_store: SqlUserStore) -> None:
    assert await sql_store.ping() is True
