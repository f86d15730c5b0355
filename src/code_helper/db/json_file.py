"""User store backed by a single JSON array on disk.

The file format matches the one written by earlier versions of the server:
a list of ``{id, name, email, password}`` objects, indented by two spaces.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from code_helper.db.helpers import TimestampIds
from code_helper.errors import DuplicateEmailError
from code_helper.models import UserRecord

logger = logging.getLogger(__name__)


def _read_users(path: Path) -> list[UserRecord]:
    if not path.exists():
        return []
    raw: Any = json.loads(path.read_text(encoding="utf-8") or "[]")
    if not isinstance(raw, list):
        raise ValueError(f"{path} must contain a JSON array of users")
    return [UserRecord.from_dict(item) for item in raw]


def _write_users(path: Path, users: list[UserRecord]) -> None:
    """Rewrite the whole file through a temp file and an atomic rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump([u.to_dict() for u in users], fh, indent=2)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class JsonFileUserStore:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._users: list[UserRecord] | None = None
        self._ids = TimestampIds()
        self._lock = asyncio.Lock()

    async def _load(self) -> list[UserRecord]:
        if self._users is None:
            loaded = await asyncio.to_thread(_read_users, self.path)
            # An insert may have finished while we were reading; its list is newer.
            if self._users is None:
                self._users = loaded
                for user in loaded:
                    self._ids.observe(user.id)
                logger.info("Loaded %d user(s) from %s", len(loaded), self.path)
        return self._users

    async def find_by_email(self, email: str) -> UserRecord | None:
        for user in await self._load():
            if user.email == email:
                return user
        return None

    async def insert(self, name: str, email: str, password_hash: str) -> UserRecord:
        async with self._lock:
            users = await self._load()
            if any(u.email == email for u in users):
                raise DuplicateEmailError(email)
            user = UserRecord(id=self._ids.next(), name=name, email=email, password=password_hash)
            updated = [*users, user]
            await asyncio.to_thread(_write_users, self.path, updated)
            self._users = updated
            return user

    async def list_users(self) -> list[UserRecord]:
        return list(await self._load())

    async def ping(self) -> bool:
        try:
            await self._load()
        except (OSError, ValueError, KeyError, TypeError):
            logger.exception("User file %s is unreadable", self.path)
            return False
        return True

    async def dispose(self) -> None:
        self._users = None
