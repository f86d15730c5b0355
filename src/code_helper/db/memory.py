import asyncio

from code_helper.db.helpers import TimestampIds
from code_helper.errors import DuplicateEmailError
from code_helper.models import UserRecord


class InMemoryUserStore:
    def __init__(self, users: list[UserRecord] | None = None) -> None:
        self.users: list[UserRecord] = list(users or [])
        self._ids = TimestampIds()
        for user in self.users:
            self._ids.observe(user.id)
        self._lock = asyncio.Lock()

    async def find_by_email(self, email: str) -> UserRecord | None:
        for user in self.users:
            if user.email == email:
                return user
        return None

    async def insert(self, name: str, email: str, password_hash: str) -> UserRecord:
        async with self._lock:
            if await self.find_by_email(email) is not None:
                raise DuplicateEmailError(email)
            user = UserRecord(id=self._ids.next(), name=name, email=email, password=password_hash)
            self.users.append(user)
            return user

    async def list_users(self) -> list[UserRecord]:
        return list(self.users)

    async def ping(self) -> bool:
        return True

    async def dispose(self) -> None:
        pass
