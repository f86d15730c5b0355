from typing import Protocol

from code_helper.models import UserRecord


class UserStore(Protocol):
    async def find_by_email(self, email: str) -> UserRecord | None: ...

    async def insert(self, name: str, email: str, password_hash: str) -> UserRecord: ...

    async def list_users(self) -> list[UserRecord]: ...

    async def ping(self) -> bool: ...

    async def dispose(self) -> None: ...
