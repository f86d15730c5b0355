import logging

from sqlalchemy import Column, Integer, MetaData, String, Table, insert, select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from code_helper.errors import DuplicateEmailError
from code_helper.models import UserRecord

logger = logging.getLogger(__name__)

metadata = MetaData()

users_table = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False, default=""),
    Column("email", String(320), nullable=False, unique=True),
    Column("password", String(128), nullable=False),
)


class SqlUserStore:
    """User store on any SQLAlchemy async engine (SQLite by default)."""

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._ready = False

    async def ensure_ready(self) -> None:
        if self._ready:
            return
        async with self._engine.begin() as conn:
            await conn.run_sync(metadata.create_all)
        self._ready = True
        logger.info("users table ready on %s", self._engine.url.render_as_string(hide_password=True))

    async def find_by_email(self, email: str) -> UserRecord | None:
        await self.ensure_ready()
        async with self._engine.connect() as conn:
            result = await conn.execute(select(users_table).where(users_table.c.email == email))
            row = result.mappings().first()
        return UserRecord.from_dict(dict(row)) if row is not None else None

    async def insert(self, name: str, email: str, password_hash: str) -> UserRecord:
        await self.ensure_ready()
        try:
            async with self._engine.begin() as conn:
                result = await conn.execute(
                    insert(users_table).values(name=name, email=email, password=password_hash)
                )
                user_id = result.inserted_primary_key[0]
        except IntegrityError as exc:
            raise DuplicateEmailError(email) from exc
        return UserRecord(id=int(user_id), name=name, email=email, password=password_hash)

    async def list_users(self) -> list[UserRecord]:
        await self.ensure_ready()
        async with self._engine.connect() as conn:
            result = await conn.execute(select(users_table).order_by(users_table.c.id))
            return [UserRecord.from_dict(dict(row)) for row in result.mappings()]

    async def ping(self) -> bool:
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError):
            return False
        return True

    async def dispose(self) -> None:
        await self._engine.dispose()
