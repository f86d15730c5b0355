from code_helper.config import Settings
from code_helper.core.ports.users import UserStore
from code_helper.db.engine import get_engine
from code_helper.db.json_file import JsonFileUserStore
from code_helper.db.memory import InMemoryUserStore
from code_helper.db.sql import SqlUserStore
from code_helper.errors import ConfigError


def create_user_store(settings: Settings) -> UserStore:
    if settings.user_store == "json":
        return JsonFileUserStore(settings.users_file)
    if settings.user_store == "sqlite":
        return SqlUserStore(get_engine(settings.database_url))
    if settings.user_store == "memory":
        return InMemoryUserStore()
    raise ConfigError(f"Unknown user store {settings.user_store!r}")
