from code_helper.db.engine import get_engine
from code_helper.db.factory import create_user_store
from code_helper.db.json_file import JsonFileUserStore
from code_helper.db.memory import InMemoryUserStore
from code_helper.db.sql import SqlUserStore, users_table

__all__ = [
    "InMemoryUserStore",
    "JsonFileUserStore",
    "SqlUserStore",
    "create_user_store",
    "get_engine",
    "users_table",
]
