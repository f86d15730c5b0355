import asyncio
import logging

import bcrypt

from code_helper.core.ports.users import UserStore
from code_helper.errors import AuthError, DuplicateEmailError
from code_helper.models import UserRecord

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 10

# bcrypt only reads the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES]


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False


async def signup(
    store: UserStore,
    name: str,
    email: str,
    password: str,
    rounds: int = DEFAULT_ROUNDS,
) -> UserRecord:
    """Create a user with a bcrypt-hashed password.

    Raises ``DuplicateEmailError`` if the email is already registered.
    """
    if await store.find_by_email(email) is not None:
        raise DuplicateEmailError(email)

    password_hash = await asyncio.to_thread(hash_password, password, rounds)
    user = await store.insert(name, email, password_hash)
    logger.info("signup: created user %d", user.id)
    return user


async def login(store: UserStore, email: str, password: str) -> UserRecord:
    user = await store.find_by_email(email)
    if user is None:
        raise AuthError("Invalid email!")

    if not await asyncio.to_thread(verify_password, password, user.password):
        raise AuthError("Incorrect password!")
    return user
