import os
from dataclasses import dataclass

from dotenv import load_dotenv

from code_helper.errors import ConfigError

PROVIDERS = ("gemini", "groq")
USER_STORES = ("json", "sqlite", "memory")

_DEFAULT_MODELS = {
    "gemini": "gemini-2.0-flash",
    "groq": "llama-3.3-70b-versatile",
}

_API_KEY_VARS = {
    "gemini": "GEMINI_API_KEY",
    "groq": "GROQ_API_KEY",
}


@dataclass(frozen=True)
class Settings:
    api_key: str
    provider: str = "gemini"
    model: str = ""
    timeout: float = 30.0
    temperature: float = 0.3
    max_output_tokens: int = 2048
    max_retries: int = 0
    retry_backoff: float = 0.5
    max_code_length: int = 20_000
    user_store: str = "json"
    users_file: str = "users.json"
    database_url: str = "sqlite+aiosqlite:///users.db"
    bcrypt_rounds: int = 10
    log_level: str = "INFO"

    @property
    def resolved_model(self) -> str:
        return self.model or _DEFAULT_MODELS[self.provider]


def _env_number(name: str, default: str, kind: type[int] | type[float]) -> int | float:
    raw = os.getenv(name, default)
    try:
        return kind(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


def load_settings(require_api_key: bool = True) -> Settings:
    """Read settings from the environment (and a ``.env`` file, if present).

    Raises ``ConfigError`` when the API key of the selected provider is absent,
    unless *require_api_key* is false (commands that never call the provider).
    """
    load_dotenv()

    provider = os.getenv("CODE_HELPER_PROVIDER", "gemini").strip().lower()
    if provider not in PROVIDERS:
        raise ConfigError(f"Unknown completion provider {provider!r}; expected one of {', '.join(PROVIDERS)}")

    key_var = _API_KEY_VARS[provider]
    api_key = os.getenv(key_var, "").strip()
    if require_api_key and not api_key:
        raise ConfigError(f"{key_var} is not set")

    user_store = os.getenv("CODE_HELPER_USER_STORE", "json").strip().lower()
    if user_store not in USER_STORES:
        raise ConfigError(f"Unknown user store {user_store!r}; expected one of {', '.join(USER_STORES)}")

    return Settings(
        api_key=api_key,
        provider=provider,
        model=os.getenv("CODE_HELPER_MODEL", ""),
        timeout=float(_env_number("CODE_HELPER_TIMEOUT", "30", float)),
        temperature=float(_env_number("CODE_HELPER_TEMPERATURE", "0.3", float)),
        max_output_tokens=int(_env_number("CODE_HELPER_MAX_OUTPUT_TOKENS", "2048", int)),
        max_retries=int(_env_number("CODE_HELPER_MAX_RETRIES", "0", int)),
        max_code_length=int(_env_number("CODE_HELPER_MAX_CODE_LENGTH", "20000", int)),
        user_store=user_store,
        users_file=os.getenv("CODE_HELPER_USERS_FILE", "users.json"),
        database_url=os.getenv("DATABASE_URL", "sqlite+aiosqlite:///users.db"),
        bcrypt_rounds=int(_env_number("CODE_HELPER_BCRYPT_ROUNDS", "10", int)),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
