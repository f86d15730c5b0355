from __future__ import annotations

import httpx

from code_helper.config import Settings
from code_helper.errors import ConfigError
from code_helper.llm.base import HttpCompletionClient
from code_helper.llm.gemini import GeminiCompletionClient
from code_helper.llm.groq import GroqCompletionClient
from code_helper.models import CompletionOptions

_CLIENTS: dict[str, type[HttpCompletionClient]] = {
    "gemini": GeminiCompletionClient,
    "groq": GroqCompletionClient,
}


def create_completion_client(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> HttpCompletionClient:
    """Instantiate the completion client selected by ``settings.provider``."""
    try:
        client_cls = _CLIENTS[settings.provider]
    except KeyError:
        raise ConfigError(f"Unknown completion provider {settings.provider!r}") from None
    return client_cls(
        settings.api_key,
        timeout=settings.timeout,
        max_retries=settings.max_retries,
        retry_backoff=settings.retry_backoff,
        transport=transport,
    )


def completion_options(settings: Settings) -> CompletionOptions:
    return CompletionOptions(
        model=settings.resolved_model,
        max_output_tokens=settings.max_output_tokens,
        temperature=settings.temperature,
    )
