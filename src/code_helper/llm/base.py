"""Shared plumbing for HTTP completion providers.

Subclasses describe the provider's wire format (endpoint, payload, response
shape); this module owns timeouts, retries and the mapping of transport and
HTTP failures onto ``CompletionError``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from code_helper.errors import CompletionError
from code_helper.models import CompletionOptions, PromptSpec, PromptStyle

logger = logging.getLogger(__name__)

_MAX_ERROR_DETAIL = 300


class HttpCompletionClient:
    provider = "http"
    display_name = "HTTP"
    prompt_style = PromptStyle.TEXT
    default_base_url = ""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str | None = None,
        timeout: float = 30.0,
        max_retries: int = 0,
        retry_backoff: float = 0.5,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._timeout = timeout
        self._max_retries = max(0, max_retries)
        self._retry_backoff = retry_backoff
        self._client = httpx.AsyncClient(
            base_url=base_url or self.default_base_url,
            headers=self._auth_headers(),
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    # --- provider specifics -------------------------------------------------

    def _auth_headers(self) -> dict[str, str]:
        raise NotImplementedError

    def _endpoint(self, options: CompletionOptions) -> str:
        raise NotImplementedError

    def _payload(self, prompt: PromptSpec, options: CompletionOptions) -> dict[str, Any]:
        raise NotImplementedError

    def _extract_text(self, body: Any) -> str:
        """Pull the generated text out of a decoded response body.

        May raise ``KeyError``, ``IndexError`` or ``TypeError`` on unexpected
        shapes; those are reported as ``malformed_response``.
        """
        raise NotImplementedError

    # --- public API ---------------------------------------------------------

    async def complete(self, prompt: PromptSpec, options: CompletionOptions) -> str:
        try:
            return await asyncio.wait_for(self._complete_with_retries(prompt, options), timeout=self._timeout)
        except asyncio.TimeoutError:
            raise CompletionError(
                self.provider, "timeout", f"{self.display_name} request timed out after {self._timeout:g}s"
            ) from None

    async def aclose(self) -> None:
        await self._client.aclose()

    # --- internals ----------------------------------------------------------

    async def _complete_with_retries(self, prompt: PromptSpec, options: CompletionOptions) -> str:
        attempt = 0
        while True:
            try:
                return await self._send(prompt, options)
            except CompletionError as exc:
                if not exc.retryable or attempt >= self._max_retries:
                    raise
                delay = self._retry_backoff * (2**attempt)
                attempt += 1
                logger.warning(
                    "%s %s error (%s), retrying in %.2fs (%d/%d)",
                    self.display_name,
                    exc.kind,
                    exc,
                    delay,
                    attempt,
                    self._max_retries,
                )
                await asyncio.sleep(delay)

    async def _send(self, prompt: PromptSpec, options: CompletionOptions) -> str:
        try:
            response = await self._client.post(self._endpoint(options), json=self._payload(prompt, options))
        except httpx.TimeoutException as exc:
            raise CompletionError(self.provider, "timeout", f"{self.display_name} request timed out") from exc
        except httpx.HTTPError as exc:
            detail = self._scrub(str(exc)) or exc.__class__.__name__
            raise CompletionError(self.provider, "network", f"{self.display_name} request failed: {detail}") from exc

        if response.status_code >= 400:
            raise self._status_error(response)

        try:
            body = response.json()
        except ValueError as exc:
            raise CompletionError(
                self.provider, "malformed_response", f"{self.display_name} returned a non-JSON body"
            ) from exc

        try:
            text = self._extract_text(body)
        except (KeyError, IndexError, TypeError) as exc:
            raise CompletionError(
                self.provider, "malformed_response", f"{self.display_name} response did not contain any text"
            ) from exc
        if not isinstance(text, str):
            raise CompletionError(
                self.provider, "malformed_response", f"{self.display_name} response did not contain any text"
            )
        return text

    def _status_error(self, response: httpx.Response) -> CompletionError:
        status = response.status_code
        if status in (401, 403):
            kind = "auth"
        elif status == 429:
            kind = "rate_limit"
        else:
            kind = "provider"
        detail = self._error_detail(response)
        logger.warning("%s returned HTTP %d (%s)", self.display_name, status, kind)
        return CompletionError(self.provider, kind, f"{self.display_name} HTTP {status}: {detail}", status_code=status)

    def _error_detail(self, response: httpx.Response) -> str:
        # Gemini and OpenAI-compatible APIs both use {"error": {"message": ...}}.
        try:
            detail = str(response.json()["error"]["message"])
        except (ValueError, KeyError, TypeError):
            detail = response.text or response.reason_phrase
        return self._scrub(detail)[:_MAX_ERROR_DETAIL]

    def _scrub(self, text: str) -> str:
        if self._api_key:
            return text.replace(self._api_key, "***")
        return text
