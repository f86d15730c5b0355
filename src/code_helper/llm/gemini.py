from typing import Any

from code_helper.llm.base import HttpCompletionClient
from code_helper.models import CompletionOptions, PromptSpec, PromptStyle


class GeminiCompletionClient(HttpCompletionClient):
    """Google Gemini ``generateContent`` REST API."""

    provider = "gemini"
    display_name = "Gemini"
    prompt_style = PromptStyle.TEXT
    default_base_url = "https://generativelanguage.googleapis.com/v1beta"

    def _auth_headers(self) -> dict[str, str]:
        # Header rather than ?key= so the key never shows up in logged URLs.
        return {"x-goog-api-key": self._api_key}

    def _endpoint(self, options: CompletionOptions) -> str:
        return f"/models/{options.model}:generateContent"

    def _payload(self, prompt: PromptSpec, options: CompletionOptions) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt.user}]}],
            "generationConfig": {
                "temperature": options.temperature,
                "maxOutputTokens": options.max_output_tokens,
            },
        }
        if prompt.system is not None:
            payload["systemInstruction"] = {"parts": [{"text": prompt.system}]}
        return payload

    def _extract_text(self, body: Any) -> str:
        parts = body["candidates"][0]["content"]["parts"]
        return "".join(part.get("text", "") for part in parts)
