from typing import Any

from code_helper.llm.base import HttpCompletionClient
from code_helper.models import CompletionOptions, PromptSpec, PromptStyle


class GroqCompletionClient(HttpCompletionClient):
    """Groq's OpenAI-compatible chat completions endpoint."""

    provider = "groq"
    display_name = "Groq"
    prompt_style = PromptStyle.CHAT
    default_base_url = "https://api.groq.com/openai/v1"

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}"}

    def _endpoint(self, options: CompletionOptions) -> str:
        return "/chat/completions"

    def _payload(self, prompt: PromptSpec, options: CompletionOptions) -> dict[str, Any]:
        return {
            "model": options.model,
            "messages": prompt.as_messages(),
            "temperature": options.temperature,
            "max_tokens": options.max_output_tokens,
        }

    def _extract_text(self, body: Any) -> str:
        content: str = body["choices"][0]["message"]["content"]
        return content
