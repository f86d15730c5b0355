from typing import Protocol

from code_helper.models import CompletionOptions, PromptSpec, PromptStyle


class CompletionClient(Protocol):
    provider: str
    prompt_style: PromptStyle

    async def complete(self, prompt: PromptSpec, options: CompletionOptions) -> str: ...

    async def aclose(self) -> None: ...
