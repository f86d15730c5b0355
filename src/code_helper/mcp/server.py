"""FastMCP server exposing the code-helper tasks as tools."""

from __future__ import annotations

from fastmcp import FastMCP

from code_helper.core.ports.completion import CompletionClient
from code_helper.core.prompts import build_prompt
from code_helper.core.tasks import run_task
from code_helper.errors import CompletionError, ValidationError
from code_helper.models import CodeTaskRequest, CompletionOptions, PromptStyle


def create_mcp_server(
    client: CompletionClient,
    options: CompletionOptions,
    max_code_length: int = 0,
) -> FastMCP:
    """Create a FastMCP server wired to the given completion client."""

    mcp = FastMCP("code-helper", instructions="Explain, fix, convert and document code snippets.")

    async def _run(request: CodeTaskRequest) -> str:
        try:
            return await run_task(client, request, options, max_code_length)
        except ValidationError as exc:
            return f"Error: {exc}"
        except CompletionError as exc:
            return f"Error: {exc.provider} {exc.kind}: {exc}"

    @mcp.tool()
    async def explain(code: str, language: str = "", extra: str = "") -> str:
        """Explain a code snippet step by step."""
        return await _run(CodeTaskRequest.create("explain", code, source_language=language, extra=extra))

    @mcp.tool()
    async def fix(code: str, language: str = "") -> str:
        """Find bugs in a code snippet and propose a corrected version."""
        return await _run(CodeTaskRequest.create("fix", code, source_language=language))

    @mcp.tool()
    async def convert(code: str, target_language: str, language: str = "") -> str:
        """Convert a code snippet to another language."""
        return await _run(
            CodeTaskRequest.create("convert", code, source_language=language, target_language=target_language)
        )

    @mcp.tool()
    async def document(code: str, language: str = "") -> str:
        """Write documentation for a code snippet."""
        return await _run(CodeTaskRequest.create("document", code, source_language=language))

    @mcp.tool()
    async def render_prompt(
        task_type: str,
        code: str,
        language: str = "",
        target_language: str = "",
        extra: str = "",
        style: str = "text",
    ) -> str:
        """Return the prompt that would be sent for a task, without calling the model."""
        request = CodeTaskRequest.create(task_type, code, language, target_language, extra)
        try:
            return build_prompt(request, PromptStyle(style)).as_text()
        except ValidationError as exc:
            return f"Error: {exc}"
        except ValueError:
            return f"Error: unknown prompt style {style!r}"

    return mcp
