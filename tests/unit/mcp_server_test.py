"""Tests for the MCP server tool definitions."""

from __future__ import annotations

import asyncio
import inspect
from typing import Any

import pytest

from code_helper.errors import CompletionError
from code_helper.mcp.server import create_mcp_server
from code_helper.models import CompletionOptions
from tests.conftest import StubCompletionClient


def _tools(client: StubCompletionClient, max_code_length: int = 0) -> dict[str, Any]:
    server = create_mcp_server(client, CompletionOptions(model="m"), max_code_length)
    return asyncio.run(server.get_tools())


@pytest.fixture
def stub() -> StubCompletionClient:
    return StubCompletionClient(reply="model answer")


@pytest.fixture
def server_tools(stub: StubCompletionClient) -> dict[str, Any]:
    return _tools(stub)


class TestMcpServerCreation:
    def test_creates_server(self) -> None:
        server = create_mcp_server(StubCompletionClient(), CompletionOptions(model="m"))
        assert server is not None
        assert server.name == "code-helper"

    def test_server_has_tools(self, server_tools: dict[str, Any]) -> None:
        assert {"explain", "fix", "convert", "document", "render_prompt"} <= set(server_tools)

    def test_convert_requires_target_language(self, server_tools: dict[str, Any]) -> None:
        fn = server_tools["convert"].fn
        sig = inspect.signature(fn)
        assert sig.parameters["target_language"].default is inspect.Parameter.empty
        assert sig.parameters["language"].default == ""


class TestMcpTools:
    def test_fix_calls_the_model(self, server_tools: dict[str, Any], stub: StubCompletionClient) -> None:
        result = asyncio.run(server_tools["fix"].fn(code="def f(): retrun 1", language="python"))
        assert result == "model answer"
        prompt, options = stub.calls[0]
        assert "Fix errors in this python code" in prompt.user
        assert options.model == "m"

    def test_convert_passes_target_language(self, server_tools: dict[str, Any], stub: StubCompletionClient) -> None:
        asyncio.run(server_tools["convert"].fn(code="print(1)", target_language="go", language="python"))
        prompt, _ = stub.calls[0]
        assert "Convert this python code to go" in prompt.user

    def test_empty_code_returns_error_text(self, server_tools: dict[str, Any], stub: StubCompletionClient) -> None:
        result = asyncio.run(server_tools["explain"].fn(code=""))
        assert result == "Error: Fields 'taskType' and 'code' are required"
        assert stub.calls == []

    def test_oversized_code_returns_error_text(self) -> None:
        stub = StubCompletionClient()
        tools = _tools(stub, max_code_length=10)
        result = asyncio.run(tools["document"].fn(code="x" * 11))
        assert result.startswith("Error: ")
        assert stub.calls == []

    def test_completion_failure_returns_error_text(self) -> None:
        failing = StubCompletionClient(error=CompletionError("gemini", "rate_limit", "Gemini HTTP 429: quota"))
        tools = _tools(failing)
        result = asyncio.run(tools["fix"].fn(code="x = 1"))
        assert result == "Error: gemini rate_limit: Gemini HTTP 429: quota"

    def test_render_prompt_text(self, server_tools: dict[str, Any], stub: StubCompletionClient) -> None:
        result = asyncio.run(server_tools["render_prompt"].fn(task_type="explain", code="x = 1", language="python"))
        assert result.startswith("Explain this python code in simple language.")
        assert stub.calls == []

    def test_render_prompt_chat_includes_system_line(self, server_tools: dict[str, Any]) -> None:
        result = asyncio.run(server_tools["render_prompt"].fn(task_type="fix", code="x = 1", style="chat"))
        assert result.startswith("You are a precise coding assistant.\n\n")

    def test_render_prompt_unknown_style(self, server_tools: dict[str, Any]) -> None:
        result = asyncio.run(server_tools["render_prompt"].fn(task_type="fix", code="x = 1", style="xml"))
        assert result == "Error: unknown prompt style 'xml'"

    def test_render_prompt_unknown_task(self, server_tools: dict[str, Any]) -> None:
        result = asyncio.run(server_tools["render_prompt"].fn(task_type="refactor", code="x = 1"))
        assert result == "Error: Invalid task type: 'refactor'"
