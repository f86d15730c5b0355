from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.markdown import Markdown

from code_helper.config import Settings, load_settings
from code_helper.core.prompts import build_prompt
from code_helper.core.tasks import run_task
from code_helper.errors import CompletionError, ConfigError, ValidationError
from code_helper.llm.factory import completion_options
from code_helper.models import CodeTaskRequest, PromptStyle

if TYPE_CHECKING:
    from code_helper.core.ports.completion import CompletionClient

console = Console()
err_console = Console(stderr=True)

TaskArg = Annotated[str, typer.Argument(help="Task type: explain, fix, convert or document.")]
CodeArg = Annotated[
    str | None, typer.Argument(help="Code snippet. Read from --file or standard input when omitted.")
]
FileOpt = Annotated[Path | None, typer.Option("--file", "-f", help="Read the code from this file.")]
LanguageOpt = Annotated[str, typer.Option("--language", "-l", help="Source language label, e.g. python.")]
TargetOpt = Annotated[str, typer.Option("--target", "-t", help="Target language for 'convert'.")]
ExtraOpt = Annotated[str, typer.Option(help="Extra instructions for 'explain'.")]


def _read_code(code: str | None, file: Path | None) -> str:
    if code is not None:
        return code
    if file is not None:
        return file.read_text(encoding="utf-8")
    return typer.get_text_stream("stdin").read()


def _get_client(settings: Settings) -> CompletionClient:
    from code_helper.llm.factory import create_completion_client

    return create_completion_client(settings)


def prompt(
    task: TaskArg,
    code: CodeArg = None,
    file: FileOpt = None,
    language: LanguageOpt = "",
    target: TargetOpt = "",
    extra: ExtraOpt = "",
    style: Annotated[PromptStyle, typer.Option(help="Prompt shape to render.")] = PromptStyle.TEXT,
) -> None:
    """Print the prompt a task would send, without calling the model."""
    request = CodeTaskRequest.create(task, _read_code(code, file), language, target, extra)
    try:
        rendered = build_prompt(request, style)
    except ValidationError as exc:
        err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc

    if style is PromptStyle.CHAT:
        for message in rendered.as_messages():
            console.print(f"[bold]{message['role']}:[/bold]")
            console.print(message["content"], markup=False, highlight=False)
    else:
        console.print(rendered.as_text(), markup=False, highlight=False)


def ask(
    task: TaskArg,
    code: CodeArg = None,
    file: FileOpt = None,
    language: LanguageOpt = "",
    target: TargetOpt = "",
    extra: ExtraOpt = "",
    raw: Annotated[bool, typer.Option(help="Print the answer as plain text instead of rendered Markdown.")] = False,
) -> None:
    """Run a task against the configured LLM provider and print the answer."""
    try:
        settings = load_settings()
    except ConfigError as exc:
        err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc

    request = CodeTaskRequest.create(task, _read_code(code, file), language, target, extra)
    client = _get_client(settings)

    async def _run() -> str:
        try:
            return await run_task(client, request, completion_options(settings), settings.max_code_length)
        finally:
            await client.aclose()

    try:
        result = asyncio.run(_run())
    except (ValidationError, CompletionError) as exc:
        err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc

    if raw:
        console.print(result, markup=False, highlight=False)
    else:
        console.print(Markdown(result))
