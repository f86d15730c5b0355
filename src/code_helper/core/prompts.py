"""Task dispatcher: maps a task tag onto one of four prompt templates."""

from __future__ import annotations

from code_helper.errors import CodeTooLargeError, MissingFieldError, UnsupportedTaskError
from code_helper.models import CodeTaskRequest, PromptSpec, PromptStyle, TaskType

SYSTEM_PROMPT = "You are a precise coding assistant."


def _explain(request: CodeTaskRequest) -> str:
    return (
        f"Explain this {request.source_language} code in simple language.\n"
        "Break it step-by-step:\n"
        "\n"
        f"{request.source_code}\n"
        "\n"
        f"Extra: {request.extra or 'None'}\n"
    )


def _fix(request: CodeTaskRequest) -> str:
    return (
        f"Fix errors in this {request.source_language} code.\n"
        "Find the bugs, explain the mistakes and give a corrected version:\n"
        "\n"
        f"{request.source_code}\n"
    )


def _convert(request: CodeTaskRequest) -> str:
    # An empty target renders an empty label, it is not rejected.
    return (
        f"Convert this {request.source_language} code to {request.target_language}.\n"
        "Preserve the logic and optimize where possible:\n"
        "\n"
        f"{request.source_code}\n"
    )


def _document(request: CodeTaskRequest) -> str:
    return (
        f"Write documentation for this {request.source_language} code.\n"
        "Include:\n"
        "- Purpose\n"
        "- Flow summary\n"
        "- Function explanations\n"
        "- Inputs & outputs\n"
        "- Example usage\n"
        "\n"
        f"{request.source_code}\n"
    )


_TEMPLATES = {
    TaskType.EXPLAIN: _explain,
    TaskType.FIX: _fix,
    TaskType.CONVERT: _convert,
    TaskType.DOCUMENT: _document,
}


def resolve_task_type(task_type: str) -> TaskType:
    try:
        return TaskType(task_type)
    except ValueError:
        raise UnsupportedTaskError(task_type) from None


def build_prompt(request: CodeTaskRequest, style: PromptStyle = PromptStyle.TEXT) -> PromptSpec:
    """Render the prompt for *request*.

    ``PromptStyle.TEXT`` yields a single user text; ``PromptStyle.CHAT`` adds
    the system message expected by chat-completion backends.

    Raises ``MissingFieldError`` when ``task_type`` or ``source_code`` is empty
    and ``UnsupportedTaskError`` for an unknown tag.
    """
    missing = [name for name, value in (("taskType", request.task_type), ("code", request.source_code)) if not value]
    if missing:
        raise MissingFieldError(missing)

    render = _TEMPLATES[resolve_task_type(request.task_type)]
    text = render(request)
    if style is PromptStyle.CHAT:
        return PromptSpec(user=text, system=SYSTEM_PROMPT)
    return PromptSpec(user=text)


def check_code_size(code: str, limit: int) -> None:
    """Raise ``CodeTooLargeError`` if *code* exceeds *limit* characters. ``limit <= 0`` disables the check."""
    if limit > 0 and len(code) > limit:
        raise CodeTooLargeError(len(code), limit)
