"""Tests for the task dispatcher."""

from __future__ import annotations

import pytest

from code_helper.core.prompts import SYSTEM_PROMPT, build_prompt, check_code_size, resolve_task_type
from code_helper.errors import CodeTooLargeError, MissingFieldError, UnsupportedTaskError
from code_helper.models import CodeTaskRequest, PromptStyle, TaskType

SNIPPET = 'def greet(name):\n    return f"Hello, {name}!"  # <b>&\\n</b>\n'


def _request(task_type: str, **kwargs: str) -> CodeTaskRequest:
    return CodeTaskRequest.create(task_type, kwargs.pop("code", SNIPPET), **kwargs)


class TestBuildPrompt:
    @pytest.mark.parametrize("task_type", [t.value for t in TaskType])
    def test_every_task_embeds_code_verbatim(self, task_type: str) -> None:
        prompt = build_prompt(_request(task_type, source_language="python", target_language="go"))
        assert prompt.user
        assert SNIPPET in prompt.user

    def test_explain_template(self) -> None:
        prompt = build_prompt(_request("explain", source_language="python", extra="focus on the f-string"))
        assert prompt.user.startswith("Explain this python code in simple language.")
        assert "step-by-step" in prompt.user
        assert prompt.user.rstrip().endswith("Extra: focus on the f-string")

    def test_explain_without_extra_says_none(self) -> None:
        prompt = build_prompt(_request("explain", source_language="python"))
        assert "Extra: None" in prompt.user

    def test_fix_template(self) -> None:
        prompt = build_prompt(CodeTaskRequest.create("fix", "def f(): retrun 1", "python"))
        assert "Fix errors in this python code" in prompt.user
        assert "corrected version" in prompt.user
        assert "def f(): retrun 1" in prompt.user

    def test_convert_template(self) -> None:
        prompt = build_prompt(CodeTaskRequest.create("convert", "print(1)", "python", "go"))
        assert "Convert this python code to go" in prompt.user
        assert "print(1)" in prompt.user

    def test_convert_with_empty_target_renders_empty_label(self) -> None:
        prompt = build_prompt(CodeTaskRequest.create("convert", "print(1)", "python", None))
        assert "Convert this python code to .\n" in prompt.user

    def test_document_template_lists_sections(self) -> None:
        prompt = build_prompt(_request("document", source_language="go"))
        assert prompt.user.startswith("Write documentation for this go code.")
        for section in ("Purpose", "Flow summary", "Function explanations", "Inputs & outputs", "Example usage"):
            assert f"- {section}" in prompt.user

    def test_missing_language_renders_empty_label(self) -> None:
        prompt = build_prompt(_request("fix"))
        assert prompt.user.startswith("Fix errors in this  code.")

    def test_text_style_has_no_system_part(self) -> None:
        prompt = build_prompt(_request("fix"), PromptStyle.TEXT)
        assert prompt.system is None
        assert prompt.as_text() == prompt.user
        assert prompt.as_messages() == [{"role": "user", "content": prompt.user}]

    def test_chat_style_adds_system_message(self) -> None:
        prompt = build_prompt(_request("fix"), PromptStyle.CHAT)
        assert prompt.system == SYSTEM_PROMPT
        messages = prompt.as_messages()
        assert [m["role"] for m in messages] == ["system", "user"]
        assert messages[1]["content"] == prompt.user
        assert prompt.as_text().startswith(SYSTEM_PROMPT)

    def test_same_input_gives_identical_prompt(self) -> None:
        request = _request("document", source_language="rust")
        assert build_prompt(request) == build_prompt(request)
        assert build_prompt(request).user == build_prompt(request).user


class TestValidation:
    def test_unknown_task_is_rejected(self) -> None:
        with pytest.raises(UnsupportedTaskError) as exc_info:
            build_prompt(_request("refactor"))
        assert exc_info.value.task_type == "refactor"

    def test_task_type_is_case_sensitive(self) -> None:
        with pytest.raises(UnsupportedTaskError):
            build_prompt(_request("Explain"))

    def test_missing_code(self) -> None:
        with pytest.raises(MissingFieldError) as exc_info:
            build_prompt(CodeTaskRequest.create("fix", ""))
        assert exc_info.value.fields == ("code",)

    def test_missing_task_type(self) -> None:
        with pytest.raises(MissingFieldError) as exc_info:
            build_prompt(CodeTaskRequest.create(None, "x = 1"))
        assert exc_info.value.fields == ("taskType",)

    def test_missing_both_fields(self) -> None:
        with pytest.raises(MissingFieldError) as exc_info:
            build_prompt(CodeTaskRequest.create(None, None))
        assert exc_info.value.fields == ("taskType", "code")
        assert str(exc_info.value) == "Fields 'taskType' and 'code' are required"

    def test_resolve_task_type(self) -> None:
        assert resolve_task_type("convert") is TaskType.CONVERT


class TestCheckCodeSize:
    def test_within_limit(self) -> None:
        check_code_size("x" * 10, 10)

    def test_over_limit(self) -> None:
        with pytest.raises(CodeTooLargeError) as exc_info:
            check_code_size("x" * 11, 10)
        assert exc_info.value.length == 11
        assert exc_info.value.limit == 10

    def test_zero_disables_limit(self) -> None:
        check_code_size("x" * 100_000, 0)
