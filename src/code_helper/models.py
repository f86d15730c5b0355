"""Value objects shared by the dispatcher, the completion clients and the user stores."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class TaskType(str, Enum):
    EXPLAIN = "explain"
    FIX = "fix"
    CONVERT = "convert"
    DOCUMENT = "document"


class PromptStyle(str, Enum):
    """Shape in which a prompt is handed to a completion backend."""

    TEXT = "text"
    CHAT = "chat"


@dataclass(frozen=True)
class CodeTaskRequest:
    task_type: str
    source_code: str
    source_language: str = ""
    target_language: str = ""
    extra: str = ""

    @classmethod
    def create(
        cls,
        task_type: str | None,
        source_code: str | None,
        source_language: str | None = None,
        target_language: str | None = None,
        extra: str | None = None,
    ) -> CodeTaskRequest:
        """Build a request from loosely typed input, mapping ``None`` to ``""``."""
        return cls(
            task_type=task_type or "",
            source_code=source_code or "",
            source_language=source_language or "",
            target_language=target_language or "",
            extra=extra or "",
        )


@dataclass(frozen=True)
class PromptSpec:
    user: str
    system: str | None = None

    def as_text(self) -> str:
        if self.system is None:
            return self.user
        return f"{self.system}\n\n{self.user}"

    def as_messages(self) -> list[dict[str, str]]:
        messages: list[dict[str, str]] = []
        if self.system is not None:
            messages.append({"role": "system", "content": self.system})
        messages.append({"role": "user", "content": self.user})
        return messages


@dataclass(frozen=True)
class CompletionOptions:
    model: str
    max_output_tokens: int = 2048
    temperature: float = 0.3


@dataclass(frozen=True)
class UserRecord:
    id: int
    name: str
    email: str
    password: str

    def public(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "email": self.email}

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "email": self.email, "password": self.password}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> UserRecord:
        return cls(
            id=int(raw["id"]),
            name=str(raw.get("name") or ""),
            email=str(raw["email"]),
            password=str(raw["password"]),
        )
