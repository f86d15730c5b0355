from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# --- Requests ---


class CodeHelperRequest(BaseModel):
    """POST /api/code-helper. Presence of ``taskType`` and ``code`` is checked by the dispatcher."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    task_type: str | None = None
    code: str | None = None
    language: str | None = None
    target_language: str | None = None
    extra: str | None = None


class SignupRequest(BaseModel):
    name: str = ""
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class LoginRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


# --- Responses ---


class CodeHelperResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    task_type: str
    result: str


class MessageResponse(BaseModel):
    success: bool
    message: str


class PublicUser(BaseModel):
    id: int
    name: str
    email: str


class LoginResponse(MessageResponse):
    user: PublicUser


class HealthResponse(BaseModel):
    status: str = "ok"
    message: str = "AI Code Helper backend running"
    time: str


class ReadinessResponse(BaseModel):
    status: str
    user_store: str
