"""Exception hierarchy used across the code helper.

Client-input problems derive from ``ValidationError``; provider failures are
all reported as a single ``CompletionError`` carrying a ``kind``.
"""

from __future__ import annotations

from collections.abc import Sequence


class CodeHelperError(Exception):
    """Base class for every error raised on purpose by this package."""


class ConfigError(CodeHelperError):
    """Configuration is missing or invalid."""


class ValidationError(CodeHelperError):
    """The inbound request cannot be turned into a prompt."""


class MissingFieldError(ValidationError):
    def __init__(self, fields: Sequence[str]) -> None:
        self.fields = tuple(fields)
        super().__init__("Fields 'taskType' and 'code' are required")


class UnsupportedTaskError(ValidationError):
    def __init__(self, task_type: str) -> None:
        self.task_type = task_type
        super().__init__(f"Invalid task type: {task_type!r}")


class CodeTooLargeError(ValidationError):
    def __init__(self, length: int, limit: int) -> None:
        self.length = length
        self.limit = limit
        super().__init__(f"Code is too large ({length} characters, limit is {limit})")


class CompletionError(CodeHelperError):
    """A completion provider could not produce text.

    ``kind`` is one of ``auth``, ``rate_limit``, ``timeout``, ``network``,
    ``malformed_response`` or ``provider``.
    """

    def __init__(self, provider: str, kind: str, message: str, status_code: int | None = None) -> None:
        self.provider = provider
        self.kind = kind
        self.status_code = status_code
        super().__init__(message)

    @property
    def retryable(self) -> bool:
        if self.kind in ("rate_limit", "network"):
            return True
        return self.kind == "provider" and self.status_code is not None and self.status_code >= 500


class AuthError(CodeHelperError):
    """Signup or login was refused."""


class DuplicateEmailError(AuthError):
    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("Email already exists!")
