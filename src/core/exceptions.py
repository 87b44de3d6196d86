from __future__ import annotations

from typing import Any


class APIError(Exception):
    """An error that is rendered as the standard response envelope."""

    def __init__(self, *, message: str, code: str, status: int, errors: Any = None, extra: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status
        self.errors = errors
        self.extra = extra or {}

    def envelope_fields(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "status": self.status,
            "code": self.code,
            "errors": self.errors,
            "extra": self.extra,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, status={self.status})"
