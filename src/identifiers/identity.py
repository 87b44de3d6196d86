from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """The caller as seen by the store: an opaque principal id."""

    principal_id: str

    @classmethod
    def from_user(cls, user) -> "AuthenticatedIdentity":
        return cls(principal_id=str(getattr(user, "pk", None) or getattr(user, "id", "")))

    def __str__(self) -> str:
        return self.principal_id
