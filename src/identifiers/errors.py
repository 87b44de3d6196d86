"""
Domain failures of the identifier key lifecycle.

Every failure the rotation engine knows about is a ``DomainError`` tagged with an
``ErrorKind``. The transport adapter matches on the kind; anything that is not a
``DomainError`` is an internal fault and is left to propagate.
"""
from __future__ import annotations

import enum
from typing import Any

from src.core.exceptions import APIError


class ErrorKind(str, enum.Enum):
    IDENTIFIER_NOT_PROVIDED = "IDENTIFIER_NOT_PROVIDED"
    IDENTIFIER_NOT_FOUND = "IDENTIFIER_NOT_FOUND"
    IDENTIFIER_ACCESS_DENIED = "IDENTIFIER_ACCESS_DENIED"
    IDENTIFIER_ALREADY_EXISTS = "IDENTIFIER_ALREADY_EXISTS"
    KEY_NOT_CONFIGURED = "KEY_NOT_CONFIGURED"
    NO_CURRENT_KEY = "NO_CURRENT_KEY"
    DUPLICATE_CURRENT_KEY = "DUPLICATE_CURRENT_KEY"
    DUPLICATE_KEY_ID = "DUPLICATE_KEY_ID"
    INVALID_KEY_PARAMETERS = "INVALID_KEY_PARAMETERS"
    UNSUPPORTED_KEY_USE = "UNSUPPORTED_KEY_USE"
    CONCURRENT_MODIFICATION = "CONCURRENT_MODIFICATION"


class DomainError(APIError):
    kind: ErrorKind
    status: int = 400

    def __init__(self, message: str, *, errors: Any = None, extra: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code=self.kind.value,
            status=type(self).status,
            errors=errors,
            extra=extra,
        )


# Request shape


class IdentifierNotProvided(DomainError):
    kind = ErrorKind.IDENTIFIER_NOT_PROVIDED
    status = 400

    def __init__(self):
        super().__init__("An identifier must be provided")


# Authorization / lookup (raised by the store)


class IdentifierNotFound(DomainError):
    kind = ErrorKind.IDENTIFIER_NOT_FOUND
    status = 404

    def __init__(self, identifier_id: str):
        super().__init__(
            f"Identifier '{identifier_id}' not found",
            extra={"identifier": identifier_id},
        )


class IdentifierAccessDenied(DomainError):
    kind = ErrorKind.IDENTIFIER_ACCESS_DENIED
    status = 403

    def __init__(self, identifier_id: str):
        super().__init__(
            f"Caller is not permitted to manage identifier '{identifier_id}'",
            extra={"identifier": identifier_id},
        )


class IdentifierAlreadyExists(DomainError):
    kind = ErrorKind.IDENTIFIER_ALREADY_EXISTS
    status = 409

    def __init__(self, identifier_id: str):
        super().__init__(
            f"Identifier '{identifier_id}' already exists",
            extra={"identifier": identifier_id},
        )


# Aggregate state


class KeyNotConfigured(DomainError):
    kind = ErrorKind.KEY_NOT_CONFIGURED
    status = 400

    def __init__(self, identifier_id: str, use):
        super().__init__(
            f"Identifier '{identifier_id}' has no current key configured for use '{use}'",
            extra={"identifier": identifier_id, "use": str(use)},
        )


class NoCurrentKey(DomainError):
    kind = ErrorKind.NO_CURRENT_KEY
    status = 409

    def __init__(self, identifier_id: str, use):
        super().__init__(
            f"Identifier '{identifier_id}' has no current key to retire for use '{use}'",
            extra={"identifier": identifier_id, "use": str(use)},
        )


class DuplicateCurrentKey(DomainError):
    kind = ErrorKind.DUPLICATE_CURRENT_KEY
    status = 409

    def __init__(self, identifier_id: str, use):
        super().__init__(
            f"Identifier '{identifier_id}' already has a current key for use '{use}'",
            extra={"identifier": identifier_id, "use": str(use)},
        )


class DuplicateKeyId(DomainError):
    kind = ErrorKind.DUPLICATE_KEY_ID
    status = 409

    def __init__(self, identifier_id: str, key_id: str):
        super().__init__(
            f"Identifier '{identifier_id}' already holds a key with id '{key_id}'",
            extra={"identifier": identifier_id, "key_id": key_id},
        )


# Validation


class InvalidKeyParameters(DomainError):
    kind = ErrorKind.INVALID_KEY_PARAMETERS
    status = 422

    def __init__(self, message: str, **details):
        super().__init__(message, errors=details or None)


class UnsupportedKeyUse(DomainError):
    kind = ErrorKind.UNSUPPORTED_KEY_USE
    status = 422

    def __init__(self, use):
        super().__init__(f"Unsupported key use: {use!r}", extra={"use": str(use)})


# Concurrency


class ConcurrentModification(DomainError):
    kind = ErrorKind.CONCURRENT_MODIFICATION
    status = 409

    def __init__(self, identifier_id: str):
        super().__init__(
            f"Identifier '{identifier_id}' was modified concurrently, retry the request",
            extra={"identifier": identifier_id},
        )
