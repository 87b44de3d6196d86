"""
HTTP mapping for identifier key operations.

Every ``ErrorKind`` has exactly one row in ``FAILURE_LOG_LEVELS``; state errors are
logged at ERROR because they point at misconfiguration or a race, the rest are
client-recoverable and logged at INFO. Exceptions that are not ``DomainError``
are not handled here and reach the API's fault boundary untouched.
"""
from __future__ import annotations

import logging

from django.http import JsonResponse

from src.api.envelopes import envelope
from src.identifiers.errors import DomainError, ErrorKind, IdentifierNotProvided
from src.identifiers.presenters import controller_document_to_dto
from src.identifiers.requests import parse_rotation_query
from src.identifiers.services import RotationFailed, RotationSucceeded, rotate_key

logger = logging.getLogger(__name__)

FAILURE_LOG_LEVELS = {
    ErrorKind.IDENTIFIER_NOT_PROVIDED: logging.INFO,
    ErrorKind.IDENTIFIER_NOT_FOUND: logging.INFO,
    ErrorKind.IDENTIFIER_ACCESS_DENIED: logging.INFO,
    ErrorKind.IDENTIFIER_ALREADY_EXISTS: logging.INFO,
    ErrorKind.INVALID_KEY_PARAMETERS: logging.INFO,
    ErrorKind.UNSUPPORTED_KEY_USE: logging.INFO,
    ErrorKind.CONCURRENT_MODIFICATION: logging.INFO,
    ErrorKind.KEY_NOT_CONFIGURED: logging.ERROR,
    ErrorKind.NO_CURRENT_KEY: logging.ERROR,
    ErrorKind.DUPLICATE_CURRENT_KEY: logging.ERROR,
    ErrorKind.DUPLICATE_KEY_ID: logging.ERROR,
}


def failure_response(request, error: DomainError) -> JsonResponse:
    level = FAILURE_LOG_LEVELS[error.kind]
    logger.log(
        level,
        "identifier.request_failed kind=%s status=%s message=%s",
        error.kind.value,
        error.status,
        error.message,
        extra={"error_extra": error.extra},
    )
    return envelope(request, **error.envelope_fields())


def roll_key_response(request, identifier_id, *, store, caller, use=None, alg=None, size=None, curve=None):
    """Parse the roll query, rotate, and map the outcome to 201 or an error envelope."""
    if not identifier_id:
        # answered before any parsing or store access
        return failure_response(request, IdentifierNotProvided())

    try:
        query = parse_rotation_query(use=use, alg=alg, size=size, curve=curve)
    except DomainError as exc:
        return failure_response(request, exc)

    result = rotate_key(
        store=store,
        identifier_id=identifier_id,
        use=query.use,
        caller=caller,
        algorithm=query.algorithm,
        size=query.size,
        curve=query.curve,
    )
    if isinstance(result, RotationSucceeded):
        return JsonResponse(controller_document_to_dto(result.document), status=201)
    if isinstance(result, RotationFailed):
        return failure_response(request, result.error)
    raise TypeError(f"Unexpected rotation result: {result!r}")
