from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Union

from django.conf import settings

from src.identifiers.aggregate import Identifier, controller_document_id
from src.identifiers.documents.controller_document import ControllerDocument
from src.identifiers.documents.mapper import relationship_for, to_verification_method
from src.identifiers.enums import Curve, KeyAlgorithm, KeyUse
from src.identifiers.errors import (
    DomainError,
    IdentifierAlreadyExists,
    IdentifierNotProvided,
    KeyNotConfigured,
)
from src.identifiers.keys.pairs import KeyPair
from src.identifiers.keys.provider import create_key, inherit_parameters

logger = logging.getLogger(__name__)

KeyFactory = Callable[..., KeyPair]


@dataclass(frozen=True)
class KeySpec:
    algorithm: KeyAlgorithm
    size: int | None = None
    curve: Curve | None = None


@dataclass(frozen=True)
class RotationSucceeded:
    document: ControllerDocument
    retired_key_id: str
    new_key_id: str


@dataclass(frozen=True)
class RotationFailed:
    error: DomainError


RotationResult = Union[RotationSucceeded, RotationFailed]


def did_prefix() -> str:
    return getattr(settings, "IDENTIFIERS_DID_PREFIX", "did:example")


def _attach_key(identifier: Identifier, key_pair: KeyPair) -> None:
    identifier.add_key(key_pair)
    method = to_verification_method(key_pair, identifier.controller_document.id)
    identifier.controller_document.add_verification_method(method, [relationship_for(key_pair.use)])


def rotate_key(
    *,
    store,
    identifier_id: str | None,
    use: KeyUse,
    caller,
    algorithm: KeyAlgorithm | None = None,
    size: int | None = None,
    curve: Curve | None = None,
    key_factory: KeyFactory = create_key,
) -> RotationResult:
    """
    Retire the current key for ``use`` and replace it with a fresh one.

    Parameters not overridden are inherited from the retired key when the
    target algorithm takes them; explicit values that do not fit it fail. The loaded
    aggregate is private to this call and is only committed by the store's
    ``add_or_update``; when that raises, nothing of the mutation is visible.

    Known domain failures come back as ``RotationFailed``; anything else raises.
    """
    try:
        if not identifier_id:
            raise IdentifierNotProvided()

        identifier = store.read(identifier_id, caller)

        current = identifier.get_current_key(use)
        if current is None:
            raise KeyNotConfigured(identifier_id, use)

        new_algorithm, new_size, new_curve = inherit_parameters(current, algorithm, size, curve)
        new_key = key_factory(new_algorithm, use, new_size, new_curve)

        # nothing is mutated before this point
        retired = identifier.retire_current_key(use)
        _attach_key(identifier, new_key)

        store.add_or_update(identifier)
    except DomainError as exc:
        return RotationFailed(error=exc)

    logger.info(
        "identifier.key_rotated identifier=%s use=%s retired_key=%s new_key=%s",
        identifier.id,
        use.value,
        retired.id,
        new_key.id,
    )
    return RotationSucceeded(
        document=identifier.controller_document,
        retired_key_id=retired.id,
        new_key_id=new_key.id,
    )


def create_identifier(
    *,
    store,
    identifier_id: str | None,
    caller,
    signing: KeySpec,
    key_agreement: KeySpec | None = None,
    key_factory: KeyFactory = create_key,
) -> Identifier:
    """
    Provision a new identifier with a current signing key and, optionally, a
    key-agreement key. Raises DomainError subclasses on failure.
    """
    if not identifier_id:
        raise IdentifierNotProvided()
    if store.exists(identifier_id):
        raise IdentifierAlreadyExists(identifier_id)

    identifier = Identifier(
        id=identifier_id,
        owner_id=caller.principal_id,
        controller_document=ControllerDocument(id=controller_document_id(did_prefix(), identifier_id)),
    )

    specs = [(KeyUse.SIGNING, signing)]
    if key_agreement is not None:
        specs.append((KeyUse.KEY_AGREEMENT, key_agreement))

    # generate everything first so a bad spec leaves nothing half-built
    keys = [key_factory(spec.algorithm, use, spec.size, spec.curve) for use, spec in specs]
    for key_pair in keys:
        _attach_key(identifier, key_pair)

    store.add_or_update(identifier)
    logger.info(
        "identifier.created identifier=%s owner=%s keys=%s",
        identifier.id,
        identifier.owner_id,
        ",".join(kp.id for kp in keys),
    )
    return identifier


def get_controller_document(*, store, identifier_id: str | None, caller) -> ControllerDocument:
    if not identifier_id:
        raise IdentifierNotProvided()
    return store.read(identifier_id, caller).controller_document


def list_keys(*, store, identifier_id: str | None, caller) -> list[dict]:
    if not identifier_id:
        raise IdentifierNotProvided()
    return [kp.summary() for kp in store.read(identifier_id, caller).key_pairs]


def default_signing_spec() -> KeySpec:
    return KeySpec(
        algorithm=KeyAlgorithm(getattr(settings, "IDENTIFIERS_DEFAULT_SIGNING_ALG", KeyAlgorithm.ECDSA)),
        size=getattr(settings, "IDENTIFIERS_DEFAULT_SIGNING_SIZE", None),
        curve=_curve_or_none(getattr(settings, "IDENTIFIERS_DEFAULT_SIGNING_CURVE", Curve.P_256)),
    )


def default_key_agreement_spec() -> KeySpec:
    curve = Curve(getattr(settings, "IDENTIFIERS_DEFAULT_AGREEMENT_CURVE", Curve.X25519))
    # X25519 is filed under the EdDSA (OKP) family; it is an XDH curve, not a signature scheme
    algorithm = KeyAlgorithm.EDDSA if curve == Curve.X25519 else KeyAlgorithm.ECDSA
    return KeySpec(algorithm=algorithm, curve=curve)


def _curve_or_none(value) -> Curve | None:
    return Curve(value) if value else None
