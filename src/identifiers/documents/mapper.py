from __future__ import annotations

from src.identifiers.documents.controller_document import VerificationMethod
from src.identifiers.enums import Curve, KeyAlgorithm, KeyUse, VerificationMethodRelationship
from src.identifiers.errors import UnsupportedKeyUse
from src.identifiers.keys.pairs import KeyPair

RELATIONSHIP_FOR_USE = {
    KeyUse.SIGNING: VerificationMethodRelationship.AUTHENTICATION,
    KeyUse.KEY_AGREEMENT: VerificationMethodRelationship.KEY_AGREEMENT,
}

_EC_SIGNING_ALGS = {
    Curve.P_256: "ES256",
    Curve.P_384: "ES384",
    Curve.P_521: "ES512",
    Curve.SECP256K1: "ES256K",
}


def relationship_for(use) -> VerificationMethodRelationship:
    try:
        return RELATIONSHIP_FOR_USE[use]
    except KeyError:
        raise UnsupportedKeyUse(use) from None


def verification_method_id(controller_document_id: str, key_id: str) -> str:
    return f"{controller_document_id}#{key_id}"


def choose_jws_alg(key_pair: KeyPair) -> str | None:
    # agreement keys carry no JWS alg
    if key_pair.use != KeyUse.SIGNING:
        return None
    if key_pair.algorithm == KeyAlgorithm.RSA:
        return "RS256"
    if key_pair.algorithm == KeyAlgorithm.EDDSA:
        return "EdDSA"
    return _EC_SIGNING_ALGS.get(key_pair.curve)


def to_verification_method(key_pair: KeyPair, controller_document_id: str) -> VerificationMethod:
    relationship_for(key_pair.use)  # fail closed on unmapped uses
    vm_id = verification_method_id(controller_document_id, key_pair.id)

    jwk = key_pair.as_jwk(include_private=False)
    jwk["kid"] = vm_id
    alg = choose_jws_alg(key_pair)
    if alg:
        jwk["alg"] = alg
    jwk["use"] = key_pair.use.value

    return VerificationMethod(id=vm_id, controller=controller_document_id, public_key_jwk=jwk)
