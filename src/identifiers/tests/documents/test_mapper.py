import pytest

from src.identifiers.documents.mapper import relationship_for, to_verification_method
from src.identifiers.enums import Curve, KeyAlgorithm, KeyUse, VerificationMethodRelationship
from src.identifiers.errors import UnsupportedKeyUse
from src.identifiers.keys.provider import create_key


def test_relationship_for_known_uses():
    assert relationship_for(KeyUse.SIGNING) == VerificationMethodRelationship.AUTHENTICATION
    assert relationship_for(KeyUse.KEY_AGREEMENT) == VerificationMethodRelationship.KEY_AGREEMENT


def test_relationship_for_fails_closed():
    with pytest.raises(UnsupportedKeyUse):
        relationship_for("wrap")


def test_signing_key_maps_to_jwk_2020_method():
    kp = create_key(KeyAlgorithm.ECDSA, KeyUse.SIGNING, curve=Curve.P_256)

    vm = to_verification_method(kp, "did:example:123")

    assert vm.id == f"did:example:123#{kp.id}"
    assert vm.controller == "did:example:123"
    assert vm.to_dict()["type"] == "JsonWebKey2020"
    jwk = vm.public_key_jwk
    assert jwk["kid"] == vm.id
    assert jwk["alg"] == "ES256"
    assert jwk["use"] == "sig"
    assert "d" not in jwk


def test_agreement_key_carries_no_jws_alg():
    kp = create_key(KeyAlgorithm.EDDSA, KeyUse.KEY_AGREEMENT, curve=Curve.X25519)

    jwk = to_verification_method(kp, "did:example:123").public_key_jwk

    assert "alg" not in jwk
    assert jwk["use"] == "enc"
