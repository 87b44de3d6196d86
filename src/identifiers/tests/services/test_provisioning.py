import pytest

from src.identifiers.enums import Curve, KeyAlgorithm, KeyUse, VerificationMethodRelationship as Rel
from src.identifiers.errors import (
    IdentifierAlreadyExists,
    IdentifierNotFound,
    IdentifierNotProvided,
    InvalidKeyParameters,
)
from src.identifiers.services import (
    KeySpec,
    create_identifier,
    default_key_agreement_spec,
    default_signing_spec,
    get_controller_document,
    list_keys,
)


def test_create_identifier_publishes_both_relationships(store, owner, provision):
    identifier = provision(key_agreement=KeySpec(algorithm=KeyAlgorithm.EDDSA, curve=Curve.X25519))

    doc = get_controller_document(store=store, identifier_id="123", caller=owner)

    assert doc.id == "did:example:123"
    assert identifier.version == 1
    signing = identifier.get_current_key(KeyUse.SIGNING)
    agreement = identifier.get_current_key(KeyUse.KEY_AGREEMENT)
    assert doc.relationship(Rel.AUTHENTICATION) == [f"did:example:123#{signing.id}"]
    assert doc.relationship(Rel.KEY_AGREEMENT) == [f"did:example:123#{agreement.id}"]


def test_create_identifier_twice(provision):
    provision()
    with pytest.raises(IdentifierAlreadyExists):
        provision()


def test_create_identifier_requires_id(provision):
    with pytest.raises(IdentifierNotProvided):
        provision(identifier_id="")


def test_bad_key_spec_leaves_store_empty(store, provision):
    with pytest.raises(InvalidKeyParameters):
        provision(
            key_agreement=KeySpec(algorithm=KeyAlgorithm.EDDSA, curve=Curve.ED25519),
        )
    assert store.records == {}


def test_list_keys_never_exposes_private_material(store, owner, provision):
    provision()

    keys = list_keys(store=store, identifier_id="123", caller=owner)

    assert len(keys) == 1
    assert keys[0]["state"] == "current"
    assert "d" not in keys[0]["publicKeyJwk"]
    assert "privateKey" not in keys[0]


def test_reads_are_owner_only(store, stranger, provision):
    provision()
    with pytest.raises(IdentifierNotFound):
        get_controller_document(store=store, identifier_id="123", caller=stranger)


def test_default_specs_follow_settings(settings):
    settings.IDENTIFIERS_DEFAULT_SIGNING_ALG = "RSA"
    settings.IDENTIFIERS_DEFAULT_SIGNING_SIZE = 3072
    settings.IDENTIFIERS_DEFAULT_SIGNING_CURVE = ""
    settings.IDENTIFIERS_DEFAULT_AGREEMENT_CURVE = "P-256"

    assert default_signing_spec() == KeySpec(algorithm=KeyAlgorithm.RSA, size=3072, curve=None)
    assert default_key_agreement_spec() == KeySpec(algorithm=KeyAlgorithm.ECDSA, curve=Curve.P_256)


def test_did_prefix_follows_settings(settings, store, owner):
    settings.IDENTIFIERS_DID_PREFIX = "did:web:registry.example"

    identifier = create_identifier(
        store=store,
        identifier_id="abc",
        caller=owner,
        signing=KeySpec(algorithm=KeyAlgorithm.EDDSA, curve=Curve.ED25519),
    )

    assert identifier.controller_document.id == "did:web:registry.example:abc"
