import pytest

from src.identifiers.enums import KeyState, KeyUse, VerificationMethodRelationship as Rel
from src.identifiers.errors import (
    ConcurrentModification,
    ErrorKind,
    IdentifierAccessDenied,
    IdentifierAlreadyExists,
    IdentifierNotFound,
)
from src.identifiers.models import IdentifierRecord
from src.identifiers.services import RotationFailed, RotationSucceeded, rotate_key
from src.identifiers.store import DjangoIdentifierStore

pytestmark = pytest.mark.django_db


@pytest.fixture
def db_store():
    return DjangoIdentifierStore(hide_forbidden=True)


def test_create_then_read(db_store, owner, provision):
    created = provision(target=db_store)

    loaded = db_store.read("123", owner)

    assert loaded.version == created.version == 1
    assert loaded.owner_id == "owner-1"
    assert loaded.controller_document.to_dict() == created.controller_document.to_dict()
    assert [kp.id for kp in loaded.key_pairs] == [kp.id for kp in created.key_pairs]
    assert loaded.get_current_key(KeyUse.SIGNING).private_key is not None


def test_unknown_identifier(db_store, owner):
    with pytest.raises(IdentifierNotFound):
        db_store.read("nope", owner)


def test_foreign_caller_sees_not_found_by_default(db_store, stranger, provision):
    provision(target=db_store)
    with pytest.raises(IdentifierNotFound):
        db_store.read("123", stranger)


def test_foreign_caller_sees_forbidden_when_configured(stranger, provision):
    store = DjangoIdentifierStore(hide_forbidden=False)
    provision(target=store)
    with pytest.raises(IdentifierAccessDenied):
        store.read("123", stranger)


def test_hide_forbidden_defaults_from_settings(settings):
    settings.IDENTIFIERS_HIDE_FORBIDDEN = False
    assert DjangoIdentifierStore().hide_forbidden is False


def test_create_twice(db_store, owner, provision):
    provision(target=db_store)
    with pytest.raises(IdentifierAlreadyExists):
        provision(target=db_store)
    assert IdentifierRecord.objects.count() == 1


def test_update_bumps_version(db_store, owner, provision):
    provision(target=db_store)

    result = rotate_key(store=db_store, identifier_id="123", use=KeyUse.SIGNING, caller=owner)

    assert isinstance(result, RotationSucceeded)
    assert IdentifierRecord.objects.get(identifier="123").version == 2
    assert db_store.read("123", owner).version == 2


def test_stale_version_is_rejected(db_store, owner, provision):
    provision(target=db_store)
    first = db_store.read("123", owner)
    second = db_store.read("123", owner)
    db_store.add_or_update(first)

    with pytest.raises(ConcurrentModification):
        db_store.add_or_update(second)
    assert IdentifierRecord.objects.get(identifier="123").version == 2


def test_historical_keys_are_stored_without_private_material(db_store, owner, provision):
    provision(target=db_store)
    old_id = db_store.read("123", owner).get_current_key(KeyUse.SIGNING).id

    rotate_key(store=db_store, identifier_id="123", use=KeyUse.SIGNING, caller=owner)

    rows = {row["id"]: row for row in IdentifierRecord.objects.get(identifier="123").key_pairs}
    assert rows[old_id]["state"] == KeyState.HISTORICAL.value
    assert "privateKey" not in rows[old_id]
    current = [row for row in rows.values() if row["state"] == KeyState.CURRENT.value]
    assert len(current) == 1
    assert current[0]["privateKey"]


def test_stored_document_has_no_private_jwk_members(db_store, owner, provision):
    provision(target=db_store)
    rotate_key(store=db_store, identifier_id="123", use=KeyUse.SIGNING, caller=owner)

    document = IdentifierRecord.objects.get(identifier="123").document
    assert len(document["verificationMethod"]) == 2
    assert all("d" not in vm["publicKeyJwk"] for vm in document["verificationMethod"])


def test_racing_rotations_commit_once(db_store, owner, provision, monkeypatch):
    provision(target=db_store)
    original_read = db_store.read
    racing, outcomes = [], []

    def read_then_race(identifier_id, caller):
        identifier = original_read(identifier_id, caller)
        if not racing:
            racing.append(identifier_id)
            outcomes.append(rotate_key(store=db_store, identifier_id=identifier_id, use=KeyUse.SIGNING, caller=caller))
        return identifier

    monkeypatch.setattr(db_store, "read", read_then_race)
    loser = rotate_key(store=db_store, identifier_id="123", use=KeyUse.SIGNING, caller=owner)
    monkeypatch.undo()
    winner = outcomes[0]

    assert isinstance(winner, RotationSucceeded)
    assert isinstance(loser, RotationFailed)
    assert loser.error.kind == ErrorKind.CONCURRENT_MODIFICATION

    stored = db_store.read("123", owner)
    assert stored.version == 2
    assert stored.get_current_key(KeyUse.SIGNING).id == winner.new_key_id
    assert len(stored.controller_document.relationship(Rel.AUTHENTICATION)) == 2
