import copy

import pytest

from src.identifiers.aggregate import Identifier
from src.identifiers.enums import Curve, KeyAlgorithm
from src.identifiers.errors import ConcurrentModification, IdentifierAlreadyExists, IdentifierNotFound
from src.identifiers.identity import AuthenticatedIdentity
from src.identifiers.policies import can_manage_identifier
from src.identifiers.services import KeySpec, create_identifier


class FakeStore:
    """
    Dict-backed store with the same contract as DjangoIdentifierStore: plain JSON
    at rest, ownership check on read, version check on write.
    """

    def __init__(self):
        self.records = {}
        self.reads = 0
        self.writes = 0
        self.fail_next_write = None

    def exists(self, identifier_id):
        return identifier_id in self.records

    def read(self, identifier_id, caller):
        self.reads += 1
        rec = self.records.get(identifier_id)
        if rec is None or not can_manage_identifier(caller, rec["owner_id"]):
            raise IdentifierNotFound(identifier_id)
        return Identifier.from_parts(
            identifier_id=identifier_id,
            owner_id=rec["owner_id"],
            document=copy.deepcopy(rec["document"]),
            key_pairs=copy.deepcopy(rec["key_pairs"]),
            version=rec["version"],
        )

    def add_or_update(self, identifier):
        self.writes += 1
        if self.fail_next_write is not None:
            exc, self.fail_next_write = self.fail_next_write, None
            raise exc
        rec = self.records.get(identifier.id)
        if identifier.version is None:
            if rec is not None:
                raise IdentifierAlreadyExists(identifier.id)
            version = 1
        else:
            if rec is None or rec["version"] != identifier.version:
                raise ConcurrentModification(identifier.id)
            version = identifier.version + 1
        self.records[identifier.id] = {
            "owner_id": identifier.owner_id,
            "document": identifier.controller_document.to_dict(),
            "key_pairs": identifier.key_pairs_to_list(),
            "version": version,
        }
        identifier.version = version

    def snapshot(self, identifier_id):
        return copy.deepcopy(self.records[identifier_id])


P256_SIGNING = KeySpec(algorithm=KeyAlgorithm.ECDSA, curve=Curve.P_256)


@pytest.fixture
def owner():
    return AuthenticatedIdentity(principal_id="owner-1")


@pytest.fixture
def stranger():
    return AuthenticatedIdentity(principal_id="someone-else")


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def provision(store, owner):
    def _provision(identifier_id="123", signing=P256_SIGNING, key_agreement=None, target=None):
        return create_identifier(
            store=target or store,
            identifier_id=identifier_id,
            caller=owner,
            signing=signing,
            key_agreement=key_agreement,
        )

    return _provision
