from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from src.identifiers.documents.controller_document import ControllerDocument
from src.identifiers.enums import KeyState, KeyUse
from src.identifiers.errors import DuplicateCurrentKey, DuplicateKeyId, NoCurrentKey
from src.identifiers.keys.pairs import KeyPair


def controller_document_id(prefix: str, identifier_id: str) -> str:
    return f"{prefix}:{identifier_id}"


@dataclass(eq=False)
class Identifier:
    """
    Aggregate root: one identifier, all its key pairs in creation order, and its
    controller document. ``version`` is the store's concurrency token (None until
    first persisted).
    """

    id: str
    owner_id: str
    controller_document: ControllerDocument
    key_pairs: list[KeyPair] = field(default_factory=list)
    version: int | None = None

    def _current(self, use: KeyUse) -> list[KeyPair]:
        return [kp for kp in self.key_pairs if kp.use == use and kp.state == KeyState.CURRENT]

    def get_current_key(self, use: KeyUse) -> KeyPair | None:
        matches = self._current(use)
        if len(matches) > 1:
            raise DuplicateCurrentKey(self.id, use)
        return matches[0] if matches else None

    def get_key(self, key_id: str) -> KeyPair | None:
        for kp in self.key_pairs:
            if kp.id == key_id:
                return kp
        return None

    def retire_current_key(self, use: KeyUse) -> KeyPair:
        current = self.get_current_key(use)
        if current is None:
            raise NoCurrentKey(self.id, use)
        current.retire()
        return current

    def add_key(self, key_pair: KeyPair) -> None:
        if key_pair.state != KeyState.CURRENT:
            raise ValueError("Only current keys can be added to an identifier")
        if self.get_current_key(key_pair.use) is not None:
            raise DuplicateCurrentKey(self.id, key_pair.use)
        if self.get_key(key_pair.id) is not None:
            raise DuplicateKeyId(self.id, key_pair.id)
        self.key_pairs.append(key_pair)

    # Store boundary

    def key_pairs_to_list(self) -> list[dict[str, Any]]:
        return [kp.to_dict() for kp in self.key_pairs]

    @classmethod
    def from_parts(
        cls,
        *,
        identifier_id: str,
        owner_id: str,
        document: dict[str, Any],
        key_pairs: list[dict[str, Any]],
        version: int | None,
    ) -> "Identifier":
        return cls(
            id=identifier_id,
            owner_id=owner_id,
            controller_document=ControllerDocument.from_dict(document),
            key_pairs=[KeyPair.from_dict(kp) for kp in key_pairs],
            version=version,
        )
