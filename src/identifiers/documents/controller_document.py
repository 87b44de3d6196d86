from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from src.identifiers.documents.ordering import order_controller_document
from src.identifiers.documents.validators import validate_controller_document
from src.identifiers.enums import VerificationMethodRelationship, VerificationMethodType

DEFAULT_CONTEXT = [
    "https://www.w3.org/ns/did/v1",
    "https://w3id.org/security/suites/jws-2020/v1",
]


@dataclass(frozen=True)
class VerificationMethod:
    id: str
    controller: str
    public_key_jwk: dict
    type: VerificationMethodType = VerificationMethodType.JSON_WEB_KEY_2020

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "controller": self.controller,
            "publicKeyJwk": dict(self.public_key_jwk),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VerificationMethod":
        return cls(
            id=data["id"],
            controller=data["controller"],
            public_key_jwk=dict(data["publicKeyJwk"]),
            type=VerificationMethodType(data["type"]),
        )


@dataclass
class ControllerDocument:
    """
    A DID document restricted to what the key lifecycle touches.

    Methods are never removed: historical keys keep their entry, and their
    relationship references, so past signatures stay verifiable.
    """

    id: str
    verification_methods: list[VerificationMethod] = field(default_factory=list)
    relationships: dict[VerificationMethodRelationship, list[str]] = field(default_factory=dict)
    context: list[str] = field(default_factory=lambda: list(DEFAULT_CONTEXT))

    def get_verification_method(self, method_id: str) -> VerificationMethod | None:
        for vm in self.verification_methods:
            if vm.id == method_id:
                return vm
        return None

    def relationship(self, relationship: VerificationMethodRelationship) -> list[str]:
        return list(self.relationships.get(relationship, []))

    def add_verification_method(
        self,
        method: VerificationMethod,
        relationships: Iterable[VerificationMethodRelationship],
    ) -> None:
        # idempotent per (method id, relationship)
        if self.get_verification_method(method.id) is None:
            self.verification_methods.append(method)
        for rel in relationships:
            refs = self.relationships.setdefault(VerificationMethodRelationship(rel), [])
            if method.id not in refs:
                refs.append(method.id)

    # Store boundary

    def to_dict(self) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "@context": list(self.context),
            "id": self.id,
            "controller": self.id,
            "verificationMethod": [vm.to_dict() for vm in self.verification_methods],
        }
        for rel in VerificationMethodRelationship:
            refs = self.relationships.get(rel)
            if refs:
                doc[rel.value] = list(refs)
        return order_controller_document(doc)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ControllerDocument":
        validate_controller_document(data)
        methods = [VerificationMethod.from_dict(vm) for vm in data.get("verificationMethod", [])]
        known = {vm.id for vm in methods}
        relationships: dict[VerificationMethodRelationship, list[str]] = {}
        for rel in VerificationMethodRelationship:
            refs = data.get(rel.value) or []
            dangling = [r for r in refs if r not in known]
            if dangling:
                raise ValueError(
                    f"{rel.value} references unknown verification method(s): {', '.join(dangling)}"
                )
            if refs:
                relationships[rel] = list(refs)
        return cls(
            id=data["id"],
            verification_methods=methods,
            relationships=relationships,
            context=list(data.get("@context") or DEFAULT_CONTEXT),
        )
