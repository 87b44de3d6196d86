from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Any

from cryptography.hazmat.primitives import serialization

from src.identifiers.enums import Curve, KeyAlgorithm, KeyState, KeyUse
from src.identifiers.errors import InvalidKeyParameters
from src.identifiers.keys.jwk import jwk_from_public_key, jwk_private_members
from src.identifiers.keys.material import PrivateKeyMaterial


@dataclass(eq=False)
class KeyPair:
    """
    One asymmetric key owned by an identifier.

    ``public_key`` is SubjectPublicKeyInfo DER and is always present.
    ``private_key`` exists only while the key is current; ``retire()`` wipes it.
    """

    id: str
    algorithm: KeyAlgorithm
    size: int
    use: KeyUse
    public_key: bytes
    curve: Curve | None = None
    state: KeyState = KeyState.CURRENT
    private_key: PrivateKeyMaterial | None = field(default=None, repr=False)

    @property
    def is_current(self) -> bool:
        return self.state == KeyState.CURRENT

    def load_public_key(self):
        return serialization.load_der_public_key(self.public_key)

    def retire(self) -> None:
        if self.private_key is not None:
            self.private_key.wipe()
            self.private_key = None
        self.state = KeyState.HISTORICAL

    def as_jwk(self, include_private: bool = False) -> dict:
        jwk = jwk_from_public_key(self.load_public_key())
        if include_private:
            if self.private_key is None:
                raise InvalidKeyParameters(
                    f"Key '{self.id}' holds no private material", key_id=self.id
                )
            with self.private_key.borrowed() as der:
                priv = serialization.load_der_private_key(der, password=None)
            jwk.update(jwk_private_members(priv))
        return jwk

    # Store boundary

    def to_dict(self) -> dict[str, Any]:
        out = {
            "id": self.id,
            "algorithm": self.algorithm.value,
            "size": self.size,
            "curve": self.curve.value if self.curve else None,
            "use": self.use.value,
            "state": self.state.value,
            "publicKey": _b64(self.public_key),
        }
        if self.private_key is not None and self.is_current:
            out["privateKey"] = self.private_key.to_b64()
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "KeyPair":
        state = KeyState(data["state"])
        private = data.get("privateKey")
        return cls(
            id=data["id"],
            algorithm=KeyAlgorithm(data["algorithm"]),
            size=int(data["size"]),
            curve=Curve(data["curve"]) if data.get("curve") else None,
            use=KeyUse(data["use"]),
            state=state,
            public_key=_unb64(data["publicKey"]),
            private_key=PrivateKeyMaterial.from_b64(private)
            if private and state == KeyState.CURRENT
            else None,
        )

    def summary(self) -> dict[str, Any]:
        """Public view used by key listings."""
        return {
            "id": self.id,
            "algorithm": self.algorithm.value,
            "size": self.size,
            "curve": self.curve.value if self.curve else None,
            "use": self.use.value,
            "state": self.state.value,
            "publicKeyJwk": self.as_jwk(),
        }


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _unb64(value: str) -> bytes:
    return base64.b64decode(value)
