from __future__ import annotations
import base64
import hashlib

import rfc8785
from cryptography.hazmat.primitives.asymmetric import rsa, ec, ed25519, x25519
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)

# members that define the key, RFC 7638 section 3.2
THUMBPRINT_MEMBERS = {
    "EC": ("crv", "kty", "x", "y"),
    "OKP": ("crv", "kty", "x"),
    "RSA": ("e", "kty", "n"),
}

_EC_CURVE_NAMES = {
    "secp256r1": "P-256",
    "secp384r1": "P-384",
    "secp521r1": "P-521",
    "secp256k1": "secp256k1",
}


def _b64u(b: bytes) -> str:
    return base64.urlsafe_b64encode(b).rstrip(b"=").decode("ascii")


def _int_to_b64u(n: int, length: int | None = None) -> str:
    # big-endian, minimal length unless a fixed length is required
    size = length or (n.bit_length() + 7) // 8 or 1
    return _b64u(n.to_bytes(size, "big"))


def _coord_len(curve) -> int:
    return (curve.key_size + 7) // 8


def jwk_from_public_key(pub) -> dict:
    if isinstance(pub, rsa.RSAPublicKey):
        nums = pub.public_numbers()
        return {"kty": "RSA", "n": _int_to_b64u(nums.n), "e": _int_to_b64u(nums.e)}
    if isinstance(pub, ec.EllipticCurvePublicKey):
        nums = pub.public_numbers()
        size = _coord_len(pub.curve)
        name = pub.curve.name
        return {
            "kty": "EC",
            "crv": _EC_CURVE_NAMES.get(name, name),
            "x": _int_to_b64u(nums.x, size),
            "y": _int_to_b64u(nums.y, size),
        }
    if isinstance(pub, ed25519.Ed25519PublicKey):
        raw = pub.public_bytes(Encoding.Raw, PublicFormat.Raw)
        return {"kty": "OKP", "crv": "Ed25519", "x": _b64u(raw)}
    if isinstance(pub, x25519.X25519PublicKey):
        raw = pub.public_bytes(Encoding.Raw, PublicFormat.Raw)
        return {"kty": "OKP", "crv": "X25519", "x": _b64u(raw)}
    raise ValueError("Unsupported public key type")


def jwk_private_members(priv) -> dict:
    """Private JWK members for a loaded private key (merged over the public JWK)."""
    if isinstance(priv, rsa.RSAPrivateKey):
        nums = priv.private_numbers()
        return {
            "d": _int_to_b64u(nums.d),
            "p": _int_to_b64u(nums.p),
            "q": _int_to_b64u(nums.q),
            "dp": _int_to_b64u(nums.dmp1),
            "dq": _int_to_b64u(nums.dmq1),
            "qi": _int_to_b64u(nums.iqmp),
        }
    if isinstance(priv, ec.EllipticCurvePrivateKey):
        nums = priv.private_numbers()
        return {"d": _int_to_b64u(nums.private_value, _coord_len(priv.curve))}
    if isinstance(priv, (ed25519.Ed25519PrivateKey, x25519.X25519PrivateKey)):
        raw = priv.private_bytes(Encoding.Raw, PrivateFormat.Raw, NoEncryption())
        return {"d": _b64u(raw)}
    raise ValueError("Unsupported private key type")


def jwk_thumbprint(jwk: dict) -> str:
    """RFC 7638 SHA-256 thumbprint, base64url encoded."""
    members = THUMBPRINT_MEMBERS.get(jwk.get("kty"))
    if not members:
        raise ValueError(f"Unsupported JWK kty: {jwk.get('kty')!r}")
    required = {k: jwk[k] for k in members}
    return _b64u(hashlib.sha256(rfc8785.dumps(required)).digest())
