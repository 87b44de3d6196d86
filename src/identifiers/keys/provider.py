from __future__ import annotations

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa, x25519

from src.identifiers.enums import Curve, KeyAlgorithm, KeyUse
from src.identifiers.errors import InvalidKeyParameters, UnsupportedKeyUse
from src.identifiers.keys.jwk import jwk_from_public_key, jwk_thumbprint
from src.identifiers.keys.material import PrivateKeyMaterial
from src.identifiers.keys.pairs import KeyPair

RSA_SIZES = (2048, 3072, 4096)
RSA_PUBLIC_EXPONENT = 65537

# curve -> bit size
CURVE_SIZES = {
    Curve.P_256: 256,
    Curve.P_384: 384,
    Curve.P_521: 521,
    Curve.SECP256K1: 256,
    Curve.ED25519: 256,
    Curve.X25519: 256,
}

# EdDSA stands for the OKP key family of RFC 8037: Ed25519 signs, X25519 is an
# XDH agreement curve and never signs (see _check_use)
ALGORITHM_CURVES = {
    KeyAlgorithm.ECDSA: {Curve.P_256, Curve.P_384, Curve.P_521, Curve.SECP256K1},
    KeyAlgorithm.EDDSA: {Curve.ED25519, Curve.X25519},
}

_EC_CURVES = {
    Curve.P_256: ec.SECP256R1,
    Curve.P_384: ec.SECP384R1,
    Curve.P_521: ec.SECP521R1,
    Curve.SECP256K1: ec.SECP256K1,
}

# Ed25519 and RSA sign only, X25519 only agrees
_SIGNING_ONLY = {Curve.ED25519}
_AGREEMENT_ONLY = {Curve.X25519}


def _check_use(algorithm: KeyAlgorithm, use: KeyUse, curve: Curve | None) -> None:
    if use not in (KeyUse.SIGNING, KeyUse.KEY_AGREEMENT):
        raise UnsupportedKeyUse(use)
    if use == KeyUse.KEY_AGREEMENT and (algorithm == KeyAlgorithm.RSA or curve in _SIGNING_ONLY):
        raise InvalidKeyParameters(
            f"{curve or algorithm} keys cannot be used for key agreement",
            algorithm=str(algorithm),
            use=str(use),
        )
    if use == KeyUse.SIGNING and curve in _AGREEMENT_ONLY:
        raise InvalidKeyParameters(
            f"{curve} keys cannot be used for signing",
            algorithm=str(algorithm),
            use=str(use),
        )


def resolve_parameters(
    algorithm: KeyAlgorithm | None,
    use: KeyUse,
    size: int | None = None,
    curve: Curve | None = None,
) -> tuple[KeyAlgorithm, int, Curve | None]:
    """
    Validate (algorithm, use, size, curve) and return the normalized triple.

    RSA takes a size and no curve. Curve algorithms take a curve, and a size is only
    accepted when it matches the curve's own size.
    """
    if algorithm is None:
        raise InvalidKeyParameters("A key algorithm is required")

    if algorithm == KeyAlgorithm.RSA:
        if curve is not None:
            raise InvalidKeyParameters(
                "RSA keys do not take a curve",
                algorithm=str(algorithm),
                curve=str(curve),
            )
        if size is None:
            raise InvalidKeyParameters("RSA keys require a size", algorithm=str(algorithm))
        if size not in RSA_SIZES:
            raise InvalidKeyParameters(
                f"RSA key size must be one of {', '.join(map(str, RSA_SIZES))}",
                algorithm=str(algorithm),
                size=size,
            )
        _check_use(algorithm, use, None)
        return algorithm, size, None

    allowed = ALGORITHM_CURVES.get(algorithm)
    if allowed is None:
        raise InvalidKeyParameters(f"Unsupported key algorithm: {algorithm}")
    if curve is None:
        raise InvalidKeyParameters(f"{algorithm} keys require a curve", algorithm=str(algorithm))
    if curve not in allowed:
        raise InvalidKeyParameters(
            f"Curve {curve} is not compatible with {algorithm}",
            algorithm=str(algorithm),
            curve=str(curve),
        )
    if size is not None and size != CURVE_SIZES[curve]:
        raise InvalidKeyParameters(
            f"{curve} keys are {CURVE_SIZES[curve]} bits, got size {size}",
            algorithm=str(algorithm),
            curve=str(curve),
            size=size,
        )
    _check_use(algorithm, use, curve)
    return algorithm, CURVE_SIZES[curve], curve


def inherit_parameters(
    current: KeyPair,
    algorithm: KeyAlgorithm | None = None,
    size: int | None = None,
    curve: Curve | None = None,
) -> tuple[KeyAlgorithm, int | None, Curve | None]:
    """
    Fill the parameters a rotation did not override from the retired key.

    Only parameters the target algorithm takes are inherited: an RSA size never
    reaches a curve algorithm and a curve never reaches RSA. Explicit values are
    passed through untouched so ``resolve_parameters`` can reject them.
    """
    target = algorithm or current.algorithm
    if target == KeyAlgorithm.RSA:
        if size is None and current.algorithm == KeyAlgorithm.RSA:
            size = current.size
    elif curve is None and current.curve in ALGORITHM_CURVES.get(target, ()):
        curve = current.curve
    return target, size, curve


def _generate(algorithm: KeyAlgorithm, size: int, curve: Curve | None):
    if algorithm == KeyAlgorithm.RSA:
        return rsa.generate_private_key(public_exponent=RSA_PUBLIC_EXPONENT, key_size=size)
    if algorithm == KeyAlgorithm.ECDSA:
        return ec.generate_private_key(_EC_CURVES[curve]())
    if curve == Curve.ED25519:
        return ed25519.Ed25519PrivateKey.generate()
    return x25519.X25519PrivateKey.generate()


def create_key(
    algorithm: KeyAlgorithm | None,
    use: KeyUse,
    size: int | None = None,
    curve: Curve | None = None,
) -> KeyPair:
    """
    Generate a fresh current key pair. The id is the JWK thumbprint of the public key.
    Raises InvalidKeyParameters / UnsupportedKeyUse before any key is generated.
    """
    algorithm, size, curve = resolve_parameters(algorithm, use, size, curve)
    priv = _generate(algorithm, size, curve)
    pub = priv.public_key()

    private_der = PrivateKeyMaterial(
        priv.private_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )
    )
    public_der = pub.public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )

    return KeyPair(
        id=jwk_thumbprint(jwk_from_public_key(pub)),
        algorithm=algorithm,
        size=size,
        curve=curve,
        use=use,
        public_key=public_der,
        private_key=private_der,
    )
