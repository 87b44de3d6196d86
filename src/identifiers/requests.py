from __future__ import annotations

from dataclasses import dataclass

from src.identifiers.enums import CURVE_ALIASES, Curve, KeyAlgorithm, KeyUse
from src.identifiers.errors import InvalidKeyParameters, UnsupportedKeyUse
from src.identifiers.services import KeySpec


@dataclass(frozen=True)
class RotationQuery:
    use: KeyUse = KeyUse.SIGNING
    algorithm: KeyAlgorithm | None = None
    size: int | None = None
    curve: Curve | None = None


def _blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_use(value, default: KeyUse = KeyUse.SIGNING) -> KeyUse:
    if _blank(value):
        return default
    try:
        return KeyUse(value.strip())
    except ValueError:
        raise UnsupportedKeyUse(value) from None


def parse_algorithm(value) -> KeyAlgorithm | None:
    if _blank(value):
        return None
    token = value.strip()
    for alg in KeyAlgorithm:
        if alg.value.lower() == token.lower():
            return alg
    raise InvalidKeyParameters(f"Unknown key algorithm: {value!r}", alg=value)


def parse_size(value) -> int | None:
    if _blank(value):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(value.strip())
    except ValueError:
        raise InvalidKeyParameters(f"Key size must be an integer, got {value!r}", size=value) from None


def parse_curve(value) -> Curve | None:
    if _blank(value):
        return None
    token = value.strip()
    if token in Curve.values:
        return Curve(token)
    alias = CURVE_ALIASES.get(token.lower())
    if alias is None:
        raise InvalidKeyParameters(f"Unknown curve: {value!r}", curve=value)
    return alias


def parse_rotation_query(*, use=None, alg=None, size=None, curve=None) -> RotationQuery:
    return RotationQuery(
        use=parse_use(use),
        algorithm=parse_algorithm(alg),
        size=parse_size(size),
        curve=parse_curve(curve),
    )


def parse_key_spec(*, alg=None, size=None, curve=None) -> KeySpec:
    algorithm = parse_algorithm(alg)
    if algorithm is None:
        raise InvalidKeyParameters("A key algorithm is required")
    return KeySpec(algorithm=algorithm, size=parse_size(size), curve=parse_curve(curve))
