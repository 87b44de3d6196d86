import pytest

from src.identifiers.enums import Curve, KeyAlgorithm, KeyUse
from src.identifiers.errors import InvalidKeyParameters, UnsupportedKeyUse
from src.identifiers.requests import parse_curve, parse_key_spec, parse_rotation_query
from src.identifiers.services import KeySpec


def test_blank_query_means_signing_with_inherited_parameters():
    query = parse_rotation_query(use="", alg=" ", size=None, curve="")

    assert query.use == KeyUse.SIGNING
    assert (query.algorithm, query.size, query.curve) == (None, None, None)


def test_algorithm_is_case_insensitive():
    assert parse_rotation_query(alg="eddsa").algorithm == KeyAlgorithm.EDDSA
    assert parse_rotation_query(alg="ECDSA").algorithm == KeyAlgorithm.ECDSA


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("P-384", Curve.P_384),
        ("prime256v1", Curve.P_256),
        ("secp521r1", Curve.P_521),
        ("X25519", Curve.X25519),
        ("ed25519", Curve.ED25519),
    ],
)
def test_curve_aliases(raw, expected):
    assert parse_curve(raw) == expected


def test_unknown_curve():
    with pytest.raises(InvalidKeyParameters):
        parse_curve("brainpoolP256r1")


def test_unknown_use():
    with pytest.raises(UnsupportedKeyUse):
        parse_rotation_query(use="wrapKey")


def test_size_must_be_numeric():
    with pytest.raises(InvalidKeyParameters):
        parse_rotation_query(size="2k")


def test_key_spec_requires_algorithm():
    with pytest.raises(InvalidKeyParameters):
        parse_key_spec(size="2048")


def test_key_spec():
    assert parse_key_spec(alg="RSA", size="4096") == KeySpec(algorithm=KeyAlgorithm.RSA, size=4096)
