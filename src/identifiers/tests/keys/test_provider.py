import pytest

from src.identifiers.enums import Curve, KeyAlgorithm, KeyState, KeyUse
from src.identifiers.errors import InvalidKeyParameters
from src.identifiers.keys.jwk import jwk_thumbprint
from src.identifiers.keys.provider import create_key, inherit_parameters, resolve_parameters


def test_ecdsa_key_is_current_with_private_material():
    kp = create_key(KeyAlgorithm.ECDSA, KeyUse.SIGNING, curve=Curve.P_256)
    assert kp.state == KeyState.CURRENT
    assert kp.algorithm == KeyAlgorithm.ECDSA
    assert kp.curve == Curve.P_256
    assert kp.size == 256
    assert kp.private_key is not None and len(kp.private_key) > 0
    assert kp.public_key


def test_key_id_is_public_jwk_thumbprint():
    kp = create_key(KeyAlgorithm.EDDSA, KeyUse.SIGNING, curve=Curve.ED25519)
    assert kp.id == jwk_thumbprint(kp.as_jwk())


def test_each_key_gets_a_fresh_id():
    a = create_key(KeyAlgorithm.ECDSA, KeyUse.SIGNING, curve=Curve.P_256)
    b = create_key(KeyAlgorithm.ECDSA, KeyUse.SIGNING, curve=Curve.P_256)
    assert a.id != b.id


def test_rsa_key_uses_requested_size():
    kp = create_key(KeyAlgorithm.RSA, KeyUse.SIGNING, size=2048)
    assert kp.size == 2048
    assert kp.curve is None
    assert kp.as_jwk()["kty"] == "RSA"


def test_x25519_agreement_key():
    kp = create_key(KeyAlgorithm.EDDSA, KeyUse.KEY_AGREEMENT, curve=Curve.X25519)
    jwk = kp.as_jwk()
    assert (jwk["kty"], jwk["crv"]) == ("OKP", "X25519")
    assert kp.size == 256


def test_secp256k1_key_exports_jose_curve_name():
    kp = create_key(KeyAlgorithm.ECDSA, KeyUse.SIGNING, curve=Curve.SECP256K1)
    assert kp.as_jwk()["crv"] == "secp256k1"


@pytest.mark.parametrize(
    "algorithm,use,size,curve",
    [
        (KeyAlgorithm.RSA, KeyUse.SIGNING, None, None),
        (KeyAlgorithm.RSA, KeyUse.SIGNING, 1024, None),
        (KeyAlgorithm.ECDSA, KeyUse.SIGNING, None, None),
        (KeyAlgorithm.ECDSA, KeyUse.SIGNING, None, Curve.ED25519),
        (KeyAlgorithm.EDDSA, KeyUse.SIGNING, None, Curve.P_256),
        (KeyAlgorithm.EDDSA, KeyUse.SIGNING, None, Curve.X25519),
        (KeyAlgorithm.EDDSA, KeyUse.KEY_AGREEMENT, None, Curve.ED25519),
        (KeyAlgorithm.RSA, KeyUse.KEY_AGREEMENT, 2048, None),
        (None, KeyUse.SIGNING, None, Curve.P_256),
    ],
)
def test_invalid_parameters_are_rejected(algorithm, use, size, curve):
    with pytest.raises(InvalidKeyParameters):
        create_key(algorithm, use, size, curve)


def test_curve_given_with_rsa_is_rejected():
    with pytest.raises(InvalidKeyParameters):
        resolve_parameters(KeyAlgorithm.RSA, KeyUse.SIGNING, 3072, Curve.P_256)


def test_size_that_contradicts_the_curve_is_rejected():
    with pytest.raises(InvalidKeyParameters):
        resolve_parameters(KeyAlgorithm.ECDSA, KeyUse.SIGNING, 2048, Curve.P_384)


def test_size_matching_the_curve_is_accepted():
    assert resolve_parameters(KeyAlgorithm.ECDSA, KeyUse.SIGNING, 384, Curve.P_384) == (
        KeyAlgorithm.ECDSA,
        384,
        Curve.P_384,
    )


def test_inherit_parameters_skips_what_the_target_algorithm_does_not_take():
    ec_key = create_key(KeyAlgorithm.ECDSA, KeyUse.SIGNING, curve=Curve.P_256)
    rsa_key = create_key(KeyAlgorithm.RSA, KeyUse.SIGNING, size=2048)

    assert inherit_parameters(ec_key) == (KeyAlgorithm.ECDSA, None, Curve.P_256)
    assert inherit_parameters(ec_key, KeyAlgorithm.RSA, 3072) == (KeyAlgorithm.RSA, 3072, None)
    assert inherit_parameters(rsa_key) == (KeyAlgorithm.RSA, 2048, None)
    assert inherit_parameters(rsa_key, KeyAlgorithm.ECDSA, curve=Curve.P_384) == (
        KeyAlgorithm.ECDSA,
        None,
        Curve.P_384,
    )
    # ECDSA curves are not EdDSA curves
    assert inherit_parameters(ec_key, KeyAlgorithm.EDDSA) == (KeyAlgorithm.EDDSA, None, None)


def test_explicit_values_are_not_overwritten_by_inheritance():
    ec_key = create_key(KeyAlgorithm.ECDSA, KeyUse.SIGNING, curve=Curve.P_256)
    assert inherit_parameters(ec_key, size=4096) == (KeyAlgorithm.ECDSA, 4096, Curve.P_256)
