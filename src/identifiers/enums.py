from django.db import models


class KeyUse(models.TextChoices):
    SIGNING = "sig", "Signing"
    KEY_AGREEMENT = "enc", "Key agreement"


class KeyAlgorithm(models.TextChoices):
    ECDSA = "ECDSA", "ECDSA"
    EDDSA = "EdDSA", "EdDSA"
    RSA = "RSA", "RSA"


class Curve(models.TextChoices):
    P_256 = "P-256", "NIST P-256"
    P_384 = "P-384", "NIST P-384"
    P_521 = "P-521", "NIST P-521"
    SECP256K1 = "secp256k1", "secp256k1"
    ED25519 = "Ed25519", "Ed25519"
    X25519 = "X25519", "X25519"


class KeyState(models.TextChoices):
    CURRENT = "current", "Current"
    HISTORICAL = "historical", "Historical"


class VerificationMethodRelationship(models.TextChoices):
    AUTHENTICATION = "authentication", "Authentication"
    KEY_AGREEMENT = "keyAgreement", "Key agreement"


class VerificationMethodType(models.TextChoices):
    JSON_WEB_KEY_2020 = "JsonWebKey2020", "JsonWebKey2020"


# Input aliases (cryptography / lowercase spellings) -> canonical JOSE names
CURVE_ALIASES = {
    "secp256r1": Curve.P_256,
    "prime256v1": Curve.P_256,
    "secp384r1": Curve.P_384,
    "secp521r1": Curve.P_521,
    "ed25519": Curve.ED25519,
    "x25519": Curve.X25519,
}
