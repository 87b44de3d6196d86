from config.env import env

# Controller documents are named "<prefix>:<identifier id>"
IDENTIFIERS_DID_PREFIX = env("IDENTIFIERS_DID_PREFIX", default="did:example")

# Answer 404 instead of 403 when the caller does not own the identifier
IDENTIFIERS_HIDE_FORBIDDEN = env.bool("IDENTIFIERS_HIDE_FORBIDDEN", default=True)

# Provisioning defaults (used when a create request omits a key spec)
IDENTIFIERS_DEFAULT_SIGNING_ALG = env("IDENTIFIERS_DEFAULT_SIGNING_ALG", default="ECDSA")
IDENTIFIERS_DEFAULT_SIGNING_SIZE = env.int("IDENTIFIERS_DEFAULT_SIGNING_SIZE", default=None)
IDENTIFIERS_DEFAULT_SIGNING_CURVE = env("IDENTIFIERS_DEFAULT_SIGNING_CURVE", default="P-256")
IDENTIFIERS_DEFAULT_AGREEMENT_CURVE = env("IDENTIFIERS_DEFAULT_AGREEMENT_CURVE", default="X25519")
