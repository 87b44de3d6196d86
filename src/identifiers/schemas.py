from ninja import Field, Schema


class KeySpecIn(Schema):
    alg: str
    size: int | None = None
    curve: str | None = None


class IdentifierCreateIn(Schema):
    id: str
    signing: KeySpecIn | None = None
    key_agreement: KeySpecIn | None = Field(None, alias="keyAgreement")
