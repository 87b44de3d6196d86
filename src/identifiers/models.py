from django.db import models

from src.common.models import BaseModel


class IdentifierRecord(BaseModel):
    """
    Persisted identifier aggregate: key pairs plus controller document.
    ``version`` is bumped on every write and guards read-modify-write cycles.
    """

    identifier = models.CharField(max_length=255, unique=True)

    owner_id = models.CharField(
        max_length=255, db_index=True, help_text="Principal allowed to manage this identifier"
    )

    document = models.JSONField(help_text="Controller document (DID document JSON)")

    key_pairs = models.JSONField(
        default=list, help_text="Key pairs in creation order, current and historical"
    )

    version = models.PositiveIntegerField(default=1)

    class Meta:
        db_table = "identifiers"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.identifier}@v{self.version}"
