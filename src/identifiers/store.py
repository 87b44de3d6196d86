from __future__ import annotations

import logging

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from src.identifiers.aggregate import Identifier
from src.identifiers.errors import (
    ConcurrentModification,
    IdentifierAccessDenied,
    IdentifierAlreadyExists,
    IdentifierNotFound,
)
from src.identifiers.models import IdentifierRecord
from src.identifiers.policies import can_manage_identifier

logger = logging.getLogger(__name__)


class DjangoIdentifierStore:
    """
    Identifier persistence over the ORM.

    ``read`` enforces ownership; ``add_or_update`` writes the whole aggregate and
    rejects the write when the stored version moved since ``read`` (optimistic
    concurrency), so two rotations racing on one identifier cannot both commit.
    """

    def __init__(self, *, hide_forbidden: bool | None = None):
        if hide_forbidden is None:
            hide_forbidden = getattr(settings, "IDENTIFIERS_HIDE_FORBIDDEN", True)
        self.hide_forbidden = hide_forbidden

    def exists(self, identifier_id: str) -> bool:
        return IdentifierRecord.objects.filter(identifier=identifier_id).exists()

    def read(self, identifier_id: str, caller) -> Identifier:
        try:
            record = IdentifierRecord.objects.get(identifier=identifier_id)
        except IdentifierRecord.DoesNotExist:
            raise IdentifierNotFound(identifier_id)

        if not can_manage_identifier(caller, record.owner_id):
            if self.hide_forbidden:
                raise IdentifierNotFound(identifier_id)
            raise IdentifierAccessDenied(identifier_id)

        return Identifier.from_parts(
            identifier_id=record.identifier,
            owner_id=record.owner_id,
            document=record.document,
            key_pairs=record.key_pairs,
            version=record.version,
        )

    def add_or_update(self, identifier: Identifier) -> None:
        document = identifier.controller_document.to_dict()
        key_pairs = identifier.key_pairs_to_list()

        if identifier.version is None:
            try:
                with transaction.atomic():
                    record = IdentifierRecord.objects.create(
                        identifier=identifier.id,
                        owner_id=identifier.owner_id,
                        document=document,
                        key_pairs=key_pairs,
                    )
            except IntegrityError:
                raise IdentifierAlreadyExists(identifier.id)
            identifier.version = record.version
            return

        with transaction.atomic():
            updated = IdentifierRecord.objects.filter(
                identifier=identifier.id, version=identifier.version
            ).update(
                document=document,
                key_pairs=key_pairs,
                version=F("version") + 1,
                updated_at=timezone.now(),
            )
        if updated != 1:
            logger.info(
                "identifier.write_conflict identifier=%s expected_version=%s",
                identifier.id,
                identifier.version,
            )
            raise ConcurrentModification(identifier.id)
        identifier.version += 1
