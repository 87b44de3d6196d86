import json

from django.core.management.base import BaseCommand, CommandError

from src.identifiers.errors import DomainError
from src.identifiers.identity import AuthenticatedIdentity
from src.identifiers.requests import parse_key_spec
from src.identifiers.services import (
    create_identifier,
    default_key_agreement_spec,
    default_signing_spec,
)
from src.identifiers.store import DjangoIdentifierStore


class Command(BaseCommand):
    help = "Provision an identifier with a current signing key (and optionally a key-agreement key)."

    def add_arguments(self, parser):
        parser.add_argument("identifier", help="Identifier id (e.g. 123).")
        parser.add_argument("--owner", required=True, help="Principal id that will own the identifier.")
        parser.add_argument("--alg", default=None, help="Signing key algorithm (ECDSA | EdDSA | RSA).")
        parser.add_argument("--size", default=None, help="Signing key size (RSA).")
        parser.add_argument("--curve", default=None, help="Signing key curve (P-256, Ed25519, ...).")
        parser.add_argument(
            "--with-key-agreement",
            action="store_true",
            help="Also create a key-agreement key using the configured default curve.",
        )

    def handle(self, *args, **opts):
        try:
            signing = (
                parse_key_spec(alg=opts["alg"], size=opts["size"], curve=opts["curve"])
                if opts["alg"]
                else default_signing_spec()
            )
            identifier = create_identifier(
                store=DjangoIdentifierStore(),
                identifier_id=opts["identifier"],
                caller=AuthenticatedIdentity(principal_id=opts["owner"]),
                signing=signing,
                key_agreement=default_key_agreement_spec() if opts["with_key_agreement"] else None,
            )
        except DomainError as exc:
            raise CommandError(f"{exc.code}: {exc.message}")

        self.stdout.write(json.dumps(identifier.controller_document.to_dict(), indent=2))
        self.stdout.write(self.style.SUCCESS(f"Identifier {identifier.id} created"))
