import json

from django.core.management.base import BaseCommand, CommandError

from src.identifiers.errors import DomainError
from src.identifiers.identity import AuthenticatedIdentity
from src.identifiers.requests import parse_rotation_query
from src.identifiers.services import RotationFailed, rotate_key
from src.identifiers.store import DjangoIdentifierStore


class Command(BaseCommand):
    help = "Roll the current key of an identifier for one use (sig | enc)."

    def add_arguments(self, parser):
        parser.add_argument("identifier", help="Identifier id.")
        parser.add_argument("--owner", required=True, help="Principal id acting on the identifier.")
        parser.add_argument("--use", default=None, help="Key use: sig (default) or enc.")
        parser.add_argument("--alg", default=None, help="Override the key algorithm.")
        parser.add_argument("--size", default=None, help="Override the key size.")
        parser.add_argument("--curve", default=None, help="Override the curve.")

    def handle(self, *args, **opts):
        try:
            query = parse_rotation_query(
                use=opts["use"], alg=opts["alg"], size=opts["size"], curve=opts["curve"]
            )
        except DomainError as exc:
            raise CommandError(f"{exc.code}: {exc.message}")

        result = rotate_key(
            store=DjangoIdentifierStore(),
            identifier_id=opts["identifier"],
            use=query.use,
            caller=AuthenticatedIdentity(principal_id=opts["owner"]),
            algorithm=query.algorithm,
            size=query.size,
            curve=query.curve,
        )
        if isinstance(result, RotationFailed):
            raise CommandError(f"{result.error.code}: {result.error.message}")

        self.stdout.write(json.dumps(result.document.to_dict(), indent=2))
        self.stdout.write(
            self.style.SUCCESS(f"Rolled {result.retired_key_id} -> {result.new_key_id}")
        )
