from django.http import JsonResponse
from ninja import Body
from ninja_extra import api_controller, route
from ninja_jwt.authentication import JWTAuth

from src.identifiers.controllers.responses import failure_response, roll_key_response
from src.identifiers.errors import DomainError
from src.identifiers.identity import AuthenticatedIdentity
from src.identifiers.presenters import controller_document_to_dto, key_list_to_dto
from src.identifiers.requests import parse_key_spec
from src.identifiers.schemas import IdentifierCreateIn
from src.identifiers.services import (
    create_identifier,
    default_key_agreement_spec,
    default_signing_spec,
    get_controller_document,
    list_keys,
)
from src.identifiers.store import DjangoIdentifierStore


@api_controller("/identifiers", tags=["Identifiers"], auth=JWTAuth())
class IdentifiersController:
    store_class = DjangoIdentifierStore

    def _store(self):
        return self.store_class()

    @route.post("")
    def create(self, request, body: IdentifierCreateIn = Body(...)):
        caller = AuthenticatedIdentity.from_user(request.user)
        try:
            signing = (
                parse_key_spec(alg=body.signing.alg, size=body.signing.size, curve=body.signing.curve)
                if body.signing
                else default_signing_spec()
            )
            key_agreement = None
            if body.key_agreement:
                key_agreement = parse_key_spec(
                    alg=body.key_agreement.alg,
                    size=body.key_agreement.size,
                    curve=body.key_agreement.curve,
                )
            identifier = create_identifier(
                store=self._store(),
                identifier_id=body.id,
                caller=caller,
                signing=signing,
                key_agreement=key_agreement,
            )
        except DomainError as exc:
            return failure_response(request, exc)
        return JsonResponse(controller_document_to_dto(identifier.controller_document), status=201)

    @route.get("/{identifier_id}")
    def read(self, request, identifier_id: str):
        caller = AuthenticatedIdentity.from_user(request.user)
        try:
            document = get_controller_document(store=self._store(), identifier_id=identifier_id, caller=caller)
        except DomainError as exc:
            return failure_response(request, exc)
        return JsonResponse(controller_document_to_dto(document), status=200)

    @route.get("/{identifier_id}/keys")
    def keys(self, request, identifier_id: str):
        caller = AuthenticatedIdentity.from_user(request.user)
        try:
            keys = list_keys(store=self._store(), identifier_id=identifier_id, caller=caller)
        except DomainError as exc:
            return failure_response(request, exc)
        return JsonResponse(key_list_to_dto(identifier_id, keys), status=200)

    @route.post("/{identifier_id}/keys/roll")
    def roll(
        self,
        request,
        identifier_id: str,
        use: str | None = None,
        alg: str | None = None,
        size: str | None = None,
        curve: str | None = None,
    ):
        """
        Roll the current key for ``use`` (default ``sig``). ``alg``, ``size`` and
        ``curve`` default to the current key's values.
        """
        return roll_key_response(
            request,
            identifier_id,
            store=self._store(),
            caller=AuthenticatedIdentity.from_user(request.user),
            use=use,
            alg=alg,
            size=size,
            curve=curve,
        )
