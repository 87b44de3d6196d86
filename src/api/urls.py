from ninja_extra import NinjaExtraAPI
from ninja_jwt.controller import NinjaJWTDefaultController

from src.api.exception_handler import attach_exception_handlers

from src.identifiers.controllers.identifiers_controller import IdentifiersController


api = NinjaExtraAPI(title="DID Identifier Keys API", version="1.0.0", csrf=False)

# JWT Authentication
api.register_controllers(NinjaJWTDefaultController)

# Register exception handlers in one place
attach_exception_handlers(api)

api.register_controllers(
    IdentifiersController,
)
