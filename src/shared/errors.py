"""HTTP error mapping for domain and access-control exceptions.

Error bodies take one of two shapes:

- ``{"error": "message"}``
- ``{"error": {"field": ["message", ...]}}``
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from shared.logging import get_logger

logger = get_logger(__name__)


class AuthenticationError(Exception):
    """The request carries no valid session."""

    def __init__(self, message="Authentication required"):
        super().__init__(message)
        self.message = message


class AuthorizationError(Exception):
    """The session is valid but its role does not permit the action."""

    def __init__(self, message="Access denied"):
        super().__init__(message)
        self.message = message


def _error_body(exc):
    messages = getattr(exc, "messages", None)
    if isinstance(messages, dict | str) and messages:
        return {"error": messages}
    return {"error": str(exc) or exc.__class__.__name__}


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("request_rejected", path=request.url.path, errors=getattr(exc, "messages", None))
    return JSONResponse(status_code=400, content=_error_body(exc))


async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    logger.info("record_not_found", path=request.url.path)
    return JSONResponse(status_code=404, content={"error": "Not found"})


async def authentication_error_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
    return JSONResponse(status_code=401, content={"error": exc.message})


async def authorization_error_handler(request: Request, exc: AuthorizationError) -> JSONResponse:
    logger.warning("access_denied", path=request.url.path, reason=exc.message)
    return JSONResponse(status_code=403, content={"error": exc.message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(AuthenticationError, authentication_error_handler)
    app.add_exception_handler(AuthorizationError, authorization_error_handler)
