"""Interface layer errors and their HTTP translation."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from toplist.domain.error import CollaboratorUnavailableError, ValidationError


class InterfaceError(Exception):
    """Base interface error."""

    pass


class IdentityResolutionError(InterfaceError):
    """The voter's address could not be determined from the request."""

    pass


def register_error_handlers(app: FastAPI) -> None:
    """Map errors that can surface from any route to HTTP responses.

    Route-specific errors (cooldown, unknown server) are translated in the
    routes themselves.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(CollaboratorUnavailableError)
    async def _collaborator_unavailable(
        request: Request, exc: CollaboratorUnavailableError
    ) -> JSONResponse:
        logfire.error(
            "Request failed on unavailable collaborator",
            path=request.url.path,
            collaborator=exc.collaborator,
            operation=exc.operation,
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Voting is temporarily unavailable, try again later"},
        )

    @app.exception_handler(ValidationError)
    async def _domain_validation(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": str(exc)},
        )

    @app.exception_handler(IdentityResolutionError)
    async def _identity_unresolved(
        request: Request, exc: IdentityResolutionError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": str(exc)},
        )
