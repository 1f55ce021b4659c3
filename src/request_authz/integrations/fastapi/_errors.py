"""Exception handlers for FastAPI integration."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from request_authz.exceptions import (
    AuthorizationDenied,
    AuthorizationRequiredError,
    InvalidConfiguration,
    MissingIdentity,
    NoPolicyError,
)

__all__ = ["install_error_handlers"]


def install_error_handlers(app: FastAPI) -> None:
    """Install exception handlers for request-authz errors on a FastAPI app.

    Converts authorization exceptions into HTTP responses:

    - ``AuthorizationDenied`` -> 403 Forbidden
    - ``MissingIdentity`` -> 401 Unauthorized
    - ``InvalidConfiguration``, ``NoPolicyError`` and
      ``AuthorizationRequiredError`` -> 500 Internal Server Error

    Configuration errors are rendered without request-specific detail.

    Example::

        app = FastAPI()
        install_error_handlers(app)
    """

    @app.exception_handler(AuthorizationDenied)
    async def authz_denied_handler(  # pyright: ignore[reportUnusedFunction]
        request: object, exc: AuthorizationDenied
    ) -> JSONResponse:
        return JSONResponse(status_code=403, content={"detail": str(exc)})

    @app.exception_handler(MissingIdentity)
    async def missing_identity_handler(  # pyright: ignore[reportUnusedFunction]
        request: object, exc: MissingIdentity
    ) -> JSONResponse:
        return JSONResponse(status_code=401, content={"detail": str(exc)})

    @app.exception_handler(InvalidConfiguration)
    async def invalid_configuration_handler(  # pyright: ignore[reportUnusedFunction]
        request: object, exc: InvalidConfiguration
    ) -> JSONResponse:
        return JSONResponse(status_code=500, content={"detail": "Authorization is misconfigured"})

    @app.exception_handler(NoPolicyError)
    async def no_policy_handler(  # pyright: ignore[reportUnusedFunction]
        request: object, exc: NoPolicyError
    ) -> JSONResponse:
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    @app.exception_handler(AuthorizationRequiredError)
    async def authorization_required_handler(  # pyright: ignore[reportUnusedFunction]
        request: object, exc: AuthorizationRequiredError
    ) -> JSONResponse:
        return JSONResponse(status_code=500, content={"detail": str(exc)})
