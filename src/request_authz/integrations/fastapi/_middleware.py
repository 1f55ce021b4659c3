"""End-of-request authorization check for FastAPI apps."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from request_authz.exceptions import AuthorizationRequiredError

__all__ = ["install_authorization_check"]


def install_authorization_check(app: FastAPI) -> None:
    """Fail successful responses of requests that were never authorized.

    ``AuthzDep`` leaves the request's service on ``request.state``. Once
    the endpoint has produced a response below 400, the service must be
    authorized, scoped or skipped; otherwise the response is replaced by
    a 500 error. Requests that never resolved ``AuthzDep`` are untouched.

    Example::

        app = FastAPI()
        install_error_handlers(app)
        install_authorization_check(app)
    """

    @app.middleware("http")
    async def authorization_check(  # pyright: ignore[reportUnusedFunction]
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        service = getattr(request.state, "request_authz_service", None)
        if service is None or response.status_code >= 400:
            return response
        middleware = request.state.request_authz_middleware
        try:
            middleware.verify(request.state.request_authz_context, service)
        except AuthorizationRequiredError as exc:
            return JSONResponse(status_code=500, content={"detail": str(exc)})
        return response
