"""Flask extension for request-authz authorization."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from flask import Flask, Response, current_app, g, jsonify, request

from request_authz.component._component import AuthorizationComponent
from request_authz.config._config import ComponentConfig
from request_authz.exceptions import (
    AuthorizationDenied,
    AuthorizationRequiredError,
    InvalidConfiguration,
    MissingIdentity,
    NoPolicyError,
)
from request_authz.lifecycle import Controller
from request_authz.middleware._middleware import AuthorizationMiddleware
from request_authz.policy._resolver import PolicyResolver
from request_authz.request import RequestContext

__all__ = ["AuthzExtension"]

F = TypeVar("F", bound=Callable[..., Any])

_MODEL_ATTR = "_request_authz_model"


class _ViewController(Controller):
    """Controller adapter over a Flask view function."""

    def __init__(self, request: RequestContext, view: Callable[..., Any] | None) -> None:
        super().__init__(request)
        self._view = view

    def load_model(self) -> Any:
        model = getattr(self._view, _MODEL_ATTR, None)
        if model is None:
            raise InvalidConfiguration(
                key=str(self.request.get_param("action")),
                expected="a view registered with @authz.model(...)",
                actual_type="NoneType",
            )
        return model


class AuthzExtension:
    """Flask extension that runs the authorization component per request.

    On every routed request it builds a ``RequestContext`` (the routed
    action is the view's endpoint name), attaches a fresh authorization
    service and identity, and runs ``authorize_action``. After the view,
    a successful response for a request that was never authorized, scoped
    or skipped is replaced by a 500 error.

    Supports the Flask app-factory pattern via ``init_app()``.

    Args:
        app: Optional Flask application. If provided, calls ``init_app()``
            immediately.
        identity_provider: A callable ``() -> actor | None`` returning the
            authenticated actor. Called within request context.
        resolver: Optional policy resolver. Defaults to the global registry.
        config: Optional component config.
        require_authorization_check: Enforce the end-of-request assertion.
        exempt_endpoints: Endpoint names the extension leaves alone. Flask's
            ``static`` endpoints (including blueprint ones) are always exempt.

    Example::

        app = Flask(__name__)
        authz = AuthzExtension(app, identity_provider=lambda: current_user)

        @app.get("/articles/<int:article_id>")
        @authz.model(Article)
        def view(article_id):
            article = session.get(Article, article_id)
            authz.authorize(article)
            return {"title": article.title}
    """

    def __init__(
        self,
        app: Flask | None = None,
        *,
        identity_provider: Callable[[], Any],
        resolver: PolicyResolver | None = None,
        config: ComponentConfig | None = None,
        require_authorization_check: bool = True,
        exempt_endpoints: Iterable[str] = (),
    ) -> None:
        self._identity_provider = identity_provider
        self._exempt_endpoints = frozenset(exempt_endpoints)
        self._config = config if config is not None else ComponentConfig()
        self._middleware = AuthorizationMiddleware(
            resolver,
            identity_attribute=self._config.identity_attribute,
            service_attribute=self._config.service_attribute,
            require_authorization_check=require_authorization_check,
        )

        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """Initialize the extension with a Flask application.

        Stores the extension on ``app.extensions["request_authz"]``, registers
        the request hooks and the error handlers for authorization exceptions.
        """
        app.extensions["request_authz"] = self
        app.before_request(self._before_request)
        app.after_request(self._after_request)

        @app.errorhandler(AuthorizationDenied)
        def handle_denied(exc: AuthorizationDenied):  # pyright: ignore[reportUnusedFunction]
            return jsonify({"detail": str(exc)}), 403

        @app.errorhandler(MissingIdentity)
        def handle_missing_identity(exc: MissingIdentity):  # pyright: ignore[reportUnusedFunction]
            return jsonify({"detail": str(exc)}), 401

        @app.errorhandler(InvalidConfiguration)
        def handle_invalid_configuration(exc: InvalidConfiguration):  # pyright: ignore[reportUnusedFunction]
            return jsonify({"detail": "Authorization is misconfigured"}), 500

        @app.errorhandler(NoPolicyError)
        def handle_no_policy(exc: NoPolicyError):  # pyright: ignore[reportUnusedFunction]
            return jsonify({"detail": str(exc)}), 500

    def model(self, model: Any) -> Callable[[F], F]:
        """Declare the default resource checked by ``authorize_action`` for a view."""

        def decorator(fn: F) -> F:
            setattr(fn, _MODEL_ATTR, model)
            return fn

        return decorator

    # ------------------------------------------------------------------
    # Request hooks
    # ------------------------------------------------------------------

    def _before_request(self) -> None:
        endpoint = request.endpoint
        if endpoint is None or self._is_exempt(endpoint):
            return

        context = RequestContext(
            attributes={self._config.identity_attribute: self._identity_provider()},
            params={"action": endpoint},
        )
        context, service = self._middleware.prepare(context)
        controller = _ViewController(context, current_app.view_functions.get(endpoint))
        component = AuthorizationComponent(controller, self._config)
        controller.add_component(component)

        g.request_authz_context = context
        g.request_authz_service = service
        g.request_authz_component = component
        controller.startup()

    def _is_exempt(self, endpoint: str) -> bool:
        if endpoint == "static" or endpoint.endswith(".static"):
            return True
        return endpoint in self._exempt_endpoints

    def _after_request(self, response: Response) -> Response:
        service = g.get("request_authz_service")
        if service is None or response.status_code >= 400:
            return response
        try:
            self._middleware.verify(g.request_authz_context, service)
        except AuthorizationRequiredError as exc:
            response = jsonify({"detail": str(exc)})
            response.status_code = 500
        return response

    # ------------------------------------------------------------------
    # Component shortcuts
    # ------------------------------------------------------------------

    @property
    def component(self) -> AuthorizationComponent:
        """The authorization component of the current request."""
        return g.request_authz_component

    def authorize(self, resource: Any, action: str | None = None) -> None:
        self.component.authorize(resource, action)

    def apply_scope(self, resource: Any, action: str | None = None) -> Any:
        return self.component.apply_scope(resource, action)

    def skip_authorization(self) -> AuthorizationComponent:
        return self.component.skip_authorization()
