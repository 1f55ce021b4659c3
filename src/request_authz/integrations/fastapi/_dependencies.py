"""FastAPI dependencies for request-authz authorization."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fastapi import Depends, Request

from request_authz.component._component import AuthorizationComponent
from request_authz.config._config import ComponentConfig
from request_authz.lifecycle import Controller
from request_authz.middleware._middleware import AuthorizationMiddleware
from request_authz.policy._resolver import PolicyResolver
from request_authz.request import RequestContext

__all__ = ["AuthzDep", "get_identity"]


# ---------------------------------------------------------------------------
# Sentinel dependency functions for DI-based configuration
# ---------------------------------------------------------------------------


def get_identity(request: Request) -> Any:
    """Sentinel dependency — override via ``app.dependency_overrides[get_identity]``.

    Raises ``NotImplementedError`` if not overridden, ensuring users
    configure their identity provider before using ``AuthzDep``. The
    override may return ``None`` for anonymous requests.

    Example::

        from request_authz.integrations.fastapi import get_identity

        app.dependency_overrides[get_identity] = my_get_current_user
    """
    raise NotImplementedError(
        "Override get_identity via app.dependency_overrides[get_identity]. "
        "See request-authz docs for configuration guide."
    )


class _RouteController(Controller):
    def __init__(self, request: RequestContext, model: Any) -> None:
        super().__init__(request)
        self._model = model

    def load_model(self) -> Any:
        if self._model is None:
            return super().load_model()
        return self._model


# ---------------------------------------------------------------------------
# Dependency builder
# ---------------------------------------------------------------------------


def _make_dependency(
    model: Any,
    *,
    config: ComponentConfig,
    resolver: PolicyResolver | None,
) -> Callable[..., Any]:
    middleware = AuthorizationMiddleware(
        resolver,
        identity_attribute=config.identity_attribute,
        service_attribute=config.service_attribute,
    )

    def _resolve(request: Request, identity: Any = Depends(get_identity)) -> AuthorizationComponent:
        endpoint = request.scope.get("endpoint")
        action = getattr(endpoint, "__name__", None)
        context = RequestContext(
            attributes={config.identity_attribute: identity},
            params={"action": action},
        )
        context, service = middleware.prepare(context)
        request.state.request_authz_context = context
        request.state.request_authz_service = service
        request.state.request_authz_middleware = middleware

        controller = _RouteController(context, model)
        component = AuthorizationComponent(controller, config)
        controller.add_component(component)
        controller.startup()
        return component

    return _resolve


def AuthzDep(  # noqa: N802
    model: Any = None,
    *,
    config: ComponentConfig | None = None,
    resolver: PolicyResolver | None = None,
) -> Any:
    """FastAPI dependency providing the route's ``AuthorizationComponent``.

    The routed action is the endpoint function name. Before the endpoint
    body runs, ``authorize_action`` is executed: skipped actions are marked
    skipped and, when ``authorize_model`` is on, *model* is authorized.

    Args:
        model: Default resource checked by ``authorize_action``.
        config: Component configuration. Defaults to ``ComponentConfig()``.
        resolver: Policy resolver. Defaults to the global registry.

    Returns:
        A FastAPI ``Depends`` instance.

    Example::

        @app.get("/articles")
        def index(authz: AuthorizationComponent = AuthzDep(Article)):
            return session.scalars(authz.apply_scope(select(Article))).all()
    """
    dep_fn = _make_dependency(
        model,
        config=config if config is not None else ComponentConfig(),
        resolver=resolver,
    )
    return Depends(dep_fn)
