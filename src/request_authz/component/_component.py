"""AuthorizationComponent — authorization checks for controller actions."""

from __future__ import annotations

from typing import Any

from request_authz._audit import log_decision, log_skip
from request_authz._types import (
    ACTION_PARAM,
    AuthorizationServiceLike,
    ControllerLike,
    IdentityLike,
    RequestLike,
)
from request_authz.component._actions import resolve_action
from request_authz.component._gate import check_action
from request_authz.config._config import ComponentConfig
from request_authz.exceptions import AuthorizationDenied, InvalidConfiguration, MissingIdentity
from request_authz.policy._resolver import resource_type_of

__all__ = ["AuthorizationComponent"]


class AuthorizationComponent:
    """Makes it easier to check authorization in controllers.

    Applies conventions matching policy actions to controller actions and
    raises errors when authorization fails. The identity and the
    authorization service are read from the controller's current request
    under the configured attribute keys.

    Args:
        controller: The host controller. Must expose ``request`` and
            ``load_model()``.
        config: Component configuration. Defaults to ``ComponentConfig()``.

    Example::

        class ArticlesController(Controller):
            model = Article

        controller = ArticlesController(request)
        authz = AuthorizationComponent(
            controller,
            ComponentConfig(skip_authorization={"index": True}),
        )
        controller.add_component(authz)

        authz.authorize(article, "edit")      # raises AuthorizationDenied
        stmt = authz.apply_scope(select(Article), "index")
    """

    def __init__(self, controller: ControllerLike, config: ComponentConfig | None = None) -> None:
        self._controller = controller
        self._config = config if config is not None else ComponentConfig()

    @property
    def config(self) -> ComponentConfig:
        return self._config

    @property
    def controller(self) -> ControllerLike:
        return self._controller

    @property
    def request(self) -> RequestLike:
        return self._controller.request

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def authorize(self, resource: Any, action: str | None = None) -> None:
        """Check the policy for *resource*, raising on denial.

        If *action* is omitted, the current controller action is used after
        applying ``action_map``.

        Raises:
            AuthorizationDenied: The identity may not perform *action*.
            MissingIdentity: No identity is attached to the request.
            InvalidConfiguration: The identity or ``action_map`` is malformed.
        """
        if action is None:
            action = self.get_default_action()
        identity = self.get_identity()
        resource_type = resource_type_of(resource).__name__

        if not identity.can(action, resource):
            log_decision(action=action, resource_type=resource_type, allowed=False)
            raise AuthorizationDenied(action=action, resource_type=resource_type)
        log_decision(action=action, resource_type=resource_type, allowed=True)

    def can(self, resource: Any, action: str | None = None) -> bool:
        """Non-raising variant of ``authorize``."""
        if action is None:
            action = self.get_default_action()
        return bool(self.get_identity().can(action, resource))

    def apply_scope(self, resource: Any, action: str | None = None) -> Any:
        """Apply the identity's scope for *action* to *resource*.

        Returns the narrowed resource exactly as the identity produced it.
        If *action* is omitted, the current controller action is used.
        """
        if action is None:
            action = self.get_default_action()
        identity = self.get_identity()

        return identity.apply_scope(action, resource)

    def skip_authorization(self) -> AuthorizationComponent:
        """Mark the current request as intentionally not authorized.

        Returns:
            The component, for chaining.
        """
        service = self.get_service()
        service.skip_authorization()
        log_skip(action=self.request.get_param(ACTION_PARAM))
        return self

    # ------------------------------------------------------------------
    # Request lookups
    # ------------------------------------------------------------------

    def get_service(self) -> AuthorizationServiceLike:
        """Get the authorization service from the request.

        A missing service is reported the same way as a wrong-typed one.

        Raises:
            InvalidConfiguration: The attribute does not hold an
                ``AuthorizationServiceLike``.
        """
        attribute = self._config.service_attribute
        service = self.request.get_attribute(attribute)
        if not isinstance(service, AuthorizationServiceLike):
            raise InvalidConfiguration(
                key=attribute,
                expected="an instance of AuthorizationServiceLike",
                actual_type=type(service).__name__,
            )
        return service

    def get_identity(self) -> IdentityLike:
        """Get the identity from the request.

        Raises:
            MissingIdentity: No identity is present under the attribute.
            InvalidConfiguration: The attribute holds something that is not
                an ``IdentityLike``.
        """
        attribute = self._config.identity_attribute
        identity = self.request.get_attribute(attribute)
        if identity is None:
            raise MissingIdentity(attribute=attribute)
        if not isinstance(identity, IdentityLike):
            raise InvalidConfiguration(
                key=attribute,
                expected="an instance of IdentityLike",
                actual_type=type(identity).__name__,
            )
        return identity

    def get_routed_action(self) -> str:
        """Return the routed controller action name of the current request."""
        action = self.request.get_param(ACTION_PARAM)
        if not isinstance(action, str):
            raise InvalidConfiguration(
                key=ACTION_PARAM,
                expected="a routed action name",
                actual_type=type(action).__name__,
            )
        return action

    def get_default_action(self) -> str:
        """Return the authorization action for the current controller action."""
        return resolve_action(self.get_routed_action(), self._config.action_map)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def authorize_action(self) -> None:
        """Action authorization handler, run once per request.

        Skips authorization when ``skip_authorization`` is on for the
        routed action; otherwise authorizes the controller's default model
        when ``authorize_model`` is on. With both off, the handler must
        authorize or skip by itself.
        """
        action = self.get_routed_action()

        if check_action(action, "skip_authorization", self._config):
            self.skip_authorization()
            return

        if check_action(action, "authorize_model", self._config):
            self.authorize(self._controller.load_model())

    def implemented_events(self) -> dict[str, str]:
        """Return the lifecycle binding ``{event name: handler method name}``."""
        return {self._config.authorization_event: "authorize_action"}
