"""Controller lifecycle — bind component handlers to named request events."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ClassVar, Protocol, runtime_checkable

from request_authz._types import RequestLike
from request_authz.config._config import STARTUP_EVENTS
from request_authz.exceptions import InvalidConfiguration

__all__ = ["Controller", "EventDispatcher", "EventListener"]


@runtime_checkable
class EventListener(Protocol):
    """Anything that declares lifecycle handlers by event name."""

    def implemented_events(self) -> dict[str, str]: ...


class EventDispatcher:
    """Ordered event name to handler registry for a single request pipeline.

    Example::

        events = EventDispatcher()
        events.on("Controller.initialize", component.authorize_action)
        events.dispatch("Controller.initialize")
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Callable[[], Any]]] = {}

    def on(self, event: str, handler: Callable[[], Any]) -> None:
        handlers = self._handlers.setdefault(event, [])
        if handler not in handlers:
            handlers.append(handler)

    def listeners(self, event: str) -> list[Callable[[], Any]]:
        return list(self._handlers.get(event, []))

    def dispatch(self, event: str) -> None:
        """Run every handler bound to *event* in registration order.

        Exceptions propagate to the caller; later handlers do not run.
        """
        for handler in self.listeners(event):
            handler()


class Controller:
    """Minimal host controller for request handling.

    Subclasses set ``model`` to the default resource of the controller
    (typically a mapped SQLAlchemy class); ``load_model`` returns it so
    ``authorize_action`` can check model-level policies.

    Example::

        class ArticlesController(Controller):
            model = Article

        controller = ArticlesController(request)
        controller.add_component(AuthorizationComponent(controller))
        controller.startup()  # runs authorize_action once
    """

    model: ClassVar[Any] = None

    def __init__(self, request: RequestLike) -> None:
        self.request = request
        self.events = EventDispatcher()
        self.components: list[EventListener] = []

    def add_component(self, component: EventListener) -> None:
        """Attach *component* and bind its declared lifecycle handlers."""
        self.components.append(component)
        for event, method_name in component.implemented_events().items():
            self.events.on(event, getattr(component, method_name))

    def load_model(self) -> Any:
        """Return the controller's default resource.

        Raises:
            InvalidConfiguration: The controller has no ``model``.
        """
        if self.model is None:
            raise InvalidConfiguration(
                key=f"{type(self).__name__}.model",
                expected="a default model",
                actual_type="NoneType",
            )
        return self.model

    def startup(self) -> None:
        """Dispatch the request-start events before the action body runs.

        ``Controller.initialize`` fires first, then ``Controller.startup``.
        A handler that raises stops the sequence.
        """
        for event in STARTUP_EVENTS:
            self.events.dispatch(event)
