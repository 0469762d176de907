"""
Interface Protocols

Structural contracts shared by the registries and the objects they manage.
Implementations do not need to inherit from these; the registries only rely
on the attributes and methods declared here.
"""

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class INotification(Protocol):
    """A named event value, optionally carrying a body and a type."""

    @property
    def name(self) -> str:
        """Get the notification name."""
        ...

    body: Any
    type: str | None


@runtime_checkable
class ICommand(Protocol):
    """A unit of behaviour executed in response to a notification."""

    def execute(self, notification: INotification) -> None:
        """Run the command for the given notification."""
        ...


CommandFactory = Callable[[], ICommand]


@runtime_checkable
class IObserver(Protocol):
    """Callback plus the context it was registered on behalf of."""

    def notify_observer(self, notification: INotification) -> None:
        """Deliver a notification to the wrapped callback."""
        ...

    def compare_notify_context(self, obj: Any) -> bool:
        """Check whether obj is the context this observer was created for."""
        ...


@runtime_checkable
class IMediator(Protocol):
    """
    Bridge between a view component and the notification system.

    When a mediator is registered with a view, the view calls
    ``list_notification_interests`` once and routes every matching
    notification to ``handle_notification`` if the mediator has one
    (see ``INotificationHandler``). ``on_register`` and ``on_remove``
    bracket the mediator's time in the registry.
    """

    view_component: Any

    @property
    def name(self) -> str | None:
        """Get the name the view stores this mediator under."""
        ...

    def context(self) -> Any:
        """Get the non-owning reference handed to observers."""
        ...

    def list_notification_interests(self) -> list[str]:
        """List the notification names this mediator wants to receive."""
        ...

    def on_register(self) -> None:
        """Called by the view when the mediator is registered."""
        ...

    def on_remove(self) -> None:
        """Called by the view when the mediator is removed."""
        ...


@runtime_checkable
class INotificationHandler(Protocol):
    """Capability of receiving notifications; optional for mediators."""

    def handle_notification(self, notification: INotification) -> None:
        """Handle a notification the object declared interest in."""
        ...


@runtime_checkable
class IController(Protocol):
    """Maps notification names to command factories and runs them."""

    def execute_command(self, notification: INotification) -> None:
        """Execute the command registered for the notification's name."""
        ...

    def has_command(self, notification_name: str) -> bool:
        """Check if a command is registered for a notification name."""
        ...

    def register_command(
        self, notification_name: str, command_factory: CommandFactory
    ) -> None:
        """Register the command factory handling a notification name."""
        ...

    def remove_command(self, notification_name: str) -> None:
        """Remove the mapping for a notification name, if any."""
        ...


@runtime_checkable
class IView(Protocol):
    """Registry of mediators and notification observers."""

    def register_observer(self, notification_name: str, observer: IObserver) -> None:
        ...

    def remove_observer(self, notification_name: str, notify_context: Any) -> None:
        ...

    def notify_observers(self, notification: INotification) -> None:
        ...

    def register_mediator(self, mediator: IMediator) -> None:
        ...

    def retrieve_mediator(self, mediator_name: str) -> IMediator | None:
        ...

    def has_mediator(self, mediator_name: str) -> bool:
        ...

    def remove_mediator(self, mediator_name: str) -> IMediator | None:
        ...


def has_notification_handler(obj: Any) -> bool:
    """Return True if obj exposes a callable ``handle_notification``."""
    return callable(getattr(obj, "handle_notification", None))


__all__ = [
    "CommandFactory",
    "ICommand",
    "IController",
    "IMediator",
    "INotification",
    "INotificationHandler",
    "IObserver",
    "IView",
    "has_notification_handler",
]
