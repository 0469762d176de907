"""Facade: single entry point wiring one View and one Controller."""

from typing import Any

from mvcore.core.config import Settings
from mvcore.core.controller import Controller
from mvcore.core.interfaces import CommandFactory, IMediator
from mvcore.core.logging import get_logger
from mvcore.core.observer import Notification, Notifier
from mvcore.core.view import View

logger = get_logger(__name__)


class Facade:
    """
    Owns a view and a controller and exposes their operations.

    Mediators registered here and commands built by the controller are
    attached to this facade, so their ``send_notification`` reaches the view.

    Usage Example:
        facade = Facade()
        facade.register_command("app/startup", StartupCommand)
        facade.register_mediator(ShellMediator(view_component=window))
        facade.send_notification("app/startup", body=window)
    """

    def __init__(self, settings: Settings | None = None):
        self.view = View()
        self.controller = Controller(view=self.view, facade=self, settings=settings)

    # Commands

    def register_command(
        self, notification_name: str, command_factory: CommandFactory
    ) -> None:
        self.controller.register_command(notification_name, command_factory)

    def remove_command(self, notification_name: str) -> None:
        self.controller.remove_command(notification_name)

    def has_command(self, notification_name: str) -> bool:
        return self.controller.has_command(notification_name)

    # Mediators

    def register_mediator(self, mediator: IMediator) -> None:
        """
        Attach the mediator to this facade and register it with the view.

        The facade is attached first so ``on_register`` can send
        notifications. A mediator whose name is already taken is passed to
        the view untouched, which ignores it.
        """
        if isinstance(mediator, Notifier) and not self.view.has_mediator(mediator.name):
            mediator.initialize_notifier(self)
        self.view.register_mediator(mediator)

    def retrieve_mediator(self, mediator_name: str) -> IMediator | None:
        return self.view.retrieve_mediator(mediator_name)

    def remove_mediator(self, mediator_name: str) -> IMediator | None:
        return self.view.remove_mediator(mediator_name)

    def has_mediator(self, mediator_name: str) -> bool:
        return self.view.has_mediator(mediator_name)

    # Notifications

    def send_notification(
        self, notification_name: str, body: Any = None, type: str | None = None
    ) -> None:
        """Create a notification and deliver it to the view's observers."""
        self.notify_observers(Notification(notification_name, body, type))

    def notify_observers(self, notification: Notification) -> None:
        logger.debug("Sending notification", notification_name=notification.name)
        self.view.notify_observers(notification)
