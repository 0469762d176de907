"""Mediator base adapter."""

from typing import Any

from mvcore.core.interfaces import INotification
from mvcore.core.observer import Notifier


class Mediator(Notifier):
    """
    Base mediator.

    Supplies every member of ``IMediator`` plus a no-op
    ``handle_notification``, so subclasses only override what they use.
    The name is fixed at construction and defaults to ``NAME``.

    Usage Example:
        class UserListMediator(Mediator):
            NAME = "UserListMediator"

            def list_notification_interests(self):
                return ["user/added", "user/removed"]

            def handle_notification(self, notification):
                self.view_component.refresh(notification.body)

        view.register_mediator(UserListMediator(view_component=user_list))
    """

    NAME = "Mediator"

    def __init__(self, mediator_name: str | None = None, view_component: Any = None):
        super().__init__()
        self._name = mediator_name if mediator_name is not None else self.NAME
        self.view_component = view_component

    @property
    def name(self) -> str | None:
        return self._name

    def context(self) -> Any:
        return self

    def list_notification_interests(self) -> list[str]:
        return []

    def handle_notification(self, notification: INotification) -> None:
        """Called for each notification listed in the interests. No-op here."""

    def on_register(self) -> None:
        """Called by the view when the mediator is registered."""

    def on_remove(self) -> None:
        """Called by the view when the mediator is removed."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self._name!r})"
