"""Notifier base for objects that send notifications through a facade."""

from typing import TYPE_CHECKING, Any

from mvcore.core.errors import ConfigurationError

if TYPE_CHECKING:
    from mvcore.core.facade import Facade


class Notifier:
    """
    Base class for mediators and commands.

    A notifier is constructed detached and gets its facade from whoever
    registers or builds it: ``Facade.register_mediator`` for mediators,
    the controller for commands.
    """

    def __init__(self) -> None:
        self._facade: "Facade | None" = None

    def initialize_notifier(self, facade: "Facade") -> None:
        """Attach the facade used by ``send_notification``."""
        self._facade = facade

    @property
    def facade(self) -> "Facade":
        if self._facade is None:
            raise ConfigurationError(
                f"{self.__class__.__name__} is not attached to a facade; "
                "call initialize_notifier() or register it through a Facade"
            )
        return self._facade

    def send_notification(
        self, notification_name: str, body: Any = None, type: str | None = None
    ) -> None:
        """Create and broadcast a notification through the attached facade."""
        self.facade.send_notification(notification_name, body, type)
