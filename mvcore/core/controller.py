"""Controller: notification name to command mapping.

The controller remembers which command factory handles which notification,
and when attached to a view registers itself as the observer for every
mapped name. On ``execute_command`` it builds a fresh command from the
factory and runs it with the notification.

Design:
- Factories are zero-argument callables; a command class is one
- One factory per notification name; re-registration follows the
  configured ``RegistrationPolicy``
- Unmapped names are a silent no-op unless ``strict_dispatch`` is set
"""

import threading
import time
from typing import TYPE_CHECKING, Any

from mvcore.core.config import Settings, get_settings
from mvcore.core.enums import RegistrationPolicy
from mvcore.core.errors import (
    CommandNotFoundError,
    DuplicateRegistrationError,
    ValidationError,
)
from mvcore.core.interfaces import CommandFactory, INotification, IView
from mvcore.core.logging import get_logger, log_context
from mvcore.core.observer import Notifier, Observer

if TYPE_CHECKING:
    from mvcore.core.facade import Facade

logger = get_logger(__name__)


class Controller:
    """
    Command registry and executor.

    Usage Example:
        controller = Controller(view)
        controller.register_command("app/startup", StartupCommand)
        view.notify_observers(Notification("app/startup"))
    """

    def __init__(
        self,
        view: IView | None = None,
        facade: "Facade | None" = None,
        settings: Settings | None = None,
    ):
        """
        Initialize controller.

        Args:
            view: View to register command observers with, if any
            facade: Facade handed to every command built here
            settings: Settings (defaults to the cached global settings)
        """
        self._view = view
        self._facade = facade
        self._settings = settings or get_settings()

        self._command_map: dict[str, CommandFactory] = {}
        self._lock = threading.RLock()
        self._metrics = {
            "executed_commands": 0,
            "failed_commands": 0,
            "missing_commands": 0,
            "total_execution_time": 0.0,
        }

    @property
    def registration_policy(self) -> RegistrationPolicy:
        return self._settings.command_registration_policy

    def register_command(
        self, notification_name: str, command_factory: CommandFactory
    ) -> None:
        """
        Register the command factory handling a notification name.

        Args:
            notification_name: Name of the notification
            command_factory: Zero-argument callable returning a command

        Raises:
            ValidationError: If the name is empty or the factory not callable
            DuplicateRegistrationError: If the name is mapped and the policy is reject
        """
        if not isinstance(notification_name, str) or not notification_name.strip():
            raise ValidationError(
                f"Notification name must be a non-empty string, got {notification_name!r}",
                field="notification_name",
            )
        if not callable(command_factory):
            raise ValidationError(
                f"Command factory must be callable, got {type(command_factory).__name__}",
                field="command_factory",
            )

        policy = self.registration_policy

        with self._lock:
            previous = self._command_map.get(notification_name)

            if previous is not None:
                if policy == RegistrationPolicy.REJECT:
                    raise DuplicateRegistrationError(notification_name)
                if policy == RegistrationPolicy.WARN:
                    logger.warning(
                        "Replacing command registration",
                        notification_name=notification_name,
                        previous=_factory_name(previous),
                        command=_factory_name(command_factory),
                    )

            self._command_map[notification_name] = command_factory

            if previous is None and self._view is not None:
                self._view.register_observer(
                    notification_name, Observer(self.execute_command, self)
                )

        logger.debug(
            "Command registered",
            notification_name=notification_name,
            command=_factory_name(command_factory),
            replaced=previous is not None,
        )

    def has_command(self, notification_name: str) -> bool:
        with self._lock:
            return notification_name in self._command_map

    def remove_command(self, notification_name: str) -> None:
        """Remove the mapping for a notification name. No-op if absent."""
        with self._lock:
            factory = self._command_map.pop(notification_name, None)
            if factory is None:
                return

            if self._view is not None:
                self._view.remove_observer(notification_name, self)

        logger.debug(
            "Command removed",
            notification_name=notification_name,
            command=_factory_name(factory),
        )

    def execute_command(self, notification: INotification) -> None:
        """
        Build and run the command registered for the notification's name.

        Raises:
            CommandNotFoundError: If nothing is mapped and strict_dispatch is set
            ValidationError: If the factory returned an object without execute()
        """
        notification_name = notification.name

        with self._lock:
            factory = self._command_map.get(notification_name)
            if factory is None:
                self._metrics["missing_commands"] += 1

        if factory is None:
            if self._settings.strict_dispatch:
                raise CommandNotFoundError(notification_name)
            logger.debug("No command registered", notification_name=notification_name)
            return

        command = factory()
        if not callable(getattr(command, "execute", None)):
            raise ValidationError(
                f"Command factory {_factory_name(factory)} returned "
                f"{type(command).__name__}, which has no execute()",
                field="command_factory",
            )
        if self._facade is not None and isinstance(command, Notifier):
            command.initialize_notifier(self._facade)

        with log_context(command=command.__class__.__name__):
            start_time = time.time()
            try:
                logger.debug("Executing command", notification_name=notification_name)
                command.execute(notification)
            except Exception as e:
                execution_time = time.time() - start_time
                self._record_execution(execution_time, failed=True)
                logger.exception(
                    "Command execution failed",
                    notification_name=notification_name,
                    error=str(e),
                    execution_time=execution_time,
                )
                raise

            self._record_execution(time.time() - start_time, failed=False)

    def _record_execution(self, execution_time: float, failed: bool) -> None:
        with self._lock:
            key = "failed_commands" if failed else "executed_commands"
            self._metrics[key] += 1
            self._metrics["total_execution_time"] += execution_time

    def get_metrics(self) -> dict[str, Any]:
        """Get controller execution metrics."""
        with self._lock:
            metrics = dict(self._metrics)
            registered = len(self._command_map)

        attempted = metrics["executed_commands"] + metrics["failed_commands"]
        return {
            "registered_commands": registered,
            **metrics,
            "average_execution_time": (
                metrics["total_execution_time"] / max(attempted, 1)
            ),
        }


def _factory_name(factory: CommandFactory) -> str:
    return getattr(factory, "__qualname__", None) or repr(factory)
