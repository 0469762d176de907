"""Command base classes.

Commands hold the behaviour run when a notification fires. The controller
builds a fresh command from its registered factory for every notification,
so commands should keep no state between executions.

Architecture:
- SimpleCommand: Single command with an overridable ``execute``
- MacroCommand: Runs a list of sub-commands in registration order
"""

from mvcore.core.errors import ValidationError
from mvcore.core.interfaces import CommandFactory, INotification
from mvcore.core.logging import get_logger
from mvcore.core.observer import Notifier

logger = get_logger(__name__)


class SimpleCommand(Notifier):
    """
    Base class for single-step commands.

    Usage Example:
        class SelectUserCommand(SimpleCommand):
            def execute(self, notification):
                user = notification.body
                self.send_notification("user/show", user)

        controller.register_command("user/select", SelectUserCommand)
    """

    def execute(self, notification: INotification) -> None:
        """Fulfil the use case initiated by the notification."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class MacroCommand(Notifier):
    """
    Command that runs other commands.

    Subclasses add sub-command factories in ``initialize_macro_command``.
    On ``execute`` each sub-command is built, given the macro's facade and
    run with the same notification, first added first run. The list is
    emptied afterwards, so a macro instance executes once.

    Usage Example:
        class StartupCommand(MacroCommand):
            def initialize_macro_command(self):
                self.add_sub_command(PrepareModelCommand)
                self.add_sub_command(PrepareViewCommand)
    """

    def __init__(self) -> None:
        super().__init__()
        self._sub_commands: list[CommandFactory] = []
        self.initialize_macro_command()

    def initialize_macro_command(self) -> None:
        """Add sub-commands here. Override in subclasses."""

    def add_sub_command(self, command_factory: CommandFactory) -> None:
        """
        Append a sub-command factory.

        Raises:
            ValidationError: If the factory is not callable
        """
        if not callable(command_factory):
            raise ValidationError(
                f"Sub-command factory must be callable, got {type(command_factory).__name__}",
                field="command_factory",
            )
        self._sub_commands.append(command_factory)

    @property
    def sub_command_count(self) -> int:
        return len(self._sub_commands)

    def execute(self, notification: INotification) -> None:
        while self._sub_commands:
            factory = self._sub_commands.pop(0)
            command = factory()
            if self._facade is not None and isinstance(command, Notifier):
                command.initialize_notifier(self._facade)

            logger.debug(
                "Executing sub-command",
                macro=self.__class__.__name__,
                command=command.__class__.__name__,
                notification_name=notification.name,
            )
            command.execute(notification)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(pending={len(self._sub_commands)})"
