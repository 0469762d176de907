"""Core of mvcore.

Components:
- interfaces: Structural contracts (IMediator, IController, ICommand, ...)
- observer: Notification value type, Observer and the Notifier base
- command: SimpleCommand and MacroCommand
- mediator: Mediator base adapter
- view: Mediator registry and notification delivery
- controller: Notification name to command mapping
- facade: Entry point wiring view and controller
- Cross-cutting: configuration, errors, logging
"""

from .command import MacroCommand, SimpleCommand
from .config import Settings, get_settings
from .controller import Controller
from .enums import Environment, LogFormat, LogLevel, RegistrationPolicy
from .errors import (
    CommandNotFoundError,
    ConfigurationError,
    DuplicateRegistrationError,
    ErrorSeverity,
    MVCoreError,
    ValidationError,
)
from .facade import Facade
from .interfaces import (
    CommandFactory,
    ICommand,
    IController,
    IMediator,
    INotification,
    INotificationHandler,
    IObserver,
    IView,
    has_notification_handler,
)
from .logging import configure_logging, get_logger, log_context
from .mediator import Mediator
from .observer import Notification, Notifier, Observer
from .view import MediatorRegistration, View

__all__ = [
    "CommandFactory",
    "CommandNotFoundError",
    "ConfigurationError",
    "Controller",
    "DuplicateRegistrationError",
    "Environment",
    "ErrorSeverity",
    "Facade",
    "ICommand",
    "IController",
    "IMediator",
    "INotification",
    "INotificationHandler",
    "IObserver",
    "IView",
    "LogFormat",
    "LogLevel",
    "MVCoreError",
    "MacroCommand",
    "Mediator",
    "MediatorRegistration",
    "Notification",
    "Notifier",
    "Observer",
    "RegistrationPolicy",
    "Settings",
    "SimpleCommand",
    "ValidationError",
    "View",
    "configure_logging",
    "get_logger",
    "get_settings",
    "has_notification_handler",
    "log_context",
]
