"""mvcore: Mediator and Controller contracts for notification-driven MVC apps."""

from mvcore.core import *  # noqa: F403
from mvcore.core import __all__  # noqa: F401

__version__ = "0.1.0"
