"""Enumerations shared by configuration, logging and the controller."""

from enum import Enum


class Environment(Enum):
    """Deployment environment; picks logging defaults for unset settings."""

    DEVELOPMENT = "dev"
    TESTING = "test"
    STAGING = "staging"
    PRODUCTION = "prod"


class LogLevel(Enum):
    """Log level as (name, stdlib numeric level)."""

    DEBUG = ("DEBUG", 10)
    INFO = ("INFO", 20)
    WARNING = ("WARNING", 30)
    ERROR = ("ERROR", 40)
    CRITICAL = ("CRITICAL", 50)

    def __init__(self, level_name: str, priority: int):
        self.level_name = level_name
        self.priority = priority

    def to_logging_level(self) -> int:
        return self.priority


class LogFormat(Enum):
    """Renderer selected for log output."""

    JSON = "json"
    CONSOLE = "console"
    PLAIN = "plain"

    def __str__(self) -> str:
        return self.value


class RegistrationPolicy(Enum):
    """What the controller does when a notification name is already mapped."""

    OVERWRITE = "overwrite"
    WARN = "warn"
    REJECT = "reject"


__all__ = [
    "Environment",
    "LogFormat",
    "LogLevel",
    "RegistrationPolicy",
]
