# ruff: noqa: A005
"""Structured logging for mvcore.

The registries and the dispatch path log through ``get_logger(__name__)``
and pass structured keyword fields rather than formatted strings. Output
goes through structlog to the stdlib root handler.

Pieces:
- LogConfig: level, renderer and extras; unset values come from the environment
- MessageLengthFilter: keeps oversized event messages bounded
- StructuredLogger: per-module logger with a level threshold and counters
- LoggerFactory: builds the structlog processor chain and hands out loggers
- log_context: binds fields to every record logged inside a block
"""

import logging
import sys
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

import structlog
from structlog.contextvars import bound_contextvars, merge_contextvars

from mvcore.core.enums import Environment, LogFormat, LogLevel
from mvcore.core.errors import ConfigurationError

if TYPE_CHECKING:
    from mvcore.core.config import Settings

# level, format, caller info
_ENVIRONMENT_DEFAULTS: dict[Environment, tuple[LogLevel, LogFormat, bool]] = {
    Environment.DEVELOPMENT: (LogLevel.INFO, LogFormat.CONSOLE, True),
    Environment.TESTING: (LogLevel.WARNING, LogFormat.PLAIN, False),
    Environment.STAGING: (LogLevel.INFO, LogFormat.JSON, False),
    Environment.PRODUCTION: (LogLevel.INFO, LogFormat.JSON, False),
}


@dataclass
class LogConfig:
    """
    Logging configuration.

    ``level``, ``format`` and ``enable_caller_info`` left as None are filled
    in from the environment. Values passed explicitly are kept as given.

    Usage Example:
        config = LogConfig(environment=Environment.PRODUCTION, level=LogLevel.DEBUG)
        assert config.format == LogFormat.JSON
        assert config.level == LogLevel.DEBUG
    """

    level: LogLevel | None = None
    format: LogFormat | None = None
    environment: Environment = field(default=Environment.DEVELOPMENT)

    enable_timestamps: bool = True
    enable_caller_info: bool | None = None
    enable_exception_info: bool = True

    truncate_long_messages: bool = True
    max_message_length: int = 10000

    def __post_init__(self):
        if not isinstance(self.environment, Environment):
            raise ConfigurationError(f"Invalid environment: {self.environment!r}")

        level, log_format, caller_info = _ENVIRONMENT_DEFAULTS[self.environment]
        if self.level is None:
            self.level = level
        if self.format is None:
            self.format = log_format
        if self.enable_caller_info is None:
            self.enable_caller_info = caller_info

        self.validate()

    @classmethod
    def from_settings(cls, settings: "Settings") -> "LogConfig":
        return cls(
            level=settings.log_level,
            format=settings.log_format,
            environment=settings.environment,
        )

    def validate(self) -> None:
        """
        Raises:
            ConfigurationError: If a field holds an unusable value
        """
        if not isinstance(self.level, LogLevel):
            raise ConfigurationError(f"Invalid log level: {self.level!r}")

        if not isinstance(self.format, LogFormat):
            raise ConfigurationError(f"Invalid log format: {self.format!r}")

        if self.max_message_length < 1000:
            raise ConfigurationError(
                "Maximum message length must be at least 1000 characters"
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level.level_name,
            "format": self.format.value,
            "environment": self.environment.value,
            "enable_timestamps": self.enable_timestamps,
            "enable_caller_info": self.enable_caller_info,
            "truncate_long_messages": self.truncate_long_messages,
            "max_message_length": self.max_message_length,
        }


class LogFilter(ABC):
    """Transforms an event record before it is emitted."""

    @abstractmethod
    def filter(self, record: dict[str, Any]) -> dict[str, Any]:
        """Return the record to emit."""


class MessageLengthFilter(LogFilter):
    """Cut event messages down to ``max_length`` characters."""

    def __init__(self, max_length: int = 10000):
        self.max_length = max_length

    def filter(self, record: dict[str, Any]) -> dict[str, Any]:
        message = record.get("message")
        if isinstance(message, str) and len(message) > self.max_length:
            record["message"] = message[: self.max_length] + "... [TRUNCATED]"
            record["original_length"] = len(message)
        return record


class StructuredLogger:
    """
    Per-module logger.

    Each call takes a short event message plus keyword fields, which are
    forwarded to structlog as key/value pairs. Records under the configured
    level are dropped before reaching structlog.
    """

    def __init__(self, name: str, config: LogConfig):
        self.name = name
        self.config = config

        self.filters: list[LogFilter] = []
        if config.truncate_long_messages:
            self.filters.append(MessageLengthFilter(config.max_message_length))

        self._logger = structlog.get_logger(name)

        self._log_count = 0
        self._error_count = 0
        self._last_log_time: datetime | None = None

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._error_count += 1
        self._log(LogLevel.ERROR, message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._error_count += 1
        self._log(LogLevel.CRITICAL, message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log at error level with the active exception's traceback."""
        self.error(message, exc_info=True, **kwargs)

    def _log(self, level: LogLevel, message: str, **kwargs: Any) -> None:
        if level.priority < self.config.level.priority:
            return

        record = {"message": message, **kwargs}
        for log_filter in self.filters:
            record = log_filter.filter(record)
        message = record.pop("message")

        try:
            getattr(self._logger, level.level_name.lower())(message, **record)
        except Exception as e:
            # structlog misconfiguration must not break dispatch
            fallback = logging.getLogger(self.name)
            fallback.exception("Structured logging failed: %s", str(e))
            fallback.log(level.to_logging_level(), message)
            return

        self._log_count += 1
        self._last_log_time = datetime.now(timezone.utc)

    def get_stats(self) -> dict[str, Any]:
        return {
            "logger_name": self.name,
            "log_count": self._log_count,
            "error_count": self._error_count,
            "last_log_time": self._last_log_time.isoformat()
            if self._last_log_time
            else None,
        }


class LoggerFactory:
    """Configures structlog for a LogConfig and caches one logger per name."""

    def __init__(self, config: LogConfig):
        self.config = config
        self._loggers: dict[str, StructuredLogger] = {}
        self._configured = False

    def build_processors(self) -> list[Any]:
        """Return the structlog processor chain for this configuration."""
        processors: list[Any] = [
            merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
        ]

        if self.config.enable_timestamps:
            processors.append(structlog.processors.TimeStamper(fmt="iso"))

        if self.config.enable_caller_info:
            processors.append(
                structlog.processors.CallsiteParameterAdder(
                    parameters=[
                        structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO,
                        structlog.processors.CallsiteParameter.FUNC_NAME,
                    ],
                    # report the module that called StructuredLogger, not this one
                    additional_ignores=[__name__],
                )
            )

        if self.config.enable_exception_info:
            processors.append(structlog.processors.StackInfoRenderer())
            # ConsoleRenderer formats exc_info itself
            if self.config.format != LogFormat.CONSOLE:
                processors.append(structlog.processors.format_exc_info)

        processors.append(structlog.processors.UnicodeDecoder())

        if self.config.format == LogFormat.JSON:
            processors.append(structlog.processors.JSONRenderer(default=str))
        elif self.config.format == LogFormat.CONSOLE:
            processors.append(structlog.dev.ConsoleRenderer(colors=False))
        else:
            processors.append(structlog.processors.KeyValueRenderer())

        return processors

    def configure_logging(self) -> None:
        if self._configured:
            return

        structlog.configure(
            processors=self.build_processors(),
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        stdlib_level = self.config.level.to_logging_level()
        logging.basicConfig(format="%(message)s", stream=sys.stdout, level=stdlib_level)
        logging.getLogger("mvcore").setLevel(stdlib_level)

        self._configured = True

    def get_logger(self, name: str) -> StructuredLogger:
        self.configure_logging()

        if name not in self._loggers:
            self._loggers[name] = StructuredLogger(name, self.config)
        return self._loggers[name]


_logger_factory: LoggerFactory | None = None


def configure_logging(config: LogConfig | None = None) -> None:
    """
    Configure the process-wide logging setup.

    Args:
        config: Logging configuration (built from the cached settings if omitted)
    """
    global _logger_factory  # noqa: PLW0603 - Required to initialize global factory

    if config is None:
        from mvcore.core.config import get_settings

        config = LogConfig.from_settings(get_settings())

    _logger_factory = LoggerFactory(config)
    _logger_factory.configure_logging()


def get_logger(name: str) -> StructuredLogger:
    """
    Get the structured logger for a module.

    Args:
        name: Logger name (usually __name__)
    """
    if _logger_factory is None:
        configure_logging()

    return _logger_factory.get_logger(name)


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Attach fields to every record logged in this block, then restore."""
    with bound_contextvars(**fields):
        yield


__all__ = [
    "LogConfig",
    "LogFilter",
    "LoggerFactory",
    "MessageLengthFilter",
    "StructuredLogger",
    "configure_logging",
    "get_logger",
    "log_context",
]
