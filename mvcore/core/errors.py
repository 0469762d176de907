"""Error classes for mvcore."""

import logging
import time
import uuid
from enum import Enum
from typing import Any


class ErrorSeverity(Enum):
    """Error severity levels for monitoring and alerting."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class MVCoreError(Exception):
    """
    Base exception for all mvcore errors.

    Carries an error ID, a machine-readable code, structured details and a
    severity level. Every instance logs itself on creation.
    """

    default_code: str = "ERROR"
    severity: ErrorSeverity = ErrorSeverity.MEDIUM

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message
        self.code = kwargs.get("code") or self.default_code
        self.details = kwargs.get("details") or {}
        self.error_id = str(uuid.uuid4())
        self.timestamp = time.time()
        self.context = kwargs.get("context") or {}
        self.__cause__ = kwargs.get("cause")

        self._log_error()

    def _log_error(self) -> None:
        """Log error with structured data."""
        logger = logging.getLogger(f"mvcore.errors.{self.__class__.__name__}")
        log_data = {
            "error_id": self.error_id,
            "code": self.code,
            "error_message": self.message,
            "severity": self.severity.value,
            "details": self.details,
            "context": self.context,
            "error_class": self.__class__.__name__,
        }

        if self.severity == ErrorSeverity.CRITICAL:
            logger.critical("Critical error occurred", extra=log_data)
        elif self.severity == ErrorSeverity.HIGH:
            logger.error("High severity error", extra=log_data)
        elif self.severity == ErrorSeverity.MEDIUM:
            logger.warning("Medium severity error", extra=log_data)
        else:
            logger.info("Low severity error", extra=log_data)

    def to_dict(self, include_internal: bool = False) -> dict[str, Any]:
        """
        Serialize error for logging or display.

        Args:
            include_internal: Include error_id, severity and context
        """
        data = {
            "error": self.code,
            "message": self.message,
            "timestamp": self.timestamp,
        }

        if self.details:
            data["details"] = dict(self.details)

        if include_internal:
            data.update(
                {
                    "error_id": self.error_id,
                    "severity": self.severity.value,
                    "context": self.context,
                }
            )

        return data

    def with_context(self, **context: Any) -> "MVCoreError":
        """Add context to error and return self for chaining."""
        self.context.update(context)
        return self

    def __str__(self) -> str:
        return f"[{self.error_id}] {self.code}: {self.message}"


class ValidationError(MVCoreError):
    """Invalid argument passed to a registry or value type."""

    default_code = "VALIDATION_ERROR"
    severity = ErrorSeverity.LOW

    def __init__(self, message: str, field: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        if field:
            self.details["field"] = field


class ConfigurationError(MVCoreError):
    """Invalid settings, or a notifier used before it was wired."""

    default_code = "CONFIGURATION_ERROR"
    severity = ErrorSeverity.HIGH


class DuplicateRegistrationError(MVCoreError):
    """A notification name is already mapped and the policy rejects overwrites."""

    default_code = "DUPLICATE_REGISTRATION"
    severity = ErrorSeverity.MEDIUM

    def __init__(self, notification_name: str, **kwargs: Any) -> None:
        super().__init__(
            f"Command already registered for notification '{notification_name}'",
            **kwargs,
        )
        self.notification_name = notification_name
        self.details["notification_name"] = notification_name


class CommandNotFoundError(MVCoreError):
    """No command is mapped for a notification under strict dispatch."""

    default_code = "COMMAND_NOT_FOUND"
    severity = ErrorSeverity.MEDIUM

    def __init__(self, notification_name: str, **kwargs: Any) -> None:
        super().__init__(
            f"No command registered for notification '{notification_name}'",
            **kwargs,
        )
        self.notification_name = notification_name
        self.details["notification_name"] = notification_name


__all__ = [
    "CommandNotFoundError",
    "ConfigurationError",
    "DuplicateRegistrationError",
    "ErrorSeverity",
    "MVCoreError",
    "ValidationError",
]
