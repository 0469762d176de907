"""Configuration management for mvcore.

Settings are read from environment variables (prefixed ``MVCORE_``) with an
optional ``.env`` file as a fallback source. Values already present in the
process environment always win over the file.

Architecture:
- EnvironmentLoader: Environment variable loading with type conversion
- Settings: Typed access to every mvcore setting
- get_settings: Cached settings factory
"""

import os
from enum import Enum
from functools import lru_cache
from typing import Any

from mvcore.core.enums import Environment, LogFormat, LogLevel, RegistrationPolicy
from mvcore.core.errors import ConfigurationError

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class EnvironmentLoader:
    """
    Environment variable loader with type conversion and validation.

    Usage Example:
        loader = EnvironmentLoader(".env", prefix="MVCORE_")
        strict = loader.get_boolean("STRICT_DISPATCH", False)
    """

    def __init__(self, env_file: str = ".env", prefix: str = "MVCORE_"):
        """
        Initialize environment loader.

        Args:
            env_file: Optional environment file to load
            prefix: Prefix prepended to every key looked up
        """
        self.env_file = env_file
        self.prefix = prefix
        self._load_env_file()

    def _load_env_file(self) -> None:
        """Load environment variables from file if it exists."""
        if not self.env_file or not os.path.exists(self.env_file):
            return

        try:
            with open(self.env_file, encoding="utf-8") as f:
                for raw_line in f:
                    line = raw_line.strip()

                    if not line or line.startswith("#"):
                        continue

                    if "=" in line:
                        key, value = line.split("=", 1)
                        key = key.strip()
                        value = value.strip()

                        if (value.startswith('"') and value.endswith('"')) or (
                            value.startswith("'") and value.endswith("'")
                        ):
                            value = value[1:-1]

                        if key not in os.environ:
                            os.environ[key] = value

        except OSError as e:
            raise ConfigurationError(
                f"Failed to load environment file {self.env_file}: {e}"
            ) from e

    def _raw(self, key: str) -> str | None:
        return os.environ.get(f"{self.prefix}{key}")

    def get_string(
        self, key: str, default: str | None = None, required: bool = False
    ) -> str | None:
        """Get string value from environment."""
        value = self._raw(key)
        if value is None:
            if required:
                raise ConfigurationError(f"{self.prefix}{key} is required")
            return default
        return value.strip()

    def get_boolean(
        self, key: str, default: bool = False, required: bool = False
    ) -> bool:
        """Get boolean value from environment."""
        value = self.get_string(key, None, required)
        if value is None:
            return default

        lowered = value.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ConfigurationError(
            f"{self.prefix}{key} must be a boolean, got {value!r}"
        )

    def get_enum(
        self,
        key: str,
        enum_class: type[Enum],
        default: Enum | None = None,
        required: bool = False,
    ) -> Enum | None:
        """Get enum value from environment, matching by value or member name."""
        value = self.get_string(key, None, required)
        if value is None:
            return default

        for member in enum_class:
            member_value = member.value
            if isinstance(member_value, tuple):
                member_value = member_value[0]
            if value.lower() in (str(member_value).lower(), member.name.lower()):
                return member

        allowed = ", ".join(m.name.lower() for m in enum_class)
        raise ConfigurationError(
            f"{self.prefix}{key} must be one of: {allowed}; got {value!r}"
        )


class Settings:
    """
    mvcore settings.

    Usage Example:
        settings = Settings()
        if settings.strict_dispatch:
            ...
    """

    def __init__(self, env_file: str = ".env"):
        """
        Initialize settings with environment variable loading.

        Args:
            env_file: Environment file to load variables from
        """
        self.env_loader = EnvironmentLoader(env_file)

        self._load_logging_config()
        self._load_dispatch_config()

    def _load_logging_config(self) -> None:
        self.environment = self.env_loader.get_enum(
            "ENVIRONMENT", Environment, Environment.DEVELOPMENT
        )
        # None leaves the choice to the environment defaults in LogConfig
        self.log_level = self.env_loader.get_enum("LOG_LEVEL", LogLevel)
        self.log_format = self.env_loader.get_enum("LOG_FORMAT", LogFormat)

    def _load_dispatch_config(self) -> None:
        self.command_registration_policy = self.env_loader.get_enum(
            "COMMAND_REGISTRATION_POLICY",
            RegistrationPolicy,
            RegistrationPolicy.OVERWRITE,
        )
        self.strict_dispatch = self.env_loader.get_boolean("STRICT_DISPATCH", False)

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to a plain dictionary."""
        return {
            "environment": self.environment.value,
            "log_level": self.log_level.level_name if self.log_level else None,
            "log_format": self.log_format.value if self.log_format else None,
            "command_registration_policy": self.command_registration_policy.value,
            "strict_dispatch": self.strict_dispatch,
        }


@lru_cache
def get_settings(env_file: str = ".env") -> Settings:
    """
    Get cached settings instance.

    Args:
        env_file: Environment file to load

    Returns:
        Settings: mvcore settings
    """
    return Settings(env_file)


__all__ = [
    "EnvironmentLoader",
    "Settings",
    "get_settings",
]
