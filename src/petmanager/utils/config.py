"""
Configuration management utilities.

This module provides environment variable handling with type conversion,
the API client configuration (from environment or YAML file), and
logging configuration utilities.
"""

import logging
import logging.config
import os
from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from urllib.parse import urlparse
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from ..exceptions import ConfigurationException

DEFAULT_BASE_URL = "http://localhost:8000"
DEFAULT_TIMEOUT = 30.0
ENV_PREFIX = "PETMANAGER_"


class LogLevel(Enum):
    """Enumeration for log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class EnvironmentConfig:
    """Utility class for handling environment variables with type conversion."""

    @staticmethod
    def get_str(
        key: str, default: Optional[str] = None, required: bool = False
    ) -> Optional[str]:
        """
        Get a string environment variable.

        Args:
            key: Environment variable key
            default: Default value if not found
            required: Whether the variable is required

        Returns:
            String value or default

        Raises:
            ConfigurationException: If required variable is missing
        """
        value = os.getenv(key, default)

        if required and value is None:
            raise ConfigurationException(
                f"Required environment variable '{key}' is not set", config_key=key
            )

        return value

    @staticmethod
    def get_int(
        key: str, default: Optional[int] = None, required: bool = False
    ) -> Optional[int]:
        """
        Get an integer environment variable.

        Raises:
            ConfigurationException: If required variable is missing or invalid
        """
        value = os.getenv(key)

        if value is None:
            if required:
                raise ConfigurationException(
                    f"Required environment variable '{key}' is not set",
                    config_key=key,
                )
            return default

        try:
            return int(value)
        except ValueError:
            raise ConfigurationException(
                f"Environment variable '{key}' must be an integer, got: {value}",
                config_key=key,
                config_value=value,
            )

    @staticmethod
    def get_float(
        key: str, default: Optional[float] = None, required: bool = False
    ) -> Optional[float]:
        """
        Get a float environment variable.

        Raises:
            ConfigurationException: If required variable is missing or invalid
        """
        value = os.getenv(key)

        if value is None:
            if required:
                raise ConfigurationException(
                    f"Required environment variable '{key}' is not set",
                    config_key=key,
                )
            return default

        try:
            return float(value)
        except ValueError:
            raise ConfigurationException(
                f"Environment variable '{key}' must be a float, got: {value}",
                config_key=key,
                config_value=value,
            )


@dataclass
class ClientConfig:
    """Configuration for the pet-management API client."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    user_id: Optional[int] = None
    timezone: str = "UTC"
    log_level: str = LogLevel.INFO.value

    def __post_init__(self) -> None:
        errors = self.validate()
        if errors:
            raise ConfigurationException(
                f"Invalid client configuration: {'; '.join(errors)}"
            )
        self.base_url = self.base_url.rstrip("/")

    def validate(self) -> List[str]:
        """Validate the configuration and return a list of problems."""
        errors = []

        parsed = urlparse(self.base_url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            errors.append(f"base_url must be an http(s) URL, got: {self.base_url!r}")

        if self.timeout is None or self.timeout <= 0:
            errors.append("timeout must be a positive number of seconds")

        if self.user_id is not None and self.user_id <= 0:
            errors.append("user_id must be a positive integer")

        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            errors.append(f"Unknown timezone: {self.timezone}")

        if self.log_level.upper() not in LogLevel.__members__:
            errors.append(f"Unknown log level: {self.log_level}")

        return errors

    @classmethod
    def from_environment(cls, prefix: str = ENV_PREFIX) -> "ClientConfig":
        """
        Build the configuration from ``PETMANAGER_*`` environment variables.

        Unset variables fall back to the dataclass defaults.
        """
        return cls(
            base_url=EnvironmentConfig.get_str(f"{prefix}BASE_URL", DEFAULT_BASE_URL),
            timeout=EnvironmentConfig.get_float(f"{prefix}TIMEOUT", DEFAULT_TIMEOUT),
            user_id=EnvironmentConfig.get_int(f"{prefix}USER_ID"),
            timezone=EnvironmentConfig.get_str(f"{prefix}TIMEZONE", "UTC"),
            log_level=EnvironmentConfig.get_str(
                f"{prefix}LOG_LEVEL", LogLevel.INFO.value
            ),
        )

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ClientConfig":
        """
        Load the configuration from a YAML file.

        Args:
            path: Path to a YAML mapping with any of the dataclass fields

        Raises:
            ConfigurationException: If the file is missing, malformed or
                contains unknown keys
        """
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigurationException(
                f"Configuration file not found: {config_path}",
                config_key="config_file",
                config_value=str(config_path),
            )

        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Invalid YAML in {config_path}: {e}")

        if not isinstance(data, dict):
            raise ConfigurationException(
                f"Configuration file {config_path} must contain a mapping"
            )

        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationException(
                f"Unknown configuration keys: {', '.join(unknown)}"
            )

        return cls(**data)

    def save(self, path: Union[str, Path]) -> None:
        """Write the configuration to a YAML file."""
        config_path = Path(path)
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w") as f:
            yaml.dump(asdict(self), f, default_flow_style=False, indent=2)


class LoggingConfigurator:
    """Utility class for configuring logging."""

    DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @staticmethod
    def configure_basic_logging(
        level: Union[str, LogLevel] = LogLevel.INFO,
        format_string: Optional[str] = None,
        log_file: Optional[str] = None,
    ) -> None:
        """
        Configure basic logging for the application.

        Args:
            level: Logging level
            format_string: Custom format string
            log_file: Optional log file path
        """
        if isinstance(level, LogLevel):
            level = level.value

        basic_config_args: Dict[str, Any] = {
            "level": level,
            "format": format_string or LoggingConfigurator.DEFAULT_FORMAT,
            "datefmt": "%Y-%m-%d %H:%M:%S",
        }

        if log_file:
            basic_config_args["filename"] = log_file
            basic_config_args["filemode"] = "a"

        logging.basicConfig(**basic_config_args)

    @staticmethod
    def configure_structured_logging(
        config_dict: Optional[Dict[str, Any]] = None,
        config_file: Optional[str] = None,
        level: Union[str, LogLevel] = LogLevel.INFO,
    ) -> None:
        """
        Configure structured logging using a dictionary or file.

        Args:
            config_dict: Logging configuration dictionary
            config_file: Path to logging configuration file
            level: Level for the ``petmanager`` logger in the default config
        """
        if isinstance(level, LogLevel):
            level = level.value

        if config_file and Path(config_file).exists():
            logging.config.fileConfig(config_file)
        elif config_dict:
            logging.config.dictConfig(config_dict)
        else:
            default_config = {
                "version": 1,
                "disable_existing_loggers": False,
                "formatters": {
                    "standard": {"format": LoggingConfigurator.DEFAULT_FORMAT},
                    "detailed": {
                        "format": "%(asctime)s - %(name)s - %(levelname)s - %(module)s - %(funcName)s - %(message)s"
                    },
                },
                "handlers": {
                    "console": {
                        "class": "logging.StreamHandler",
                        "level": level,
                        "formatter": "standard",
                        "stream": "ext://sys.stdout",
                    }
                },
                "loggers": {
                    "petmanager": {
                        "level": level,
                        "handlers": ["console"],
                        "propagate": False,
                    }
                },
                "root": {"level": "WARNING", "handlers": ["console"]},
            }
            logging.config.dictConfig(default_config)

    @staticmethod
    def configure_from_client_config(config: ClientConfig) -> None:
        """Apply the default structured logging at the configured level."""
        LoggingConfigurator.configure_structured_logging(
            level=config.log_level.upper()
        )
