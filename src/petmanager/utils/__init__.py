"""
Utility functions and helper modules.

This module provides date decoding and calendar helpers, and the
configuration and logging utilities shared by the client and stores.
"""

from .datetime_utils import (
    API_DATETIME_FORMATS,
    coerce_api_datetime,
    ensure_utc,
    format_api_date,
    format_api_datetime,
    get_current_utc,
    is_same_day,
    parse_api_datetime,
    resolve_now,
    start_of_day,
    to_local,
    whole_days_between,
)

from .config import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    ClientConfig,
    EnvironmentConfig,
    LoggingConfigurator,
    LogLevel,
)

__all__ = [
    # DateTime utilities
    "API_DATETIME_FORMATS",
    "coerce_api_datetime",
    "ensure_utc",
    "format_api_date",
    "format_api_datetime",
    "get_current_utc",
    "is_same_day",
    "parse_api_datetime",
    "resolve_now",
    "start_of_day",
    "to_local",
    "whole_days_between",
    # Configuration utilities
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
    "ClientConfig",
    "EnvironmentConfig",
    "LoggingConfigurator",
    "LogLevel",
]
