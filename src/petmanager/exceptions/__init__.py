"""
Custom exceptions for the petmanager package.

This module defines the exception hierarchy used by the API client,
the state stores and the configuration layer.
"""

from .core_exceptions import (  # Utility functions
    APIException,
    ConfigurationException,
    DateParseException,
    DecodeException,
    HTTPStatusException,
    PetManagerException,
    StatusTransitionException,
    TransportException,
    ValidationException,
    create_error_response,
    format_validation_errors,
    log_exception_context,
)

__all__ = [
    # Exception classes
    "PetManagerException",
    "APIException",
    "TransportException",
    "HTTPStatusException",
    "DecodeException",
    "DateParseException",
    "ValidationException",
    "StatusTransitionException",
    "ConfigurationException",
    # Utility functions
    "format_validation_errors",
    "create_error_response",
    "log_exception_context",
]
