"""
Core exceptions for the petmanager package.

This module defines the exception hierarchy used by the API client,
the state stores and the configuration layer.
"""

import logging
import time
import traceback
from typing import Any, Dict, List, Optional


class PetManagerException(Exception):
    """
    Base exception class for all petmanager package exceptions.

    Provides a consistent interface for error handling across the package.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary format.

        Returns:
            Dictionary representation of the exception
        """
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "timestamp": time.time(),
        }

    def get_debug_info(self) -> Dict[str, Any]:
        """
        Get detailed debug information for the exception.

        Returns:
            Dictionary with debug information including traceback
        """
        debug_info = self.to_dict()
        formatted = traceback.format_exc()
        debug_info.update(
            {
                "traceback": (
                    formatted if formatted.strip() != "NoneType: None" else None
                ),
                "module": self.__class__.__module__,
                "class_name": self.__class__.__name__,
            }
        )
        return debug_info

    def log_error(
        self, logger: Optional[logging.Logger] = None, level: int = logging.ERROR
    ) -> None:
        """
        Log the exception with appropriate level and context.

        Args:
            logger: Logger instance to use (creates default if None)
            level: Logging level to use
        """
        if logger is None:
            logger = logging.getLogger(__name__)

        log_data = {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }

        logger.log(
            level,
            f"Exception occurred: {self.message}",
            extra={"exception_data": log_data},
        )

    def __str__(self) -> str:
        """String representation of the exception."""
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class APIException(PetManagerException):
    """Base exception for failures talking to the pet-management API."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        method: Optional[str] = None,
        url: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        """
        Initialize API exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            details: Additional error details
            method: HTTP method of the failed request
            url: URL of the failed request
            original_error: Original exception that caused this error
        """
        super().__init__(message, error_code, details)
        self.method = method
        self.url = url
        self.original_error = original_error

        if method:
            self.details.setdefault("method", method)
        if url:
            self.details.setdefault("url", url)
        if original_error and "original_error" not in self.details:
            self.details["original_error"] = str(original_error)


class TransportException(APIException):
    """Exception raised when the request never produced an HTTP response."""

    def __init__(
        self,
        message: str = "Network request failed",
        method: Optional[str] = None,
        url: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            error_code="TRANSPORT_ERROR",
            method=method,
            url=url,
            original_error=original_error,
        )


class HTTPStatusException(APIException):
    """Exception raised when the server answers outside the 2xx range."""

    def __init__(
        self,
        status_code: int,
        body: Optional[str] = None,
        method: Optional[str] = None,
        url: Optional[str] = None,
        message: Optional[str] = None,
    ):
        """
        Initialize HTTP status exception.

        Args:
            status_code: HTTP status code returned by the server
            body: Response body text, surfaced as the error detail
            method: HTTP method of the failed request
            url: URL of the failed request
            message: Optional override for the generated message
        """
        details: Dict[str, Any] = {"status_code": status_code}
        if body:
            details["body"] = body

        if message is None:
            message = f"Server responded with status {status_code}"
            if body:
                message = f"{message}: {body}"

        super().__init__(
            message=message,
            error_code="HTTP_STATUS_ERROR",
            details=details,
            method=method,
            url=url,
        )
        self.status_code = status_code
        self.body = body

    @property
    def is_client_error(self) -> bool:
        """True for 4xx responses."""
        return 400 <= self.status_code < 500

    @property
    def is_server_error(self) -> bool:
        """True for 5xx responses."""
        return 500 <= self.status_code < 600


class DecodeException(APIException):
    """Exception raised when a response body cannot be decoded into a schema."""

    def __init__(
        self,
        message: str = "Failed to decode response",
        schema_name: Optional[str] = None,
        validation_errors: Optional[Dict[str, List[str]]] = None,
        method: Optional[str] = None,
        url: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        """
        Initialize decode exception.

        Args:
            message: Error message
            schema_name: Name of the schema the payload was decoded into
            validation_errors: Formatted validation errors per field
            method: HTTP method of the request
            url: URL of the request
            original_error: Original exception
        """
        details: Dict[str, Any] = {}
        if schema_name:
            details["schema_name"] = schema_name
        if validation_errors:
            details["validation_errors"] = validation_errors

        super().__init__(
            message=message,
            error_code="DECODE_ERROR",
            details=details,
            method=method,
            url=url,
            original_error=original_error,
        )


class DateParseException(DecodeException, ValueError):
    """
    Exception raised when a date string matches none of the accepted formats.

    Also a ``ValueError`` so pydantic reports it as a field validation error
    when raised from inside a field validator.
    """

    def __init__(self, raw_value: str, attempted_formats: Optional[List[str]] = None):
        """
        Initialize date parse exception.

        Args:
            raw_value: The offending date string
            attempted_formats: Format labels that were tried, in order
        """
        super().__init__(message=f"Cannot decode date: {raw_value}")
        self.error_code = "DATE_PARSE_ERROR"
        self.raw_value = raw_value
        self.details["raw_value"] = raw_value
        if attempted_formats:
            self.details["attempted_formats"] = attempted_formats


class ValidationException(PetManagerException):
    """Base exception for data validation errors."""

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        value: Optional[Any] = None,
        validation_errors: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize validation exception.

        Args:
            message: Error message
            field: Field that failed validation
            value: Value that failed validation
            validation_errors: Detailed validation errors
        """
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        if validation_errors:
            details["validation_errors"] = validation_errors

        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details=details,
        )


class StatusTransitionException(ValidationException):
    """Exception raised when a record cannot move to the requested status."""

    def __init__(
        self,
        message: str = "Status transition not allowed",
        current_status: Optional[str] = None,
        target_status: Optional[str] = None,
        record_id: Optional[int] = None,
    ):
        """
        Initialize status transition exception.

        Args:
            message: Error message
            current_status: Status the record currently has
            target_status: Status that was requested
            record_id: Identifier of the record
        """
        super().__init__(message=message)
        self.error_code = "STATUS_TRANSITION_ERROR"
        if current_status:
            self.details["current_status"] = current_status
        if target_status:
            self.details["target_status"] = target_status
        if record_id is not None:
            self.details["record_id"] = record_id


class ConfigurationException(PetManagerException):
    """Exception raised for configuration-related errors."""

    def __init__(
        self,
        message: str = "Configuration error",
        config_key: Optional[str] = None,
        config_value: Optional[str] = None,
    ):
        """
        Initialize configuration exception.

        Args:
            message: Error message
            config_key: Configuration key that caused the error
            config_value: Configuration value (will be sanitized)
        """
        details = {}
        if config_key:
            details["config_key"] = config_key
        if config_value:
            details["config_value"] = self._sanitize_config_value(
                config_key, config_value
            )

        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            details=details,
        )

    @staticmethod
    def _sanitize_config_value(key: Optional[str], value: str) -> str:
        """Sanitize configuration values to avoid exposing secrets."""
        if not key:
            return "[REDACTED]"

        sensitive_keys = ["password", "secret", "key", "token", "credential"]
        if any(sensitive in key.lower() for sensitive in sensitive_keys):
            return "[REDACTED]"

        return value


# Utility functions for exception handling and error formatting


def format_validation_errors(errors: List[Dict[str, Any]]) -> Dict[str, List[str]]:
    """
    Format Pydantic validation errors into a user-friendly structure.

    Args:
        errors: List of Pydantic validation errors

    Returns:
        Dictionary mapping field names to lists of error messages
    """
    formatted_errors: Dict[str, List[str]] = {}

    for error in errors:
        field_path = ".".join(str(loc) for loc in error.get("loc", []))
        if not field_path:
            field_path = "root"

        message = error.get("msg", "Validation error")
        error_type = error.get("type", "unknown")

        if error_type == "value_error":
            formatted_message = message
        elif error_type == "missing":
            formatted_message = "This field is required"
        else:
            formatted_message = f"{message} (type: {error_type})"

        formatted_errors.setdefault(field_path, []).append(formatted_message)

    return formatted_errors


def create_error_response(
    exception: PetManagerException,
    include_debug: bool = False,
) -> Dict[str, Any]:
    """
    Create a standardized error response from an exception.

    Args:
        exception: The exception to format
        include_debug: Whether to include debug information

    Returns:
        Standardized error response dictionary
    """
    response: Dict[str, Any] = {
        "success": False,
        "error": {
            "type": exception.__class__.__name__,
            "code": exception.error_code,
            "message": exception.message,
        },
    }

    if exception.details:
        response["error"]["details"] = exception.details

    if include_debug:
        debug_info = exception.get_debug_info()
        response["debug"] = {
            "timestamp": debug_info["timestamp"],
            "module": debug_info["module"],
            "class_name": debug_info["class_name"],
        }

    return response


def log_exception_context(
    exception: Exception,
    context: Dict[str, Any],
    logger: Optional[logging.Logger] = None,
    level: int = logging.ERROR,
) -> None:
    """
    Log an exception with additional context information.

    Args:
        exception: The exception to log
        context: Additional context information
        logger: Logger instance to use
        level: Logging level
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    if isinstance(exception, PetManagerException):
        log_data = exception.to_dict()
        log_data["context"] = context
        logger.log(
            level,
            f"Exception with context: {exception.message}",
            extra={"exception_data": log_data},
        )
    else:
        logger.log(
            level,
            f"Non-petmanager exception: {str(exception)}",
            extra={
                "exception_type": exception.__class__.__name__,
                "exception_message": str(exception),
                "context": context,
            },
        )
