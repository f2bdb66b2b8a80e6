"""
Core Error Handling
Task ID: R1 - Reaction embeds core

This module provides the error hierarchy for the reaction_embeds library.
Only construction-time problems are raised as library errors; transport
failures from discord.py are left as ``discord.HTTPException`` subclasses.
"""

from typing import Optional, Any, Dict
import traceback
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base library error class

    All custom exceptions in the library inherit from this class.
    Provides common error handling functionality and consistent error formatting.
    """

    def __init__(self,
                 message: str,
                 error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        """
        Initialize the library error

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code for logging
            details: Additional error context and metadata
            cause: The underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__.upper()
        self.details = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc)

        # Capture stack trace if available
        self.stack_trace = traceback.format_exc() if cause else None

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary representation

        Returns:
            Dictionary containing error information
        """
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
            "cause": str(self.cause) if self.cause else None,
            "stack_trace": self.stack_trace
        }

    def __str__(self) -> str:
        """String representation of the error"""
        if self.details:
            return f"{self.message} (Code: {self.error_code}, Details: {self.details})"
        return f"{self.message} (Code: {self.error_code})"


class ValidationError(AppError):
    """
    Input validation error

    Raised when arguments given to an embed constructor fail validation.
    """

    def __init__(self,
                 field: str,
                 value: Any,
                 validation_rule: str,
                 message: Optional[str] = None,
                 error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        """
        Initialize the validation error

        Args:
            field: Field name that failed validation
            value: Value that failed validation (truncated)
            validation_rule: Description of the validation rule that failed
            message: Human-readable error message
            error_code: Machine-readable error code
            details: Additional error context
        """
        sanitized_value = str(value)[:100] if value is not None else None

        default_message = f"Validation failed for field '{field}': {validation_rule}"

        enhanced_details = {
            "field": field,
            "value": sanitized_value,
            "validation_rule": validation_rule,
            **(details or {})
        }

        super().__init__(
            message=message or default_message,
            error_code=error_code or "VALIDATION_ERROR",
            details=enhanced_details
        )

        self.field = field
        self.value = sanitized_value
        self.validation_rule = validation_rule


class ConfigurationError(AppError):
    """
    Configuration error

    Raised when there are issues with library configuration.
    """

    def __init__(self,
                 config_key: str,
                 message: str,
                 error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        """
        Initialize the configuration error

        Args:
            config_key: Configuration key that has an issue
            message: Human-readable error message
            error_code: Machine-readable error code
            details: Additional error context
            cause: The underlying exception that caused this error
        """
        enhanced_details = {
            "config_key": config_key,
            **(details or {})
        }

        super().__init__(
            message=f"Configuration error for '{config_key}': {message}",
            error_code=error_code or "CONFIG_ERROR",
            details=enhanced_details,
            cause=cause
        )

        self.config_key = config_key


__all__ = [
    'AppError',
    'ValidationError',
    'ConfigurationError',
]
