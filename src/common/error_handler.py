################################################################################
# File Name: error_handler.py
# Purpose/Description: Error taxonomy and top-level error reporting for the
#                      UPS watchdog daemon
# Author: Michael Cornelison
# Creation Date: 2026-10-19
# Copyright: (c) 2026 X728 UPS Watchdog Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-19    | M. Cornelison | Initial implementation
# ================================================================================
################################################################################

"""
Error handling module.

Provides centralized error handling with:
- Custom exception classes by error category
- Error classification (transient, config, execution, hardware, system)
- Structured error reporting for the process entry point

The watchdog never retries: transient read errors are absorbed by the
monitor that hit them, everything else propagates to main() and ends the
daemon with a non-zero exit code.

Usage:
    from common.error_handler import ConfigurationError, handleError

    try:
        runDaemon()
    except Exception as e:
        handleError(e, reraise=False)
"""

import logging
import traceback
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class ErrorCategory(Enum):
    """Categories of errors for classification."""
    TRANSIENT = 'transient'       # Per-tick read failure, log and skip
    CONFIGURATION = 'config'      # Bad command line values, fail fast
    EXECUTION = 'execution'       # Shutdown/reboot command failed
    HARDWARE = 'hardware'         # GPIO/I2C bring-up failed
    SYSTEM = 'system'             # Unexpected errors


# ================================================================================
# Custom Exception Classes
# ================================================================================

class BaseError(Exception):
    """Base exception for all custom errors."""

    category: ErrorCategory = ErrorCategory.SYSTEM

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def toDict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            'type': self.__class__.__name__,
            'category': self.category.value,
            'message': self.message,
            'details': self.details
        }


class TransientReadError(BaseError):
    """Hardware read that failed for one tick only."""
    category = ErrorCategory.TRANSIENT


class ConfigurationError(BaseError):
    """Invalid or missing configuration value."""
    category = ErrorCategory.CONFIGURATION


class CommandExecutionError(BaseError):
    """External shutdown/reboot command could not be run successfully."""
    category = ErrorCategory.EXECUTION


class HardwareError(BaseError):
    """GPIO pin or I2C bus could not be acquired."""
    category = ErrorCategory.HARDWARE


# ================================================================================
# Error Classification
# ================================================================================

def classifyError(error: Exception) -> ErrorCategory:
    """
    Classify an error into a category.

    Args:
        error: Exception to classify

    Returns:
        ErrorCategory for the error
    """
    if isinstance(error, BaseError):
        return error.category

    return ErrorCategory.SYSTEM


def formatError(error: Exception) -> str:
    """
    Format an error for display/logging.

    Args:
        error: Exception to format

    Returns:
        Formatted error string
    """
    category = classifyError(error)

    if isinstance(error, BaseError):
        details = f" | details={error.details}" if error.details else ""
        return f"[{category.value.upper()}] {error.message}{details}"

    return f"[{category.value.upper()}] {type(error).__name__}: {error}"


def handleError(
    error: Exception,
    context: dict[str, Any] | None = None,
    reraise: bool = True
) -> dict[str, Any]:
    """
    Handle an error with logging and classification.

    Args:
        error: Exception that occurred
        context: Additional context information
        reraise: Whether to re-raise the exception

    Returns:
        Error details dictionary

    Raises:
        The original exception if reraise is True
    """
    category = classifyError(error)
    context = context or {}

    errorDetails = {
        'type': type(error).__name__,
        'category': category.value,
        'message': str(error),
        'context': context,
        'traceback': traceback.format_exc()
    }

    if category == ErrorCategory.TRANSIENT:
        logger.warning(f"Transient error: {error}")
    elif category == ErrorCategory.CONFIGURATION:
        logger.error(f"Configuration error: {error}")
    elif category == ErrorCategory.EXECUTION:
        logger.error(f"Command execution error: {error}")
    elif category == ErrorCategory.HARDWARE:
        logger.error(f"Hardware error: {error}")
    else:
        logger.error(f"Error: {error}", exc_info=True)

    if reraise:
        raise error

    return errorDetails
