################################################################################
# File Name: __init__.py
# Purpose/Description: Common utilities package initialization
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
Common utilities package.

This package provides shared functionality used across the daemon:
- Logging configuration
- Error taxonomy and reporting

Usage:
    from common.logging_config import getLogger, setupLogging
    from common.error_handler import ConfigurationError, handleError
"""

from .error_handler import (
    BaseError,
    CommandExecutionError,
    ConfigurationError,
    ErrorCategory,
    HardwareError,
    TransientReadError,
    classifyError,
    formatError,
    handleError,
)
from .logging_config import getLogger, logWithContext, setupLogging

__all__ = [
    'getLogger',
    'setupLogging',
    'logWithContext',
    'BaseError',
    'ErrorCategory',
    'TransientReadError',
    'ConfigurationError',
    'CommandExecutionError',
    'HardwareError',
    'classifyError',
    'formatError',
    'handleError',
]
