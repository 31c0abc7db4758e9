################################################################################
# File Name: config.py
# Purpose/Description: Watchdog settings taken from the command line
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
Watchdog configuration.

There is no configuration file; the three values come from the command line.
Blank command lines are accepted here with a warning because they only
matter once an action needs them.
"""

import argparse
import logging
from dataclasses import dataclass
from typing import Any

from common.error_handler import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WatchdogConfig:
    """
    Attributes:
        shutdownCommand: Command line run for shutdown actions
        rebootCommand: Command line run for reboot actions
        timeout: Seconds on battery before a forced shutdown
    """

    shutdownCommand: str
    rebootCommand: str
    timeout: int

    @classmethod
    def fromArgs(cls, args: argparse.Namespace) -> 'WatchdogConfig':
        """
        Build and validate a config from parsed arguments.

        Raises:
            ConfigurationError: If the timeout is negative
        """
        config = cls(
            shutdownCommand=args.shutdown,
            rebootCommand=args.reboot,
            timeout=args.timeout,
        )
        config.validate()
        return config

    def validate(self) -> None:
        if self.timeout < 0:
            raise ConfigurationError(
                f"Timeout must be non-negative, got {self.timeout}",
                details={'timeout': self.timeout}
            )

        for name, command in (('shutdown', self.shutdownCommand),
                              ('reboot', self.rebootCommand)):
            if not command.strip():
                logger.warning(f"The {name} command is empty; {name} actions will fail")

    def toDict(self) -> dict[str, Any]:
        return {
            'shutdown': self.shutdownCommand,
            'reboot': self.rebootCommand,
            'timeout': self.timeout,
        }
