################################################################################
# File Name: types.py
# Purpose/Description: Terminal actions produced by the watchdog monitors
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
Watchdog action types.

Each monitor resolves to at most one action:
- PowerLossAction: CapacityLow or Timeout (power source monitor)
- ButtonAction: Reboot or Shutdown (button monitor)

Every action knows which configured command it maps to (commandKind) and
how to describe itself for the log. Durations are seconds.

All types have zero project dependencies (stdlib only) to avoid circular imports.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class ActionKind(Enum):
    """Which configured command an action runs."""

    SHUTDOWN = "shutdown"
    REBOOT = "reboot"


# ================================================================================
# Power Loss Actions
# ================================================================================

@dataclass(frozen=True)
class PowerLossAction(ABC):
    """Terminal decision of the power source monitor."""

    @property
    def commandKind(self) -> ActionKind:
        return ActionKind.SHUTDOWN

    @abstractmethod
    def describe(self) -> str:
        """Log line announcing the action."""


@dataclass(frozen=True)
class CapacityLow(PowerLossAction):
    """
    Battery capacity dropped below the critical threshold.

    Attributes:
        capacity: State of charge in percent when the threshold was crossed
    """

    capacity: float

    def describe(self) -> str:
        return f"Critical capacity of {self.capacity:.1f}% reached! Shutting down..."


@dataclass(frozen=True)
class Timeout(PowerLossAction):
    """
    Host ran on battery for longer than the configured timeout.

    Attributes:
        elapsed: Seconds since the switch to battery
    """

    elapsed: float

    def describe(self) -> str:
        return f"Downtime of {int(self.elapsed)} seconds reached! Shutting down..."


# ================================================================================
# Button Actions
# ================================================================================

@dataclass(frozen=True)
class ButtonAction(ABC):
    """
    Terminal decision of the button monitor.

    Attributes:
        elapsed: Seconds the button was held
    """

    elapsed: float

    @property
    @abstractmethod
    def commandKind(self) -> ActionKind:
        """Configured command this action runs."""

    @abstractmethod
    def describe(self) -> str:
        """Log line announcing the action."""


@dataclass(frozen=True)
class Reboot(ButtonAction):
    """Button held for the reboot threshold or longer."""

    @property
    def commandKind(self) -> ActionKind:
        return ActionKind.REBOOT

    def describe(self) -> str:
        return f"Button pressed for {int(self.elapsed * 1000)} ms. Rebooting the system."


@dataclass(frozen=True)
class Shutdown(ButtonAction):
    """Button released before the reboot threshold."""

    @property
    def commandKind(self) -> ActionKind:
        return ActionKind.SHUTDOWN

    def describe(self) -> str:
        return f"Button pressed for {int(self.elapsed * 1000)} ms. Shutting down the system."


WatchdogAction = PowerLossAction | ButtonAction
