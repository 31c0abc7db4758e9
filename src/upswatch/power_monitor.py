################################################################################
# File Name: power_monitor.py
# Purpose/Description: Power source transition and battery runtime watcher
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
Power source monitor.

Polls the power loss pin every 10 seconds. Every change of power source is
logged and announced on the buzzer. While on battery the monitor resolves:

- Timeout(elapsed) once the host has been on battery longer than the
  configured timeout (checked first, capacity is not read on that tick)
- CapacityLow(capacity) once the fuel gauge reports less than 20%

A failed fuel gauge read only skips the capacity check for that tick.

Usage:
    monitor = PowerSourceMonitor(
        readPowerSource=board.getPowerSource,
        fuelGauge=board.fuelGauge,
        buzzer=buzzer,
        cancellation=cancellation,
        shutdownTimeout=3600,
    )
    action = await monitor.run()
"""

import logging
import time
from collections.abc import Callable
from datetime import datetime
from typing import Protocol

from common.logging_config import TRANSITION_TIME_FORMAT
from hardware.fuel_gauge import FuelGaugeError
from hardware.x728_board import PowerSource

from .buzzer import POWER_LOST_PATTERN, POWER_RESTORED_PATTERN, BuzzerCoordinator
from .cancellation import CancellationSignal
from .types import CapacityLow, PowerLossAction, Timeout

logger = logging.getLogger(__name__)


# ================================================================================
# Power Monitor Constants
# ================================================================================

DEFAULT_POLL_INTERVAL = 10.0  # seconds
DEFAULT_CAPACITY_THRESHOLD = 20.0  # percent


class CapacitySource(Protocol):
    """Anything that reports battery capacity in percent."""

    def getCapacity(self) -> float: ...


# ================================================================================
# Power Source Monitor Class
# ================================================================================


class PowerSourceMonitor:
    """
    Watches for power loss and decides when the battery can no longer be trusted.

    Attributes:
        shutdownTimeout: Seconds on battery before a forced shutdown
        lastSource: Power source seen on the previous tick (None before run)
    """

    def __init__(
        self,
        readPowerSource: Callable[[], PowerSource],
        fuelGauge: CapacitySource,
        buzzer: BuzzerCoordinator,
        cancellation: CancellationSignal,
        shutdownTimeout: float,
        pollInterval: float = DEFAULT_POLL_INTERVAL,
        capacityThreshold: float = DEFAULT_CAPACITY_THRESHOLD,
        clock: Callable[[], float] = time.monotonic
    ):
        """
        Initialize the monitor.

        Args:
            readPowerSource: Samples the power loss pin
            fuelGauge: Source of battery capacity readings
            buzzer: Shared buzzer coordinator
            cancellation: Shared stop signal
            shutdownTimeout: Seconds on battery before Timeout resolves
            pollInterval: Seconds between ticks (default: 10)
            capacityThreshold: Capacity in percent below which CapacityLow resolves
            clock: Monotonic time source in seconds

        Raises:
            ValueError: If the timeout is negative or the interval not positive
        """
        if shutdownTimeout < 0:
            raise ValueError("Shutdown timeout must be non-negative")
        if pollInterval <= 0:
            raise ValueError("Poll interval must be positive")

        self._readPowerSource = readPowerSource
        self._fuelGauge = fuelGauge
        self._buzzer = buzzer
        self._cancellation = cancellation
        self._shutdownTimeout = shutdownTimeout
        self._pollInterval = pollInterval
        self._capacityThreshold = capacityThreshold
        self._clock = clock

        self._lastSource: PowerSource | None = None
        self._stateChangedAt = 0.0

    async def run(self) -> PowerLossAction | None:
        """
        Poll until a shutdown condition is met or cancellation is requested.

        Returns:
            The resolved action, or None if cancelled first
        """
        self._lastSource = self._readPowerSource()
        self._stateChangedAt = self._clock()

        logger.info(
            f"Power monitor started | source={self._lastSource.value} "
            f"timeout={self._shutdownTimeout}s"
        )

        while not self._cancellation.isCancelled():
            newSource = self._readPowerSource()

            if newSource != self._lastSource:
                self._lastSource = newSource
                self._stateChangedAt = self._clock()
                await self._announceTransition(newSource)

            if not self._cancellation.isCancelled() and newSource == PowerSource.BATTERY:
                action = self._checkBattery()
                if action is not None:
                    return action

            await self._cancellation.sleep(self._pollInterval)

        logger.debug("Power monitor cancelled")
        return None

    async def _announceTransition(self, newSource: PowerSource) -> None:
        timestamp = datetime.now().strftime(TRANSITION_TIME_FORMAT)

        if newSource == PowerSource.POWER_SUPPLY:
            logger.info(f"Power Supply restored at {timestamp}")
            await self._buzzer.play(POWER_RESTORED_PATTERN)
        else:
            logger.warning(f"Power Supply failed at {timestamp}")
            await self._buzzer.play(POWER_LOST_PATTERN)

    def _checkBattery(self) -> PowerLossAction | None:
        """Evaluate the on-battery conditions for one tick."""
        elapsed = self._clock() - self._stateChangedAt

        if elapsed > self._shutdownTimeout:
            return Timeout(elapsed)

        try:
            capacity = self._fuelGauge.getCapacity()
        except FuelGaugeError as e:
            logger.warning(f"Error while reading capacity: {e}")
            return None

        logger.debug(f"On battery for {elapsed:.0f}s | capacity={capacity:.1f}%")

        if capacity < self._capacityThreshold:
            return CapacityLow(capacity)

        return None

    @property
    def shutdownTimeout(self) -> float:
        return self._shutdownTimeout

    @property
    def lastSource(self) -> PowerSource | None:
        return self._lastSource
