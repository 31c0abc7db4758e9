################################################################################
# File Name: buzzer.py
# Purpose/Description: Serialized pulse-train playback on the board buzzer
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
Buzzer coordinator.

Both monitors use the buzzer for audible feedback. The coordinator holds an
asyncio.Lock for the whole pulse train, so a second request waits until the
first has finished instead of interleaving pulses with it.

Usage:
    buzzer = BuzzerCoordinator(board.buzzer, cancellation)
    await buzzer.play(POWER_LOST_PATTERN)
    await buzzer.beep(0.2, 0.2, 1)
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from .cancellation import CancellationSignal

logger = logging.getLogger(__name__)


class BuzzerOutput(Protocol):
    """Anything that can drive the buzzer line."""

    def setHigh(self) -> None: ...

    def setLow(self) -> None: ...


@dataclass(frozen=True)
class BeepPattern:
    """
    A finite pulse train.

    Attributes:
        highDuration: Seconds the buzzer is on per pulse
        lowDuration: Seconds of silence between pulses
        count: Number of pulses
    """

    highDuration: float
    lowDuration: float
    count: int


POWER_RESTORED_PATTERN = BeepPattern(highDuration=0.05, lowDuration=0.1, count=2)
POWER_LOST_PATTERN = BeepPattern(highDuration=0.5, lowDuration=0.5, count=3)
BUTTON_PRESS_PATTERN = BeepPattern(highDuration=0.2, lowDuration=0.2, count=1)


class BuzzerCoordinator:
    """
    Exclusive owner of the buzzer output.

    Attributes:
        isBusy: Whether a pulse train is currently playing
    """

    def __init__(self, output: BuzzerOutput, cancellation: CancellationSignal):
        """
        Initialize the coordinator.

        Args:
            output: Buzzer line, expected to be low already
            cancellation: Shared stop signal; pending pulses are skipped once set
        """
        self._output = output
        self._cancellation = cancellation
        self._lock = asyncio.Lock()

    async def beep(self, highDuration: float, lowDuration: float, count: int) -> None:
        """
        Play count pulses of highDuration on / lowDuration off.

        Returns early without toggling once cancellation is set. No silence
        follows the last pulse.

        Args:
            highDuration: Seconds on per pulse
            lowDuration: Seconds off between pulses
            count: Number of pulses
        """
        async with self._lock:
            isHigh = False
            try:
                for counter in range(count):
                    if self._cancellation.isCancelled():
                        return

                    self._output.setHigh()
                    isHigh = True
                    await self._cancellation.sleep(highDuration)
                    self._output.setLow()
                    isHigh = False

                    if counter + 1 < count:
                        await self._cancellation.sleep(lowDuration)
            finally:
                # Task cancellation can land between setHigh and setLow
                if isHigh:
                    self._output.setLow()

    async def play(self, pattern: BeepPattern) -> None:
        """Play a named pattern."""
        logger.debug(
            f"Beep {pattern.count}x {int(pattern.highDuration * 1000)}ms on / "
            f"{int(pattern.lowDuration * 1000)}ms off"
        )
        await self.beep(pattern.highDuration, pattern.lowDuration, pattern.count)

    @property
    def isBusy(self) -> bool:
        return self._lock.locked()
