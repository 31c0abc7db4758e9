################################################################################
# File Name: button_monitor.py
# Purpose/Description: Board button press-duration classifier
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
Button monitor.

Samples the button every 50ms. A press is acknowledged with one beep and
timed until release; held for 2 seconds or more it means reboot, anything
shorter means shutdown. There is no debounce filter, so even a one-sample
glitch on the pin counts as a short press.

Usage:
    monitor = ButtonMonitor(board.getButtonState, buzzer, cancellation)
    action = await monitor.run()
"""

import logging
import time
from collections.abc import Callable

from hardware.x728_board import ButtonState

from .buzzer import BUTTON_PRESS_PATTERN, BuzzerCoordinator
from .cancellation import CancellationSignal
from .types import ButtonAction, Reboot, Shutdown

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_INTERVAL = 0.05  # seconds
DEFAULT_REBOOT_HOLD_TIME = 2.0  # seconds


def classifyPress(
    elapsed: float,
    rebootHoldTime: float = DEFAULT_REBOOT_HOLD_TIME
) -> ButtonAction:
    """
    Map a hold duration to an action.

    Args:
        elapsed: Seconds the button was held
        rebootHoldTime: Shortest hold that means reboot

    Returns:
        Reboot if elapsed >= rebootHoldTime, else Shutdown
    """
    if elapsed >= rebootHoldTime:
        return Reboot(elapsed)
    return Shutdown(elapsed)


class ButtonMonitor:
    """
    Two-state (released/pressed) sampler that resolves on the first release.
    """

    def __init__(
        self,
        readButtonState: Callable[[], ButtonState],
        buzzer: BuzzerCoordinator,
        cancellation: CancellationSignal,
        sampleInterval: float = DEFAULT_SAMPLE_INTERVAL,
        rebootHoldTime: float = DEFAULT_REBOOT_HOLD_TIME,
        clock: Callable[[], float] = time.monotonic
    ):
        if sampleInterval <= 0:
            raise ValueError("Sample interval must be positive")
        if rebootHoldTime <= 0:
            raise ValueError("Reboot hold time must be positive")

        self._readButtonState = readButtonState
        self._buzzer = buzzer
        self._cancellation = cancellation
        self._sampleInterval = sampleInterval
        self._rebootHoldTime = rebootHoldTime
        self._clock = clock

    async def run(self) -> ButtonAction | None:
        """
        Wait for one complete press.

        Returns:
            Reboot or Shutdown for the first press, None if cancelled first
        """
        logger.info(
            f"Button monitor started | rebootHoldTime={self._rebootHoldTime}s"
        )

        while not self._cancellation.isCancelled():
            if self._readButtonState() == ButtonState.RELEASED:
                await self._cancellation.sleep(self._sampleInterval)
                continue

            await self._buzzer.play(BUTTON_PRESS_PATTERN)
            pulseStart = self._clock()

            while (not self._cancellation.isCancelled()
                    and self._readButtonState() == ButtonState.PRESSED):
                await self._cancellation.sleep(self._sampleInterval)

            if self._cancellation.isCancelled():
                break

            return classifyPress(self._clock() - pulseStart, self._rebootHoldTime)

        logger.debug("Button monitor cancelled")
        return None
