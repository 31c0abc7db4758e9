################################################################################
# File Name: cancellation.py
# Purpose/Description: One-shot cooperative stop signal shared by all tasks
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
Cooperative cancellation signal.

A single CancellationSignal is created at startup and handed to every
task. Monitors check it at the top of each loop and use sleep() so that a
stop request interrupts a pending wait immediately.

Usage:
    signal = CancellationSignal()

    while not signal.isCancelled():
        poll()
        await signal.sleep(0.05)
"""

import asyncio
import logging

logger = logging.getLogger(__name__)


class CancellationSignal:
    """
    Broadcast stop flag that can only go from unset to set.

    Must be used from the event loop thread; signal handlers are wired
    through loop.add_signal_handler so they run there too.
    """

    def __init__(self):
        self._event = asyncio.Event()

    def cancel(self) -> None:
        """Set the flag. Calling it again has no further effect."""
        if not self._event.is_set():
            logger.debug("Cancellation requested")
        self._event.set()

    def isCancelled(self) -> bool:
        return self._event.is_set()

    async def waitCancelled(self) -> None:
        """Suspend until the flag is set; returns at once if it already is."""
        await self._event.wait()

    async def sleep(self, seconds: float) -> bool:
        """
        Sleep for the given time unless cancelled first.

        Args:
            seconds: Maximum time to sleep

        Returns:
            True if the sleep ended because of cancellation
        """
        if self._event.is_set():
            return True

        try:
            await asyncio.wait_for(self._event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return False
        return True
