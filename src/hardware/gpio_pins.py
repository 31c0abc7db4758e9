################################################################################
# File Name: gpio_pins.py
# Purpose/Description: Digital input/output pin wrappers over gpiozero
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
Digital GPIO pins for the X728 board.

Thin wrappers around gpiozero's DigitalInputDevice and DigitalOutputDevice
that read and write raw levels. The watchdog samples levels itself on a
fixed tick, so no edge callbacks or bounce filtering are configured here.

Usage:
    from hardware.gpio_pins import InputPin, OutputPin

    powerLoss = InputPin(6)
    buzzer = OutputPin(20)

    if powerLoss.isHigh():
        buzzer.setHigh()
    buzzer.setLow()

Note:
    Inputs are opened floating (no internal pull resistor); the X728 drives
    both lines itself.
"""

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


# ================================================================================
# GPIO Exceptions
# ================================================================================


class GpioError(Exception):
    """Base exception for GPIO pin errors."""

    def __init__(self, message: str, pin: int | None = None):
        super().__init__(message)
        self.message = message
        self.pin = pin

    def __str__(self) -> str:
        if self.pin is not None:
            return f"{self.message} | pin=GPIO{self.pin}"
        return self.message


class GpioNotAvailableError(GpioError):
    """Raised when a pin cannot be acquired (no gpiozero, no pin factory, pin busy)."""
    pass


# ================================================================================
# GPIO Pin Classes
# ================================================================================


class _GpioPin(ABC):
    """Shared lifecycle for input and output pins."""

    direction = 'pin'

    def __init__(self, pin: int):
        if pin < 0:
            raise ValueError("GPIO pin must be non-negative")

        self._pin = pin
        self._device = None

    @abstractmethod
    def _createDevice(self, gpiozero):
        """Build the gpiozero device for this pin."""

    def _open(self) -> None:
        try:
            import gpiozero
        except ImportError as e:
            raise GpioNotAvailableError(
                f"gpiozero library not available: {e}", pin=self._pin
            ) from e

        try:
            self._device = self._createDevice(gpiozero)
        except (gpiozero.GPIOZeroError, OSError, RuntimeError) as e:
            raise GpioNotAvailableError(
                f"Failed to acquire {self.direction}: {e}", pin=self._pin
            ) from e

        logger.debug(f"GPIO{self._pin} opened as {self.direction}")

    def _requireDevice(self):
        if self._device is None:
            raise GpioError("GPIO pin is closed", pin=self._pin)
        return self._device

    def isHigh(self) -> bool:
        """Read the current pin level."""
        return bool(self._requireDevice().value)

    @property
    def pin(self) -> int:
        """Get the GPIO pin number (BCM numbering)."""
        return self._pin

    @property
    def isOpen(self) -> bool:
        return self._device is not None

    def close(self) -> None:
        """
        Release the pin.

        Safe to call multiple times.
        """
        if self._device is None:
            return

        try:
            self._device.close()
        except Exception as e:
            logger.warning(f"Error closing GPIO{self._pin}: {e}")
        finally:
            self._device = None

        logger.debug(f"GPIO{self._pin} closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class InputPin(_GpioPin):
    """
    Floating digital input.

    Example:
        button = InputPin(5)
        pressed = button.isHigh()
    """

    direction = 'input'

    def __init__(self, pin: int):
        """
        Acquire a pin as digital input.

        Args:
            pin: GPIO pin number in BCM numbering

        Raises:
            ValueError: If pin is negative
            GpioNotAvailableError: If the pin cannot be acquired
        """
        super().__init__(pin)
        self._open()

    def _createDevice(self, gpiozero):
        # pull_up=None requires an explicit active state; high means active
        return gpiozero.DigitalInputDevice(
            self._pin, pull_up=None, active_state=True
        )


class OutputPin(_GpioPin):
    """
    Digital output driven high or low.

    Example:
        buzzer = OutputPin(20)
        buzzer.setHigh()
        buzzer.setLow()
    """

    direction = 'output'

    def __init__(self, pin: int, initialHigh: bool = False):
        """
        Acquire a pin as digital output.

        Args:
            pin: GPIO pin number in BCM numbering
            initialHigh: Level to drive immediately after acquisition

        Raises:
            ValueError: If pin is negative
            GpioNotAvailableError: If the pin cannot be acquired
        """
        super().__init__(pin)
        self._initialHigh = initialHigh
        self._open()

    def _createDevice(self, gpiozero):
        return gpiozero.DigitalOutputDevice(
            self._pin, initial_value=self._initialHigh
        )

    def setHigh(self) -> None:
        """Drive the pin high."""
        self._requireDevice().on()

    def setLow(self) -> None:
        """Drive the pin low."""
        self._requireDevice().off()
