################################################################################
# File Name: x728_board.py
# Purpose/Description: X728 UPS HAT pin map and hardware bring-up
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
X728 UPS HAT hardware.

Acquires every pin and the fuel gauge the watchdog needs and exposes them
as typed reads:

    GPIO5   input   button (high while pressed)
    GPIO6   input   power loss detect (high while on battery)
    GPIO12  output  software alive, held high while the daemon runs
    GPIO20  output  buzzer, starts low
    I2C-1   0x36    fuel gauge

Usage:
    from hardware.x728_board import X728Board, PowerSource

    with X728Board.open() as board:
        if board.getPowerSource() == PowerSource.BATTERY:
            print(board.fuelGauge.getCapacity())
"""

import logging
from enum import Enum

from common.error_handler import HardwareError

from .fuel_gauge import DEFAULT_FUEL_GAUGE_ADDRESS, FuelGauge
from .gpio_pins import GpioError, InputPin, OutputPin
from .i2c_client import DEFAULT_BUS, I2cClient, I2cError

logger = logging.getLogger(__name__)


# ================================================================================
# Board Constants
# ================================================================================

GPIO_BUTTON = 5
GPIO_POWER_LOSS = 6
GPIO_SOFTWARE_ALIVE = 12
GPIO_BUZZER = 20


class PowerSource(Enum):
    """Where the host is currently drawing power from."""
    POWER_SUPPLY = "power_supply"
    BATTERY = "battery"


class ButtonState(Enum):
    """Instantaneous state of the board button."""
    PRESSED = "pressed"
    RELEASED = "released"


# ================================================================================
# Board Class
# ================================================================================


class X728Board:
    """
    Handle on the X728 pins and fuel gauge.

    Build one with X728Board.open(); the constructor takes already-acquired
    parts so tests can hand in fakes.
    """

    def __init__(
        self,
        buttonPin: InputPin,
        powerLossPin: InputPin,
        buzzerPin: OutputPin,
        fuelGauge: FuelGauge,
        softwareAlivePin: OutputPin | None = None,
        i2cClient: I2cClient | None = None
    ):
        self._buttonPin = buttonPin
        self._powerLossPin = powerLossPin
        self._buzzerPin = buzzerPin
        self._fuelGauge = fuelGauge
        self._softwareAlivePin = softwareAlivePin
        self._i2cClient = i2cClient

    @classmethod
    def open(
        cls,
        bus: int = DEFAULT_BUS,
        address: int = DEFAULT_FUEL_GAUGE_ADDRESS
    ) -> 'X728Board':
        """
        Acquire all board resources.

        Anything acquired before a failure is released again.

        Args:
            bus: I2C bus number of the fuel gauge
            address: I2C address of the fuel gauge

        Returns:
            Ready-to-use board

        Raises:
            HardwareError: If any pin or the I2C bus cannot be acquired
        """
        acquired = []

        try:
            buzzerPin = OutputPin(GPIO_BUZZER, initialHigh=False)
            acquired.append(buzzerPin)
            powerLossPin = InputPin(GPIO_POWER_LOSS)
            acquired.append(powerLossPin)
            softwareAlivePin = OutputPin(GPIO_SOFTWARE_ALIVE, initialHigh=True)
            acquired.append(softwareAlivePin)
            buttonPin = InputPin(GPIO_BUTTON)
            acquired.append(buttonPin)
            i2cClient = I2cClient(address=address, bus=bus)
            acquired.append(i2cClient)
        except (GpioError, I2cError, ValueError) as e:
            for resource in reversed(acquired):
                resource.close()
            raise HardwareError(
                f"X728 initialization failed: {e}",
                details={'bus': bus, 'address': f"0x{address:02x}"}
            ) from e

        logger.info(
            f"X728 board opened | button=GPIO{GPIO_BUTTON} powerLoss=GPIO{GPIO_POWER_LOSS} "
            f"buzzer=GPIO{GPIO_BUZZER} alive=GPIO{GPIO_SOFTWARE_ALIVE} gauge=0x{address:02x}"
        )

        return cls(
            buttonPin=buttonPin,
            powerLossPin=powerLossPin,
            buzzerPin=buzzerPin,
            fuelGauge=FuelGauge(i2cClient),
            softwareAlivePin=softwareAlivePin,
            i2cClient=i2cClient,
        )

    def getPowerSource(self) -> PowerSource:
        """Sample the power loss pin."""
        if self._powerLossPin.isHigh():
            return PowerSource.BATTERY
        return PowerSource.POWER_SUPPLY

    def getButtonState(self) -> ButtonState:
        """Sample the button pin."""
        if self._buttonPin.isHigh():
            return ButtonState.PRESSED
        return ButtonState.RELEASED

    @property
    def buzzer(self) -> OutputPin:
        """Buzzer output; only the buzzer coordinator should drive it."""
        return self._buzzerPin

    @property
    def fuelGauge(self) -> FuelGauge:
        return self._fuelGauge

    def close(self) -> None:
        """
        Release all pins and the bus, leaving the buzzer low.

        Safe to call multiple times.
        """
        if self._buzzerPin.isOpen:
            self._buzzerPin.setLow()

        for resource in (
            self._buttonPin,
            self._softwareAlivePin,
            self._powerLossPin,
            self._buzzerPin,
            self._i2cClient,
        ):
            if resource is not None:
                resource.close()

        logger.debug("X728 board closed")

    def __enter__(self) -> 'X728Board':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
