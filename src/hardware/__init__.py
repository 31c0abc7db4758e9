################################################################################
# File Name: __init__.py
# Purpose/Description: Hardware package initialization for the X728 UPS HAT
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
Hardware package for the X728 UPS HAT.

This package provides hardware abstraction for the board:
- Platform detection (isRaspberryPi, readBoardModel)
- Digital GPIO pins (InputPin, OutputPin)
- I2C communication (I2cClient)
- Fuel gauge decoding (FuelGauge, BatteryReading)
- Board bring-up and typed pin reads (X728Board, PowerSource, ButtonState)

Usage:
    from hardware import X728Board, PowerSource

    with X728Board.open() as board:
        source = board.getPowerSource()
        reading = board.fuelGauge.getReading()
"""

from .platform_utils import isRaspberryPi, readBoardModel
from .gpio_pins import (
    GpioError,
    GpioNotAvailableError,
    InputPin,
    OutputPin,
)
from .i2c_client import (
    I2cClient,
    I2cCommunicationError,
    I2cDeviceNotFoundError,
    I2cError,
    I2cNotAvailableError,
)
from .fuel_gauge import (
    BatteryReading,
    FuelGauge,
    FuelGaugeError,
)
from .x728_board import (
    ButtonState,
    PowerSource,
    X728Board,
)

__all__ = [
    # Platform utilities
    'isRaspberryPi',
    'readBoardModel',
    # GPIO pins
    'GpioError',
    'GpioNotAvailableError',
    'InputPin',
    'OutputPin',
    # I2C client
    'I2cClient',
    'I2cError',
    'I2cNotAvailableError',
    'I2cCommunicationError',
    'I2cDeviceNotFoundError',
    # Fuel gauge
    'BatteryReading',
    'FuelGauge',
    'FuelGaugeError',
    # Board
    'ButtonState',
    'PowerSource',
    'X728Board',
]
