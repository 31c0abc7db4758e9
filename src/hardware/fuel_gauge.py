################################################################################
# File Name: fuel_gauge.py
# Purpose/Description: X728 battery fuel gauge register decoding
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
Fuel gauge reader for the X728 UPS HAT.

The gauge sits at I2C address 0x36 and exposes three 16-bit registers that
it transmits most-significant byte first:

    0x02  voltage   raw * 1.25 / 16 millivolts
    0x04  capacity  raw / 25600 as a 0.0-1.0 ratio
    0x14  current   raw as signed 16-bit milliamps

SMBus assembles words least-significant byte first, so every word read is
byte-swapped before it is scaled. Readings are never cached.

Usage:
    from hardware.fuel_gauge import FuelGauge
    from hardware.i2c_client import I2cClient

    gauge = FuelGauge(I2cClient(address=0x36))
    reading = gauge.getReading()
    print(f"{reading.voltage:.2f}V {reading.current:.0f}mA {reading.capacity:.1f}%")
"""

import logging
from dataclasses import dataclass
from typing import Any

from common.error_handler import TransientReadError

from .i2c_client import I2cClient, I2cError

logger = logging.getLogger(__name__)


# ================================================================================
# Fuel Gauge Exceptions
# ================================================================================


class FuelGaugeError(TransientReadError):
    """Raised when a fuel gauge register cannot be read."""
    pass


# ================================================================================
# Fuel Gauge Constants
# ================================================================================

DEFAULT_FUEL_GAUGE_ADDRESS = 0x36

REGISTER_VOLTAGE = 0x02
REGISTER_CAPACITY = 0x04
REGISTER_CURRENT = 0x14

VOLTAGE_SCALE_MV = 1.25 / 16
CAPACITY_RATIO_DIVISOR = 25600


# ================================================================================
# Register Decoding
# ================================================================================


def swapBytes(word: int) -> int:
    """Swap the two bytes of a 16-bit word."""
    return ((word & 0xFF) << 8) | ((word >> 8) & 0xFF)


def decodeVoltage(raw: int) -> float:
    """
    Convert a raw voltage register word to volts.

    Args:
        raw: Word as returned by the SMBus read

    Returns:
        Battery voltage in volts
    """
    milliVolts = swapBytes(raw) * VOLTAGE_SCALE_MV
    return milliVolts / 1000.0


def decodeCapacity(raw: int) -> float:
    """
    Convert a raw capacity register word to a percentage.

    Args:
        raw: Word as returned by the SMBus read

    Returns:
        State of charge in percent (0-100 on a healthy gauge)
    """
    return swapBytes(raw) * 100 / CAPACITY_RATIO_DIVISOR


def decodeCurrent(raw: int) -> float:
    """
    Convert a raw current register word to signed milliamps.

    Args:
        raw: Word as returned by the SMBus read

    Returns:
        Battery current in milliamps
    """
    value = swapBytes(raw)
    if value > 0x7FFF:
        value -= 0x10000
    return float(value)


# ================================================================================
# Battery Reading
# ================================================================================


@dataclass(frozen=True)
class BatteryReading:
    """
    Fuel gauge snapshot.

    Attributes:
        voltage: Battery voltage in volts
        current: Battery current in milliamps (signed)
        capacity: State of charge in percent
    """

    voltage: float
    current: float
    capacity: float

    def toDict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            'voltage': round(self.voltage, 3),
            'current': self.current,
            'capacity': round(self.capacity, 1),
        }


# ================================================================================
# Fuel Gauge Class
# ================================================================================


class FuelGauge:
    """
    Reads voltage, current and capacity from the X728 fuel gauge.

    Example:
        gauge = FuelGauge(client)
        if gauge.getCapacity() < 20:
            print("Battery low")
    """

    def __init__(self, i2cClient: I2cClient):
        """
        Initialize the fuel gauge reader.

        Args:
            i2cClient: Client already bound to the gauge's address
        """
        self._client = i2cClient

    def _readRegister(self, register: int, name: str) -> int:
        try:
            return self._client.readWord(register)
        except I2cError as e:
            raise FuelGaugeError(f"Failed to read battery {name}: {e}") from e

    def getVoltage(self) -> float:
        """
        Read battery voltage.

        Returns:
            Voltage in volts

        Raises:
            FuelGaugeError: If the register read fails
        """
        voltage = decodeVoltage(self._readRegister(REGISTER_VOLTAGE, 'voltage'))
        logger.debug(f"Battery voltage: {voltage:.3f}V")
        return voltage

    def getCurrent(self) -> float:
        """
        Read battery current.

        Returns:
            Current in milliamps, negative while discharging

        Raises:
            FuelGaugeError: If the register read fails
        """
        current = decodeCurrent(self._readRegister(REGISTER_CURRENT, 'current'))
        logger.debug(f"Battery current: {current:.0f}mA")
        return current

    def getCapacity(self) -> float:
        """
        Read battery state of charge.

        Returns:
            Capacity in percent

        Raises:
            FuelGaugeError: If the register read fails
        """
        capacity = decodeCapacity(self._readRegister(REGISTER_CAPACITY, 'capacity'))
        logger.debug(f"Battery capacity: {capacity:.1f}%")
        return capacity

    def getReading(self) -> BatteryReading:
        """
        Read all three registers.

        Returns:
            BatteryReading snapshot

        Raises:
            FuelGaugeError: If any register read fails
        """
        return BatteryReading(
            voltage=self.getVoltage(),
            current=self.getCurrent(),
            capacity=self.getCapacity(),
        )
