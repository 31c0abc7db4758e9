################################################################################
# File Name: i2c_client.py
# Purpose/Description: SMBus word reader bound to a single I2C device
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
I2C communication client for the X728 fuel gauge.

Opens one SMBus and talks to one device address. There is no retry logic:
a failed read surfaces immediately so the caller can skip that poll tick.

Usage:
    from hardware.i2c_client import I2cClient, I2cNotAvailableError

    try:
        with I2cClient(address=0x36, bus=1) as client:
            raw = client.readWord(0x04)
    except I2cNotAvailableError:
        print("I2C not available on this system")

Note:
    This module requires the smbus2 library and I2C hardware support.
    On non-Pi systems, creating an I2cClient raises I2cNotAvailableError.
"""

import logging

from .platform_utils import isRaspberryPi

logger = logging.getLogger(__name__)


# ================================================================================
# I2C Exceptions
# ================================================================================

class I2cError(Exception):
    """Base exception for I2C errors."""

    def __init__(self, message: str, address: int | None = None,
                 register: int | None = None):
        """
        Initialize I2C error.

        Args:
            message: Error message
            address: I2C device address (optional)
            register: Register being accessed (optional)
        """
        super().__init__(message)
        self.message = message
        self.address = address
        self.register = register

    def __str__(self) -> str:
        parts = [self.message]
        if self.address is not None:
            parts.append(f"address=0x{self.address:02x}")
        if self.register is not None:
            parts.append(f"register=0x{self.register:02x}")
        return ' | '.join(parts)


class I2cNotAvailableError(I2cError):
    """Exception raised when the I2C bus cannot be opened."""

    def __init__(self, message: str = "I2C not available on this system"):
        super().__init__(message)


class I2cCommunicationError(I2cError):
    """Exception raised when a transfer on an open bus fails."""
    pass


class I2cDeviceNotFoundError(I2cCommunicationError):
    """Exception raised when nothing acknowledges at the device address."""
    pass


# ================================================================================
# I2C Client Constants
# ================================================================================

DEFAULT_BUS = 1

# errno values reported when no device answers (ENXIO, ENODEV, EREMOTEIO)
DEVICE_MISSING_ERRNOS = (6, 19, 121)


# ================================================================================
# I2C Client Class
# ================================================================================

class I2cClient:
    """
    SMBus client bound to one device address.

    Attributes:
        address: I2C device address
        bus: I2C bus number (default: 1)

    Example:
        client = I2cClient(address=0x36)
        raw = client.readWord(0x02)
    """

    def __init__(self, address: int, bus: int = DEFAULT_BUS):
        """
        Open the bus.

        Args:
            address: I2C device address (0x00-0x7F)
            bus: I2C bus number (default: 1 for Raspberry Pi)

        Raises:
            ValueError: If address is outside the 7-bit range
            I2cNotAvailableError: If I2C is not available on this system
        """
        if not 0 <= address <= 0x7F:
            raise ValueError(f"I2C address must be 0x00-0x7F, got 0x{address:02x}")

        self._address = address
        self._bus = bus
        self._smbus: object | None = None

        self._initializeBus()

    def _initializeBus(self) -> None:
        """
        Initialize the SMBus connection.

        Raises:
            I2cNotAvailableError: If I2C is not available
        """
        if not isRaspberryPi():
            raise I2cNotAvailableError(
                f"I2C bus {self._bus} not available - not running on Raspberry Pi"
            )

        try:
            import smbus2
        except ImportError as e:
            raise I2cNotAvailableError(
                f"smbus2 library not available: {e}"
            ) from e

        try:
            self._smbus = smbus2.SMBus(self._bus)
            logger.info(f"I2C client initialized on bus {self._bus} for device 0x{self._address:02x}")
        except OSError as e:
            raise I2cNotAvailableError(
                f"Failed to open I2C bus {self._bus}: {e}"
            ) from e

    def readWord(self, register: int) -> int:
        """
        Read a 16-bit word from a device register.

        SMBus combines the two received bytes little-endian; callers whose
        device sends big-endian words must swap the bytes themselves.

        Args:
            register: Register (command byte) to read from

        Returns:
            16-bit word value (0-65535) as returned by the bus

        Raises:
            I2cDeviceNotFoundError: If the device does not acknowledge
            I2cCommunicationError: If the transfer fails
            I2cNotAvailableError: If the bus is closed
        """
        if self._smbus is None:
            raise I2cNotAvailableError("I2C bus not initialized")

        try:
            result = self._smbus.read_word_data(self._address, register)
        except OSError as e:
            if getattr(e, 'errno', None) in DEVICE_MISSING_ERRNOS:
                raise I2cDeviceNotFoundError(
                    f"No I2C device found at address 0x{self._address:02x}",
                    address=self._address,
                    register=register
                ) from e
            raise I2cCommunicationError(
                f"I2C readWord failed: {e}",
                address=self._address,
                register=register
            ) from e

        logger.debug(f"I2C read word: addr=0x{self._address:02x} reg=0x{register:02x} value=0x{result:04x}")
        return result

    def close(self) -> None:
        """
        Close the I2C bus connection.

        Safe to call multiple times.
        """
        if self._smbus is not None:
            try:
                self._smbus.close()
                logger.debug(f"I2C bus {self._bus} closed")
            except Exception as e:
                logger.warning(f"Error closing I2C bus: {e}")
            finally:
                self._smbus = None

    def __enter__(self) -> 'I2cClient':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def address(self) -> int:
        """Get the bound device address."""
        return self._address

    @property
    def bus(self) -> int:
        """Get the I2C bus number."""
        return self._bus

    @property
    def isConnected(self) -> bool:
        """Check if the I2C bus is open."""
        return self._smbus is not None
