################################################################################
# File Name: platform_utils.py
# Purpose/Description: Raspberry Pi board detection for hardware bring-up
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
Raspberry Pi board detection.

The X728 only exists as a Pi HAT, so bring-up refuses to open the I2C bus
on anything else and reports the board model in the startup banner.

Usage:
    from hardware.platform_utils import isRaspberryPi, readBoardModel

    if not isRaspberryPi():
        raise SystemExit("not a Pi")
    print(readBoardModel())
"""

import logging
import os
import platform

logger = logging.getLogger(__name__)

# Path to the device tree model file on Linux systems
DEVICE_TREE_MODEL_PATH = '/proc/device-tree/model'


def readBoardModel() -> str | None:
    """
    Read the board model string from the device tree.

    Returns:
        The model string (e.g., "Raspberry Pi 4 Model B Rev 1.4")
        or None if not available.
    """
    if platform.system() != 'Linux':
        return None

    if not os.path.exists(DEVICE_TREE_MODEL_PATH):
        return None

    try:
        with open(DEVICE_TREE_MODEL_PATH) as f:
            modelString = f.read()
    except OSError as e:
        logger.debug(f"Could not read device tree model: {e}")
        return None

    # The model string is null terminated
    modelString = modelString.strip('\x00').strip()
    return modelString or None


def isRaspberryPi() -> bool:
    """
    Detect whether the code is running on a Raspberry Pi.

    Returns:
        True if the device tree model names a Raspberry Pi, False otherwise.
    """
    model = readBoardModel()
    return model is not None and 'Raspberry Pi' in model
