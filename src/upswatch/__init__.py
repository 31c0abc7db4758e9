################################################################################
# File Name: __init__.py
# Purpose/Description: Watchdog engine package initialization
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
Watchdog engine.

This package contains the concurrent monitoring engine:
- CancellationSignal: shared one-shot stop flag
- BuzzerCoordinator: serialized pulse trains on the buzzer
- PowerSourceMonitor: power loss, battery timeout and low capacity
- ButtonMonitor: press duration classification (reboot / shutdown)
- ActionDispatcher: runs both monitors and executes the winning action
- WatchdogConfig: command line settings
- Action types: CapacityLow, Timeout, Reboot, Shutdown
"""

__version__ = '1.0.0'

from .button_monitor import ButtonMonitor, classifyPress
from .buzzer import (
    BUTTON_PRESS_PATTERN,
    POWER_LOST_PATTERN,
    POWER_RESTORED_PATTERN,
    BeepPattern,
    BuzzerCoordinator,
)
from .cancellation import CancellationSignal
from .command_runner import (
    CommandFailedError,
    CommandSpawnError,
    NoCommandError,
    runShellCommand,
)
from .config import WatchdogConfig
from .dispatcher import ActionDispatcher, createDispatcherFromConfig
from .power_monitor import PowerSourceMonitor
from .types import (
    ActionKind,
    ButtonAction,
    CapacityLow,
    PowerLossAction,
    Reboot,
    Shutdown,
    Timeout,
    WatchdogAction,
)

__all__ = [
    'ActionDispatcher',
    'ActionKind',
    'BeepPattern',
    'BUTTON_PRESS_PATTERN',
    'ButtonAction',
    'ButtonMonitor',
    'BuzzerCoordinator',
    'CancellationSignal',
    'CapacityLow',
    'CommandFailedError',
    'CommandSpawnError',
    'NoCommandError',
    'POWER_LOST_PATTERN',
    'POWER_RESTORED_PATTERN',
    'PowerLossAction',
    'PowerSourceMonitor',
    'Reboot',
    'Shutdown',
    'Timeout',
    'WatchdogAction',
    'WatchdogConfig',
    'classifyPress',
    'createDispatcherFromConfig',
    'runShellCommand',
]
