################################################################################
# File Name: dispatcher.py
# Purpose/Description: Runs both monitors and executes the first resolved action
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
Action dispatcher.

Starts the power source monitor and the button monitor as concurrent tasks
sharing one cancellation signal. The first monitor to resolve claims the
action and sets the signal, which stops the other. Once both have exited,
the configured command for the action is run exactly once:

    Timeout, CapacityLow, Shutdown  ->  shutdown command
    Reboot                          ->  reboot command

A blank command line fails before anything is spawned. A failing command is
not retried; the error propagates to the process entry point.

Usage:
    dispatcher = createDispatcherFromConfig(config, board, cancellation)
    action = await dispatcher.run()
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

from hardware.x728_board import X728Board

from .button_monitor import ButtonMonitor
from .buzzer import BuzzerCoordinator
from .cancellation import CancellationSignal
from .command_runner import NoCommandError, runShellCommand
from .config import WatchdogConfig
from .power_monitor import PowerSourceMonitor
from .types import ActionKind, WatchdogAction

logger = logging.getLogger(__name__)


class Monitor(Protocol):
    """A watcher that resolves to at most one action."""

    async def run(self) -> WatchdogAction | None: ...


CommandRunner = Callable[[str], Awaitable[int]]


class ActionDispatcher:
    """
    Coordinates the two monitors and the command executor.

    Attributes:
        resolvedAction: The action claimed in the last run, if any
    """

    def __init__(
        self,
        powerMonitor: Monitor,
        buttonMonitor: Monitor,
        cancellation: CancellationSignal,
        shutdownCommand: str,
        rebootCommand: str,
        runner: CommandRunner = runShellCommand
    ):
        """
        Initialize the dispatcher.

        Args:
            powerMonitor: Power source monitor
            buttonMonitor: Button monitor
            cancellation: Signal shared with both monitors
            shutdownCommand: Command line for shutdown actions
            rebootCommand: Command line for reboot actions
            runner: Coroutine that runs a command line
        """
        self._powerMonitor = powerMonitor
        self._buttonMonitor = buttonMonitor
        self._cancellation = cancellation
        self._commands = {
            ActionKind.SHUTDOWN: shutdownCommand,
            ActionKind.REBOOT: rebootCommand,
        }
        self._runner = runner
        self._resolvedAction: WatchdogAction | None = None

    async def run(self) -> WatchdogAction | None:
        """
        Run both monitors to completion and dispatch the winning action.

        Returns:
            The dispatched action, or None if cancelled before any resolved

        Raises:
            NoCommandError: If the mapped command line is blank
            CommandExecutionError: If the command fails
            Exception: Anything a monitor raises, after the claimed action
                (if any) has been dispatched
        """
        self._resolvedAction = None

        results = await asyncio.gather(
            self._watch('power', self._powerMonitor),
            self._watch('button', self._buttonMonitor),
            return_exceptions=True
        )
        errors = [result for result in results if isinstance(result, BaseException)]

        if self._resolvedAction is None:
            if errors:
                raise errors[0]
            logger.info("Watchdog stopped without an action")
            return None

        # A monitor failing after the claim must not drop the claimed command
        await self.dispatch(self._resolvedAction)

        if errors:
            raise errors[0]
        return self._resolvedAction

    async def _watch(self, name: str, monitor: Monitor) -> None:
        try:
            action = await monitor.run()
        except Exception:
            logger.error(f"The {name} monitor failed, stopping watchdog")
            self._cancellation.cancel()
            raise

        if action is None:
            return

        if self._resolvedAction is not None:
            logger.warning(f"Discarding {name} action {action}, another action was already claimed")
            return

        self._resolvedAction = action
        self._cancellation.cancel()
        logger.warning(action.describe())

    def commandFor(self, action: WatchdogAction) -> str:
        """Get the configured command line for an action."""
        return self._commands[action.commandKind]

    async def dispatch(self, action: WatchdogAction) -> None:
        """
        Run the command mapped to an action once.

        Raises:
            NoCommandError: If the command line is blank
            CommandExecutionError: If the command fails
        """
        command = self.commandFor(action)

        if not command.strip():
            raise NoCommandError(
                f"No {action.commandKind.value} command configured."
            )

        await self._runner(command)

    @property
    def resolvedAction(self) -> WatchdogAction | None:
        return self._resolvedAction


def createDispatcherFromConfig(
    config: WatchdogConfig,
    board: X728Board,
    cancellation: CancellationSignal,
    runner: CommandRunner = runShellCommand
) -> ActionDispatcher:
    """
    Wire monitors, buzzer and dispatcher to an opened board.

    Args:
        config: Validated watchdog configuration
        board: Opened X728 board
        cancellation: Signal that SIGINT/SIGTERM will set
        runner: Coroutine that runs a command line

    Returns:
        Ready-to-run dispatcher
    """
    buzzer = BuzzerCoordinator(board.buzzer, cancellation)

    powerMonitor = PowerSourceMonitor(
        readPowerSource=board.getPowerSource,
        fuelGauge=board.fuelGauge,
        buzzer=buzzer,
        cancellation=cancellation,
        shutdownTimeout=config.timeout,
    )
    buttonMonitor = ButtonMonitor(
        readButtonState=board.getButtonState,
        buzzer=buzzer,
        cancellation=cancellation,
    )

    return ActionDispatcher(
        powerMonitor=powerMonitor,
        buttonMonitor=buttonMonitor,
        cancellation=cancellation,
        shutdownCommand=config.shutdownCommand,
        rebootCommand=config.rebootCommand,
        runner=runner,
    )
