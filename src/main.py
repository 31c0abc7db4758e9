################################################################################
# File Name: main.py
# Purpose/Description: UPS watchdog daemon entry point
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
Main application entry point.

This module provides the main entry point for the daemon with:
- CLI argument parsing
- Hardware bring-up (pins held for the lifetime of the process)
- Signal handling: SIGINT/SIGTERM stop both monitors
- Error handling and exit codes
- One-shot battery status report

Usage:
    python src/main.py --help
    python src/main.py --shutdown "sudo shutdown -h now" --reboot "sudo reboot" --timeout 3600
    python src/main.py --status
"""

import argparse
import asyncio
import signal
import sys
from pathlib import Path

# Resolve project paths relative to this script (not CWD)
srcPath = Path(__file__).resolve().parent
if str(srcPath) not in sys.path:
    sys.path.insert(0, str(srcPath))

from common.error_handler import (
    CommandExecutionError,
    ConfigurationError,
    HardwareError,
    handleError,
)
from common.logging_config import getLogger, logWithContext, setupLogging
from hardware.fuel_gauge import FuelGaugeError
from hardware.platform_utils import readBoardModel
from hardware.x728_board import X728Board
from upswatch import __version__
from upswatch.cancellation import CancellationSignal
from upswatch.config import WatchdogConfig
from upswatch.dispatcher import createDispatcherFromConfig
from upswatch.types import WatchdogAction

# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1
EXIT_COMMAND_ERROR = 2
EXIT_HARDWARE_ERROR = 3
EXIT_UNKNOWN_ERROR = 4

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)

# --status warning thresholds
LOW_CAPACITY_WARNING = 20.0
LOW_VOLTAGE_WARNING = 3.00


def parseArgs(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    --shutdown, --reboot and --timeout are required unless --status is given.

    Args:
        argv: Argument list (default: sys.argv[1:])

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description='X728 UPS watchdog: shuts down or reboots the host on power loss or button press',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  main.py --shutdown "sudo shutdown -h now" --reboot "sudo reboot" --timeout 3600
  main.py --shutdown "systemctl poweroff" --reboot "systemctl reboot" --timeout 600 -v
  main.py --status                  Print battery telemetry and exit
        '''
    )

    parser.add_argument(
        '--shutdown',
        help='Command to execute to shut down the system'
    )

    parser.add_argument(
        '--reboot',
        help='Command to execute to reboot the system'
    )

    parser.add_argument(
        '--timeout',
        type=int,
        help='Timeout in seconds after power loss to shut down the system'
    )

    parser.add_argument(
        '--status',
        action='store_true',
        help='Read the fuel gauge once, log it and exit'
    )

    parser.add_argument(
        '--log-file',
        default=None,
        help='Also write log output to this file'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose (debug) logging'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    args = parser.parse_args(argv)

    if not args.status:
        missing = [
            f'--{name}' for name in ('shutdown', 'reboot', 'timeout')
            if getattr(args, name) is None
        ]
        if missing:
            parser.error(f"the following arguments are required: {', '.join(missing)}")

    return args


def registerSignalHandlers(
    loop: asyncio.AbstractEventLoop,
    cancellation: CancellationSignal
) -> None:
    """
    Route SIGINT and SIGTERM to the cancellation signal.

    Args:
        loop: Running event loop
        cancellation: Signal to set on interrupt/terminate
    """
    logger = getLogger(__name__)

    def onSignal(signalName: str) -> None:
        logger.info(f"Received signal {signalName}, stopping watchdog")
        cancellation.cancel()

    for sig in SHUTDOWN_SIGNALS:
        try:
            loop.add_signal_handler(sig, onSignal, sig.name)
        except NotImplementedError:
            # Event loops without add_signal_handler support
            signal.signal(
                sig,
                lambda signum, frame: loop.call_soon_threadsafe(
                    onSignal, signal.Signals(signum).name
                )
            )


def restoreSignalHandlers(loop: asyncio.AbstractEventLoop) -> None:
    """Remove the handlers installed by registerSignalHandlers."""
    for sig in SHUTDOWN_SIGNALS:
        try:
            loop.remove_signal_handler(sig)
        except NotImplementedError:
            signal.signal(sig, signal.SIG_DFL)


async def runWatchdog(config: WatchdogConfig, board: X728Board) -> WatchdogAction | None:
    """
    Run both monitors until an action is dispatched or a signal arrives.

    Args:
        config: Validated configuration
        board: Opened X728 board

    Returns:
        The dispatched action, or None when stopped by a signal

    Raises:
        NoCommandError: If the mapped command line is blank
        CommandExecutionError: If the command fails
    """
    logger = getLogger(__name__)
    loop = asyncio.get_running_loop()
    cancellation = CancellationSignal()

    logger.debug("Registering signal handlers...")
    registerSignalHandlers(loop, cancellation)

    try:
        dispatcher = createDispatcherFromConfig(config, board, cancellation)
        return await dispatcher.run()
    finally:
        logger.debug("Restoring signal handlers...")
        restoreSignalHandlers(loop)


def reportStatus(board: X728Board) -> int:
    """
    Log one power source sample and fuel gauge reading.

    Args:
        board: Opened X728 board

    Returns:
        Exit code

    Raises:
        HardwareError: If the fuel gauge cannot be read
    """
    logger = getLogger(__name__)

    source = board.getPowerSource()
    try:
        reading = board.fuelGauge.getReading()
    except FuelGaugeError as e:
        raise HardwareError(f"Fuel gauge not readable: {e}") from e

    logWithContext(
        logger, 'info', "Battery status",
        source=source.value,
        voltage=f"{reading.voltage:.2f}V",
        current=f"{reading.current:.0f}mA",
        capacity=f"{reading.capacity:.1f}%",
    )

    if reading.capacity >= 100.0:
        logger.info("Battery FULL")

    if reading.capacity < LOW_CAPACITY_WARNING:
        logger.warning("Battery Low")

    if reading.voltage < LOW_VOLTAGE_WARNING:
        logger.warning("Battery LOW!!!")

    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point.

    Args:
        argv: Argument list (default: sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    args = parseArgs(argv)

    logLevel = 'DEBUG' if args.verbose else 'INFO'
    setupLogging(level=logLevel, logFile=args.log_file)
    logger = getLogger(__name__)

    logger.info("=" * 60)
    logger.info(f"X728 UPS watchdog {__version__} starting...")
    logger.info(f"Board: {readBoardModel() or 'unknown'}")
    logger.info("=" * 60)

    try:
        if args.status:
            with X728Board.open() as board:
                return reportStatus(board)

        config = WatchdogConfig.fromArgs(args)
        logWithContext(logger, 'info', "Configuration loaded", **config.toDict())

        with X728Board.open() as board:
            action = asyncio.run(runWatchdog(config, board))

        if action is not None:
            logger.info(f"Dispatched {type(action).__name__} action")
        return EXIT_SUCCESS

    except ConfigurationError as e:
        handleError(e, reraise=False)
        return EXIT_CONFIG_ERROR

    except CommandExecutionError as e:
        handleError(e, reraise=False)
        return EXIT_COMMAND_ERROR

    except HardwareError as e:
        handleError(e, reraise=False)
        return EXIT_HARDWARE_ERROR

    except KeyboardInterrupt:
        logger.warning("Interrupted during startup")
        return EXIT_SUCCESS

    except Exception as e:
        handleError(e, reraise=False)
        logger.error(f"Unexpected error: {e}")
        return EXIT_UNKNOWN_ERROR

    finally:
        logger.info("=" * 60)
        logger.info("X728 UPS watchdog finished")
        logger.info("=" * 60)


if __name__ == '__main__':
    sys.exit(main())
