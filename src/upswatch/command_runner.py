################################################################################
# File Name: command_runner.py
# Purpose/Description: Runs the configured shutdown/reboot command line
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
External command execution.

The command line is split on whitespace into program and arguments and run
without a shell. The coroutine waits for the process with no timeout; only
exit status 0 counts as success.

Usage:
    from upswatch.command_runner import runShellCommand

    await runShellCommand("sudo systemctl poweroff")
"""

import asyncio
import logging

from common.error_handler import CommandExecutionError, ConfigurationError

logger = logging.getLogger(__name__)


# ================================================================================
# Command Exceptions
# ================================================================================


class NoCommandError(ConfigurationError):
    """Raised when the command line is empty or only whitespace."""

    def __init__(self, message: str = "Command is empty or whitespace."):
        super().__init__(message)


class CommandSpawnError(CommandExecutionError):
    """Raised when the program cannot be started."""
    pass


class CommandFailedError(CommandExecutionError):
    """Raised when the program exits with a non-zero status."""

    def __init__(self, returnCode: int, command: str):
        super().__init__(
            f"Command returned with exit status {returnCode}.",
            details={'command': command, 'returnCode': returnCode}
        )
        self.returnCode = returnCode


# ================================================================================
# Command Execution
# ================================================================================


def splitCommand(command: str) -> list[str]:
    """
    Split a command line on whitespace.

    Args:
        command: Command line, e.g. "sudo shutdown -h now"

    Returns:
        Program followed by its arguments

    Raises:
        NoCommandError: If nothing is left after splitting
    """
    parts = command.split()
    if not parts:
        raise NoCommandError()
    return parts


async def runShellCommand(command: str) -> int:
    """
    Run a command line to completion.

    Args:
        command: Whitespace separated program and arguments

    Returns:
        The exit status (always 0)

    Raises:
        NoCommandError: If the command line is blank; nothing is spawned
        CommandSpawnError: If the program cannot be started
        CommandFailedError: If the program exits non-zero or is killed
    """
    program, *arguments = splitCommand(command)

    logger.info(f"Executing command: {command}")

    try:
        process = await asyncio.create_subprocess_exec(program, *arguments)
    except OSError as e:
        raise CommandSpawnError(
            f"Failed to start '{program}': {e}",
            details={'command': command}
        ) from e

    returnCode = await process.wait()

    if returnCode != 0:
        raise CommandFailedError(returnCode, command)

    logger.debug(f"Command completed: {command}")
    return returnCode
