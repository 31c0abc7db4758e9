################################################################################
# File Name: test_command_runner.py
# Purpose/Description: Tests for shutdown/reboot command execution
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
Tests for the command_runner module.

Run with:
    pytest tests/test_command_runner.py -v
"""

import shutil
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

srcPath = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(srcPath))

from common.error_handler import CommandExecutionError, ConfigurationError
from upswatch.command_runner import (
    CommandFailedError,
    CommandSpawnError,
    NoCommandError,
    runShellCommand,
    splitCommand,
)
from tests.test_utils import runAsync

requiresPosixTools = pytest.mark.skipif(
    shutil.which('true') is None or shutil.which('false') is None,
    reason="true/false executables not available"
)


class TestCommandErrors:
    """Tests for the command exception hierarchy."""

    def test_noCommandError_isConfigurationError(self):
        assert issubclass(NoCommandError, ConfigurationError)

    def test_noCommandError_defaultMessage(self):
        assert str(NoCommandError()) == "Command is empty or whitespace."

    def test_commandFailedError_carriesReturnCode(self):
        """
        Given: A command that exited with status 3
        When: CommandFailedError is created
        Then: Message and returnCode reflect the status
        """
        error = CommandFailedError(3, 'sudo reboot')

        assert isinstance(error, CommandExecutionError)
        assert error.returnCode == 3
        assert str(error) == "Command returned with exit status 3."
        assert error.details == {'command': 'sudo reboot', 'returnCode': 3}


class TestSplitCommand:
    """Tests for splitCommand()."""

    def test_splitCommand_collapsesWhitespace(self):
        assert splitCommand("  sudo   shutdown -h\tnow ") == ['sudo', 'shutdown', '-h', 'now']

    @pytest.mark.parametrize('command', ['', '   ', '\t\n'])
    def test_splitCommand_blank_raisesNoCommand(self, command):
        with pytest.raises(NoCommandError):
            splitCommand(command)


class TestRunShellCommand:
    """Tests for runShellCommand()."""

    @requiresPosixTools
    def test_run_exitZero_returnsZero(self):
        """
        Given: A program that exits 0
        When: runShellCommand() is awaited
        Then: Returns 0
        """
        assert runAsync(runShellCommand('true')) == 0

    @requiresPosixTools
    def test_run_exitNonZero_raisesCommandFailed(self):
        """
        Given: A program that exits 1
        When: runShellCommand() is awaited
        Then: Raises CommandFailedError with return code 1
        """
        with pytest.raises(CommandFailedError) as excInfo:
            runAsync(runShellCommand('false'))

        assert excInfo.value.returnCode == 1

    def test_run_missingProgram_raisesSpawnError(self):
        """
        Given: A program name that does not exist
        When: runShellCommand() is awaited
        Then: Raises CommandSpawnError
        """
        with pytest.raises(CommandSpawnError):
            runAsync(runShellCommand('x728-no-such-program --flag'))

    def test_run_blankCommand_spawnsNothing(self):
        """
        Given: A whitespace-only command line
        When: runShellCommand() is awaited
        Then: Raises NoCommandError before any process is created
        """
        with patch('asyncio.create_subprocess_exec', new=AsyncMock()) as mockSpawn:
            with pytest.raises(NoCommandError):
                runAsync(runShellCommand('   '))

        mockSpawn.assert_not_called()

    def test_run_splitsProgramAndArguments(self):
        """
        Given: A command line with arguments
        When: runShellCommand() is awaited
        Then: Program and arguments are passed separately, without a shell
        """
        # Arrange
        process = MagicMock()
        process.wait = AsyncMock(return_value=0)

        with patch('asyncio.create_subprocess_exec', new=AsyncMock(return_value=process)) as mockSpawn:
            # Act
            runAsync(runShellCommand('sudo shutdown -h now'))

        # Assert
        mockSpawn.assert_awaited_once_with('sudo', 'shutdown', '-h', 'now')

    def test_run_killedBySignal_raisesCommandFailed(self):
        """
        Given: A process terminated by SIGTERM (negative return code)
        When: runShellCommand() is awaited
        Then: Raises CommandFailedError
        """
        # Arrange
        process = MagicMock()
        process.wait = AsyncMock(return_value=-15)

        with patch('asyncio.create_subprocess_exec', new=AsyncMock(return_value=process)):
            # Act & Assert
            with pytest.raises(CommandFailedError) as excInfo:
                runAsync(runShellCommand('sudo reboot'))

        assert excInfo.value.returnCode == -15
