################################################################################
# File Name: test_types.py
# Purpose/Description: Tests for the watchdog action types
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
Tests for the types module.

Run with:
    pytest tests/test_types.py -v
"""

import sys
from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

srcPath = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(srcPath))

from upswatch.types import (
    ActionKind,
    ButtonAction,
    CapacityLow,
    PowerLossAction,
    Reboot,
    Shutdown,
    Timeout,
)


# ================================================================================
# Base Class Tests
# ================================================================================

class TestActionBases:
    """Tests for the abstract action bases."""

    def test_powerLossAction_cannotBeInstantiated(self):
        with pytest.raises(TypeError):
            PowerLossAction()

    def test_buttonAction_cannotBeInstantiated(self):
        with pytest.raises(TypeError):
            ButtonAction(1.0)

    def test_buttonSubclassWithoutCommandKind_cannotBeInstantiated(self):
        """
        Given: A button action that only implements describe()
        When: It is instantiated
        Then: TypeError is raised for the missing commandKind
        """
        # Arrange
        class HalfAction(ButtonAction):
            def describe(self) -> str:
                return "half"

        # Act & Assert
        with pytest.raises(TypeError):
            HalfAction(1.0)


# ================================================================================
# Concrete Action Tests
# ================================================================================

class TestConcreteActions:
    """Tests for command mapping and log text of each action."""

    @pytest.mark.parametrize('action, kind', [
        (CapacityLow(15.0), ActionKind.SHUTDOWN),
        (Timeout(3601.0), ActionKind.SHUTDOWN),
        (Shutdown(0.8), ActionKind.SHUTDOWN),
        (Reboot(2.5), ActionKind.REBOOT),
    ])
    def test_commandKind_mapsToConfiguredCommand(self, action, kind):
        assert action.commandKind == kind

    def test_describe_formatsUnits(self):
        assert CapacityLow(15.04).describe() == (
            "Critical capacity of 15.0% reached! Shutting down..."
        )
        assert Timeout(3601.7).describe() == (
            "Downtime of 3601 seconds reached! Shutting down..."
        )
        assert Reboot(2.5).describe() == (
            "Button pressed for 2500 ms. Rebooting the system."
        )

    def test_actions_areFrozen(self):
        action = Reboot(2.5)

        with pytest.raises(FrozenInstanceError):
            action.elapsed = 1.0
