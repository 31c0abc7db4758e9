################################################################################
# File Name: test_buzzer.py
# Purpose/Description: Tests for the buzzer coordinator
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
Tests for the buzzer module.

Durations are kept at a millisecond so the pulse trains run quickly; the
assertions look at the order of pin writes, not at timing.

Run with:
    pytest tests/test_buzzer.py -v
"""

import asyncio
import sys
from pathlib import Path

srcPath = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(srcPath))

from upswatch.buzzer import (
    BUTTON_PRESS_PATTERN,
    POWER_LOST_PATTERN,
    POWER_RESTORED_PATTERN,
    BeepPattern,
    BuzzerCoordinator,
)
from tests.test_utils import RecordingOutput, runAsync

TICK = 0.001


def assertAlternatesEndingLow(events: list[str]) -> None:
    """Pin writes must go high, low, high, low ... and end low."""
    assert len(events) % 2 == 0
    for index, event in enumerate(events):
        assert event == ('high' if index % 2 == 0 else 'low'), events


# ================================================================================
# Pattern Tests
# ================================================================================

class TestBeepPatterns:
    """Tests for the named patterns."""

    def test_powerRestoredPattern_twoShortPulses(self):
        assert POWER_RESTORED_PATTERN == BeepPattern(0.05, 0.1, 2)

    def test_powerLostPattern_threeLongPulses(self):
        assert POWER_LOST_PATTERN == BeepPattern(0.5, 0.5, 3)

    def test_buttonPressPattern_singlePulse(self):
        assert BUTTON_PRESS_PATTERN == BeepPattern(0.2, 0.2, 1)


# ================================================================================
# Beep Tests
# ================================================================================

class TestBuzzerBeep:
    """Tests for BuzzerCoordinator.beep()."""

    def test_beep_threePulses_alternatesAndEndsLow(self, cancellation, recordingOutput):
        """
        Given: An idle coordinator
        When: beep() is called for 3 pulses
        Then: The pin goes high/low exactly 3 times and ends low
        """
        # Arrange
        buzzer = BuzzerCoordinator(recordingOutput, cancellation)

        # Act
        runAsync(buzzer.beep(TICK, TICK, 3))

        # Assert
        assert recordingOutput.events == ['high', 'low'] * 3

    def test_beep_zeroCount_doesNotTouchPin(self, cancellation, recordingOutput):
        """
        Given: An idle coordinator
        When: beep() is called with count 0
        Then: Nothing is written
        """
        buzzer = BuzzerCoordinator(recordingOutput, cancellation)

        runAsync(buzzer.beep(TICK, TICK, 0))

        assert recordingOutput.events == []

    def test_beep_alreadyCancelled_doesNotTouchPin(self, cancellation, recordingOutput):
        """
        Given: A cancelled signal
        When: beep() is called
        Then: Returns without writing to the pin
        """
        # Arrange
        cancellation.cancel()
        buzzer = BuzzerCoordinator(recordingOutput, cancellation)

        # Act
        runAsync(buzzer.beep(TICK, TICK, 3))

        # Assert
        assert recordingOutput.events == []

    def test_beep_cancelledDuringSecondPulse_stopsLow(self, cancellation):
        """
        Given: A 5 pulse train
        When: Cancellation is set while the second pulse is high
        Then: That pulse is finished low and no further pulses follow
        """
        # Arrange
        def cancelOnSecondPulse(highCount):
            if highCount == 2:
                cancellation.cancel()

        output = RecordingOutput(onHigh=cancelOnSecondPulse)
        buzzer = BuzzerCoordinator(output, cancellation)

        # Act
        runAsync(buzzer.beep(TICK, TICK, 5))

        # Assert
        assert output.events == ['high', 'low', 'high', 'low']
        assert output.isHighNow is False

    def test_beep_taskCancelledWhileHigh_leavesPinLow(self, cancellation, recordingOutput):
        """
        Given: A pulse train in its first long high phase
        When: The asyncio task running it is cancelled
        Then: The pin is driven low once before the task ends
        """
        # Arrange
        buzzer = BuzzerCoordinator(recordingOutput, cancellation)

        async def scenario():
            task = asyncio.create_task(buzzer.beep(10, 10, 3))
            await asyncio.sleep(0.01)
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        # Act
        runAsync(scenario())

        # Assert
        assert recordingOutput.events == ['high', 'low']


# ================================================================================
# Serialization Tests
# ================================================================================

class TestBuzzerSerialization:
    """Tests for mutual exclusion between concurrent requests."""

    def test_concurrentBeeps_doNotInterleave(self, cancellation, recordingOutput):
        """
        Given: Two tasks requesting 2 and 3 pulses at the same time
        When: Both complete
        Then: Exactly 5 pulses are written and the pin strictly alternates
        """
        # Arrange
        buzzer = BuzzerCoordinator(recordingOutput, cancellation)

        async def scenario():
            await asyncio.gather(
                buzzer.beep(TICK, TICK, 2),
                buzzer.beep(TICK, TICK, 3),
            )

        # Act
        runAsync(scenario())

        # Assert
        assert recordingOutput.events.count('high') == 5
        assertAlternatesEndingLow(recordingOutput.events)

    def test_isBusy_duringPlay_isTrue(self, cancellation, recordingOutput):
        """
        Given: A pattern playing in one task
        When: Another task checks isBusy
        Then: isBusy is True while playing and False afterwards
        """
        # Arrange
        buzzer = BuzzerCoordinator(recordingOutput, cancellation)
        observed = {}

        async def scenario():
            task = asyncio.create_task(buzzer.play(BeepPattern(0.2, TICK, 1)))
            await asyncio.sleep(0.01)
            observed['during'] = buzzer.isBusy
            await task
            observed['after'] = buzzer.isBusy

        # Act
        runAsync(scenario())

        # Assert
        assert observed == {'during': True, 'after': False}

    def test_play_pattern_usesPatternCount(self, cancellation, recordingOutput):
        """
        Given: A 2 pulse pattern
        When: play() is awaited
        Then: Two pulses are written
        """
        buzzer = BuzzerCoordinator(recordingOutput, cancellation)

        runAsync(buzzer.play(BeepPattern(TICK, TICK, 2)))

        assert recordingOutput.events == ['high', 'low', 'high', 'low']
