################################################################################
# File Name: conftest.py
# Purpose/Description: Pytest fixtures and configuration
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
Pytest configuration and shared fixtures.

Fixtures defined here are available to all test files automatically.

Usage:
    def test_something(fakeClock, cancellation):
        # fakeClock and cancellation are automatically injected
        pass
"""

import sys
from collections.abc import Generator
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add src to path for imports
srcPath = Path(__file__).parent.parent / 'src'
if str(srcPath) not in sys.path:
    sys.path.insert(0, str(srcPath))

from tests.test_utils import FakeClock, RecordingBuzzer, RecordingOutput
from upswatch.cancellation import CancellationSignal


# ================================================================================
# Watchdog Fixtures
# ================================================================================

@pytest.fixture
def fakeClock() -> FakeClock:
    """Provide a clock starting at 0.0 seconds."""
    return FakeClock()


@pytest.fixture
def cancellation() -> CancellationSignal:
    """
    Provide an unset cancellation signal.

    asyncio.Event binds to a loop lazily, so the signal can be created
    outside asyncio.run().
    """
    return CancellationSignal()


@pytest.fixture
def recordingBuzzer() -> RecordingBuzzer:
    """Provide a buzzer stand-in that records played patterns."""
    return RecordingBuzzer()


@pytest.fixture
def recordingOutput() -> RecordingOutput:
    """Provide an output pin that records high/low writes."""
    return RecordingOutput()


@pytest.fixture
def watchdogArgs() -> list[str]:
    """Provide a complete daemon command line."""
    return [
        '--shutdown', 'sudo shutdown -h now',
        '--reboot', 'sudo reboot',
        '--timeout', '3600',
    ]


# ================================================================================
# Mock Fixtures
# ================================================================================

@pytest.fixture
def mockLogger() -> MagicMock:
    """
    Provide mock logger for testing log calls.

    Returns:
        MagicMock logger instance
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    return logger


@pytest.fixture
def mockI2cClient() -> MagicMock:
    """
    Provide mock I2C client for fuel gauge tests.

    Returns:
        MagicMock with readWord returning 0
    """
    client = MagicMock()
    client.readWord.return_value = 0
    return client


# ================================================================================
# Utility Fixtures
# ================================================================================

@pytest.fixture
def assertNoLogs(caplog: pytest.LogCaptureFixture) -> Generator[None, None, None]:
    """
    Assert that no error logs were emitted during test.

    Usage:
        def test_something(assertNoLogs):
            # Test code here
            # Will fail if any ERROR logs are emitted
    """
    yield

    errors = [r for r in caplog.records if r.levelname == 'ERROR']
    assert len(errors) == 0, f"Unexpected error logs: {[r.message for r in errors]}"


# ================================================================================
# Pytest Configuration
# ================================================================================

def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
