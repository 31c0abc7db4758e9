################################################################################
# File Name: __init__.py
# Purpose/Description: Test package initialization
# Author: Michael Cornelison
# Creation Date: 2026-10-19
# Copyright: (c) 2026 X728 UPS Watchdog Project. All rights reserved.
################################################################################

"""
Test package for the X728 UPS watchdog.

Run tests with:
    pytest tests/
    pytest tests/ -m "not integration"
"""
