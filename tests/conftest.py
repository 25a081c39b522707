"""
Pytest configuration and shared fixtures.
"""

import matplotlib

matplotlib.use("Agg")

import pytest

from rtlsim.core import Register

from circuits import Count, Incrementer


@pytest.fixture
def counter():
    """A register holding 0 and the logic unit that increments it."""
    reg = Register(Count(), name="count")
    return reg, Incrementer(reg)


@pytest.fixture
def make_counter():
    """Factory for freshly assembled counter circuits."""

    def build(start: int = 0):
        reg = Register(Count(val=start), name="count")
        return reg, Incrementer(reg)

    return build
