"""Pytest configuration and shared fixtures for the chamber-fdtd test suite."""

import pytest

from chamber_fdtd import WaveChamber


@pytest.fixture
def reference_chamber():
    """Five-cell chamber with the reference coefficient C2 = 0.5."""
    return WaveChamber(num_cells=5, courant_squared=0.5)


@pytest.fixture
def small_chamber():
    """Small fixed-wall chamber for fast propagation tests."""
    return WaveChamber(num_cells=32, courant_squared=0.5)


@pytest.fixture
def impulse_chamber(small_chamber):
    """Small chamber with a unit impulse at the source cell."""
    small_chamber.inject_pressure(1.0)
    return small_chamber
