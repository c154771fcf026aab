"""
Chamber FDTD - 1D pressure wave chamber simulator.

Main exports:
- WaveChamber: Double-buffered 1D wave equation stepper
- ChamberConfig: Validated chamber parameters
- FixedBoundary, OpenBoundary, PeriodicBoundary, AbsorbingBoundary: Wall policies
- SineOscillator: Independent sine tone generator
- ChamberSession: Key bindings tying chamber and oscillator together
- pressure_to_gray, render_cells: Pressure shading for display
"""

from chamber_fdtd.audio import SineOscillator
from chamber_fdtd.boundaries import (
    AbsorbingBoundary,
    FixedBoundary,
    OpenBoundary,
    PeriodicBoundary,
    make_boundary,
)
from chamber_fdtd.controls import ChamberSession, KeyEvent, parse_events
from chamber_fdtd.core.chamber import ChamberState, WaveChamber
from chamber_fdtd.core.config import ChamberConfig
from chamber_fdtd.errors import ConfigurationError
from chamber_fdtd.render import pressure_to_gray, render_cells

__version__ = "0.1.0"

__all__ = [
    # Core
    "WaveChamber",
    "ChamberState",
    "ChamberConfig",
    "ConfigurationError",
    # Boundaries
    "FixedBoundary",
    "OpenBoundary",
    "PeriodicBoundary",
    "AbsorbingBoundary",
    "make_boundary",
    # Audio
    "SineOscillator",
    # Input and display glue
    "ChamberSession",
    "KeyEvent",
    "parse_events",
    "pressure_to_gray",
    "render_cells",
]
