"""Core wave chamber components."""

from chamber_fdtd.core.chamber import ChamberState, WaveChamber
from chamber_fdtd.core.config import ChamberConfig
from chamber_fdtd.errors import ConfigurationError

__all__ = [
    "WaveChamber",
    "ChamberState",
    "ChamberConfig",
    "ConfigurationError",
]
