"""Boundary conditions for wave chamber simulations."""

from chamber_fdtd.boundaries._boundaries import (
    BOUNDARY_TYPES,
    AbsorbingBoundary,
    FixedBoundary,
    OpenBoundary,
    PeriodicBoundary,
    make_boundary,
)

__all__ = [
    "FixedBoundary",
    "OpenBoundary",
    "PeriodicBoundary",
    "AbsorbingBoundary",
    "BOUNDARY_TYPES",
    "make_boundary",
]
