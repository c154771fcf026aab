"""
Boundary conditions for the 1D wave chamber.

This module provides boundary condition implementations:
    - FixedBoundary: Zero pressure at both walls (default)
    - OpenBoundary: Zero-gradient (free) ends
    - PeriodicBoundary: Chamber wraps around into a ring
    - AbsorbingBoundary: First-order Mur absorbing boundary

Every boundary follows the same protocol. The chamber computes the interior
stencil into a fresh buffer, then calls ``apply(next, cur, prev)`` which
writes only the two end cells ``next[0]`` and ``next[-1]``. Boundaries never
touch the interior and never mutate ``cur`` or ``prev``.

Boundary Selection Guide
------------------------

**FixedBoundary**:
- Rigid wall with zero displacement; pulses reflect with inverted sign
- Conserves the discrete wave energy exactly

**OpenBoundary**:
- Free end (zero gradient); pulses reflect without inversion

**PeriodicBoundary**:
- Left and right walls are joined; no reflection at all
- Conserves the discrete wave energy exactly

**AbsorbingBoundary (Mur ABC)**:
- Outgoing waves leave through the far wall; the source wall stays clamped
- Exact for C2 = 1, small residual reflection below that

Example:
    >>> from chamber_fdtd import WaveChamber, AbsorbingBoundary
    >>> chamber = WaveChamber(num_cells=64, boundary=AbsorbingBoundary())
    >>> chamber = WaveChamber(num_cells=64, boundary="periodic")
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

import numpy as np
from numpy.typing import NDArray

from chamber_fdtd.errors import ConfigurationError

if TYPE_CHECKING:
    from chamber_fdtd.core.chamber import WaveChamber


@dataclass
class FixedBoundary:
    """Fixed (clamped) boundary condition.

    Both wall cells are held at zero pressure, equivalent to a wave
    reflecting off a rigid wall with zero displacement.
    """

    name = "fixed"

    def initialize(self, chamber: WaveChamber) -> None:
        """Initialize boundary (no-op for fixed)."""
        pass

    def apply(
        self,
        next_p: NDArray[np.float64],
        cur: NDArray[np.float64],
        prev: NDArray[np.float64],
    ) -> None:
        """Clamp both wall cells to zero."""
        next_p[0] = 0.0
        next_p[-1] = 0.0

    def reset(self) -> None:
        """Reset boundary state (no-op for fixed)."""
        pass


@dataclass
class OpenBoundary:
    """Open (free) boundary condition.

    Enforces a zero pressure gradient at the walls by copying the adjacent
    interior value, so pulses reflect with their sign preserved.
    """

    name = "open"

    def initialize(self, chamber: WaveChamber) -> None:
        """Initialize boundary (no-op for open)."""
        pass

    def apply(
        self,
        next_p: NDArray[np.float64],
        cur: NDArray[np.float64],
        prev: NDArray[np.float64],
    ) -> None:
        """Copy the neighbouring interior value into each wall cell."""
        next_p[0] = next_p[1]
        next_p[-1] = next_p[-2]

    def reset(self) -> None:
        """Reset boundary state (no-op for open)."""
        pass


class PeriodicBoundary:
    """Periodic boundary condition.

    The chamber is treated as a ring: the left neighbour of cell 0 is
    cell N-1 and the right neighbour of cell N-1 is cell 0. The wall cells
    are advanced with the same stencil as the interior.
    """

    name = "periodic"

    def __init__(self):
        self._c2: float | None = None

    def initialize(self, chamber: WaveChamber) -> None:
        """Capture the stencil coefficient from the chamber."""
        self._c2 = chamber.courant_squared

    def apply(
        self,
        next_p: NDArray[np.float64],
        cur: NDArray[np.float64],
        prev: NDArray[np.float64],
    ) -> None:
        """Advance both wall cells using wrapped neighbours."""
        if self._c2 is None:
            raise RuntimeError("PeriodicBoundary not initialized. Add to chamber first.")
        c2 = self._c2
        next_p[0] = 2.0 * cur[0] - prev[0] + c2 * (cur[1] - 2.0 * cur[0] + cur[-1])
        next_p[-1] = (
            2.0 * cur[-1] - prev[-1] + c2 * (cur[0] - 2.0 * cur[-1] + cur[-2])
        )

    def reset(self) -> None:
        """Reset boundary state (no-op, coefficient is fixed)."""
        pass

    @property
    def is_initialized(self) -> bool:
        """Check if boundary has been initialized."""
        return self._c2 is not None


class AbsorbingBoundary:
    """First-order Absorbing Boundary Condition (Mur).

    Applies the one-way wave equation at an absorbing wall:

        next[0] = cur[1] + k * (next[1] - cur[0]),  k = (C - 1) / (C + 1)

    and the mirror image at the high wall, where C = sqrt(C2). At the
    stability limit (C2 = 1) k is zero and outgoing pulses leave the
    chamber without reflection.

    Mur assumes only outgoing waves near the wall, which does not hold at
    the source cell (index 0) where pressure is injected. The default
    therefore absorbs at the far wall only and clamps the source wall to
    zero, like an anechoically terminated tube driven from a closed end.

    Args:
        side: Which wall absorbs: 'high' (index N-1, default), 'low'
            (index 0) or 'both'. A non-absorbing wall is held at zero.
    """

    name = "absorbing"

    def __init__(self, side: Literal["low", "high", "both"] = "high"):
        if side not in ("low", "high", "both"):
            raise ConfigurationError(
                f"side must be 'low', 'high' or 'both', got {side!r}"
            )
        self.side = side
        self._coeff: float | None = None

    def initialize(self, chamber: WaveChamber) -> None:
        """Compute the Mur coefficient from the chamber's Courant number."""
        courant = math.sqrt(chamber.courant_squared)
        self._coeff = (courant - 1.0) / (courant + 1.0)

    def apply(
        self,
        next_p: NDArray[np.float64],
        cur: NDArray[np.float64],
        prev: NDArray[np.float64],
    ) -> None:
        """Apply first-order Mur ABC to the absorbing wall(s)."""
        if self._coeff is None:
            raise RuntimeError("AbsorbingBoundary not initialized. Add to chamber first.")
        k = self._coeff

        if self.side in ("low", "both"):
            next_p[0] = cur[1] + k * (next_p[1] - cur[0])
        else:
            next_p[0] = 0.0

        if self.side in ("high", "both"):
            next_p[-1] = cur[-2] + k * (next_p[-2] - cur[-1])
        else:
            next_p[-1] = 0.0

    def reset(self) -> None:
        """Reset boundary state (no-op, Mur uses only the chamber buffers)."""
        pass

    @property
    def coefficient(self) -> float | None:
        """Mur coefficient (C - 1) / (C + 1), None before initialization."""
        return self._coeff


BOUNDARY_TYPES = {
    "fixed": FixedBoundary,
    "open": OpenBoundary,
    "periodic": PeriodicBoundary,
    "absorbing": AbsorbingBoundary,
}


def make_boundary(name: str):
    """Create a boundary handler from its configuration name.

    Args:
        name: One of 'fixed', 'open', 'periodic', 'absorbing'

    Raises:
        ConfigurationError: If the name is unknown
    """
    if name not in BOUNDARY_TYPES:
        raise ConfigurationError(
            f"Unknown boundary '{name}'. "
            f"Valid boundaries: {list(BOUNDARY_TYPES)}"
        )
    return BOUNDARY_TYPES[name]()
