"""
Configuration for wave chamber simulations.

A chamber is described by its cell count, the squared Courant number used as
the stencil coefficient, and the boundary policy applied at both walls. All
parameters are validated once here, so the time-stepping loop never has to
check them again.

Example:
    >>> from chamber_fdtd import ChamberConfig, WaveChamber
    >>>
    >>> # Direct specification
    >>> config = ChamberConfig(num_cells=64, courant_squared=0.5)
    >>>
    >>> # From a Courant number
    >>> config = ChamberConfig.from_courant(0.9, num_cells=64)
    >>>
    >>> # From physical parameters: (c * dt / dx)^2
    >>> config = ChamberConfig.from_physical(wave_speed=343.0, dt=1e-5, dx=5e-3)
    >>>
    >>> chamber = WaveChamber.from_config(config)
"""

from __future__ import annotations

import json
import math
import numbers
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

from chamber_fdtd.boundaries import BOUNDARY_TYPES
from chamber_fdtd.errors import ConfigurationError

# Cell count of the interactive chamber
DEFAULT_NUM_CELLS = 128

# Reference stencil coefficient (squared Courant number)
DEFAULT_COURANT_SQUARED = 0.5

# Pressure added per "inject" key press
DEFAULT_INJECTION_AMOUNT = 0.1

BOUNDARY_NAMES = tuple(BOUNDARY_TYPES)


def validate_num_cells(num_cells: Any) -> int:
    """Validate the chamber size.

    The stencil needs at least one interior cell, so ``num_cells >= 3``.

    Raises:
        ConfigurationError: If num_cells is not an integer or is below 3
    """
    if isinstance(num_cells, bool) or not isinstance(num_cells, numbers.Integral):
        raise ConfigurationError(
            f"num_cells must be an integer, got {type(num_cells).__name__}"
        )
    if num_cells < 3:
        raise ConfigurationError(
            f"num_cells must be >= 3 to have interior cells, got {num_cells}"
        )
    return int(num_cells)


def validate_courant_squared(courant_squared: Any) -> float:
    """Validate the squared Courant number.

    The explicit scheme is stable only for ``0 < C2 <= 1``. Values above 1
    make the field grow without bound, so they are rejected here rather than
    guarded against inside the stencil.

    Raises:
        ConfigurationError: If C2 is not a finite number in (0, 1]
    """
    try:
        value = float(courant_squared)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"courant_squared must be a number, got {courant_squared!r}"
        ) from e
    if not math.isfinite(value):
        raise ConfigurationError(f"courant_squared must be finite, got {value}")
    if not 0.0 < value <= 1.0:
        raise ConfigurationError(
            f"courant_squared must satisfy 0 < C2 <= 1 for stability, got {value}"
        )
    return value


def validate_boundary_name(boundary: Any) -> str:
    """Validate a boundary policy name.

    Raises:
        ConfigurationError: If the name is not a known boundary policy
    """
    if boundary not in BOUNDARY_NAMES:
        raise ConfigurationError(
            f"Unknown boundary '{boundary}'. "
            f"Valid boundaries: {list(BOUNDARY_NAMES)}"
        )
    return boundary


@dataclass(frozen=True)
class ChamberConfig:
    """Validated parameters for a wave chamber.

    Args:
        num_cells: Number of spatial sample points (>= 3)
        courant_squared: Stencil coefficient (wave_speed * dt / dx)^2,
            must satisfy 0 < C2 <= 1 (default: 0.5)
        boundary: Boundary policy name: 'fixed', 'open', 'periodic'
            or 'absorbing' (default: 'fixed')
        injection_amount: Pressure injected per input event (default: 0.1)

    Raises:
        ConfigurationError: If any parameter is out of range

    Example:
        >>> config = ChamberConfig(num_cells=5, courant_squared=0.5)
        >>> config.courant
        0.7071067811865476
    """

    num_cells: int = DEFAULT_NUM_CELLS
    courant_squared: float = DEFAULT_COURANT_SQUARED
    boundary: str = "fixed"
    injection_amount: float = DEFAULT_INJECTION_AMOUNT

    def __post_init__(self):
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "num_cells", validate_num_cells(self.num_cells))
        object.__setattr__(
            self, "courant_squared", validate_courant_squared(self.courant_squared)
        )
        validate_boundary_name(self.boundary)
        try:
            amount = float(self.injection_amount)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"injection_amount must be a number, got {self.injection_amount!r}"
            ) from e
        object.__setattr__(self, "injection_amount", amount)

    @property
    def courant(self) -> float:
        """Courant number C = sqrt(C2)."""
        return math.sqrt(self.courant_squared)

    @classmethod
    def from_courant(cls, courant: float, **kwargs) -> ChamberConfig:
        """Build a configuration from the (unsquared) Courant number."""
        return cls(courant_squared=float(courant) ** 2, **kwargs)

    @classmethod
    def from_physical(
        cls, wave_speed: float, dt: float, dx: float, **kwargs
    ) -> ChamberConfig:
        """Build a configuration from physical wave speed and step sizes.

        Args:
            wave_speed: Propagation speed in m/s
            dt: Timestep in seconds
            dx: Cell spacing in meters

        Raises:
            ConfigurationError: If any argument is not positive or the resulting
                Courant number violates the stability limit
        """
        for label, value in (("wave_speed", wave_speed), ("dt", dt), ("dx", dx)):
            if value <= 0:
                raise ConfigurationError(f"{label} must be positive, got {value}")
        return cls.from_courant(wave_speed * dt / dx, **kwargs)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ChamberConfig:
        """Build a configuration from a plain mapping.

        Raises:
            ConfigurationError: If the mapping contains unknown keys
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {unknown}. "
                f"Valid keys: {sorted(known)}"
            )
        return cls(**data)

    @classmethod
    def from_json(cls, path: str | Path) -> ChamberConfig:
        """Load a configuration from a JSON file.

        Raises:
            FileNotFoundError: If the file does not exist
            ConfigurationError: If the file is not a JSON object or holds
                invalid parameters
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file {path} must contain a JSON object"
            )
        return cls.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return asdict(self)

    def replace(self, **changes) -> ChamberConfig:
        """Return a copy with some fields replaced (None values are ignored)."""
        data = self.to_dict()
        data.update({k: v for k, v in changes.items() if v is not None})
        return ChamberConfig.from_dict(data)
