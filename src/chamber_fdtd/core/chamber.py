"""1D Finite-Difference Time-Domain (FDTD) pressure wave chamber.

This module implements an explicit second-order scheme for the 1D wave
equation on a fixed-length chamber of pressure cells.

Physics:
    ∂²p/∂t² = c² ∂²p/∂x²

Discretization (central differences in time and space):
    next[i] = 2*cur[i] - prev[i] + C2*(cur[i+1] - 2*cur[i] + cur[i-1])

where C2 = (c*dt/dx)² is the squared Courant number.

Stability: 0 < C2 <= 1 (CFL condition for 1D). This is enforced when the
chamber is configured; the stencil itself carries no runtime guard.

Example:
    >>> from chamber_fdtd import WaveChamber
    >>> chamber = WaveChamber(num_cells=128, courant_squared=0.5)
    >>> chamber.inject_pressure(0.1)
    >>> chamber.run(num_steps=100)
    >>> field = chamber.cur

Buffer Discipline:
    Each step computes the next generation into a freshly allocated
    buffer from the two previous generations, applies the boundary policy,
    then rotates (prev <- cur, cur <- next). An in-place update would read
    already-updated neighbours and change the physics.

Thread Safety:
    All mutations (step, inject_pressure, reset) hold a single lock.
    Readers receive copies or an immutable ChamberState snapshot taken
    under the same lock, so they never observe a half-rotated generation.
"""

from __future__ import annotations

import copy
import threading
import warnings
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from chamber_fdtd.boundaries import make_boundary
from chamber_fdtd.core.config import (
    DEFAULT_COURANT_SQUARED,
    DEFAULT_NUM_CELLS,
    ChamberConfig,
    validate_courant_squared,
    validate_num_cells,
)

# Energy drift, in percent, still reported as "stable"
STABLE_DRIFT_PERCENT = 1.0


def classify_drift(percent: float) -> str:
    """Label an energy change as "stable", "growing" or "decaying"."""
    if abs(percent) <= STABLE_DRIFT_PERCENT:
        return "stable"
    return "growing" if percent > 0 else "decaying"


@dataclass(frozen=True)
class ChamberState:
    """Immutable snapshot of both chamber generations.

    Args:
        step_count: Number of steps completed when the snapshot was taken
        prev: Pressure field at generation t-1 (read-only array)
        cur: Pressure field at generation t (read-only array)
    """

    step_count: int
    prev: NDArray[np.float64]
    cur: NDArray[np.float64]

    @classmethod
    def capture(
        cls, step_count: int, prev: NDArray[np.float64], cur: NDArray[np.float64]
    ) -> ChamberState:
        """Copy both buffers and freeze the copies."""
        prev_copy = prev.copy()
        cur_copy = cur.copy()
        prev_copy.setflags(write=False)
        cur_copy.setflags(write=False)
        return cls(step_count=step_count, prev=prev_copy, cur=cur_copy)


class WaveChamber:
    """1D pressure wave chamber with double-buffered time history.

    Args:
        num_cells: Number of spatial cells N (>= 3, default: 128)
        courant_squared: Stencil coefficient C2 = (c*dt/dx)², must satisfy
            0 < C2 <= 1 (default: 0.5)
        boundary: Boundary policy, either a name ('fixed', 'open',
            'periodic', 'absorbing') or a boundary object, which is copied so
            one instance can configure several chambers (default: 'fixed')
        warn_energy_drift: If True, emit warning when energy changes
            significantly during run() (default: False)
        energy_drift_threshold: Fractional threshold for energy drift
            warning (default: 0.01 = 1%)

    Raises:
        ConfigurationError: If num_cells < 3 or C2 is outside (0, 1]

    Attributes:
        num_cells: Number of cells N
        courant_squared: Stencil coefficient C2
        boundary: The boundary handler applied to the wall cells

    Example:
        >>> chamber = WaveChamber(num_cells=5, courant_squared=0.5)
        >>> chamber.inject_pressure(1.0)
        >>> chamber.step()
        >>> chamber.cur.tolist()
        [0.0, 0.5, 0.0, 0.0, 0.0]

    Energy Tracking Example:
        >>> chamber = WaveChamber(num_cells=64)
        >>> chamber.inject_pressure(1.0)
        >>> chamber.run(num_steps=500, track_energy=True)
        >>> report = chamber.energy_report()
        >>> print(f"Energy changed by {report['energy_change_percent']:.2f}%")
    """

    def __init__(
        self,
        num_cells: int = DEFAULT_NUM_CELLS,
        courant_squared: float = DEFAULT_COURANT_SQUARED,
        boundary="fixed",
        warn_energy_drift: bool = False,
        energy_drift_threshold: float = 0.01,
    ):
        self.num_cells = validate_num_cells(num_cells)
        self.courant_squared = validate_courant_squared(courant_squared)

        if isinstance(boundary, str):
            boundary = make_boundary(boundary)
        else:
            # Boundaries cache chamber coefficients in initialize()
            boundary = copy.copy(boundary)
        boundary.initialize(self)
        self.boundary = boundary

        # Both generations, float64 so replays are bit-identical
        self._prev = np.zeros(self.num_cells, dtype=np.float64)
        self._cur = np.zeros(self.num_cells, dtype=np.float64)
        self._lock = threading.Lock()

        # Simulation state
        self._step_count = 0

        # Snapshot storage
        self._snapshots: list[ChamberState] = []
        self._snapshot_interval: int | None = None

        # Energy tracking state
        self._warn_energy_drift = warn_energy_drift
        self._energy_drift_threshold = energy_drift_threshold
        self._energy_history: list[tuple[int, float]] = []
        self._track_energy = False
        self._energy_sample_interval = 1

    @classmethod
    def from_config(cls, config: ChamberConfig, **kwargs) -> WaveChamber:
        """Create a chamber from a validated ChamberConfig."""
        return cls(
            num_cells=config.num_cells,
            courant_squared=config.courant_squared,
            boundary=config.boundary,
            **kwargs,
        )

    @property
    def step_count(self) -> int:
        """Number of timesteps completed."""
        return self._step_count

    @property
    def cur(self) -> NDArray[np.float64]:
        """Copy of the current pressure field (generation t)."""
        with self._lock:
            return self._cur.copy()

    @property
    def prev(self) -> NDArray[np.float64]:
        """Copy of the previous pressure field (generation t-1)."""
        with self._lock:
            return self._prev.copy()

    def snapshot(self) -> ChamberState:
        """Capture both generations atomically.

        Returns:
            Frozen ChamberState whose arrays are read-only copies
        """
        with self._lock:
            return ChamberState.capture(self._step_count, self._prev, self._cur)

    def inject_pressure(self, amount: float) -> None:
        """Add a pressure impulse at the source cell (index 0).

        Args:
            amount: Pressure added to cur[0]. prev is untouched.
        """
        with self._lock:
            self._cur[0] += amount

    def step(self) -> None:
        """Advance simulation by one timestep.

        Computes generation t+1 purely from generations t and t-1 into a
        fresh buffer, applies the boundary policy to the two wall cells,
        then rotates the buffers.
        """
        with self._lock:
            cur = self._cur
            prev = self._prev

            next_p = np.zeros(self.num_cells, dtype=np.float64)
            # Interior cells 1..N-2 only; walls are left to the boundary
            next_p[1:-1] = (
                2.0 * cur[1:-1]
                - prev[1:-1]
                + self.courant_squared * (cur[2:] - 2.0 * cur[1:-1] + cur[:-2])
            )
            self.boundary.apply(next_p, cur, prev)

            self._prev = cur
            self._cur = next_p
            self._step_count += 1

            # Save snapshot if enabled
            if self._snapshot_interval and self._step_count % self._snapshot_interval == 0:
                self._snapshots.append(
                    ChamberState.capture(self._step_count, self._prev, self._cur)
                )

            # Record energy if tracking enabled
            if self._track_energy and self._step_count % self._energy_sample_interval == 0:
                self._energy_history.append((self._step_count, self._energy_unlocked()))

    def reset(self) -> None:
        """Reset simulation to the all-zero initial state.

        Clears step count, snapshots and energy history. Energy tracking,
        if enabled, keeps sampling from the fresh state.
        """
        with self._lock:
            self._prev = np.zeros(self.num_cells, dtype=np.float64)
            self._cur = np.zeros(self.num_cells, dtype=np.float64)
            self._step_count = 0
            self._snapshots.clear()
            self._energy_history.clear()
        self.boundary.reset()

    def enable_energy_tracking(
        self, sample_interval: int = 1, record_initial: bool = True
    ) -> None:
        """Start recording energy after every sample_interval steps.

        Args:
            sample_interval: Record energy every N steps (default: 1)
            record_initial: If True and nothing is recorded yet, record
                the energy of the current state immediately
        """
        if sample_interval < 1:
            raise ValueError(f"sample_interval must be >= 1, got {sample_interval}")
        with self._lock:
            self._track_energy = True
            self._energy_sample_interval = sample_interval
            if record_initial and not self._energy_history:
                self._energy_history.append((self._step_count, self._energy_unlocked()))

    def disable_energy_tracking(self) -> None:
        """Stop recording energy. Recorded history is kept."""
        self._track_energy = False

    def enable_snapshots(self, interval: int | None) -> None:
        """Enable field snapshots at regular intervals.

        Args:
            interval: Save snapshot every N timesteps (None disables)
        """
        if interval is not None and interval < 1:
            raise ValueError(f"Snapshot interval must be >= 1, got {interval}")
        self._snapshot_interval = interval

    def get_snapshots(self) -> list[ChamberState]:
        """Get saved field snapshots.

        Returns:
            List of ChamberState snapshots in step order
        """
        with self._lock:
            return list(self._snapshots)

    def run(
        self,
        num_steps: int,
        progress: bool = False,
        track_energy: bool = False,
        energy_sample_interval: int = 1,
        callback: Callable[[int], None] | None = None,
        snapshot_interval: int | None = None,
    ) -> None:
        """Run simulation for a number of steps.

        Args:
            num_steps: Number of timesteps to advance
            progress: If True, show a tqdm progress bar
            track_energy: If True, track energy at each sample interval
            energy_sample_interval: Record energy every N steps (default: 1)
            callback: Function called after each timestep with signature
                callback(step), where step is the 0-indexed completed step
            snapshot_interval: Save a snapshot every N steps (default: none)
        """
        if num_steps < 0:
            raise ValueError(f"num_steps must be non-negative, got {num_steps}")

        # Set up energy tracking for this run
        if track_energy:
            self.enable_energy_tracking(sample_interval=energy_sample_interval)
        else:
            self.disable_energy_tracking()

        if snapshot_interval is not None:
            self.enable_snapshots(snapshot_interval)

        if progress:
            from tqdm import tqdm

            iterator = tqdm(range(num_steps), desc="Chamber simulation")
        else:
            iterator = range(num_steps)

        for _ in iterator:
            self.step()
            if callback:
                callback(self._step_count - 1)

        # Check for energy drift warning after run completes
        if self._warn_energy_drift and len(self.get_energy_history()) >= 2:
            report = self.energy_report()
            if abs(report["energy_change_percent"]) > self._energy_drift_threshold * 100:
                warnings.warn(
                    f"Energy drift detected: {report['energy_change_percent']:.2f}% change "
                    f"(threshold: {self._energy_drift_threshold * 100:.1f}%). "
                    f"Status: {report['conservation_status']}",
                    UserWarning,
                    stacklevel=2,
                )

    def max_amplitude(self) -> float:
        """Maximum absolute pressure in the current generation."""
        with self._lock:
            return float(np.max(np.abs(self._cur)))

    def compute_energy(self) -> float:
        """Compute the discrete wave energy of the current generation pair.

        E = ½ Σ (cur - prev)² + ½ C2 Σ Δcur · Δprev

        where Δ is the forward neighbour difference (wrapping around for
        periodic walls). This quantity is conserved exactly by the
        scheme with fixed or periodic walls once no pressure sits on the
        wall cells, and is non-negative for 0 < C2 <= 1.

        Returns:
            Total energy in arbitrary units
        """
        with self._lock:
            return self._energy_unlocked()

    def _energy_unlocked(self) -> float:
        """Energy of the current buffers; caller must hold the lock."""
        cur = self._cur
        prev = self._prev
        if self.boundary.name == "periodic":
            d_cur = np.roll(cur, -1) - cur
            d_prev = np.roll(prev, -1) - prev
        else:
            d_cur = np.diff(cur)
            d_prev = np.diff(prev)
        kinetic = 0.5 * np.sum((cur - prev) ** 2)
        potential = 0.5 * self.courant_squared * np.sum(d_cur * d_prev)
        return float(kinetic + potential)

    def get_energy_history(self) -> list[tuple[int, float]]:
        """Recorded (step, energy) samples, oldest first."""
        with self._lock:
            return list(self._energy_history)

    def energy_report(self) -> dict:
        """Summarise the recorded energy samples.

        The drift is measured from the first to the last sample. A chamber
        whose drift stays within STABLE_DRIFT_PERCENT is reported as
        "stable", otherwise as "growing" or "decaying". A history starting
        from a silent chamber reports an infinite drift once any energy
        appears.

        Returns:
            Dict with initial_energy, final_energy, max_energy, min_energy,
            energy_change_percent, conservation_status and n_samples

        Raises:
            ValueError: If no energy history has been recorded
        """
        history = self.get_energy_history()
        if not history:
            raise ValueError(
                "No energy history recorded. Enable tracking or call "
                "run(track_energy=True) first."
            )

        energies = np.array([energy for _, energy in history])
        first, last = float(energies[0]), float(energies[-1])
        if first != 0:
            drift = (last - first) / first * 100
        else:
            drift = float("inf") if last != 0 else 0.0

        return {
            "initial_energy": first,
            "final_energy": last,
            "max_energy": float(energies.max()),
            "min_energy": float(energies.min()),
            "energy_change_percent": float(drift),
            "conservation_status": classify_drift(drift),
            "n_samples": len(history),
        }

    def __len__(self) -> int:
        """Return number of cells."""
        return self.num_cells

    def __repr__(self) -> str:
        return (
            f"WaveChamber(num_cells={self.num_cells}, "
            f"courant_squared={self.courant_squared}, "
            f"boundary='{self.boundary.name}', steps={self._step_count})"
        )
