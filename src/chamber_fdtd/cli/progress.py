"""Progress display for chamber simulations.

Provides rich terminal UI for simulation progress tracking including:
- Progress bar with percentage
- Elapsed time and ETA
- Stepping throughput (steps/s)
- Memory usage
"""

import time
from typing import TYPE_CHECKING

import psutil
from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)
from rich.table import Table

if TYPE_CHECKING:
    from chamber_fdtd.controls import ChamberSession, KeyEvent


def format_time(seconds: float) -> str:
    """Format time duration for display.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted string like "1m 23s" or "2h 15m"
    """
    if seconds < 60:
        return f"{seconds:.0f}s"
    elif seconds < 3600:
        minutes = int(seconds // 60)
        secs = int(seconds % 60)
        return f"{minutes}m {secs:02d}s"
    else:
        hours = int(seconds // 3600)
        minutes = int((seconds % 3600) // 60)
        return f"{hours}h {minutes:02d}m"


def format_bytes(num_bytes: float) -> str:
    """Format byte count for display.

    Args:
        num_bytes: Number of bytes

    Returns:
        Formatted string like "1.5 GB" or "256 MB"
    """
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if abs(num_bytes) < 1024.0:
            return f"{num_bytes:.1f} {unit}"
        num_bytes /= 1024.0
    return f"{num_bytes:.1f} PB"


class SimulationProgress:
    """Real-time progress display for chamber simulations.

    Shows a progress bar with stepping throughput and current/peak
    process memory.

    Example:
        >>> progress = SimulationProgress(console, num_cells, num_steps)
        >>> session.play_script(events, num_steps, callback=progress.update)
        >>> progress.finish()
    """

    def __init__(
        self, console: Console, num_cells: int, num_steps: int, update_interval: float = 0.1
    ):
        """Initialize progress display.

        Args:
            console: Rich console instance
            num_cells: Cells per chamber generation
            num_steps: Total number of timesteps
            update_interval: Minimum time between updates (seconds)
        """
        self.console = console
        self.num_cells = num_cells
        self.num_steps = num_steps
        self.update_interval = update_interval

        self.start_time = time.time()
        self.last_update = 0.0
        self.peak_memory = 0
        self._finished = False

        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            TextColumn("•"),
            TimeRemainingColumn(),
            console=console,
        )

        self.task = self.progress.add_task("Stepping", total=num_steps)
        self.progress.start()

    def update(self, step: int):
        """Update progress display for current timestep.

        Rate-limited so that the display costs little next to the
        stepping itself. The final step is always shown.

        Args:
            step: Current timestep number (0-indexed)
        """
        current_time = time.time()

        if (
            current_time - self.last_update < self.update_interval
            and step + 1 < self.num_steps
        ):
            return

        self.progress.update(self.task, completed=step + 1)

        elapsed = current_time - self.start_time
        steps_completed = step + 1
        steps_per_second = steps_completed / elapsed if elapsed > 0 else 0.0

        process = psutil.Process()
        current_memory = process.memory_info().rss
        self.peak_memory = max(self.peak_memory, current_memory)

        self.progress.update(
            self.task,
            description=(
                f"Stepping [dim]{steps_per_second:,.0f} steps/s, "
                f"mem {format_bytes(current_memory)} "
                f"(peak {format_bytes(self.peak_memory)})[/dim]"
            ),
        )

        self.last_update = current_time

    def finish(self):
        """Finalize progress display. Safe to call more than once."""
        if self._finished:
            return
        self._finished = True
        self.progress.stop()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.finish()


def print_simulation_info(
    console: Console,
    session: "ChamberSession",
    num_steps: int,
    events: "list[KeyEvent]",
):
    """Print simulation parameters before running.

    Args:
        console: Rich console instance
        session: Session holding the chamber and oscillator
        num_steps: Number of timesteps to run
        events: Key events that will be replayed
    """
    chamber = session.chamber
    config = session.config

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Cells", str(chamber.num_cells))
    table.add_row(
        "Courant",
        f"C² = {chamber.courant_squared:g} (C = {config.courant:.4f})",
    )
    table.add_row("Boundary", chamber.boundary.name)
    table.add_row("Steps", str(num_steps))
    table.add_row("Injection", f"{config.injection_amount:g} per 'a' press")
    events_str = ", ".join(f"{e.key}@{e.step}" for e in events) or "none"
    table.add_row("Events", events_str)
    table.add_row("Tone", f"{session.oscillator.hz:g} Hz")

    console.print(table)
    console.print()
