"""
Example: Boundary Comparison
============================
The same impulse in four chambers that differ only in their wall policy.
Energy is tracked so the difference between reflecting, wrapping and
absorbing walls shows up as numbers.

Chamber: 64 cells, C² = 1.0 (the stability limit, where Mur absorption is exact)
"""

from rich.console import Console
from rich.table import Table

from chamber_fdtd import WaveChamber
from chamber_fdtd.boundaries import BOUNDARY_TYPES

console = Console()

table = Table(title="Energy over 400 steps")
table.add_column("Boundary", style="cyan")
table.add_column("Initial", justify="right")
table.add_column("Final", justify="right")
table.add_column("Change", justify="right")
table.add_column("Status")

for name in BOUNDARY_TYPES:
    chamber = WaveChamber(num_cells=64, courant_squared=1.0, boundary=name)
    chamber.inject_pressure(1.0)
    # Move the pulse off the source cell before measuring
    chamber.run(num_steps=2)
    chamber.run(num_steps=400, track_energy=True)

    report = chamber.energy_report()
    table.add_row(
        name,
        f"{report['initial_energy']:.4f}",
        f"{report['final_energy']:.4f}",
        f"{report['energy_change_percent']:+.1f}%",
        report["conservation_status"],
    )

console.print(table)
