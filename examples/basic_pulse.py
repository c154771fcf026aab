"""
Example: Basic Pressure Pulse
=============================
A single pressure impulse injected at the closed end of a 128-cell chamber.
This demonstrates the core workflow: configuration, injection, stepping and
reading back the field.

Chamber: 128 cells, C² = 0.5, fixed walls
Source: 0.1 pressure units at cell 0 (one 'a' key press)
"""

from rich.console import Console

from chamber_fdtd import ChamberConfig, WaveChamber, render_cells

console = Console()

config = ChamberConfig(num_cells=128, courant_squared=0.5, boundary="fixed")
chamber = WaveChamber.from_config(config)

print("=" * 60)
print("Wave Chamber: Basic Pressure Pulse")
print("=" * 60)
print(f"Cells: {config.num_cells}")
print(f"Courant number: {config.courant:.4f} (C² = {config.courant_squared:g})")
print(f"Boundary: {config.boundary}")
print("=" * 60)
print()

chamber.inject_pressure(config.injection_amount)

# Let the wave cross the chamber, reflect off the far wall and come back
for target in (0, 40, 80, 160, 240):
    chamber.run(num_steps=target - chamber.step_count)
    # Amplified x10 so a 0.1 pulse is visible in grey levels
    console.print(
        f"step {chamber.step_count:4d} ", render_cells(chamber.cur * 10, width=64)
    )

print()
print("✓ Simulation complete!")
print(f"Max |pressure|: {chamber.max_amplitude():.4g}")
