"""Command-line tool for running wave chamber simulations.

The chamber-run CLI builds a chamber from options (or a JSON configuration
file), replays a script of key presses against it for a number of frames,
and shows the resulting pressure field in the terminal.
"""

import sys
import time
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from chamber_fdtd.audio import SineOscillator
from chamber_fdtd.boundaries import BOUNDARY_TYPES
from chamber_fdtd.controls import ChamberSession, parse_events
from chamber_fdtd.core.config import ChamberConfig
from chamber_fdtd.errors import ConfigurationError
from chamber_fdtd.render import render_cells

from .progress import SimulationProgress, format_time, print_simulation_info

console = Console()


def _run(
    config_file: Path | None,
    cells: int | None,
    courant_squared: float | None,
    boundary: str | None,
    injection_amount: float | None,
    steps: int,
    events: str,
    frequency: float,
    energy: bool,
    wav: Path | None,
    wav_duration: float,
    progress: bool,
    dry_run: bool,
    verbose: bool,
) -> int:
    try:
        console.print("\n[bold]Wave Chamber Simulation[/bold]", style="blue")
        console.print("─" * 60)

        # Build configuration: file first, then command-line overrides
        try:
            base = (
                ChamberConfig.from_json(config_file)
                if config_file is not None
                else ChamberConfig()
            )
            config = base.replace(
                num_cells=cells,
                courant_squared=courant_squared,
                boundary=boundary,
                injection_amount=injection_amount,
            )
            key_events = parse_events(events)
            oscillator = SineOscillator(hz=frequency)
        except ConfigurationError as e:
            console.print(
                f"\n[bold red]Configuration Error:[/bold red] {escape(str(e))}"
            )
            return 1
        except ValueError as e:
            console.print(f"\n[bold red]Error:[/bold red] {escape(str(e))}")
            return 1

        if verbose and config_file is not None:
            console.print(f"Loaded configuration from {config_file}", style="dim")

        session = ChamberSession(config, oscillator=oscillator)
        print_simulation_info(console, session, steps, key_events)

        if dry_run:
            console.print("[yellow]Dry run - simulation not executed[/yellow]")
            return 0

        if energy:
            # Sampled after every frame; the silent pre-injection state is skipped
            session.chamber.enable_energy_tracking(record_initial=False)

        start_time = time.time()
        progress_display = (
            SimulationProgress(console, config.num_cells, steps) if progress else None
        )

        try:
            applied = session.play_script(
                key_events,
                steps,
                callback=progress_display.update if progress_display else None,
            )
        except KeyboardInterrupt:
            console.print("\n[yellow]Interrupted by user[/yellow]")
            return 130  # Standard exit code for SIGINT
        finally:
            if progress_display:
                progress_display.finish()

        runtime = time.time() - start_time
        chamber = session.chamber

        console.print("─" * 60)
        console.print("✓ [bold green]Simulation complete![/bold green]")
        console.print(render_cells(chamber.cur, width=min(chamber.num_cells, 120)))
        console.print(f"  Events applied: {applied}/{len(key_events)}")
        console.print(f"  Max |pressure|: {chamber.max_amplitude():.6g}")
        console.print(f"  Runtime: {format_time(runtime)}")

        if energy and not chamber.get_energy_history():
            console.print("  Energy: no samples recorded")
        elif energy:
            report = chamber.energy_report()
            console.print(
                f"  Energy: {report['initial_energy']:.6g} → "
                f"{report['final_energy']:.6g} "
                f"({report['energy_change_percent']:+.2f}%, "
                f"{report['conservation_status']})"
            )

        if wav is not None:
            oscillator.to_wav(wav, duration=wav_duration)
            console.print(
                f"  Tone: {wav} ({oscillator.hz:g} Hz, {wav_duration:g} s)"
            )

        return 0

    except Exception as e:
        console.print(f"\n[bold red]Error:[/bold red] {escape(str(e))}")
        if verbose:
            console.print_exception()
        return 1


@click.command()
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file with chamber parameters (options below override it)",
)
@click.option("--cells", "-n", type=int, help="Number of chamber cells (>= 3)")
@click.option(
    "--courant-squared",
    "-c",
    type=float,
    help="Stencil coefficient C² in (0, 1]",
)
@click.option(
    "--boundary",
    "-b",
    type=click.Choice(list(BOUNDARY_TYPES)),
    help="Boundary policy at both walls",
)
@click.option("--injection-amount", type=float, help="Pressure added per 'a' press")
@click.option("--steps", "-s", type=click.IntRange(min=0), default=200, show_default=True)
@click.option(
    "--events",
    "-e",
    default="a@0",
    show_default=True,
    help="Comma-separated key@step presses (keys: r, a, space, up, down)",
)
@click.option("--frequency", type=float, default=440.0, show_default=True, help="Tone in Hz")
@click.option("--energy", is_flag=True, help="Track wave energy and print a report")
@click.option(
    "--wav",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the oscillator tone to a WAV file",
)
@click.option("--wav-duration", type=float, default=1.0, show_default=True)
@click.option("--progress/--no-progress", default=True, help="Show progress bar")
@click.option("--dry-run", is_flag=True, help="Validate parameters without stepping")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output with debug info")
@click.version_option(version="0.1.0", prog_name="chamber-run")
def main(**kwargs):
    """Run a 1D wave chamber simulation.

    Key presses from --events are replayed before the frame they name.
    'a' injects pressure at the leftmost cell, 'r' resets the chamber,
    'space' toggles the tone, 'up'/'down' shift it by 10 Hz.

    Example:

    \b
        chamber-run --cells 128 --boundary absorbing --steps 300 \\
            --events "a@0,a@20,r@200" --energy
    """
    sys.exit(_run(**kwargs))


if __name__ == "__main__":
    main()
