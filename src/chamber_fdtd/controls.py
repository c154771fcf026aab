"""Input bindings tying a chamber and an oscillator together.

A ChamberSession owns one WaveChamber and one SineOscillator and maps key
presses onto them:

    r      reset the chamber
    a      inject pressure at the source cell
    space  pause / unpause the tone
    up     raise the tone by 10 Hz
    down   lower the tone by 10 Hz

Frames are advanced with update(), one chamber step per frame. For
headless runs, a list of KeyEvent can be replayed against a fixed number of
frames with play_script().

Example:
    >>> from chamber_fdtd import ChamberSession, parse_events
    >>> session = ChamberSession()
    >>> session.play_script(parse_events("a@0,a@10,r@50"), num_steps=100)
    3
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from chamber_fdtd.audio import FREQUENCY_STEP, SineOscillator
from chamber_fdtd.core.chamber import WaveChamber
from chamber_fdtd.core.config import ChamberConfig

KEY_BINDINGS: dict[str, str] = {
    "r": "reset",
    "a": "inject",
    "space": "toggle_audio",
    "up": "raise_pitch",
    "down": "lower_pitch",
}


@dataclass(frozen=True)
class KeyEvent:
    """A key press scheduled at a frame index.

    Args:
        step: Frame index at which the key is pressed (before that
            frame's chamber step)
        key: Key name, e.g. 'a', 'r', 'space', 'up', 'down'
    """

    step: int
    key: str


def parse_events(spec: str) -> list[KeyEvent]:
    """Parse a comma-separated list of ``key@step`` entries.

    Example:
        >>> parse_events("a@0, up@5")
        [KeyEvent(step=0, key='a'), KeyEvent(step=5, key='up')]

    Raises:
        ValueError: If an entry is malformed or names an unbound key
    """
    events = []
    for raw in spec.split(","):
        entry = raw.strip()
        if not entry:
            continue
        key, sep, step_str = entry.partition("@")
        key = key.strip().lower()
        if not sep or not key:
            raise ValueError(f"Malformed event '{entry}', expected 'key@step'")
        if key not in KEY_BINDINGS:
            raise ValueError(
                f"Unknown key '{key}' in event '{entry}'. "
                f"Valid keys: {list(KEY_BINDINGS)}"
            )
        try:
            step = int(step_str)
        except ValueError as e:
            raise ValueError(f"Invalid step in event '{entry}'") from e
        if step < 0:
            raise ValueError(f"Event step must be non-negative, got {step}")
        events.append(KeyEvent(step=step, key=key))
    return events


class ChamberSession:
    """Interactive session state: one chamber, one oscillator.

    Args:
        config: Chamber configuration (default: ChamberConfig())
        oscillator: Tone generator (default: a paused 440 Hz SineOscillator)

    Attributes:
        config: The configuration the chamber was built from
        chamber: The simulated WaveChamber
        oscillator: The independent SineOscillator
    """

    def __init__(
        self,
        config: ChamberConfig | None = None,
        oscillator: SineOscillator | None = None,
    ):
        self.config = config if config is not None else ChamberConfig()
        self.chamber = WaveChamber.from_config(self.config)
        self.oscillator = oscillator if oscillator is not None else SineOscillator()

    def handle_key(self, key: str) -> bool:
        """Apply the action bound to a key.

        Args:
            key: Key name (case-insensitive)

        Returns:
            True if the key is bound, False if it was ignored
        """
        action = KEY_BINDINGS.get(key.lower())
        if action == "reset":
            self.chamber.reset()
        elif action == "inject":
            self.chamber.inject_pressure(self.config.injection_amount)
        elif action == "toggle_audio":
            self.oscillator.toggle()
        elif action == "raise_pitch":
            self.oscillator.nudge(FREQUENCY_STEP)
        elif action == "lower_pitch":
            self.oscillator.nudge(-FREQUENCY_STEP)
        else:
            return False
        return True

    def update(self) -> None:
        """Advance the chamber by one frame."""
        self.chamber.step()

    def play_script(
        self,
        events: Iterable[KeyEvent],
        num_steps: int,
        callback: Callable[[int], None] | None = None,
    ) -> int:
        """Replay key events while advancing the chamber.

        Events scheduled for frame ``n`` are applied in order before that
        frame's step. Events at or beyond ``num_steps`` never fire.

        Args:
            events: Key events to replay
            num_steps: Number of frames to run
            callback: Function called after each frame with the frame index

        Returns:
            Number of events applied
        """
        schedule: dict[int, list[str]] = {}
        for event in events:
            schedule.setdefault(event.step, []).append(event.key)

        applied = 0
        for frame in range(num_steps):
            for key in schedule.get(frame, ()):
                self.handle_key(key)
                applied += 1
            self.update()
            if callback:
                callback(frame)
        return applied
