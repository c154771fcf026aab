"""Sine tone oscillator.

The oscillator is independent of the chamber: it is driven only by its own
frequency, which input handlers nudge up and down while an audio thread
renders frames. No chamber pressure flows into the tone.

Example:
    >>> from chamber_fdtd import SineOscillator
    >>> osc = SineOscillator(hz=440.0, volume=0.5)
    >>> osc.toggle()  # start playing
    True
    >>> frames = osc.render(512, sample_rate=44100, channels=2)
    >>> frames.shape
    (512, 2)
"""

from __future__ import annotations

import threading
from pathlib import Path

import numpy as np
from numpy.typing import NDArray
from scipy.io import wavfile

DEFAULT_FREQUENCY = 440.0
DEFAULT_VOLUME = 0.5

# Frequency change per arrow key press
FREQUENCY_STEP = 10.0


class SineOscillator:
    """Phase-accumulating sine oscillator.

    Args:
        hz: Tone frequency in Hz (default: 440.0)
        volume: Output gain applied to every sample (default: 0.5)
        playing: Whether the oscillator starts unpaused (default: False)

    Attributes:
        phase: Current phase in cycles, kept in [0, 1)
        volume: Output gain
    """

    def __init__(
        self,
        hz: float = DEFAULT_FREQUENCY,
        volume: float = DEFAULT_VOLUME,
        playing: bool = False,
    ):
        if hz < 0:
            raise ValueError(f"Frequency must be non-negative, got {hz}")
        self._hz = float(hz)
        self.volume = volume
        self.phase = 0.0
        self._playing = playing
        self._lock = threading.Lock()

    @property
    def hz(self) -> float:
        """Current frequency in Hz."""
        return self._hz

    @hz.setter
    def hz(self, value: float) -> None:
        if value < 0:
            raise ValueError(f"Frequency must be non-negative, got {value}")
        with self._lock:
            self._hz = float(value)

    @property
    def playing(self) -> bool:
        """True while the oscillator is producing sound."""
        return self._playing

    def nudge(self, delta_hz: float) -> float:
        """Shift the frequency by delta_hz, stopping at 0 Hz.

        Returns:
            The new frequency
        """
        with self._lock:
            self._hz = max(0.0, self._hz + delta_hz)
            return self._hz

    def toggle(self) -> bool:
        """Pause or unpause the oscillator.

        Returns:
            The new playing state
        """
        with self._lock:
            self._playing = not self._playing
            return self._playing

    def reset_phase(self) -> None:
        """Restart the waveform at phase zero."""
        with self._lock:
            self.phase = 0.0

    def render(
        self, num_frames: int, sample_rate: int = 44100, channels: int = 1
    ) -> NDArray[np.float32]:
        """Render the next block of frames.

        Every channel of a frame carries the same sample. A paused
        oscillator renders silence and does not advance its phase.

        Args:
            num_frames: Number of frames to render
            sample_rate: Output sample rate in Hz
            channels: Number of interleaved channels per frame

        Returns:
            Array of shape (num_frames, channels), dtype float32
        """
        if sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {sample_rate}")
        if channels < 1:
            raise ValueError(f"channels must be >= 1, got {channels}")

        with self._lock:
            if not self._playing:
                return np.zeros((num_frames, channels), dtype=np.float32)

            increment = self._hz / sample_rate
            phases = self.phase + increment * np.arange(num_frames)
            samples = self.volume * np.sin(2.0 * np.pi * phases)
            self.phase = float((self.phase + increment * num_frames) % 1.0)

        mono = samples.astype(np.float32)
        return np.repeat(mono[:, np.newaxis], channels, axis=1)

    def to_wav(
        self,
        filepath: str | Path,
        duration: float,
        sample_rate: int = 44100,
    ) -> None:
        """Render a tone of the given duration to a 16-bit mono WAV file.

        The tone is rendered as if playing, from the current phase, and the
        oscillator state (phase, playing flag) is left unchanged.

        Args:
            filepath: Output file path (.wav extension recommended)
            duration: Length of the tone in seconds
            sample_rate: Output sample rate in Hz (default: 44100)
        """
        if duration < 0:
            raise ValueError(f"duration must be non-negative, got {duration}")

        num_frames = int(round(duration * sample_rate))
        tone = SineOscillator(hz=self._hz, volume=self.volume, playing=True)
        tone.phase = self.phase
        waveform = tone.render(num_frames, sample_rate=sample_rate)[:, 0]

        waveform_int = (np.clip(waveform, -1.0, 1.0) * 32767).astype(np.int16)
        wavfile.write(filepath, sample_rate, waveform_int)

    def __repr__(self) -> str:
        state = "playing" if self._playing else "paused"
        return f"SineOscillator(hz={self._hz}, volume={self.volume}, {state})"
