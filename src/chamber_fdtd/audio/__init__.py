"""Audio tone generation, decoupled from the chamber."""

from chamber_fdtd.audio.oscillator import FREQUENCY_STEP, SineOscillator

__all__ = [
    "SineOscillator",
    "FREQUENCY_STEP",
]
