import math
from dataclasses import dataclass

from .envelopes.base import Envelope

TWO_PI = 2.0 * math.pi

# harmonic amplitudes relative to the fundamental
SECOND_HARMONIC = 0.3
THIRD_HARMONIC = 0.1

# how much quieter the top MIDI key is than key 0
KEY_ATTENUATION = 0.3


@dataclass
class Voice:
    """One sounding note: an oscillator phase driven by its own envelope."""
    key: int
    freq: float
    velocity: float          # normalized 0..1
    env: Envelope
    phase: float = 0.0       # radians, in [0, 2*pi)

    def note_off(self) -> None:
        self.env.release()

    def finished(self) -> bool:
        return self.env.finished()

    @property
    def brightness(self) -> float:
        # harder notes bring the upper harmonics forward
        return self.velocity * 0.5 + 0.5

    @property
    def key_scale(self) -> float:
        return 1.0 - (self.key / 127.0) * KEY_ATTENUATION

    def advance(self, sr: int) -> None:
        phase = (self.phase + TWO_PI * self.freq / sr) % TWO_PI
        if phase >= TWO_PI:
            # a tiny negative remainder rounds up to exactly 2*pi
            phase = 0.0
        self.phase = phase

    def waveform(self) -> float:
        b = self.brightness
        p = self.phase
        return (math.sin(p)
                + math.sin(2.0 * p) * SECOND_HARMONIC * b
                + math.sin(3.0 * p) * THIRD_HARMONIC * b * b)

    def render_sample(self, amplitude: float, sr: int) -> float:
        """Advance the oscillator one sample and return its scaled output."""
        self.advance(sr)
        return self.waveform() * amplitude * self.velocity * self.key_scale
