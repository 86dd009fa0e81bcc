import logging
import threading
from typing import Dict, List, Optional

import numpy as np

from pianosynth.audio.dsp import OnePoleLowPass, ResonanceBuffer
from pianosynth.config import SynthConfig
from .envelopes.adsr import ADSR
from .voice import Voice

logger = logging.getLogger(__name__)


class Synthesizer:
    """
    Polyphonic additive synth, one voice per key.

    Thread-safe: note events and sample generation come from different
    threads; every public call runs entirely under one lock.
    """
    def __init__(self, sample_rate: int = 44100, config: Optional[SynthConfig] = None):
        if not sample_rate > 0:
            raise ValueError(f"sample rate must be positive, got {sample_rate!r}")
        self._sr = int(sample_rate)
        self.config = config or SynthConfig()
        self._voices: Dict[int, Voice] = {}
        self._lock = threading.Lock()

        # state shared by all voices
        self._resonance = ResonanceBuffer(self.config.resonance_size)
        self._lowpass = OnePoleLowPass(self.config.filter_alpha)

    @property
    def sample_rate(self) -> int:
        return self._sr

    def _make_envelope(self) -> ADSR:
        c = self.config
        return ADSR(c.attack, c.decay, c.sustain, c.release, sample_rate=self._sr)

    ###########################################################################
    ##                             NOTE EVENTS                               ##
    ###########################################################################

    def note_on(self, key: int, frequency: float, velocity: float) -> None:
        env = self._make_envelope()
        env.trigger()
        v = Voice(key=int(key), freq=float(frequency), velocity=float(velocity), env=env)
        with self._lock:
            # a retrigger drops the previous voice outright, release tail included
            self._voices[v.key] = v
        logger.debug("note on: key=%d freq=%.2f velocity=%.3f", v.key, v.freq, v.velocity)

    def note_off(self, key: int) -> None:
        with self._lock:
            v = self._voices.get(int(key))
            if v:
                v.note_off()

    def release_all(self) -> None:
        with self._lock:
            for v in self._voices.values():
                v.note_off()

    def reset(self) -> None:
        """Drop every voice and clear the resonance and filter history."""
        with self._lock:
            self._voices.clear()
            self._resonance.clear()
            self._lowpass.reset()

    ###########################################################################
    ##                              RENDERING                                ##
    ###########################################################################

    def _next_sample(self) -> float:
        # caller holds the lock
        mixed = 0.0
        dead: List[int] = []
        for key, v in self._voices.items():
            amp = v.env.process()
            if amp == 0.0 and v.finished():
                dead.append(key)
                continue
            mixed += v.render_sample(amp, self._sr)
        for key in dead:
            self._voices.pop(key, None)

        mixed += self._resonance.push(mixed * self.config.resonance_factor)
        out = self._lowpass.process(mixed)
        return out * self.config.master_gain

    def generate_sample(self) -> float:
        with self._lock:
            return self._next_sample()

    def render(self, frames: int) -> np.ndarray:
        """Render `frames` consecutive samples under a single lock acquisition."""
        out = np.empty(int(frames), dtype=np.float32)
        with self._lock:
            for i in range(out.shape[0]):
                out[i] = self._next_sample()
        return out

    ###########################################################################
    ##                             INSPECTION                                ##
    ###########################################################################

    def num_active_voices(self) -> int:
        with self._lock:
            return len(self._voices)

    def get_voice(self, key: int) -> Optional[Voice]:
        """
        Live voice at `key`, for inspection only. It keeps changing under the
        audio thread once the lock is released; do not mutate it.
        """
        with self._lock:
            return self._voices.get(int(key))
