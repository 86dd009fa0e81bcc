from typing import Iterator, Optional

import numpy as np

from pianosynth.instruments.synthesizer import Synthesizer


class SynthSource(Iterator[float]):
    """
    Pull-side adapter: an endless mono stream of samples from a Synthesizer.
    Silence is produced while no voices are sounding; the stream never ends.
    """
    channels = 1
    total_duration: Optional[float] = None

    def __init__(self, synth: Synthesizer):
        self.synth = synth

    @property
    def sample_rate(self) -> int:
        return self.synth.sample_rate

    def __next__(self) -> float:
        return self.synth.generate_sample()

    def read(self, frames: int) -> np.ndarray:
        """Next `frames` samples as float32."""
        return self.synth.render(frames)
