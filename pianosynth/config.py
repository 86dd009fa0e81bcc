"""
Configuration
-------------
Audio and tone-shaping parameters for the synthesizer. Every field has a
default, any of them can be overridden through the constructor.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class AudioConfig:
    """Output stream parameters"""
    sample_rate: int = 44100
    blocksize: int = 256
    meter_period: float = 1.0   # seconds between meter reports


@dataclass(frozen=True)
class SynthConfig:
    """Envelope, resonance and filter settings shared by all voices"""
    # ADSR, times in seconds
    attack: float = 0.002
    decay: float = 0.15
    sustain: float = 0.5
    release: float = 0.5

    # shared post-processing
    resonance_size: int = 1024
    resonance_factor: float = 0.05
    filter_alpha: float = 0.1
    master_gain: float = 0.3


AUDIO_CONFIG = AudioConfig()
SYNTH_CONFIG = SynthConfig()
