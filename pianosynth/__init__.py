"""Real-time polyphonic additive synthesizer driven by MIDI note events."""
from .config import AudioConfig, SynthConfig
from .instruments import ADSR, ADSRState, Synthesizer, Voice

__version__ = "0.1.0"

__all__ = ["AudioConfig", "SynthConfig", "ADSR", "ADSRState", "Synthesizer", "Voice"]
