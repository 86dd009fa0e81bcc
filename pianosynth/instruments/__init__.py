from .envelopes import ADSR, ADSRState, Envelope
from .voice import Voice
from .synthesizer import Synthesizer

__all__ = ["ADSR", "ADSRState", "Envelope", "Voice", "Synthesizer"]
