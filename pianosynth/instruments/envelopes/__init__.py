from .base import Envelope
from .adsr import ADSR, ADSRState, RELEASE_FLOOR

__all__ = ["Envelope", "ADSR", "ADSRState", "RELEASE_FLOOR"]
