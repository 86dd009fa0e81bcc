# engine.py needs PortAudio at import time, import it explicitly
from .dsp import OnePoleLowPass, ResonanceBuffer
from .meter import AudioMeter

__all__ = ["OnePoleLowPass", "ResonanceBuffer", "AudioMeter"]
