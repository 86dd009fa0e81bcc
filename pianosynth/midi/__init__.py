from .messages import NoteOn, NoteOff, from_mido
from .sink import MidiEventSink, midi_to_freq_equal_tempered, normalize_velocity

__all__ = ["NoteOn", "NoteOff", "from_mido",
           "MidiEventSink", "midi_to_freq_equal_tempered", "normalize_velocity"]
