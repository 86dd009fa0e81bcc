import matplotlib

matplotlib.use("Agg")

import mido
import pytest


@pytest.fixture
def make_midi():
    """Build an in-memory MIDI file from per-track lists of (type, note, velocity, delta_ticks)."""
    def _make(*tracks, type=1, ticks_per_beat=480):
        mid = mido.MidiFile(type=type, ticks_per_beat=ticks_per_beat)
        for events in tracks:
            track = mido.MidiTrack()
            for kind, note, velocity, delta in events:
                track.append(mido.Message(kind, note=note, velocity=velocity, time=delta))
            mid.tracks.append(track)
        return mid
    return _make
