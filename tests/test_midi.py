import mido
import pytest

from pianosynth.instruments.envelopes.adsr import ADSRState
from pianosynth.instruments.synthesizer import Synthesizer
from pianosynth.midi.messages import NoteOff, NoteOn, from_mido
from pianosynth.midi.sink import MidiEventSink, midi_to_freq_equal_tempered, normalize_velocity


def test_midi_to_freq():
    assert midi_to_freq_equal_tempered(69) == 440.0
    assert midi_to_freq_equal_tempered(81) == pytest.approx(880.0)
    assert midi_to_freq_equal_tempered(60) == pytest.approx(261.6256, abs=1e-4)


def test_normalize_velocity():
    assert normalize_velocity(127) == 1.0
    assert normalize_velocity(0) == 0.0
    assert normalize_velocity(64) == pytest.approx(64 / 127)


def test_from_mido_note_events():
    assert from_mido(mido.Message('note_on', note=60, velocity=90, channel=3)) == NoteOn(60, 90, 3)
    assert from_mido(mido.Message('note_off', note=60, velocity=12)) == NoteOff(60, 12, 0)
    # running-status note off
    assert from_mido(mido.Message('note_on', note=60, velocity=0)) == NoteOff(60, 0, 0)


def test_from_mido_ignores_non_note_messages():
    assert from_mido(mido.Message('control_change', control=64, value=127)) is None
    assert from_mido(mido.Message('pitchwheel', pitch=100)) is None


def test_sink_converts_key_and_velocity():
    synth = Synthesizer(44100)
    sink = MidiEventSink(synth)
    assert sink.handle(NoteOn(69, 127)) is True
    v = synth.get_voice(69)
    assert v.freq == 440.0
    assert v.velocity == 1.0
    assert v.key == 69


def test_sink_note_off_and_zero_velocity_note_on_release():
    synth = Synthesizer(44100)
    sink = MidiEventSink(synth)
    sink.handle(mido.Message('note_on', note=60, velocity=100))
    sink.handle(mido.Message('note_on', note=62, velocity=100))
    synth.render(10)

    sink.handle(NoteOff(60))
    sink.handle(mido.Message('note_on', note=62, velocity=0))
    assert synth.get_voice(60).env.state == ADSRState.RELEASE
    assert synth.get_voice(62).env.state == ADSRState.RELEASE


def test_sink_ignores_controllers():
    synth = Synthesizer(44100)
    sink = MidiEventSink(synth)
    assert sink.handle(mido.Message('control_change', control=7, value=100)) is True
    assert sink.handle(object()) is True
    assert synth.num_active_voices() == 0


def test_sink_custom_tuning():
    synth = Synthesizer(44100)
    sink = MidiEventSink(synth, midi_to_freq=lambda note: float(note))
    sink.note_on(100, 64)
    assert synth.get_voice(100).freq == 100.0
