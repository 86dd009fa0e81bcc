import logging
from typing import Callable, Union

import mido

from pianosynth.instruments.synthesizer import Synthesizer
from .messages import Event, NoteOff, NoteOn, from_mido

logger = logging.getLogger(__name__)


def midi_to_freq_equal_tempered(note: int,
                                base_note: int = 69, base_freq: float = 440.0,
                                n_tones: int = 12
                                ) -> float:
    """
    Equal-tempered tuning
    """
    return base_freq * (2 ** ((int(note) - int(base_note)) / n_tones))


def normalize_velocity(velocity: int) -> float:
    return int(velocity) / 127.0


class MidiEventSink:
    """
    Push-side adapter: feeds MIDI note events into a Synthesizer.
    The MIDI→frequency mapping is configurable via midi_to_freq.
    """

    def __init__(
        self,
        synth: Synthesizer,
        midi_to_freq: Callable[[int], float] = midi_to_freq_equal_tempered
    ):
        self.synth = synth
        self._midi_to_freq = midi_to_freq

    def note_on(self, note: int, velocity: int) -> None:
        self.synth.note_on(note, self._midi_to_freq(note), normalize_velocity(velocity))

    def note_off(self, note: int) -> None:
        self.synth.note_off(note)

    def handle(self, e: Union[Event, mido.Message]) -> bool:
        """
        Deliver one event. Accepts NoteOn/NoteOff or a raw mido message;
        everything else is ignored. Always returns True (keep playing).
        """
        if isinstance(e, mido.Message):
            e = from_mido(e)
        if isinstance(e, NoteOn):
            self.note_on(e.note, e.velocity)
        elif isinstance(e, NoteOff):
            self.note_off(e.note)
        elif e is not None:
            logger.debug("ignored event: %r", e)
        return True
