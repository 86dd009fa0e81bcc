from dataclasses import dataclass
from typing import Optional, Union

import mido

@dataclass(frozen=True)
class NoteOn:
    note: int
    velocity: int
    channel: int = 0

@dataclass(frozen=True)
class NoteOff:
    note: int
    velocity: int = 0
    channel: int = 0

Event = Union[NoteOn, NoteOff]


def from_mido(msg: mido.Message) -> Optional[Event]:
    """
    Note events only; anything else (controllers, pitch bend, meta) maps to None.
    A note_on with velocity 0 is a note off.
    """
    t = msg.type
    if t == 'note_on' and msg.velocity > 0:
        return NoteOn(msg.note, msg.velocity, getattr(msg, 'channel', 0))
    if t == 'note_off' or (t == 'note_on' and msg.velocity == 0):
        return NoteOff(msg.note, msg.velocity, getattr(msg, 'channel', 0))
    return None
