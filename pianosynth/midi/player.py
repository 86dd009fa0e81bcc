import logging
import threading
import time
import wave
from typing import Iterator, List, Optional

import mido
import numpy as np

from pianosynth.instruments.synthesizer import Synthesizer
from .sink import MidiEventSink

logger = logging.getLogger(__name__)

DEFAULT_TEMPO = 500000   # microseconds per beat (120 BPM)


def timed_messages(midi: mido.MidiFile) -> Iterator[mido.Message]:
    """
    Yield all messages with `time` as delta seconds.
    Type 0/1 files are merged by mido; type 2 tracks play one after another.
    """
    if midi.type != 2:
        yield from midi
        return
    for track in midi.tracks:
        tempo = DEFAULT_TEMPO
        for msg in track:
            delta = mido.tick2second(msg.time, midi.ticks_per_beat, tempo) if msg.time else 0.0
            if msg.type == 'set_tempo':
                tempo = msg.tempo
            yield msg.copy(time=delta)


class MidiFilePlayer:
    """
    Plays a MIDI file in real time on a background thread, handing every
    note event to the sink at its scheduled wall-clock time.
    """
    def __init__(self, midi: mido.MidiFile, sink: MidiEventSink):
        self.midi = midi
        self.sink = sink
        self._stop_evt = threading.Event()
        self._th: Optional[threading.Thread] = None

    def start(self) -> None:
        self._stop_evt.clear()
        self._th = threading.Thread(target=self._run, name="MidiPlayerThread", daemon=True)
        self._th.start()
        logger.info("playing %s (type %d, %d tracks)",
                    self.midi.filename or "<memory>", self.midi.type, len(self.midi.tracks))

    def stop(self) -> None:
        self._stop_evt.set()
        self.join(timeout=2.0)

    def join(self, timeout: Optional[float] = None) -> None:
        if self._th:
            self._th.join(timeout=timeout)

    def is_alive(self) -> bool:
        return bool(self._th and self._th.is_alive())

    def _run(self) -> None:
        start = time.perf_counter()
        t = 0.0
        for msg in timed_messages(self.midi):
            t += msg.time
            delay = start + t - time.perf_counter()
            # wait() returns True if stop was requested while sleeping
            if delay > 0 and self._stop_evt.wait(delay):
                break
            if self._stop_evt.is_set():
                break
            if not msg.is_meta:
                self.sink.handle(msg)
        # nothing keeps sounding after the file ends or playback is cut short
        self.sink.synth.release_all()
        logger.info("playback finished")


def render_midi(midi: mido.MidiFile, synth: Synthesizer, tail: float = 2.0) -> np.ndarray:
    """
    Render a whole MIDI file offline. Between two events exactly the number
    of samples separating them is generated, then `tail` seconds of release.
    """
    sink = MidiEventSink(synth)
    sr = synth.sample_rate
    blocks: List[np.ndarray] = []
    t = 0.0
    done = 0
    for msg in timed_messages(midi):
        t += msg.time
        target = int(round(t * sr))
        if target > done:
            blocks.append(synth.render(target - done))
            done = target
        if not msg.is_meta:
            sink.handle(msg)

    synth.release_all()
    blocks.append(synth.render(max(0, int(round(tail * sr)))))
    return np.concatenate(blocks)


def write_wav(path: str, samples: np.ndarray, sample_rate: int) -> None:
    """16-bit mono PCM; samples outside [-1, 1] are clipped."""
    blk = np.clip(np.asarray(samples, dtype=np.float32), -1.0, 1.0)
    pcm16 = (blk * 32767.0).astype(np.int16).tobytes()
    with wave.open(path, mode='wb') as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)  # 16-bit
        wav.setframerate(int(sample_rate))
        wav.writeframes(pcm16)
    logger.info("wrote %s (%.2fs)", path, len(blk) / sample_rate)
