"""
Command line entry point: play a MIDI file through the synthesizer, or
render it to a WAV file.
"""
import argparse
import logging
import time
from typing import List, Optional

import mido

from pianosynth.config import AUDIO_CONFIG, SYNTH_CONFIG
from pianosynth.instruments.synthesizer import Synthesizer
from pianosynth.audio.source import SynthSource
from pianosynth.midi.player import MidiFilePlayer, render_midi, write_wav
from pianosynth.midi.sink import MidiEventSink

logger = logging.getLogger("pianosynth")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="pianosynth", description=__doc__)
    p.add_argument("midi_file", help="Standard MIDI file to play")
    p.add_argument("--sample-rate", type=int, default=AUDIO_CONFIG.sample_rate)
    p.add_argument("--blocksize", type=int, default=AUDIO_CONFIG.blocksize)
    p.add_argument("--duration", type=float, default=None,
                   help="stop playback after this many seconds")
    p.add_argument("--tail", type=float, default=2.0,
                   help="seconds of release after the last note")
    p.add_argument("--render", metavar="OUT.wav", default=None,
                   help="render offline to a WAV file instead of playing")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def play(midi: mido.MidiFile, synth: Synthesizer, blocksize: int,
         duration: Optional[float], tail: float) -> int:
    # sounddevice loads PortAudio on import; the offline path must work without it
    try:
        import sounddevice as sd
        from pianosynth.audio.engine import AudioEngine
    except OSError as e:
        logger.error("audio output unavailable: %s", e)
        return 1

    try:
        engine = AudioEngine(SynthSource(synth), blocksize=blocksize,
                             meter_period=AUDIO_CONFIG.meter_period)
        engine.start()
    except sd.PortAudioError as e:
        logger.error("cannot open audio output: %s", e)
        return 1

    player = MidiFilePlayer(midi, MidiEventSink(synth))
    player.start()
    try:
        player.join(timeout=duration)
        player.stop()
        # let the release tails ring out
        time.sleep(tail)
    except KeyboardInterrupt:
        logger.info("interrupted")
        player.stop()
        return 130
    finally:
        engine.stop()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        midi = mido.MidiFile(args.midi_file)
    except (OSError, EOFError, ValueError, KeyError) as e:
        logger.error("cannot read %s: %s", args.midi_file, e)
        return 1
    logger.info("parsed %s: type %d, %d tracks, %d ticks per beat",
                args.midi_file, midi.type, len(midi.tracks), midi.ticks_per_beat)

    synth = Synthesizer(args.sample_rate, SYNTH_CONFIG)

    if args.render:
        samples = render_midi(midi, synth, tail=args.tail)
        write_wav(args.render, samples, synth.sample_rate)
        return 0

    return play(midi, synth, args.blocksize, args.duration, args.tail)


if __name__ == "__main__":
    raise SystemExit(main())
