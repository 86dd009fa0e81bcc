# audio/engine.py
import logging
import threading
from typing import Optional

import numpy as np
import sounddevice as sd

from pianosynth.audio.meter import AudioMeter
from pianosynth.audio.source import SynthSource

logger = logging.getLogger(__name__)


class AudioEngine:
    """
    Drives the default output device from a SynthSource.
    The device callback pulls one block per call; a separate thread logs the meter.
    """
    def __init__(self, source: SynthSource, blocksize=256, meter_period=1.0,
                 device: Optional[int] = None):
        self.source = source
        self.sr = int(source.sample_rate)
        self.blocksize = int(blocksize)
        self.channels = source.channels

        # metering
        self.meter = AudioMeter()
        self._meter_period = float(meter_period)
        self._meter_thread: Optional[threading.Thread] = None

        # coordinated shutdown
        self._stop_evt = threading.Event()

        # audio stream
        self.stream = sd.OutputStream(
            device=device,
            channels=self.channels,
            samplerate=self.sr,
            blocksize=self.blocksize,
            dtype='float32',
            callback=self._cb,
            latency='low'
        )

    ###########################################################################
    ##                              LIFECYCLE                                ##
    ###########################################################################
    def start(self):
        self._stop_evt.clear()
        self.stream.start()

        # meter thread (non-daemon: we join it)
        self._meter_thread = threading.Thread(target=self._meter_logger, name="AudioMeterThread")
        self._meter_thread.start()
        logger.info("audio started: %d Hz, block %d", self.sr, self.blocksize)

    def stop(self):
        # tell threads to stop
        self._stop_evt.set()

        # abort() is immediate; stop() would drain the queued blocks first
        for step in (self.stream.abort, self.stream.close):
            try:
                step()
            except sd.PortAudioError as e:
                logger.warning("stream %s failed: %s", step.__name__, e)

        # join meter
        if self._meter_thread:
            self._meter_thread.join(timeout=2.0)
            if self._meter_thread.is_alive():
                logger.warning("meter thread still alive after join()")
            self._meter_thread = None
        logger.info("audio stopped")

    ###########################################################################
    ##                           AUDIO CALL BACK                             ##
    ###########################################################################

    def _cb(self, outdata, frames, time_info, status):
        if status:
            logger.warning("stream status: %s", status)

        # if we are stopping, output silence and return—do not do work
        if self._stop_evt.is_set():
            outdata.fill(0)
            return

        block = self.source.read(frames)

        peak = float(np.max(np.abs(block))) if block.size else 0.0
        block_rms = float(np.sqrt(np.mean(block.astype(np.float64)**2))) if block.size else 0.0
        self.meter.update(peak=peak, block_rms=block_rms, frames=frames)

        outdata[:, 0] = block

    ###########################################################################
    ##                           METERING THREAD                             ##
    ###########################################################################
    def _meter_logger(self):
        period = self._meter_period

        # wait() returns True once stop is requested
        while not self._stop_evt.wait(timeout=period):
            snap = self.meter.snapshot_and_reset()
            bar = self._bar(snap["peak_db"])
            clip = " CLIP" if snap["clipped_blocks"] > 0 else ""
            logger.info("peak: %+6.1f dBFS | rms: %+6.1f dBFS | frames:%6d | voices:%3d%s%s",
                        snap["peak_db"], snap["rms_db"], snap["frames"],
                        self.source.synth.num_active_voices(), bar, clip)

    @staticmethod
    def _bar(db, floor=-60.0, ceil=0.0, width=20):
        db = max(floor, min(ceil, db))
        fill = int((db - floor) / (ceil - floor) * width + 0.5)
        return " [" + ("#" * fill).ljust(width, ".") + "]"
