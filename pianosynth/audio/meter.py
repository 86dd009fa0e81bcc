import threading, math

_EPS = 1e-12

def lin_to_dbfs(x: float) -> float:
    return 20.0 * math.log10(max(_EPS, x))

class AudioMeter:
    """
    Output meter; a window lasts from one snapshot to the next.
    Called from audio callback (update) and from a logger thread (snapshot).
    Output is not limited, so blocks peaking above full scale are counted as clipped.
    """
    def __init__(self):
        self.lock = threading.Lock()
        self.reset_locked()

    def reset_locked(self):
        # accumulators for current window
        self.frames = 0
        self.sum_sq = 0.0
        self.peak = 0.0
        self.clipped = 0           # how many blocks went past full scale

    def update(self, peak: float, block_rms: float, frames: int):
        # Called from the audio callback
        with self.lock:
            self.frames += frames
            self.sum_sq += (block_rms * block_rms) * frames
            if peak > self.peak: self.peak = peak
            if peak > 1.0: self.clipped += 1

    def snapshot_and_reset(self):
        # Called from a non-RT thread every ~1s
        with self.lock:
            if self.frames > 0:
                rms_lin = math.sqrt(self.sum_sq / self.frames)
            else:
                rms_lin = 0.0
            snap = {
                "peak_lin":       self.peak,
                "rms_lin":        rms_lin,
                "peak_db":        lin_to_dbfs(self.peak),
                "rms_db":         lin_to_dbfs(rms_lin),
                "clipped_blocks": self.clipped,
                "frames":         self.frames,
            }
            self.reset_locked()
            return snap
