from typing import Optional, Protocol
import matplotlib.pyplot as plt
import numpy as np

class Envelope(Protocol):
    sample_rate: int

    def trigger(self) -> None: ...
    def release(self) -> None: ...
    def process(self) -> float:
        """Advance one sample and return the new amplitude in [0, 1]."""
        ...
    def finished(self) -> bool:
        """True if envelope is at rest and voice can be freed."""
        ...

    def plot(self, t_total: float, t_release: Optional[float] = None):
        """Plot from trigger for `t_total` seconds, with optional release at `t_release`."""
        seconds = float(t_total)
        assert seconds > 0.0
        sr = self.sample_rate
        frames_total = int(seconds * sr)

        # release frame (clamp to window)
        if t_release is None:
            off_frame = None
        else:
            off_frame = min(max(0, int(t_release * sr)), frames_total)

        y = np.zeros(frames_total, dtype=np.float32)

        self.trigger()
        for i in range(frames_total):
            if i == off_frame:
                self.release()
            y[i] = self.process()

        # ---- plot ----
        t = np.arange(frames_total) / sr
        fig, ax = plt.subplots(figsize=(8, 3))
        ax.plot(t, y, lw=1.2)
        ax.set_ylim(-0.05, 1.05)
        ax.set_xlabel("Time [s]")
        ax.set_ylabel("Envelope")
        title = f"{self.__class__.__name__} (trigger @0s"
        if t_release is not None:
            title += f", release @{t_release:.3f}s"
        title += f", duration {seconds:.3f}s @ {sr}Hz)"
        ax.set_title(title)
        ax.grid(True, alpha=0.3)
        fig.tight_layout()
        return fig, ax
