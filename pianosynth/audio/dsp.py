import numpy as np

# below this the filter state is flushed to exact silence
SILENCE_FLOOR = 1e-30


class ResonanceBuffer:
    """
    Fixed-length FIFO of recent samples with a running sum.
    push() evicts the oldest entry and returns the mean of the window.
    """
    def __init__(self, size: int = 1024):
        self.size = max(1, int(size))
        self._buf = np.zeros(self.size, dtype=np.float64)
        self._idx = 0            # slot holding the oldest sample
        self._sum = 0.0

    def push(self, x: float) -> float:
        x = float(x)
        self._sum += x - float(self._buf[self._idx])
        self._buf[self._idx] = x
        self._idx += 1
        if self._idx == self.size:
            self._idx = 0
            # resync once per lap so rounding error cannot accumulate
            self._sum = float(np.sum(self._buf))
        return self._sum / self.size

    def clear(self) -> None:
        self._buf.fill(0.0)
        self._idx = 0
        self._sum = 0.0


class OnePoleLowPass:
    """y[n] = alpha * x[n] + (1 - alpha) * y[n-1]"""
    def __init__(self, alpha: float = 0.1):
        self.alpha = float(alpha)
        self.state = 0.0         # previous output

    def process(self, x: float) -> float:
        y = self.alpha * x + (1.0 - self.alpha) * self.state
        if abs(y) < SILENCE_FLOOR:
            # a subnormal tail would otherwise never decay to 0
            y = 0.0
        self.state = y
        return y

    def reset(self) -> None:
        self.state = 0.0
