from enum import Enum, auto
from .base import Envelope

# release snaps to silence below this level
RELEASE_FLOOR = 0.001


class ADSRState(Enum):
    IDLE = auto()      # No sound
    ATTACK = auto()    # Attack phase
    DECAY = auto()     # Decay phase
    SUSTAIN = auto()   # Sustain phase
    RELEASE = auto()   # Release phase


class ADSR(Envelope):
    """
    Attack/Decay/Sustain/Release envelope (sample-by-sample).
    Times are in seconds; sustain is a linear level in [0,1].

    Attack and decay are linear ramps. Release removes a fixed fraction of
    the current level each sample, so it behaves like an exponential decay
    and a release started from a low level ends sooner.
    """

    def __init__(self, attack=0.002, decay=0.15, sustain=0.5, release=0.5,
                 sample_rate: int = 44100):
        self.a = float(attack)
        self.d = float(decay)
        self.s = min(1.0, max(0.0, float(sustain)))
        self.r = float(release)
        self.sample_rate = int(sample_rate)

        # per-sample increments; a stage shorter than one sample completes in one step
        A = self.a * self.sample_rate
        D = self.d * self.sample_rate
        R = self.r * self.sample_rate
        self._attack_inc = 1.0 / A if A > 0 else 1.0
        self._decay_inc = (1.0 - self.s) / D if D > 0 else 1.0
        self._release_coef = 1.0 / R if R > 0 else 1.0

        # state
        self._state = ADSRState.IDLE
        self._y = 0.0

    @property
    def state(self) -> ADSRState:
        return self._state

    @property
    def value(self) -> float:
        return self._y

    # ---- control ----
    def trigger(self) -> None:
        self._state = ADSRState.ATTACK
        self._y = 0.0

    def release(self) -> None:
        if self._state != ADSRState.IDLE:
            self._state = ADSRState.RELEASE

    def finished(self) -> bool:
        return self._state == ADSRState.IDLE

    # ---- step ----
    def process(self) -> float:
        state = self._state

        if state == ADSRState.IDLE:
            return 0.0

        if state == ADSRState.ATTACK:
            self._y += self._attack_inc
            if self._y >= 1.0:
                self._y = 1.0
                self._state = ADSRState.DECAY

        elif state == ADSRState.DECAY:
            self._y -= self._decay_inc
            if self._y <= self.s:
                self._y = self.s
                self._state = ADSRState.SUSTAIN

        elif state == ADSRState.SUSTAIN:
            return self.s

        elif state == ADSRState.RELEASE:
            self._y -= self._y * self._release_coef
            if self._y <= RELEASE_FLOOR:
                self._y = 0.0
                self._state = ADSRState.IDLE

        return self._y

    def __repr__(self) -> str:
        return (f"ADSR(a={self.a}, d={self.d}, s={self.s}, r={self.r}, "
                f"state={self._state.name}, value={self._y:.4f})")
