import numpy as np
import pytest

from pianosynth.audio.dsp import OnePoleLowPass, ResonanceBuffer


def test_resonance_mean_over_window():
    buf = ResonanceBuffer(4)
    assert buf.push(4.0) == 1.0
    assert buf.push(4.0) == 2.0
    assert buf.push(4.0) == 3.0
    assert buf.push(4.0) == 4.0
    # oldest entry is evicted first
    assert buf.push(0.0) == 3.0


def test_resonance_matches_naive_fifo():
    rng = np.random.default_rng(3)
    xs = rng.normal(size=5000)
    buf = ResonanceBuffer(64)
    window = [0.0] * 64
    for x in xs:
        window.append(x)
        window.pop(0)
        assert buf.push(x) == pytest.approx(sum(window) / 64, abs=1e-12)


def test_resonance_returns_exactly_zero_after_a_silent_lap():
    buf = ResonanceBuffer(16)
    for x in np.linspace(-1, 1, 37):
        buf.push(x)
    for _ in range(32):
        m = buf.push(0.0)
    assert m == 0.0


def test_resonance_clear_and_minimum_size():
    buf = ResonanceBuffer(0)
    assert buf.size == 1
    assert buf.push(2.0) == 2.0
    buf.clear()
    assert buf.push(0.0) == 0.0


def test_lowpass_step_response():
    lp = OnePoleLowPass(alpha=0.1)
    assert lp.process(1.0) == pytest.approx(0.1)
    assert lp.process(1.0) == pytest.approx(0.19)
    assert lp.state == pytest.approx(0.19)
    for _ in range(500):
        y = lp.process(1.0)
    assert y == pytest.approx(1.0)
    lp.reset()
    assert lp.state == 0.0


def test_lowpass_decays_to_exact_zero():
    lp = OnePoleLowPass(alpha=0.1)
    lp.process(1.0)
    for _ in range(2000):
        y = lp.process(0.0)
    assert y == 0.0
    assert lp.state == 0.0


def test_lowpass_keeps_small_audible_values():
    lp = OnePoleLowPass(alpha=0.1)
    y = lp.process(1e-20)
    assert y > 0.0
    assert y == pytest.approx(1e-21, rel=1e-9, abs=0.0)
