import math

import pytest

from src.synth.audio_format import AudioFormat, SAMPLE_RATE
from src.synth.oscillators import SineOscillator, TWO_PI, sine_wave


def test_first_sample_is_zero_and_phase_starts_at_zero():
    osc = SineOscillator(440.0, 0.5)
    assert osc.phase == 0.0
    assert osc.produce() == 0.0
    assert osc.phase == pytest.approx(TWO_PI * 440.0 / SAMPLE_RATE)


@pytest.mark.parametrize("freq", [1.0, 55.0, 440.0, 1000.0, 12_345.6, 22_049.0])
def test_matches_closed_form_and_phase_stays_in_range(freq):
    amp = 0.8
    osc = SineOscillator(freq, amp)
    for n in range(5000):
        got = osc.produce()
        expected = amp * math.sin(2 * math.pi * freq * n / SAMPLE_RATE)
        assert got == pytest.approx(expected, abs=1e-6)
        assert 0.0 <= osc.phase < TWO_PI


def test_long_run_drift_is_negligible():
    # Two seconds at 440 Hz, the default tone.
    osc = SineOscillator(440.0, 0.5)
    samples = osc.take(88_200)
    n = len(samples) - 1
    assert samples[-1] == pytest.approx(0.5 * math.sin(2 * math.pi * 440.0 * n / SAMPLE_RATE), abs=1e-7)


def test_output_bounded_by_amplitude():
    osc = SineOscillator(440.0, 0.25)
    vals = osc.take(1000)
    assert max(vals) <= 0.25
    assert min(vals) >= -0.25
    assert max(vals) > 0.24  # actually reaches near peak


def test_amplitude_is_not_clamped():
    osc = SineOscillator(SAMPLE_RATE / 4, 2.0)  # quarter-rate: sample 1 is the peak
    osc.produce()
    assert osc.produce() == pytest.approx(2.0)


def test_zero_frequency_is_silence():
    osc = SineOscillator(0.0, 1.0)
    assert osc.take(10) == [0.0] * 10
    assert osc.phase == 0.0


@pytest.mark.parametrize("freq", [-440.0, SAMPLE_RATE * 1.0, SAMPLE_RATE * 2.5, -SAMPLE_RATE * 3.3])
def test_out_of_range_frequencies_keep_phase_in_range(freq):
    osc = SineOscillator(freq, 1.0)
    for _ in range(500):
        osc.produce()
        assert 0.0 <= osc.phase < TWO_PI


def test_negative_frequency_is_mirror_of_positive():
    up = SineOscillator(440.0, 1.0).take(100)
    down = SineOscillator(-440.0, 1.0).take(100)
    for a, b in zip(up, down):
        assert b == pytest.approx(-a, abs=1e-9)


def test_iteration_is_lazy_and_continues_from_current_phase():
    a = SineOscillator(440.0, 1.0)
    b = SineOscillator(440.0, 1.0)
    it = iter(a)
    first = [next(it) for _ in range(10)]
    assert first == b.take(10)
    assert a.produce() == b.produce()


def test_instances_are_independent():
    a = SineOscillator(440.0, 1.0)
    b = SineOscillator(440.0, 1.0)
    a.take(50)
    assert b.phase == 0.0
    assert b.produce() == 0.0


def test_custom_sample_rate_changes_phase_step():
    fmt = AudioFormat(sample_rate=8000)
    osc = SineOscillator(1000.0, 1.0, fmt)
    assert osc.phase_step == pytest.approx(TWO_PI / 8)


def test_sine_wave_helper_length():
    assert len(sine_wave(440.0, 0.5)) == SAMPLE_RATE // 2
    assert sine_wave(440.0, 0.0) == []
    assert sine_wave(440.0, -1.0) == []
