# oscillators.py
"""
Phase-accumulating sine oscillator.

SineOscillator.produce() returns one float sample per call in
[-amplitude, +amplitude] and advances the phase. Quantization to PCM16
happens later, in the WAV writer.
"""

from __future__ import annotations

import math
from typing import Iterator, List

from src.synth.audio_format import AudioFormat, CD_MONO

TWO_PI = 2.0 * math.pi


class SineOscillator:
    """
    Stateful sine generator. Frequency and amplitude are fixed for the life of
    the instance; construct a new one to restart from phase 0.

    Neither argument is validated: 0 Hz gives silence, negative frequencies
    run the phase backwards, and amplitudes above 1.0 are passed through
    unclamped.
    """

    def __init__(self, frequency: float, amplitude: float, fmt: AudioFormat = CD_MONO):
        self._frequency = float(frequency)
        self._amplitude = float(amplitude)
        self._fmt = fmt
        self._phase = 0.0
        self._phase_step = TWO_PI * self._frequency / fmt.sample_rate

    def __repr__(self):
        return (f"SineOscillator(frequency={self._frequency}, amplitude={self._amplitude}, "
                f"sample_rate={self._fmt.sample_rate})")

    @property
    def frequency(self) -> float:
        return self._frequency

    @property
    def amplitude(self) -> float:
        return self._amplitude

    @property
    def fmt(self) -> AudioFormat:
        return self._fmt

    @property
    def phase(self) -> float:
        return self._phase

    @property
    def phase_step(self) -> float:
        return self._phase_step

    def produce(self) -> float:
        sample = self._amplitude * math.sin(self._phase)
        self._phase = _wrap_phase(self._phase + self._phase_step)
        return sample

    def take(self, n: int) -> List[float]:
        """Pull the next n samples."""
        return [self.produce() for _ in range(max(0, n))]

    def __iter__(self) -> Iterator[float]:
        while True:
            yield self.produce()


def _wrap_phase(phase: float) -> float:
    # Subtraction keeps precision for the usual step < 2*pi case.
    if phase >= TWO_PI:
        phase -= TWO_PI
    if 0.0 <= phase < TWO_PI:
        return phase
    # Step of a full cycle or more, or running backwards.
    phase = math.fmod(phase, TWO_PI)
    if phase < 0.0:
        phase += TWO_PI
    # fmod of a tiny negative can round back up to exactly 2*pi
    return 0.0 if phase >= TWO_PI else phase


def sine_wave(frequency: float,
              duration: float,
              amplitude: float = 1.0,
              fmt: AudioFormat = CD_MONO) -> List[float]:
    """Render `duration` seconds of a fresh oscillator as floats."""
    return SineOscillator(frequency, amplitude, fmt).take(fmt.frames_for_duration(duration))
