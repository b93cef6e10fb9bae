# tone.py
"""
Oscillator -> writer glue:
  SineOscillator.produce() -> WavWriter.add_sample() -> WavWriter.write_to_file()
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from src.synth.audio_format import AudioFormat, CD_MONO
from src.synth.oscillators import SineOscillator
from src.synth.wav_writer import WavWriter


def render_tone(
    frequency: float,
    amplitude: float,
    duration: float,
    fmt: AudioFormat = CD_MONO,
    writer: Optional[WavWriter] = None,
) -> WavWriter:
    """
    Generate `duration` seconds of sine into a writer.

    Args:
        frequency: Hz
        amplitude: peak level, 1.0 = full scale (not clamped)
        duration: seconds; <= 0 adds nothing
        fmt: format profile used for both phase step and quantization
        writer: existing writer to append to, so tones can be sequenced
            into one file. Must use the same fmt.

    Returns:
        The writer holding the samples.
    """
    n = fmt.frames_for_duration(duration)
    if writer is None:
        writer = WavWriter(fmt, capacity_hint=n)
    elif writer.fmt != fmt:
        raise ValueError(f"Writer format {writer.fmt} does not match {fmt}")

    osc = SineOscillator(frequency, amplitude, fmt)
    for _ in range(n):
        writer.add_sample(osc.produce())
    return writer


def write_tone(
    path: Union[str, Path],
    frequency: float,
    amplitude: float,
    duration: float,
    fmt: AudioFormat = CD_MONO,
) -> Path:
    return render_tone(frequency, amplitude, duration, fmt).write_to_file(path)
