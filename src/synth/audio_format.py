# audio_format.py
"""
Format profile shared by the oscillator and the WAV writer.

One immutable AudioFormat is handed to both sides, so the phase step and the
header/quantization scale always agree. Only 16-bit mono integer PCM is
supported.
"""

from __future__ import annotations

from dataclasses import dataclass

# ===== DEFAULTS (EDIT HERE) =====
SAMPLE_RATE = 44_100   # CD-quality
BIT_DEPTH = 16
NUM_CHANNELS = 1       # mono
PCM_FORMAT = 1         # WAV format tag for uncompressed integer PCM


@dataclass(frozen=True)
class AudioFormat:
    sample_rate: int = SAMPLE_RATE
    bit_depth: int = BIT_DEPTH
    num_channels: int = NUM_CHANNELS
    audio_format: int = PCM_FORMAT

    def __post_init__(self) -> None:
        if self.sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {self.sample_rate}")
        if self.bit_depth != BIT_DEPTH:
            raise ValueError(f"Only {BIT_DEPTH}-bit samples are supported, got {self.bit_depth}")
        if self.num_channels != NUM_CHANNELS:
            raise ValueError(f"Only mono is supported, got {self.num_channels} channels")
        if self.audio_format != PCM_FORMAT:
            raise ValueError(f"Only integer PCM (format {PCM_FORMAT}) is supported, got {self.audio_format}")

    @property
    def bytes_per_sample(self) -> int:
        return self.bit_depth // 8

    @property
    def block_align(self) -> int:
        return self.num_channels * self.bytes_per_sample

    @property
    def byte_rate(self) -> int:
        return self.sample_rate * self.block_align

    @property
    def max_amplitude(self) -> int:
        """Largest positive sample value (32767 for 16-bit)."""
        return 2 ** (self.bit_depth - 1) - 1

    @property
    def min_sample(self) -> int:
        return -(2 ** (self.bit_depth - 1))

    def frames_for_duration(self, seconds: float) -> int:
        if seconds <= 0:
            return 0
        return int(round(seconds * self.sample_rate))


CD_MONO = AudioFormat()
