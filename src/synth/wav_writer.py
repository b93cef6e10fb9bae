# wav_writer.py
"""
Buffered PCM16 mono WAV writer.

WavWriter quantizes float samples into an int16 buffer and serializes a
canonical 44-byte RIFF/WAVE header followed by the raw little-endian samples.

Layout written by WavHeader.to_bytes():

  0  "RIFF"      4  chunk_size (36 + data_size)   8  "WAVE"
  12 "fmt "      16 16                            20 audio_format (1)
  22 channels    24 sample_rate                   28 byte_rate
  32 block_align 34 bits_per_sample               36 "data"
  40 data_size   44 samples...
"""

from __future__ import annotations

import logging
import struct
import sys
from array import array
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Union

from src.synth.audio_format import AudioFormat, CD_MONO

logger = logging.getLogger(__name__)

HEADER_SIZE = 44
FMT_CHUNK_SIZE = 16
WRITE_CHUNK_SIZE = 8192          # bytes per file.write() for sample data
DEFAULT_CAPACITY_SECONDS = 5     # pre-sized buffer length

_UINT32_MAX = 0xFFFF_FFFF
_HEADER_STRUCT = struct.Struct("<4sI4s4sIHHIIHH4sI")

PathLike = Union[str, Path]


class WavFormatError(ValueError):
    """Bytes do not form a header this module can produce."""


class WavWriteError(OSError):
    """The target file could not be opened, written or closed."""


@dataclass(frozen=True)
class WavHeader:
    data_size: int
    fmt: AudioFormat = CD_MONO

    def __post_init__(self) -> None:
        if self.data_size < 0:
            raise ValueError("data_size must be >= 0")
        if self.data_size > _UINT32_MAX - (HEADER_SIZE - 8):
            raise ValueError(f"data_size {self.data_size} does not fit a WAV header")

    @classmethod
    def for_samples(cls, sample_count: int, fmt: AudioFormat = CD_MONO) -> "WavHeader":
        return cls(sample_count * fmt.block_align, fmt)

    # ----- derived fields -----
    @property
    def chunk_size(self) -> int:
        return HEADER_SIZE - 8 + self.data_size

    @property
    def audio_format(self) -> int:
        return self.fmt.audio_format

    @property
    def num_channels(self) -> int:
        return self.fmt.num_channels

    @property
    def sample_rate(self) -> int:
        return self.fmt.sample_rate

    @property
    def byte_rate(self) -> int:
        return self.fmt.byte_rate

    @property
    def block_align(self) -> int:
        return self.fmt.block_align

    @property
    def bits_per_sample(self) -> int:
        return self.fmt.bit_depth

    @property
    def sample_count(self) -> int:
        return self.data_size // self.block_align

    def to_bytes(self) -> bytes:
        """Serialize field by field, little-endian, no padding."""
        return b"".join((
            b"RIFF",
            struct.pack("<I", self.chunk_size),
            b"WAVE",
            b"fmt ",
            struct.pack("<I", FMT_CHUNK_SIZE),
            struct.pack("<H", self.audio_format),
            struct.pack("<H", self.num_channels),
            struct.pack("<I", self.sample_rate),
            struct.pack("<I", self.byte_rate),
            struct.pack("<H", self.block_align),
            struct.pack("<H", self.bits_per_sample),
            b"data",
            struct.pack("<I", self.data_size),
        ))

    @classmethod
    def from_bytes(cls, data: bytes) -> "WavHeader":
        """
        Parse the first 44 bytes of a canonical PCM WAV file.

        Raises:
            WavFormatError: short input, unexpected chunk tags, or size/rate
                fields that disagree with each other.
        """
        if len(data) < HEADER_SIZE:
            raise WavFormatError(f"Header needs {HEADER_SIZE} bytes, got {len(data)}")

        (riff, chunk_size, wave_id, fmt_id, fmt_size, audio_format, channels,
         sample_rate, byte_rate, block_align, bits, data_id, data_size) = _HEADER_STRUCT.unpack_from(data)

        for got, want in ((riff, b"RIFF"), (wave_id, b"WAVE"), (fmt_id, b"fmt "), (data_id, b"data")):
            if got != want:
                raise WavFormatError(f"Expected chunk tag {want!r}, found {got!r}")
        if fmt_size != FMT_CHUNK_SIZE:
            raise WavFormatError(f"Unsupported fmt chunk size {fmt_size}")

        try:
            fmt = AudioFormat(sample_rate, bits, channels, audio_format)
            header = cls(data_size, fmt)
        except ValueError as e:
            raise WavFormatError(str(e)) from e

        if chunk_size != header.chunk_size:
            raise WavFormatError(f"chunk_size {chunk_size} != 36 + data_size ({header.chunk_size})")
        if byte_rate != fmt.byte_rate or block_align != fmt.block_align:
            raise WavFormatError("byte_rate/block_align inconsistent with sample format")
        return header


def read_wav_header(path: PathLike) -> WavHeader:
    with open(path, "rb") as f:
        return WavHeader.from_bytes(f.read(HEADER_SIZE))


def _wrap_to_width(value: int, fmt: AudioFormat) -> int:
    """Two's-complement wraparound into the signed sample range."""
    span = 2 ** fmt.bit_depth
    return (value - fmt.min_sample) % span + fmt.min_sample


class WavWriter:
    """
    Accumulates quantized samples; write_to_file() can be called any number
    of times and never modifies the buffer.

    Quantization is int(x * 32767), truncating toward zero. Out-of-range input
    wraps around like a fixed-width integer cast (1.25 -> -24578). Pass
    clip=True to saturate at [-32768, 32767] instead.
    """

    def __init__(self,
                 fmt: AudioFormat = CD_MONO,
                 capacity_hint: Optional[int] = None,
                 clip: bool = False):
        if capacity_hint is None:
            capacity_hint = fmt.sample_rate * DEFAULT_CAPACITY_SECONDS
        self._fmt = fmt
        self._clip = clip
        self._buffer = array("h", [0]) * max(0, capacity_hint)
        self._count = 0

    def __len__(self):
        return self._count

    def __repr__(self):
        return f"WavWriter(samples={self._count}, sample_rate={self._fmt.sample_rate}, clip={self._clip})"

    @property
    def fmt(self) -> AudioFormat:
        return self._fmt

    @property
    def sample_count(self) -> int:
        return self._count

    def add_sample(self, sample: float) -> None:
        fmt = self._fmt
        value = int(sample * fmt.max_amplitude)
        if value > fmt.max_amplitude or value < fmt.min_sample:
            if self._clip:
                value = fmt.max_amplitude if value > 0 else fmt.min_sample
            else:
                value = _wrap_to_width(value, fmt)

        if self._count < len(self._buffer):
            self._buffer[self._count] = value
        else:
            self._buffer.append(value)
        self._count += 1

    def add_samples(self, samples: Iterable[float]) -> None:
        for s in samples:
            self.add_sample(s)

    def samples(self) -> array:
        """Copy of the quantized samples, in time order."""
        return self._buffer[:self._count]

    def header(self) -> WavHeader:
        return WavHeader.for_samples(self._count, self._fmt)

    def pcm_bytes(self) -> bytes:
        """Buffered samples as little-endian int16 bytes."""
        data = self.samples()
        if sys.byteorder == "big":
            data.byteswap()
        return data.tobytes()

    def write_to_file(self,
                      path: PathLike,
                      chunk_size: int = WRITE_CHUNK_SIZE,
                      make_parents: bool = False) -> Path:
        """
        Write header + samples to `path`, truncating any existing file.

        Sample data goes out in `chunk_size`-byte writes; the last write is
        the remainder.

        Raises:
            ValueError: chunk_size is not positive.
            WavWriteError: the file could not be created, written or closed.
                A partially written file may be left behind.
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")

        p = Path(path)
        header = self.header()
        pcm = memoryview(self.pcm_bytes())
        try:
            if make_parents:
                p.parent.mkdir(parents=True, exist_ok=True)
            with open(p, "wb") as f:
                f.write(header.to_bytes())
                for start in range(0, len(pcm), chunk_size):
                    f.write(pcm[start:start + chunk_size])
        except OSError as e:
            raise WavWriteError(f"Could not write WAV file: {p} ({e})") from e

        logger.debug("Wrote %s: %d samples, %d bytes", p, self._count, HEADER_SIZE + header.data_size)
        return p
