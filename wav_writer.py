"""
RIFF/WAVE container writer
Serializes the canonical 44-byte PCM header followed by little-endian samples
"""

import logging
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Union

import numpy as np

from config import (
    SAMPLE_RATE,
    NUM_CHANNELS,
    BYTES_PER_SAMPLE,
    PCM_FORMAT,
    FMT_CHUNK_SIZE,
    HEADER_SIZE,
    MAX_DATA_SIZE,
)
from exceptions import WavWriteError, WavFormatError

logger = logging.getLogger(__name__)

# Packed little-endian layout, no alignment padding
HEADER_STRUCT = struct.Struct('<4sI4s4sIHHIIHH4sI')


@dataclass(frozen=True)
class WavHeader:
    """Fields of a single fmt/data RIFF/WAVE header"""
    chunk_size: int  # 4 + (8 + fmt_size) + (8 + data_size)
    fmt_size: int
    audio_format: int
    num_channels: int
    sample_rate: int
    byte_rate: int  # sample_rate * num_channels * bytes_per_sample
    block_align: int  # num_channels * bytes_per_sample
    bits_per_sample: int
    data_size: int  # total_samples * num_channels * bytes_per_sample

    @classmethod
    def for_samples(cls, total_samples: int,
                    sample_rate: int = SAMPLE_RATE,
                    num_channels: int = NUM_CHANNELS,
                    bytes_per_sample: int = BYTES_PER_SAMPLE) -> "WavHeader":
        """Build the header describing total_samples PCM frames"""
        data_size = total_samples * num_channels * bytes_per_sample
        if not 0 <= data_size <= MAX_DATA_SIZE:
            raise WavFormatError(
                f"{total_samples} samples do not fit in a WAVE header"
            )
        return cls(
            chunk_size=4 + (8 + FMT_CHUNK_SIZE) + (8 + data_size),
            fmt_size=FMT_CHUNK_SIZE,
            audio_format=PCM_FORMAT,
            num_channels=num_channels,
            sample_rate=sample_rate,
            byte_rate=sample_rate * num_channels * bytes_per_sample,
            block_align=num_channels * bytes_per_sample,
            bits_per_sample=bytes_per_sample * 8,
            data_size=data_size,
        )

    def pack(self) -> bytes:
        return HEADER_STRUCT.pack(
            b'RIFF',
            self.chunk_size,
            b'WAVE',
            b'fmt ',
            self.fmt_size,
            self.audio_format,
            self.num_channels,
            self.sample_rate,
            self.byte_rate,
            self.block_align,
            self.bits_per_sample,
            b'data',
            self.data_size,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "WavHeader":
        """
        Parse a header produced by pack()

        Args:
            data: At least the first 44 bytes of a WAVE file

        Returns:
            WavHeader with the decoded fields

        Raises:
            WavFormatError: if the data is too short or the chunk tags are wrong
        """
        if len(data) < HEADER_SIZE:
            raise WavFormatError(
                f"WAVE header needs {HEADER_SIZE} bytes, got {len(data)}"
            )

        (riff, chunk_size, wave, fmt, fmt_size, audio_format, num_channels,
         sample_rate, byte_rate, block_align, bits_per_sample,
         data_tag, data_size) = HEADER_STRUCT.unpack(data[:HEADER_SIZE])

        if riff != b'RIFF' or wave != b'WAVE':
            raise WavFormatError("Not a RIFF/WAVE file")
        if fmt != b'fmt ' or data_tag != b'data':
            raise WavFormatError("Unexpected chunk layout in WAVE header")

        return cls(
            chunk_size=chunk_size,
            fmt_size=fmt_size,
            audio_format=audio_format,
            num_channels=num_channels,
            sample_rate=sample_rate,
            byte_rate=byte_rate,
            block_align=block_align,
            bits_per_sample=bits_per_sample,
            data_size=data_size,
        )


def write_wav(stream: BinaryIO, total_samples: int, audio: np.ndarray) -> int:
    """
    Write header and sample data to a binary stream

    Args:
        stream: Writable binary file object
        total_samples: Sample count declared in the header
        audio: Samples to write (converted to little-endian int16)

    Returns:
        Number of bytes written

    Raises:
        WavWriteError: if the stream fails or accepts fewer bytes than given
        WavFormatError: if total_samples cannot be described by a WAVE header
    """
    header = WavHeader.for_samples(total_samples)
    payload = np.asarray(audio).astype('<i2', copy=False).tobytes()

    written = 0
    for chunk in (header.pack(), payload):
        try:
            count = stream.write(chunk)
        except OSError as e:
            raise WavWriteError(f"Error writing WAVE data: {e}") from e

        # Raw streams may return None (would block) or a short count
        if count != len(chunk):
            raise WavWriteError(
                f"Short write: {count} of {len(chunk)} bytes"
            )
        written += len(chunk)

    logger.debug(
        "Wrote WAVE container: %d header + %d data bytes",
        HEADER_SIZE, len(payload)
    )
    return written


def read_wav_header(path: Union[str, Path]) -> WavHeader:
    """Read and parse the header of a WAVE file on disk"""
    with open(path, 'rb') as f:
        return WavHeader.unpack(f.read(HEADER_SIZE))
