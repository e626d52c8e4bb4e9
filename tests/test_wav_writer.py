"""
Tests for the RIFF/WAVE header and container writer
"""

import io
import struct

import numpy as np
import pytest

from config import HEADER_SIZE
from exceptions import WavFormatError, WavWriteError
from wav_writer import WavHeader, read_wav_header, write_wav


# Header Tests

def test_header_fields():
    header = WavHeader.for_samples(26460)

    assert header.fmt_size == 16
    assert header.audio_format == 1
    assert header.num_channels == 1
    assert header.sample_rate == 44100
    assert header.byte_rate == 88200
    assert header.block_align == 2
    assert header.bits_per_sample == 16
    assert header.data_size == 52920
    assert header.chunk_size == 52956


@pytest.mark.parametrize("total_samples", [0, 1, 4410, 44100 * 63])
def test_chunk_size_is_fixed_overhead_plus_data(total_samples):
    header = WavHeader.for_samples(total_samples)
    assert header.data_size == total_samples * 2
    assert header.chunk_size == 36 + header.data_size


def test_packed_layout():
    packed = WavHeader.for_samples(10).pack()

    assert len(packed) == HEADER_SIZE
    assert packed[0:4] == b"RIFF"
    assert struct.unpack("<I", packed[4:8])[0] == 56
    assert packed[8:12] == b"WAVE"
    assert packed[12:16] == b"fmt "
    assert struct.unpack("<I", packed[16:20])[0] == 16
    assert struct.unpack("<HH", packed[20:24]) == (1, 1)
    assert struct.unpack("<II", packed[24:32]) == (44100, 88200)
    assert struct.unpack("<HH", packed[32:36]) == (2, 16)
    assert packed[36:40] == b"data"
    assert struct.unpack("<I", packed[40:44])[0] == 20


def test_unpack_round_trip():
    header = WavHeader.for_samples(8820)
    assert WavHeader.unpack(header.pack()) == header


def test_unpack_short_data():
    with pytest.raises(WavFormatError):
        WavHeader.unpack(b"RIFF\x00\x00")


def test_unpack_wrong_tag():
    packed = bytearray(WavHeader.for_samples(1).pack())
    packed[8:12] = b"AVI "
    with pytest.raises(WavFormatError):
        WavHeader.unpack(bytes(packed))


# Writer Tests

def test_write_wav_bytes():
    audio = np.array([0, 1, -1, 32767, -32768], dtype=np.int16)
    buf = io.BytesIO()

    written = write_wav(buf, len(audio), audio)
    data = buf.getvalue()

    assert written == len(data) == HEADER_SIZE + 10
    assert data[:HEADER_SIZE] == WavHeader.for_samples(5).pack()
    assert data[HEADER_SIZE:] == b"\x00\x00\x01\x00\xff\xff\xff\x7f\x00\x80"


def test_write_wav_declared_count_is_taken_as_given():
    audio = np.zeros(4, dtype=np.int16)
    buf = io.BytesIO()

    write_wav(buf, 10, audio)

    header = WavHeader.unpack(buf.getvalue())
    assert header.data_size == 20
    assert len(buf.getvalue()) == HEADER_SIZE + 8


class ShortStream(io.RawIOBase):
    """Accepts one byte less than it is given"""

    def writable(self):
        return True

    def write(self, b):
        return max(len(b) - 1, 0)


class FailingStream(io.RawIOBase):
    def writable(self):
        return True

    def write(self, b):
        raise OSError(28, "No space left on device")


def test_short_write():
    with pytest.raises(WavWriteError):
        write_wav(ShortStream(), 2, np.zeros(2, dtype=np.int16))


def test_stream_error_is_wrapped():
    with pytest.raises(WavWriteError) as exc_info:
        write_wav(FailingStream(), 2, np.zeros(2, dtype=np.int16))
    assert isinstance(exc_info.value.__cause__, OSError)


def test_read_wav_header(tmp_path):
    path = tmp_path / "tone.wav"
    with open(path, "wb") as f:
        write_wav(f, 3, np.array([1, 2, 3], dtype=np.int16))

    header = read_wav_header(path)
    assert header.sample_rate == 44100
    assert header.num_channels == 1
    assert header.bits_per_sample == 16
    assert header.data_size == 6


@pytest.mark.parametrize("total_samples", [-1, 2 ** 31, 2 ** 40])
def test_header_rejects_sizes_beyond_u32(total_samples):
    with pytest.raises(WavFormatError):
        WavHeader.for_samples(total_samples)


def test_largest_header_still_packs():
    header = WavHeader.for_samples((0xFFFFFFFF - 36) // 2)
    assert header.chunk_size <= 0xFFFFFFFF
    assert WavHeader.unpack(header.pack()) == header


def test_write_wav_oversized_count_is_a_wav_error():
    buf = io.BytesIO()
    with pytest.raises(WavFormatError):
        write_wav(buf, 2 ** 31, np.zeros(1, dtype=np.int16))
    assert buf.getvalue() == b""
