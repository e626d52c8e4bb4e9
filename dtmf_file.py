"""
Phone number to DTMF WAVE file conversion
Validates input, synthesizes every symbol and writes the container atomically
"""

import os
import stat
import numbers
import logging
import tempfile
import time
from pathlib import Path
from typing import Union

from config import SAMPLE_RATE, MIN_TONE_LENGTH, MAX_TONE_LENGTH, MAX_DIGITS
from dtmf_generator import DTMFGenerator, VALID_SYMBOLS
from exceptions import InvalidInputError, WavWriteError
from wav_writer import WavHeader, write_wav

logger = logging.getLogger(__name__)


def validate_digits(digits: str):
    """Reject anything but 0-9, '#', '*', '-' and overlong numbers"""
    if not isinstance(digits, str):
        raise InvalidInputError(f"Phone number must be a string, got {type(digits).__name__}")

    if len(digits) > MAX_DIGITS:
        raise InvalidInputError(
            f"Phone number is {len(digits)} symbols long, maximum is {MAX_DIGITS}"
        )

    invalid = sorted(set(digits) - VALID_SYMBOLS)
    if invalid:
        raise InvalidInputError(
            f"Invalid phone number: unsupported symbol(s) {''.join(invalid)!r}"
        )


def validate_tone_length(tone_length: float) -> float:
    """Return tone_length as float if it is a real number within [0.1, 1.0]"""
    if isinstance(tone_length, bool) or not isinstance(tone_length, numbers.Real):
        raise InvalidInputError(f"Tone length must be a number, got {tone_length!r}")

    try:
        value = float(tone_length)
    except OverflowError:
        raise InvalidInputError(
            f"Tone length must be within range [{MIN_TONE_LENGTH}, {MAX_TONE_LENGTH}], got a value beyond float range"
        ) from None

    # NaN fails this comparison as well
    if not MIN_TONE_LENGTH <= value <= MAX_TONE_LENGTH:
        raise InvalidInputError(
            f"Tone length must be within range [{MIN_TONE_LENGTH}, {MAX_TONE_LENGTH}], got {value}"
        )
    return value


def create_dtmf_file(path: Union[str, Path], tone_length: float, digits: str) -> WavHeader:
    """
    Create a WAVE file with one DTMF tone per symbol of a phone number

    Args:
        path: Destination file
        tone_length: Duration of each tone (seconds), within [0.1, 1.0]
        digits: Phone number made of '0'-'9', '*', '#' and '-' separators

    Returns:
        The header that was written

    Raises:
        InvalidInputError: before any synthesis or I/O, for bad arguments
        WavWriteError: if the file cannot be created or fully written; the
            destination is left untouched in that case
    """
    validate_digits(digits)
    tone_length = validate_tone_length(tone_length)

    path = Path(path)
    start = time.perf_counter()
    logger.debug("Creating DTMF file %s for %r (%.3fs tones)", path, digits, tone_length)

    generator = DTMFGenerator(sample_rate=SAMPLE_RATE, duration=tone_length)
    audio = generator.generate_sequence(digits)

    # Declared size follows the real tone length, not one second per symbol
    total_samples = generator.samples_per_tone * len(digits)
    header = WavHeader.for_samples(total_samples)

    _write_atomically(path, total_samples, audio)

    duration_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "Created %s: %d symbols, %d samples, %d bytes (%.2f ms)",
        path, len(digits), total_samples, header.chunk_size + 8, duration_ms
    )
    return header


def _write_atomically(path: Path, total_samples: int, audio):
    """Write to a temporary sibling, then rename it over the destination"""
    directory = path.parent

    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=directory
        )
    except OSError as e:
        logger.error("Cannot create %s: %s", path, e)
        raise WavWriteError(f"Cannot create and/or write to file {path}: {e}") from e

    try:
        with os.fdopen(fd, 'wb') as f:
            write_wav(f, total_samples, audio)
            f.flush()
            os.fsync(f.fileno())
        # mkstemp creates 0600; give the result the mode a plain open() would
        os.chmod(tmp_name, _target_mode(path))
        os.replace(tmp_name, path)
    except BaseException as e:
        _remove_quietly(tmp_name)
        logger.error("Failed writing %s: %s", path, e)
        if isinstance(e, OSError):
            raise WavWriteError(f"Error writing {path}: {e}") from e
        raise


def _target_mode(path: Path) -> int:
    """Mode of the existing destination, else 0o666 minus the umask"""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        pass

    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _remove_quietly(name: str):
    try:
        os.unlink(name)
    except FileNotFoundError:
        pass
