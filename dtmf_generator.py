"""
DTMF (Dual-Tone Multi-Frequency) Tone Generator
This module maps keypad symbols to tone pairs and synthesizes 16-bit PCM samples
"""

import logging
from typing import Tuple

import numpy as np

from config import SAMPLE_RATE, AMPLITUDE
from exceptions import InvalidInputError

logger = logging.getLogger(__name__)

FrequencyPair = Tuple[int, int]

# Row (low group) frequency for each symbol; '-' is a silent separator
ROW_FREQUENCIES = {
    '1': 697, '2': 697, '3': 697,
    '4': 770, '5': 770, '6': 770,
    '7': 852, '8': 852, '9': 852,
    '*': 941, '0': 941, '#': 941,
    '-': 0,
}

# Column (high group) frequency for each symbol
COLUMN_FREQUENCIES = {
    '1': 1209, '4': 1209, '7': 1209, '*': 1209,
    '2': 1336, '5': 1336, '8': 1336, '0': 1336,
    '3': 1477, '6': 1477, '9': 1477, '#': 1477,
    '-': 0,
}

# DTMF frequency pairs for each digit/symbol
DTMF_FREQUENCIES = {
    symbol: (ROW_FREQUENCIES[symbol], COLUMN_FREQUENCIES[symbol])
    for symbol in ROW_FREQUENCIES
}

VALID_SYMBOLS = frozenset(DTMF_FREQUENCIES)


def row_frequency(symbol: str) -> int:
    """Row frequency in Hz: 697, 770, 852, 941, or 0 for '-'"""
    try:
        return ROW_FREQUENCIES[symbol]
    except KeyError:
        raise InvalidInputError(f"Invalid DTMF symbol: {symbol!r}") from None


def column_frequency(symbol: str) -> int:
    """Column frequency in Hz: 1209, 1336, 1477, or 0 for '-'"""
    try:
        return COLUMN_FREQUENCIES[symbol]
    except KeyError:
        raise InvalidInputError(f"Invalid DTMF symbol: {symbol!r}") from None


def frequencies_for(symbol: str) -> FrequencyPair:
    """
    Look up the tone pair for a keypad symbol

    Args:
        symbol: One of '0'-'9', '*', '#', '-'

    Returns:
        (row frequency, column frequency) in Hz; (0, 0) for '-'
    """
    return row_frequency(symbol), column_frequency(symbol)


def synthesize(freq_pair: FrequencyPair, duration: float,
               sample_rate: int = SAMPLE_RATE,
               amplitude: int = AMPLITUDE) -> np.ndarray:
    """
    Synthesize one dual tone as signed 16-bit samples

    Args:
        freq_pair: (row, column) frequencies in Hz
        duration: Tone length (seconds)
        sample_rate: Audio sample rate (Hz)
        amplitude: Peak amplitude of each sine component

    Returns:
        int16 numpy array of int(sample_rate * duration) samples
    """
    freq_row, freq_col = freq_pair
    num_samples = int(sample_rate * duration)

    # Sample index array; n / sample_rate is the time of each sample
    n = np.arange(num_samples, dtype=np.float64)

    wave_row = np.sin(2 * np.pi * n * freq_row / sample_rate)
    wave_col = np.sin(2 * np.pi * n * freq_col / sample_rate)

    # No clamping: the amplitude leaves headroom for the summed peak
    combined_wave = np.rint(amplitude * (wave_row + wave_col))

    return combined_wave.astype(np.int16)


class DTMFGenerator:
    def __init__(self, sample_rate=SAMPLE_RATE, duration=0.2, amplitude=AMPLITUDE):
        """
        Initialize DTMF generator

        Args:
            sample_rate: Audio sample rate (Hz)
            duration: Duration of each tone (seconds)
            amplitude: Peak amplitude of each sine component
        """
        self.sample_rate = sample_rate
        self.duration = duration
        self.amplitude = amplitude

    @property
    def samples_per_tone(self) -> int:
        return int(self.sample_rate * self.duration)

    def generate_tone(self, digit: str) -> np.ndarray:
        """
        Generate DTMF tone for a specific digit

        Args:
            digit: The digit or symbol ('0'-'9', '*', '#', '-')

        Returns:
            int16 numpy array containing the audio samples
        """
        return synthesize(
            frequencies_for(digit),
            self.duration,
            sample_rate=self.sample_rate,
            amplitude=self.amplitude,
        )

    def generate_sequence(self, sequence: str) -> np.ndarray:
        """
        Generate the tones of a sequence back to back

        Args:
            sequence: String of digits/symbols

        Returns:
            int16 numpy array of len(sequence) * samples_per_tone samples
        """
        if not sequence:
            return np.zeros(0, dtype=np.int16)

        tones = [self.generate_tone(digit) for digit in sequence]
        logger.debug(
            "Generated %d tones of %d samples each",
            len(tones), self.samples_per_tone
        )
        return np.concatenate(tones)
