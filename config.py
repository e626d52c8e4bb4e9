import os
import logging
from dotenv import load_dotenv, find_dotenv

# WAVE format configuration
SAMPLE_RATE = 44100
NUM_CHANNELS = 1  # Mono
BYTES_PER_SAMPLE = 2
BITS_PER_SAMPLE = BYTES_PER_SAMPLE * 8
PCM_FORMAT = 1
FMT_CHUNK_SIZE = 16
HEADER_SIZE = 44

# Largest data chunk whose RIFF chunk size still fits in a u32
MAX_DATA_SIZE = 0xFFFFFFFF - (HEADER_SIZE - 8)

# Peak of two summed sines is 2 * AMPLITUDE = 32764, inside int16
AMPLITUDE = 16382

# Input validation
MIN_TONE_LENGTH = 0.1  # seconds
MAX_TONE_LENGTH = 1.0  # seconds
MAX_DIGITS = 63

# Logging Configuration
LOG_LEVEL_ENV = "EASY_DTMF_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def load_log_level() -> str:
    """Log level from the environment, after loading ./.env if present"""
    load_dotenv(find_dotenv(usecwd=True))
    return os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)


def setup_logging(level: str = DEFAULT_LOG_LEVEL):
    """Configure root logging for command line use"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt='%H:%M:%S'
    )
