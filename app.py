"""
easy-dtmf command line

Writes a phone number as DTMF tones to a WAVE file:

    easy-dtmf dial.wav 0.2 1-800-555-0199
"""

import sys
import logging
import argparse

import config
from dtmf_file import create_dtmf_file
from exceptions import DTMFError

logger = logging.getLogger("easy_dtmf")


def build_parser(log_level=config.DEFAULT_LOG_LEVEL):
    parser = argparse.ArgumentParser(
        description="Generate a .WAV file with DTMF tones for a phone number"
    )
    parser.add_argument(
        "output",
        type=str,
        help="Path of the WAVE file to create",
    )
    parser.add_argument(
        "tone_length",
        type=float,
        help=f"Duration of each tone in seconds [{config.MIN_TONE_LENGTH}, {config.MAX_TONE_LENGTH}]",
    )
    parser.add_argument(
        "digits",
        type=str,
        help="Phone number using 0-9, '*', '#' and '-' as separator",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default=log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )

    parser.epilog = """
    EXAMPLE USAGE:

        easy-dtmf dial.wav 0.2 1-800-555-0199
        easy-dtmf pin.wav 0.5 "1234#"
    """
    return parser


def main(argv=None) -> int:
    args = build_parser(config.load_log_level()).parse_args(argv)
    config.setup_logging(args.log_level)

    try:
        create_dtmf_file(args.output, args.tone_length, args.digits)
    except DTMFError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
