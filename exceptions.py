"""
Custom Exception Classes for easy-dtmf
Provides structured error handling for the tone-to-WAVE pipeline
"""


class DTMFError(Exception):
    """Base exception for all easy-dtmf errors"""
    pass


class InvalidInputError(DTMFError, ValueError):
    """Raised when the digit string or tone length is not accepted"""
    pass


class WavError(DTMFError):
    """Base exception for WAVE container errors"""
    pass


class WavWriteError(WavError):
    """Raised when the output file cannot be created or fully written"""
    pass


class WavFormatError(WavError, ValueError):
    """Raised when a WAVE header cannot be parsed"""
    pass
