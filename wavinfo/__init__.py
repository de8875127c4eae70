"""
wavinfo

Metadata extraction for RIFF/WAVE files: audio format, broadcast extension,
INFO tags, adtl chapter markers and axml ISRC, plus duration and bitrate.
"""

from .cursor import ByteCursor
from .decoders import Chapter
from .exceptions import (
    InvalidContainerError,
    OutOfBoundsError,
    WavInfoError,
    ZeroByteRateError,
)
from .report import build_report, get_wav_info
from .walker import parse_wav

__version__ = "0.1.0"

__all__ = [
    "ByteCursor",
    "Chapter",
    "InvalidContainerError",
    "OutOfBoundsError",
    "WavInfoError",
    "ZeroByteRateError",
    "build_report",
    "get_wav_info",
    "parse_wav",
]
