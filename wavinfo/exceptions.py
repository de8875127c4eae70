"""
exceptions.py

Error types raised while parsing a RIFF/WAVE buffer.
Every failure is terminal for the parse that raised it.
"""


class WavInfoError(Exception):
    """Base class for all wavinfo errors."""

    def __init__(self, message="", offset=None):
        self.message = message
        self.offset = offset
        if offset is not None:
            message = f"{message} (at offset {offset})"
        super().__init__(message)


class InvalidContainerError(WavInfoError):
    """The buffer does not start with a RIFF header of form type WAVE."""


class OutOfBoundsError(WavInfoError):
    """A read, skip or take would run past the end of the buffer."""


class ZeroByteRateError(WavInfoError):
    """The byte rate is zero or missing, so no duration can be derived."""
