"""
metrics.py

Values derived from a parsed header: duration, bitrates, chapter timing.
"""

import math
import re

from .exceptions import ZeroByteRateError

FACILITY_RE = re.compile(r"T=([^,\r\n]*),")


def compute_duration(data_chunk_size, byte_rate, offset=None):
    """Seconds of audio in a data chunk of the given size."""
    if not byte_rate:
        raise ZeroByteRateError(
            "byte rate is zero or missing, cannot compute duration", offset=offset
        )
    return data_chunk_size / float(byte_rate)


def overall_bitrate(total_bytes, duration):
    """Whole-file bitrate in kb/s, or None for a zero-length file."""
    if not duration:
        return None
    return round(total_bytes * 8 / duration / 1000)


def stream_bitrate(byte_rate):
    if byte_rate is None:
        return None
    return round(byte_rate * 8 / 1000)


def format_bitrate(kbps):
    if kbps is None:
        return "N/A"
    return f"{kbps} kb/s"


def format_duration(seconds):
    """
    Fixed-width HH:MM:SS.mmm. Hours are always present and milliseconds
    are truncated, not rounded.
    """
    total_ms = int(math.floor(seconds * 1000))
    hours, rest = divmod(total_ms, 3600 * 1000)
    minutes, rest = divmod(rest, 60 * 1000)
    secs, millis = divmod(rest, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{millis:03d}"


def chapter_times(chapters, sample_rate, duration):
    """
    (start_ms, end_ms) per chapter. Each chapter ends where the next one
    starts; the last one ends at the end of the audio.
    """
    if not chapters or not sample_rate:
        return []
    starts = [c.cue_point_id * 1000 // sample_rate for c in chapters]
    if duration is None:
        # No data chunk: the last chapter has no known end
        last_end = starts[-1]
    else:
        last_end = int(math.floor(duration * 1000))
    ends = starts[1:] + [last_end]
    return list(zip(starts, ends))


def recording_facility(coding_history):
    """Trimmed value of the first T=<value>, token in a bext coding history."""
    if not coding_history:
        return None
    m = FACILITY_RE.search(coding_history)
    if m:
        return m.group(1).strip() or None
    return None
