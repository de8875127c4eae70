"""
walker.py

RIFF/WAVE chunk walker. Validates the container, then steps through the
top-level chunks until the first data chunk, handing each chunk body to
the matching decoder.

    header = parse_wav(open("take1.wav", "rb").read())
    header["sample_rate"], header["duration"], header["metadata"]

Diagnostics go through an optional on_event(event, info) callback:
  chunk     : {"id", "offset", "size"} for every top-level chunk
  skip      : {"id", "offset", "size"} chunk or list type not decoded
  malformed : {"id", "offset", "size", "error"} decoder overran its chunk
  data      : {"offset", "size"} data chunk reached, walk stops
"""

from .cursor import ByteCursor
from .decoders import (
    decode_adtl_list,
    decode_axml,
    decode_bext,
    decode_fmt,
    decode_info_list,
)
from .exceptions import InvalidContainerError, OutOfBoundsError
from .metrics import compute_duration, recording_facility


def new_header():
    return {
        "chunk_id": None,
        "riff_size": None,
        "format": None,
        "audio_format": None,
        "num_channels": None,
        "sample_rate": None,
        "byte_rate": None,
        "block_align": None,
        "bits_per_sample": None,
        "data_chunk_size": None,
        "duration": None,
        "metadata": {},
        "chapters": [],
        "chunks": [],
    }


def _emit(on_event, event, **info):
    if on_event is not None:
        on_event(event, info)


def _decode_list(body, header, chunk_id, offset, size, on_event):
    list_type = body.read_string(4)
    if list_type == "INFO":
        header["metadata"].update(decode_info_list(body))
    elif list_type == "adtl":
        header["chapters"].extend(decode_adtl_list(body))
    else:
        _emit(on_event, "skip", id=f"{chunk_id}/{list_type}", offset=offset, size=size)


def _decode_chunk(chunk_id, body, header, offset, size, on_event):
    if chunk_id == "fmt ":
        header.update(decode_fmt(body))
    elif chunk_id == "bext":
        header["metadata"].update(decode_bext(body))
    elif chunk_id == "LIST":
        _decode_list(body, header, chunk_id, offset, size, on_event)
    elif chunk_id == "axml":
        header["metadata"].update(decode_axml(body))
    else:
        _emit(on_event, "skip", id=chunk_id, offset=offset, size=size)


def parse_wav(data, on_event=None):
    """
    Parse a complete RIFF/WAVE buffer into a header dict.

    Raises InvalidContainerError for a non-WAVE buffer, OutOfBoundsError
    when a chunk runs past the end of the buffer, and ZeroByteRateError
    when the data chunk is reached without a usable byte rate.
    """
    cursor = ByteCursor(data)
    header = new_header()

    if cursor.remaining() < 12:
        raise InvalidContainerError("buffer too short for a RIFF header", offset=0)
    header["chunk_id"] = cursor.read_string(4)
    header["riff_size"] = cursor.read_u32()
    header["format"] = cursor.read_string(4)
    if header["chunk_id"] != "RIFF":
        raise InvalidContainerError(f"expected RIFF tag, got {header['chunk_id']!r}", offset=0)
    if header["format"] != "WAVE":
        raise InvalidContainerError(f"expected WAVE form type, got {header['format']!r}", offset=8)

    while cursor.remaining() >= 8:
        offset = cursor.offset
        chunk_id = cursor.read_string(4)
        size = cursor.read_u32()
        header["chunks"].append(chunk_id)
        _emit(on_event, "chunk", id=chunk_id, offset=offset, size=size)

        if chunk_id == "data":
            header["data_chunk_size"] = size
            _emit(on_event, "data", offset=offset, size=size)
            header["duration"] = compute_duration(size, header["byte_rate"], offset=offset)
            break

        # A body running past the buffer means a truncated file
        body = cursor.take(size)
        # Word alignment (chunks are word-aligned), tolerate a missing final pad
        if size % 2 == 1 and cursor.remaining() > 0:
            cursor.skip(1)

        try:
            _decode_chunk(chunk_id, body, header, offset, size, on_event)
        except OutOfBoundsError as e:
            # Declared size too small for the chunk's own layout; move on
            _emit(on_event, "malformed", id=chunk_id, offset=offset, size=size, error=str(e))

    facility = recording_facility(header["metadata"].get("coding_history"))
    if facility:
        header["metadata"]["recording_facility"] = facility
    return header
