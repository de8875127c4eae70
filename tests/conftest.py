"""
Synthetic RIFF/WAVE builders shared by the tests.
"""

import struct

import pytest


def chunk(cid, payload, pad=True, size=None):
    """One chunk: id, little-endian size, payload, optional word-alignment pad."""
    if size is None:
        size = len(payload)
    out = cid + struct.pack("<I", size) + payload
    if pad and len(payload) % 2 == 1:
        out += b"\x00"
    return out


def fmt_payload(audio_format=1, channels=1, sample_rate=8000, bits=16,
                byte_rate=None, block_align=None, extra=b""):
    if block_align is None:
        block_align = channels * bits // 8
    if byte_rate is None:
        byte_rate = sample_rate * block_align
    return struct.pack("<HHIIHH", audio_format, channels, sample_rate,
                       byte_rate, block_align, bits) + extra


def fmt_chunk(**kwargs):
    return chunk(b"fmt ", fmt_payload(**kwargs))


def data_chunk(size, body=b""):
    """data chunk header declaring `size`; body bytes are optional."""
    return b"data" + struct.pack("<I", size) + body


def list_chunk(list_type, entries):
    return chunk(b"LIST", list_type + b"".join(entries))


def info_entry(tag, value):
    return chunk(tag, value)


def adtl_label(cue_point_id, text, cid=b"labl"):
    return chunk(cid, struct.pack("<I", cue_point_id) + text)


def bext_payload(description=b"", originator=b"", originator_reference=b"",
                 date=b"2024-01-31", time=b"12:34:56", time_reference=0,
                 version=2, umid=b"", loudness=(0, 0, 0, 0, 0), coding_history=b""):
    return (
        description.ljust(256, b"\x00")
        + originator.ljust(32, b"\x00")
        + originator_reference.ljust(32, b"\x00")
        + date.ljust(10, b"\x00")
        + time.ljust(8, b"\x00")
        + struct.pack("<II", time_reference & 0xFFFFFFFF, time_reference >> 32)
        + struct.pack("<H", version)
        + umid.ljust(64, b"\x00")
        + struct.pack("<5h", *loudness)
        + b"\x00" * 180
        + coding_history
    )


def riff(*chunks, form=b"WAVE", tag=b"RIFF"):
    body = form + b"".join(chunks)
    return tag + struct.pack("<I", len(body)) + body


@pytest.fixture
def canonical_wav():
    """44-byte header: mono 8000 Hz 16-bit PCM, one second of (absent) data."""
    return riff(fmt_chunk(), data_chunk(16000))


@pytest.fixture
def wav_file(tmp_path):
    def _write(data, name="take1.wav"):
        path = tmp_path / name
        path.write_bytes(data)
        return path
    return _write
