"""
decoders.py

Decoders for the individual chunk bodies: fmt, bext, LIST/INFO, LIST/adtl
and axml. Each one is handed a ByteCursor bounded to a single chunk body.
"""

import binascii
import re
from collections import namedtuple

# Cue point (sample frame offset) + label text from a LIST/adtl entry
Chapter = namedtuple("Chapter", ["cue_point_id", "text"])

# --------------------------
# RIFF INFO tag names
# --------------------------
INFO_TAGS = {
    "IARL": "archival_location",
    "IART": "artist",
    "ICMS": "commissioned",
    "ICMT": "comment",
    "ICOP": "copyright",
    "ICRD": "creation_date",
    "IENG": "engineer",
    "IGNR": "genre",
    "IKEY": "keywords",
    "IMED": "medium",
    "INAM": "title",
    "IPRD": "album",
    "IPRT": "track",
    "ITRK": "track",
    "ISBJ": "subject",
    "ISFT": "software",
    "ISRC": "source",
    "ISRF": "source_form",
    "ITCH": "technician",
}

BEXT_HEADER_SIZE = 602
ISRC_RE = re.compile(r"<dc:identifier>\s*ISRC:\s*([^<]*?)\s*</dc:identifier>", re.I)


def decode_fmt(cursor):
    """Decode the 16 mandatory bytes of a fmt chunk. Extension bytes are left unread."""
    return {
        "audio_format": cursor.read_u16(),
        "num_channels": cursor.read_u16(),
        "sample_rate": cursor.read_u32(),
        "byte_rate": cursor.read_u32(),
        "block_align": cursor.read_u16(),
        "bits_per_sample": cursor.read_u16(),
    }


def decode_bext(cursor):
    """
    Broadcast extension chunk (EBU Tech 3285, version 2 layout).

    Fixed header is 602 bytes; the coding history fills the rest of the body.
    Loudness fields are signed hundredths (e.g. -2300 = -23.00 LUFS).
    """
    meta = {
        "description": cursor.read_string(256),
        "originator": cursor.read_string(32),
        "originator_reference": cursor.read_string(32),
        "origination_date": cursor.read_string(10),
        "origination_time": cursor.read_string(8),
    }
    low = cursor.read_u32()
    high = cursor.read_u32()
    meta["time_reference"] = low | (high << 32)
    meta["version"] = cursor.read_u16()
    meta["umid"] = binascii.hexlify(cursor.read_bytes(64)).decode().upper()
    meta["loudness_value"] = cursor.read_i16()
    meta["loudness_range"] = cursor.read_i16()
    meta["max_true_peak_level"] = cursor.read_i16()
    meta["max_momentary_loudness"] = cursor.read_i16()
    meta["max_short_term_loudness"] = cursor.read_i16()
    # 180 reserved bytes up to the fixed header size
    cursor.skip(BEXT_HEADER_SIZE - cursor.offset)

    meta["coding_history"] = cursor.read_string(cursor.remaining()).strip()
    return meta


def decode_info_list(cursor):
    """LIST/INFO body (after the list type): 4-char tag -> text value."""
    tags = {}
    while cursor.remaining() >= 8:
        sub_id = cursor.read_string(4)
        sub_size = cursor.read_u32()
        # Clamp entries that claim more than the list holds
        length = min(sub_size, cursor.remaining())
        value = cursor.read_string(length)
        if sub_id:
            tags[sub_id] = value
        if sub_size % 2 == 1 and cursor.remaining() > 0:
            cursor.skip(1)
    return tags


def decode_adtl_list(cursor):
    """LIST/adtl body (after the list type): labl/note entries as chapters, in order."""
    chapters = []
    while cursor.remaining() >= 8:
        sub_id = cursor.read_string(4)
        sub_size = cursor.read_u32()
        length = min(sub_size, cursor.remaining())
        if sub_id in ("labl", "note") and length >= 4:
            cue_point_id = cursor.read_u32()
            text = cursor.read_string(length - 4)
            chapters.append(Chapter(cue_point_id, text))
        else:
            cursor.skip(length)
        if sub_size % 2 == 1 and cursor.remaining() > 0:
            cursor.skip(1)
    return chapters


def decode_axml(cursor):
    """
    Pull the ISRC out of an axml chunk.

    Only <dc:identifier>ISRC:...</dc:identifier> is looked at; the XML is not parsed.
    """
    text = cursor.read_bytes(cursor.remaining()).decode("utf-8", errors="ignore")
    m = ISRC_RE.search(text)
    if m and m.group(1):
        return {"isrc": m.group(1)}
    return {}
