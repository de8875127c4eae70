"""
report.py

Turns a parsed header into the report printed by the CLI, and reads
files from disk for it.
"""

import os

from .decoders import INFO_TAGS
from .metrics import (
    chapter_times,
    format_bitrate,
    format_duration,
    overall_bitrate,
    stream_bitrate,
)
from .walker import parse_wav

TIME_BASE = 1000

# Report tag -> where it comes from in header["metadata"], first hit wins
TAG_SOURCES = [
    ("date", ("origination_date", "ICRD")),
    ("creation_time", ("origination_time",)),
    ("time_reference", ("time_reference",)),
    ("coding_history", ("coding_history",)),
    ("title", ("INAM", "description")),
    ("artist", ("IART", "originator")),
    ("ISRC", ("isrc",)),
    ("album", ("IPRD",)),
    ("track", ("IPRT", "ITRK")),
    ("recording_facility", ("recording_facility",)),
]


def read_wav(path):
    with open(path, "rb") as f:
        return f.read()


def codec_name(audio_format, bits_per_sample):
    """ffprobe-style codec name for PCM; the hex format tag for anything else."""
    if audio_format == 0x0001 and bits_per_sample:
        if bits_per_sample == 8:
            return "pcm_u8"
        return f"pcm_s{bits_per_sample}le"
    if audio_format == 0x0003 and bits_per_sample:
        return f"pcm_f{bits_per_sample}le"
    if audio_format == 0x0006:
        return "pcm_alaw"
    if audio_format == 0x0007:
        return "pcm_mulaw"
    if audio_format is None:
        return None
    return f"0x{audio_format:04X}"


def resolve_tags(metadata):
    tags = {}
    used = set()
    for name, keys in TAG_SOURCES:
        for key in keys:
            value = metadata.get(key)
            if value not in (None, ""):
                tags[name] = value
                used.add(key)
                break
    # Remaining recognized INFO tags (genre, comment, ...) under their readable names
    for tag_id, name in INFO_TAGS.items():
        value = metadata.get(tag_id)
        if value and tag_id not in used and name not in tags:
            tags[name] = value
    return tags


def build_report(filename, header, total_bytes):
    duration = header["duration"]
    report = {
        "filename": filename,
        "format": {
            "format_name": "wav",
            "size": total_bytes,
            "duration": format_duration(duration) if duration is not None else "N/A",
            "bit_rate": format_bitrate(overall_bitrate(total_bytes, duration)),
            "tags": resolve_tags(header["metadata"]),
        },
        "streams": [
            {
                "index": 0,
                "codec_type": "audio",
                "codec_name": codec_name(header["audio_format"], header["bits_per_sample"]),
                "format_tag": header["audio_format"],
                "sample_rate": header["sample_rate"],
                "channels": header["num_channels"],
                "bits_per_sample": header["bits_per_sample"],
                "byte_rate": header["byte_rate"],
                "block_align": header["block_align"],
                "bit_rate": format_bitrate(stream_bitrate(header["byte_rate"])),
            }
        ],
    }

    times = chapter_times(header["chapters"], header["sample_rate"], duration)
    if times:
        report["chapters"] = [
            {
                "id": i,
                "time_base": f"1/{TIME_BASE}",
                "start": start,
                "end": end,
                "tags": {"title": chapter.text},
            }
            for i, (chapter, (start, end)) in enumerate(zip(header["chapters"], times))
        ]
    return report


def get_wav_info(path, on_event=None):
    """Read, parse and summarise one WAV file."""
    data = read_wav(path)
    header = parse_wav(data, on_event=on_event)
    return build_report(os.path.basename(path), header, len(data))
