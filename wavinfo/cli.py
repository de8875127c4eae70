#!/usr/bin/env python3
"""
cli.py

WAV metadata reader: fmt, bext, LIST/INFO, LIST/adtl chapters and axml ISRC.

Modes:
- Default: print a JSON report per file (a list when more than one file)
- --chunks: print the top-level chunk layout (offsets and sizes) only
- --survey: count chunk IDs across the scanned files
- -o/--output: also write one flattened row per file to CSV
- -v/--verbose: trace chunks to stderr while parsing

Examples:
  wavinfo take1.wav
  wavinfo "D:\\Audio\\Broadcast" -n 200 -o broadcast.csv
  wavinfo take1.wav --chunks
  wavinfo "D:\\Audio\\Broadcast" --survey
"""

import argparse
import json
import os
import sys
from collections import Counter

import pandas as pd

from .cursor import ByteCursor
from .exceptions import WavInfoError
from .report import build_report, read_wav
from .walker import parse_wav

DEFAULT_MAX_FILES = 500
JSON_INDENT = 2

CSV_STREAM_FIELDS = ["codec_name", "sample_rate", "channels", "bits_per_sample"]


def iter_wav_paths(paths, limit):
    """Yield files given directly, plus *.wav found under any directories."""
    count = 0
    for path in paths:
        if os.path.isdir(path):
            for root, _, files in os.walk(path):
                for file in sorted(files):
                    if file.lower().endswith(".wav"):
                        if count >= limit:
                            return
                        yield os.path.join(root, file)
                        count += 1
        else:
            if count >= limit:
                return
            yield path
            count += 1


def print_event(event, info):
    if event == "chunk":
        print(f"[CHUNK] {info['id']:4s} @ {info['offset']}, size={info['size']}", file=sys.stderr)
    elif event == "skip":
        print(f"[SKIP] {info['id']} @ {info['offset']}, size={info['size']}", file=sys.stderr)
    elif event == "malformed":
        print(f"[WARN] Malformed {info['id']} chunk @ {info['offset']}: {info['error']}", file=sys.stderr)


def flatten_report(report):
    """One CSV row per file: format fields, first stream, tags, chapter count."""
    fmt = report["format"]
    row = {
        "filename": report["filename"],
        "size": fmt["size"],
        "duration": fmt["duration"],
        "bit_rate": fmt["bit_rate"],
    }
    stream = report["streams"][0]
    for key in CSV_STREAM_FIELDS:
        row[key] = stream[key]
    row["stream_bit_rate"] = stream["bit_rate"]
    row.update(fmt["tags"])
    row["chapters"] = len(report.get("chapters", []))
    return row


def write_csv(rows, output):
    df = pd.DataFrame(rows)
    df.to_csv(output, index=False)
    print(f"[INFO] Wrote {len(rows)} entries to {output}", file=sys.stderr)


def print_chunk_layout(path, data):
    """Print chunks as the walker reaches them, so a damaged file still shows its layout."""
    print(f"=== {os.path.basename(path)} ===")
    if len(data) >= 12:
        hdr = ByteCursor(data)
        riff_id, riff_size, riff_type = hdr.read_string(4), hdr.read_u32(), hdr.read_string(4)
        if riff_id == "RIFF":
            print(f"[INFO] RIFF container size: {riff_size} bytes, type: {riff_type}")

    def show(event, info):
        if event == "chunk":
            print(f"Chunk {info['id']:4s} @ {info['offset']}, size={info['size']}")

    parse_wav(data, on_event=show)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="wavinfo", description="WAV metadata reader (fmt, bext, INFO, chapters, ISRC)."
    )
    parser.add_argument("paths", nargs="+", help="WAV files or directories containing WAV files.")
    parser.add_argument("-o", "--output", help="Also write a CSV summary to this file.")
    parser.add_argument("-n", "--num", type=int, default=DEFAULT_MAX_FILES,
                        help="Maximum number of WAV files to scan.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Trace chunks to stderr while parsing.")
    parser.add_argument("--chunks", action="store_true", help="Print the chunk layout of each file only.")
    parser.add_argument("--survey", action="store_true", help="Count chunk IDs across scanned files.")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    on_event = print_event if args.verbose else None

    reports = []
    counts = Counter()
    failed = 0
    scanned = 0

    for path in iter_wav_paths(args.paths, args.num):
        try:
            data = read_wav(path)
            if args.chunks:
                print_chunk_layout(path, data)
                continue
            header = parse_wav(data, on_event=on_event)
        except (OSError, WavInfoError) as e:
            print(f"[ERR] {path}: {e}", file=sys.stderr)
            failed += 1
            continue

        scanned += 1
        if args.survey:
            counts.update(set(header["chunks"]))
        else:
            reports.append(build_report(os.path.basename(path), header, len(data)))

    if args.survey:
        print("== Chunk ID Survey ==")
        for cid, c in counts.most_common():
            print(f"{cid:6s} : {c} files")
        print(f"\n[INFO] Scanned {scanned} file(s). Found {len(counts)} unique chunk ID(s).")
    elif reports:
        out = reports[0] if len(reports) == 1 else reports
        print(json.dumps(out, indent=JSON_INDENT))
        if args.output:
            write_csv([flatten_report(r) for r in reports], args.output)

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
