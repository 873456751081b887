#!/usr/bin/env python3
"""CLI tool to transpose a recognized sheet and print draw instructions.

Usage:
    python examples/transpose_recognition.py <recognition_file> --width W --height H
        (--target-key KEY | --direction up|down --semitones N) [options]

Examples:
    python examples/transpose_recognition.py reply.json --width 1080 --height 1440 --target-key G
    python examples/transpose_recognition.py reply.txt --width 1080 --height 1440 \\
        --target-key F --direction down --semitones 2 --anchors 12,18 88,91
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from jianpu_transpose import signed_semitones, transpose_sheet_from_response
from jianpu_transpose.coordinates import AnchorPair, AnchorPoint


def parse_anchor(text: str) -> AnchorPoint:
    """Parse an "x,y" percentage pair."""
    try:
        x, y = (float(part) for part in text.split(","))
    except ValueError as e:
        msg = f"Anchor must be 'x,y' in percent, got {text!r}"
        raise argparse.ArgumentTypeError(msg) from e
    return AnchorPoint(x, y)


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Transpose chords from a vision model recognition reply",
    )
    parser.add_argument(
        "recognition_file",
        type=Path,
        help="Recognition reply (JSON, optionally inside a Markdown code fence)",
    )
    parser.add_argument("--width", type=int, required=True, help="Image width in pixels")
    parser.add_argument("--height", type=int, required=True, help="Image height in pixels")
    parser.add_argument("--original-key", help="Sheet key (default: recognized key, else C)")
    parser.add_argument("--target-key", help="Key to transpose to")
    parser.add_argument("--direction", choices=("up", "down"), help="Shift direction")
    parser.add_argument("--semitones", type=int, help="Shift size in semitones")
    parser.add_argument(
        "--anchors",
        nargs=2,
        type=parse_anchor,
        metavar="X,Y",
        help="First and last chord positions in percent",
    )
    parser.add_argument("--color", help="Base chord color (hex)")
    parser.add_argument("--font-size", type=float, help="Label font size in pixels")
    parser.add_argument("-o", "--output", type=Path, help="Output JSON file (default: stdout)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log processing details")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.recognition_file.exists():
        print(f"Error: File not found: {args.recognition_file}", file=sys.stderr)
        return 1

    semitones = 0
    if args.direction and args.semitones is not None:
        semitones = signed_semitones(args.direction, args.semitones)

    anchors = AnchorPair(*args.anchors) if args.anchors else None

    outcome = transpose_sheet_from_response(
        args.recognition_file.read_text(encoding="utf-8"),
        args.width,
        args.height,
        target_key=args.target_key,
        original_key=args.original_key,
        semitones=semitones,
        anchors=anchors,
        chord_color=args.color,
        font_size=args.font_size,
    )

    json_str = json.dumps(outcome.to_dict(), indent=2, ensure_ascii=False)
    if args.output:
        args.output.write_text(json_str, encoding="utf-8")
        print(f"Wrote {args.output}", file=sys.stderr)
    else:
        print(json_str)

    return 0 if outcome.ok else 1


if __name__ == "__main__":
    sys.exit(main())
