"""Command-line interface for slimfilter.

Usage::

    slimfilter input.md                        # writes input.slim
    slimfilter input.md -o output.slim         # explicit output path
    slimfilter input.md --wrapper round        # div(title="x") attribute style
    slimfilter --list-profiles                 # list available profiles
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from slimfilter import __version__
from slimfilter.converter import Converter


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slimfilter",
        description="Convert Markdown files to Slim templates.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="Path to the Markdown file to convert.",
    )
    parser.add_argument(
        "-o", "--output",
        help="Output Slim file path. Defaults to <input>.slim.",
    )
    parser.add_argument(
        "-p", "--profile",
        default="plain",
        choices=Converter.PROFILES,
        help="Output profile (default: %(default)s).",
    )
    parser.add_argument(
        "-w", "--wrapper",
        default="none",
        choices=Converter.WRAPPERS,
        help="Attribute wrapping style (default: %(default)s).",
    )
    parser.add_argument(
        "--cursor",
        help="Caret placeholder emitted in empty elements.",
    )
    parser.add_argument(
        "-e", "--encoding",
        default="utf-8",
        help="Input file encoding (default: %(default)s).",
    )
    parser.add_argument(
        "--list-profiles",
        action="store_true",
        help="List available output profiles and exit.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print progress information.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.list_profiles:
        print("Available output profiles:")
        for profile in Converter.PROFILES:
            print(f"  - {profile}")
        return 0

    if not args.input:
        parser.error("the following argument is required: input")

    input_path = Path(args.input)
    if not input_path.is_file():
        print(f"Error: file not found: {input_path}", file=sys.stderr)
        return 1

    # Determine output path
    if args.output:
        output_path = Path(args.output)
    else:
        output_path = input_path.with_suffix(".slim")

    if args.verbose:
        print(f"Input:   {input_path}")
        print(f"Output:  {output_path}")
        print(f"Profile: {args.profile}")
        print(f"Wrapper: {args.wrapper}")

    try:
        converter = Converter(
            profile=args.profile,
            attributes_wrapper=args.wrapper,
            cursor=args.cursor,
        )
        converter.convert_file(input_path, output_path, encoding=args.encoding)
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"Done. {output_path.stat().st_size} bytes written.")
    else:
        print(f"Converted: {output_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
