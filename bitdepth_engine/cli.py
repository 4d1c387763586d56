"""
Command line interface.

    bitdepth-engine info FILE...     significant bits and ranges
    bitdepth-engine deep FILE...     same, plus distinct sample count
    bitdepth-engine noise FILE...    one dithered variant per noise width
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core.pipeline import EngineConfig, Mode, process_files
from .utils.report_formatter import format_report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='bitdepth-engine',
        description='Find the bit depth a PCM recording actually uses'
    )
    parser.add_argument('mode', choices=[mode.value for mode in Mode],
                        help='info: quick statistics, deep: also count distinct '
                             'samples, noise: write dithered variants')
    parser.add_argument('files', nargs='+', type=Path, help='Audio files to process')
    parser.add_argument('--output-dir', '-o', type=Path,
                        help='Directory for noise variants (default: next to each input)')
    parser.add_argument('--seed', type=int, default=42,
                        help='Noise generator seed')
    parser.add_argument('--batch-frames', type=int, default=65536,
                        help='Frames decoded per batch')
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('--verbose', '-v', action='store_true',
                           help='Verbose output')
    verbosity.add_argument('--quiet', '-q', action='store_true',
                           help='Only log warnings and errors')
    return parser


def log_level(args: argparse.Namespace) -> int:
    """INFO by default, DEBUG with --verbose, WARNING with --quiet."""
    if args.verbose:
        return logging.DEBUG
    if args.quiet:
        return logging.WARNING
    return logging.INFO


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line; returns the process exit status."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=log_level(args),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    config = EngineConfig(
        mode=Mode(args.mode),
        seed=args.seed,
        output_dir=args.output_dir,
        batch_frames=args.batch_frames
    )

    results = process_files(args.files, config)
    for result in results:
        if not result.ok:
            print(f"{result.path}: error \"{result.error}\"")
            continue
        if result.report is not None:
            print(f"{result.path}:")
            for line in format_report(result.report):
                print(f"  {line}")
        for output in result.outputs:
            print(f"{result.path} -> {output}")

    return 0 if all(result.ok for result in results) else 1


if __name__ == '__main__':
    sys.exit(main())
