#!/usr/bin/env python3
"""
Split a protein FASTA file into a number of sections.

Although the splitting is random, each section will have a nearly identical
number of residues.

Examples:
  fasta-splitter Proteins.fasta -n 25 -o split_dir/
  fasta-splitter "db/*.fasta" -t 50
  fasta-splitter db/ -s 2 -a results/ -r
"""

import argparse
import logging
import sys
from pathlib import Path

from tqdm import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm

from fasta_splitter.options import DEFAULT_SPLIT_COUNT, SplitterOptions
from fasta_splitter.splitter import FastaFileSplitter

LOG_FILE_NAME = "FastaFileSplitter_log.txt"


def configure_logging(level: int = logging.INFO, log_file: str | None = None) -> None:
    """Configure logging to write to stderr, and optionally to a file."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(asctime)s\t%(levelname)s\t%(message)s"))
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        handlers=handlers,
        force=True,
    )


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fasta-splitter",
        description="Split a protein FASTA file into a number of sections. Although the splitting "
                    "is random, each section will have a nearly identical number of residues.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", nargs="?",
                        help="Input FASTA file; may contain the wildcard character *")
    parser.add_argument("-i", "--input", dest="input_option",
                        help="Input FASTA file (alternative to the positional argument)")
    parser.add_argument("-o", "--output-dir", default="",
                        help="Output directory (default: same directory as the input file)")
    parser.add_argument("-p", "--param-file", default="",
                        help="XML parameter file with a FastaFileSplitterOptions section")
    parser.add_argument("-n", "--split-count", type=int, default=DEFAULT_SPLIT_COUNT,
                        help=f"Number of parts to split the input file into (default: {DEFAULT_SPLIT_COUNT})")
    parser.add_argument("-t", "--target-size-mb", type=int, default=None,
                        help="Split into as many parts as needed for each to be about this size (MB); "
                             "takes precedence over --split-count")
    parser.add_argument("-s", "--recurse", nargs="?", type=int, const=0, default=None, metavar="MAX_LEVEL",
                        help="Process all FASTA files in the input directory and its subdirectories; "
                             "optionally limit the number of levels (default: unlimited)")
    parser.add_argument("-a", "--alternate-output-dir", default="",
                        help="With --recurse, write results below this directory instead")
    parser.add_argument("-r", "--recreate-hierarchy", action="store_true",
                        help="With --recurse and --alternate-output-dir, re-create the input "
                             "directory hierarchy in the alternate directory")
    parser.add_argument("-l", "--log-file", action="store_true",
                        help=f"Also log messages to {LOG_FILE_NAME}")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="INFO",
                        help="Logging level (default: INFO)")
    return parser


class ProgressBar:
    """Shows splitter progress callbacks as a tqdm bar, one bar per input file."""

    def __init__(self):
        self._bar = None
        self._description = None

    def __call__(self, description: str, percent: float) -> None:
        if self._bar is None or (percent == 0 and description != self._description):
            self.close()
            self._bar = tqdm(total=100, desc=description, unit="%",
                             bar_format="{desc}: {percentage:3.0f}%|{bar}|")
        elif description != self._description:
            self._bar.set_description_str(description, refresh=False)
        self._description = description
        self._bar.n = min(percent, 100)
        self._bar.refresh()

    def close(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None


def main(argv=None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    input_path = args.input_option or args.input
    if not input_path:
        parser.print_help()
        return 1

    log_file = None
    if args.log_file:
        log_dir = args.output_dir or "."
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        log_file = str(Path(log_dir) / LOG_FILE_NAME)
    configure_logging(getattr(logging, args.log_level), log_file)

    if args.split_count < 0:
        parser.error(f"--split-count cannot be negative, got {args.split_count}")

    options = SplitterOptions(split_count=args.split_count)
    if args.target_size_mb is not None:
        if args.target_size_mb < 0:
            parser.error(f"--target-size-mb cannot be negative, got {args.target_size_mb}")
        options.target_file_size_mb = args.target_size_mb
        options.use_target_file_size = True

    progress = ProgressBar()
    splitter = FastaFileSplitter(options, progress_callback=progress)

    try:
        with logging_redirect_tqdm():
            if args.recurse is not None:
                result = splitter.process_files_recursive(
                    input_path,
                    output_dir=args.output_dir,
                    alternate_output_dir=args.alternate_output_dir,
                    recreate_hierarchy=args.recreate_hierarchy,
                    parameter_file_path=args.param_file,
                    max_levels=args.recurse,
                )
            else:
                result = splitter.process_files_wildcard(
                    input_path,
                    output_dir=args.output_dir,
                    parameter_file_path=args.param_file,
                )
    finally:
        progress.close()

    if result.success:
        print(f"Created {len(result.split_files)} split files")
    else:
        print(f"Error while processing: {result.message}", file=sys.stderr)

    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
