"""
Split a protein FASTA file into a number of sections.

Although the splitting is random, each section ends up with a nearly
identical number of residues: every protein goes to one of the output files
currently holding fewer residues than the average.
"""

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from fasta_splitter.errors import (
    FastaSplitterError,
    InputReadError,
    InvalidInputPathError,
    InvalidOutputDirectoryError,
    OutputWriteError,
    SplitterErrorCode,
)
from fasta_splitter.files import expand_wildcard, find_files_recursive, resolve_output_directory
from fasta_splitter.options import FastaFormatOptions, SplitterOptions, compute_split_count
from fasta_splitter.output_file import FastaOutputFile, SplitFileInfo, split_file_path
from fasta_splitter.params import load_parameter_file
from fasta_splitter.reader import FastaFileReader
from fasta_splitter.selector import BucketSelector
from fasta_splitter.stats import DEFAULT_STATS_DELAY_SECONDS, stats_file_path, write_stats_file

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, float], None]
WarningCallback = Callable[[str], None]


class SplitState(Enum):
    IDLE = "idle"
    OPENING = "opening"
    SPLITTING = "splitting"
    CLOSING = "closing"
    REPORTING = "reporting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ProcessResult:
    """Outcome of processing one or more input files."""

    success: bool
    error_code: SplitterErrorCode = SplitterErrorCode.NO_ERROR
    message: str = ""
    split_files: list[SplitFileInfo] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        if self.success:
            return 0
        return int(self.error_code) if int(self.error_code) > 0 else 1


def resolve_output_file_path_base(input_path, output_dir="", output_name_override="") -> str:
    """
    Path prefix shared by all output files of a run.

    The name comes from output_name_override (minus any extension) or else
    from the input file name; the directory is output_dir or else the
    directory holding the input file. A directory part in the override is
    kept, relative to that directory.
    """
    name_base = ""
    if output_name_override and output_name_override.strip():
        override = Path(output_name_override)
        if override.name:
            name_base = str(override.with_suffix(""))

    if not name_base:
        name_base = Path(input_path).stem

    if not output_dir:
        output_dir = Path(input_path).resolve().parent

    return os.path.join(output_dir, name_base)


class FastaFileSplitter:
    """Split FASTA files into residue-balanced parts."""

    def __init__(self, options: SplitterOptions | None = None,
                 format_options: FastaFormatOptions | None = None,
                 selector: BucketSelector | None = None,
                 progress_callback: ProgressCallback | None = None,
                 warning_callback: WarningCallback | None = None,
                 stats_delay_seconds: float = DEFAULT_STATS_DELAY_SECONDS):
        self.options = options or SplitterOptions()
        self.format_options = format_options or FastaFormatOptions()
        self.selector = selector or BucketSelector()
        self.progress_callback = progress_callback
        self.warning_callback = warning_callback
        self.stats_delay_seconds = stats_delay_seconds

        self._state = SplitState.IDLE
        self._error_code = SplitterErrorCode.NO_ERROR
        self._error_message = ""
        self._progress_description = ""
        self._records_processed = 0
        self._lines_read = 0
        self._lines_skipped = 0
        self._split_file_info: list[SplitFileInfo] = []

    @property
    def state(self) -> SplitState:
        return self._state

    @property
    def error_code(self) -> SplitterErrorCode:
        return self._error_code

    @property
    def error_message(self) -> str:
        return self._error_message

    @property
    def records_processed(self) -> int:
        return self._records_processed

    @property
    def lines_read(self) -> int:
        return self._lines_read

    @property
    def lines_skipped(self) -> int:
        return self._lines_skipped

    @property
    def split_file_info(self) -> list[SplitFileInfo]:
        return list(self._split_file_info)

    def _warn(self, message: str) -> None:
        logger.warning(message)
        if self.warning_callback is not None:
            self.warning_callback(message)

    def _close_output_file(self, output_file: FastaOutputFile) -> None:
        error = output_file.close()
        # Already logged by the output file
        if error is not None and self.warning_callback is not None:
            self.warning_callback(f"Error closing {output_file.output_file_path}: {error}")

    def _update_progress(self, percent: float, description: str | None = None) -> None:
        if description is not None:
            self._progress_description = description
        if self.progress_callback is not None:
            self.progress_callback(self._progress_description, percent)

    def _create_output_files(self, split_count: int, output_file_path_base: str,
                             output_files: list[FastaOutputFile]) -> None:
        # Appends as it goes so that the caller can close a partial set on failure
        for file_num in range(1, split_count + 1):
            output_file_path = split_file_path(output_file_path_base, split_count, file_num)
            try:
                output_files.append(FastaOutputFile.from_options(output_file_path, self.format_options))
            except OSError as e:
                raise OutputWriteError(
                    f"could not create output file {file_num} ({output_file_path}): {e}",
                    stage="create output",
                ) from e

    def _target_file_index(self, output_files: list[FastaOutputFile]) -> int:
        index = self.selector.select([f.total_residues for f in output_files])
        if not 0 <= index < len(output_files):
            self._warn(
                f"Programming bug: output file index {index} is outside the expected range; "
                "defaulting to index 0"
            )
            index = 0
        return index

    def split_by_count(self, input_path, output_dir="", split_count: int | None = None,
                       output_name_override="") -> list[SplitFileInfo]:
        """
        Split input_path into split_count files.

        Output files are named ``<base>_<N>x_<k>.fasta`` and a
        ``<base>_SplitStats.txt`` summary is written next to them. Returns
        the final (path, proteins, residues) of each file in file order.
        """
        if split_count is None:
            split_count = self.options.split_count

        self._state = SplitState.OPENING
        self._split_file_info = []
        self._records_processed = 0
        self._lines_read = 0
        self._lines_skipped = 0

        reader = FastaFileReader(self.format_options.start_char, self.format_options.accession_end_char)
        output_files: list[FastaOutputFile] = []

        try:
            if not input_path or not str(input_path).strip():
                raise InvalidInputPathError("Input file path is empty")
            if not os.path.isfile(input_path):
                raise InvalidInputPathError(f"Input file not found: {input_path}")

            output_file_path_base = resolve_output_file_path_base(input_path, output_dir, output_name_override)
            output_directory = os.path.dirname(output_file_path_base)
            try:
                os.makedirs(output_directory, exist_ok=True)
            except OSError as e:
                raise InvalidOutputDirectoryError(
                    f"could not create output directory {output_directory}: {e}", stage="create output"
                ) from e

            split_count = max(split_count, 1)
            self._create_output_files(split_count, output_file_path_base, output_files)

            try:
                reader.open(input_path)
            except OSError as e:
                raise InputReadError(f"{input_path}: {e}", stage="open input") from e

            self._state = SplitState.SPLITTING
            self._update_progress(0, f"Splitting FASTA file: {os.path.basename(input_path)}")

            while True:
                try:
                    record = reader.read_next_record()
                except OSError as e:
                    raise InputReadError(f"{input_path}: {e}", stage="read input") from e

                self._lines_skipped += reader.line_skip_count
                self._lines_read = reader.lines_read
                if record is None:
                    break

                self._records_processed += 1
                output_file = output_files[self._target_file_index(output_files)]
                try:
                    output_file.store_protein(record.name, record.description, record.sequence)
                except OSError as e:
                    raise OutputWriteError(
                        f"could not write protein {record.name} to {output_file.output_file_path}: {e}",
                        stage="write record",
                    ) from e

                self._update_progress(reader.percent_file_processed)

            reader.close()

            self._state = SplitState.CLOSING
            for output_file in output_files:
                self._close_output_file(output_file)
                self._split_file_info.append(output_file.info())

            self._state = SplitState.REPORTING
            write_stats_file(stats_file_path(output_file_path_base), self._split_file_info,
                             delay_seconds=self.stats_delay_seconds)

            self._update_progress(
                100,
                f"Done: Processed {self._records_processed:,} proteins ({self._lines_read:,} lines)",
            )
            self._state = SplitState.DONE
            return self.split_file_info

        except Exception:
            self._state = SplitState.FAILED
            raise

        finally:
            reader.close()
            for output_file in output_files:
                self._close_output_file(output_file)

    def split_by_size(self, input_path, output_dir="", target_size_mb: float | None = None,
                      output_name_override="") -> list[SplitFileInfo]:
        """Split input_path into as many files as needed to be about target_size_mb each."""
        if target_size_mb is None:
            target_size_mb = self.options.target_file_size_mb

        if not input_path or not os.path.isfile(input_path):
            self._state = SplitState.FAILED
            raise InvalidInputPathError(f"Input file not found: {input_path}")

        split_count, warning = compute_split_count(os.path.getsize(input_path), target_size_mb)
        if warning:
            self._warn(warning)
        else:
            logger.info("Splitting %s into %d files", os.path.basename(input_path), split_count)

        return self.split_by_count(input_path, output_dir, split_count, output_name_override)

    def split(self, input_path, output_dir="", output_name_override="") -> list[SplitFileInfo]:
        """Split using the current options; target-size mode takes precedence."""
        if self.options.use_target_file_size:
            return self.split_by_size(input_path, output_dir, output_name_override=output_name_override)
        return self.split_by_count(input_path, output_dir, output_name_override=output_name_override)

    def _record_failure(self, code: SplitterErrorCode, message: str) -> ProcessResult:
        self._error_code = code
        self._error_message = message
        return ProcessResult(False, code, message)

    def process_file(self, input_path, output_dir="", parameter_file_path="",
                     output_name_override="") -> ProcessResult:
        """
        Load the parameter file (if any) and split one file.

        Never raises for run failures; the returned ProcessResult carries
        the error code and message instead.
        """
        self._error_code = SplitterErrorCode.NO_ERROR
        self._error_message = ""

        try:
            self.options = load_parameter_file(parameter_file_path, self.options)
        except FastaSplitterError as e:
            logger.error("Parameter file load error: %s", e)
            return self._record_failure(e.code, str(e))

        if not input_path:
            logger.error("Input file name is empty")
            return self._record_failure(SplitterErrorCode.INVALID_INPUT_PATH, "Input file name is empty")

        logger.info("Parsing %s", os.path.basename(input_path))
        try:
            split_files = self.split(str(input_path), output_dir, output_name_override)
        except FastaSplitterError as e:
            logger.error("%s", e)
            return self._record_failure(e.code, str(e))
        except Exception as e:
            logger.exception("Error splitting %s", input_path)
            return self._record_failure(SplitterErrorCode.UNSPECIFIED_ERROR, f"Unspecified error: {e}")

        return ProcessResult(True, split_files=split_files)

    def process_files_wildcard(self, input_pattern, output_dir="", parameter_file_path="") -> ProcessResult:
        """Process every file matching input_pattern."""
        input_files = expand_wildcard(input_pattern)
        if not input_files:
            message = f"No files match {input_pattern}"
            logger.error(message)
            return self._record_failure(SplitterErrorCode.INVALID_INPUT_PATH, message)

        return self._process_many([(input_file, output_dir) for input_file in input_files],
                                  parameter_file_path)

    def process_files_recursive(self, input_pattern, output_dir="", alternate_output_dir="",
                                recreate_hierarchy=False, parameter_file_path="",
                                max_levels: int = 0) -> ProcessResult:
        """
        Process matching files in a directory and its subdirectories.

        max_levels limits the search depth (0 means unlimited). Output goes
        to alternate_output_dir when given, mirroring the subdirectory of
        each input if recreate_hierarchy is set.
        """
        jobs = [
            (file_path, resolve_output_directory(file_path, output_dir, alternate_output_dir,
                                                 recreate_hierarchy, relative_dir))
            for file_path, relative_dir in find_files_recursive(input_pattern, max_levels)
        ]
        if not jobs:
            message = f"No FASTA files found for {input_pattern}"
            logger.error(message)
            return self._record_failure(SplitterErrorCode.INVALID_INPUT_PATH, message)

        return self._process_many(jobs, parameter_file_path)

    def _process_many(self, jobs, parameter_file_path) -> ProcessResult:
        combined = ProcessResult(True)
        for input_file, file_output_dir in jobs:
            result = self.process_file(input_file, file_output_dir, parameter_file_path)
            combined.split_files.extend(result.split_files)
            if not result.success and combined.success:
                combined.success = False
                combined.error_code = result.error_code
                combined.message = result.message

        if not combined.success:
            self._error_code = combined.error_code
            self._error_message = combined.message
        return combined
