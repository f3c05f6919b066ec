"""A single split FASTA output file and the counts of what went into it."""

import logging
from dataclasses import dataclass

from fasta_splitter.options import (
    DEFAULT_ACCESSION_END_CHAR,
    DEFAULT_RESIDUES_PER_LINE,
    DEFAULT_START_CHAR,
    FastaFormatOptions,
    digit_count,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SplitFileInfo:
    """Final counts for one output file."""

    file_path: str
    num_proteins: int
    num_residues: int


def split_file_path(output_file_path_base: str, split_count: int, file_num: int) -> str:
    """
    Path of output file ``file_num`` (1-based) out of ``split_count``.

    The file number is zero-padded to the width of split_count, e.g.
    ``Proteins_25x_03.fasta`` or ``Proteins_100x_007.fasta``.
    """
    width = digit_count(split_count)
    return f"{output_file_path_base}_{split_count}x_{file_num:0{width}d}.fasta"


class FastaOutputFile:
    """
    Output FASTA file that keeps track of the proteins and residues written.

    The file is created (or truncated) on construction. Counts only grow
    while the file is open and are frozen once it is closed.
    """

    def __init__(self, output_file_path, start_char=DEFAULT_START_CHAR,
                 accession_end_char=DEFAULT_ACCESSION_END_CHAR,
                 residues_per_line=DEFAULT_RESIDUES_PER_LINE):
        if not output_file_path:
            raise ValueError("output_file_path is empty; cannot create the output file")

        # Validates the markers and line width before anything touches the disk
        self._format = FastaFormatOptions(start_char, accession_end_char, residues_per_line)

        self._output_file_path = str(output_file_path)
        self._total_proteins = 0
        self._total_residues = 0
        self._handle = open(self._output_file_path, "w", encoding="utf-8", newline="\n")

    @classmethod
    def from_options(cls, output_file_path, format_options: FastaFormatOptions):
        return cls(output_file_path, format_options.start_char,
                   format_options.accession_end_char, format_options.residues_per_line)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    @property
    def output_file_path(self) -> str:
        return self._output_file_path

    @property
    def residues_per_line(self) -> int:
        return self._format.residues_per_line

    @property
    def total_proteins(self) -> int:
        return self._total_proteins

    @property
    def total_residues(self) -> int:
        return self._total_residues

    def info(self) -> SplitFileInfo:
        return SplitFileInfo(self._output_file_path, self._total_proteins, self._total_residues)

    def store_protein(self, name: str, description: str, sequence: str) -> None:
        """
        Append one protein, wrapping the residues at residues_per_line.

        Ignored once the file has been closed. Write errors propagate.
        """
        if self._handle is None:
            return

        fmt = self._format
        self._handle.write(f"{fmt.start_char}{name}{fmt.accession_end_char}{description}\n")

        width = fmt.residues_per_line
        for i in range(0, len(sequence), width):
            self._handle.write(f"{sequence[i:i + width]}\n")

        self._total_proteins += 1
        self._total_residues += len(sequence)

    def close(self) -> OSError | None:
        """
        Flush and release the file; safe to call more than once.

        A failure to release the handle is logged and returned rather than
        raised, so callers can pass it on.
        """
        if self._handle is None:
            return None

        handle = self._handle
        self._handle = None
        try:
            handle.close()
        except OSError as e:
            # Best effort: proteins already written stay on disk
            logger.warning("Error closing %s: %s", self._output_file_path, e)
            return e
        return None
