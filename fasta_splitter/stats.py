"""Tab-delimited summary of the files created by a split."""

import os
import time
from collections.abc import Sequence

import pandas as pd

from fasta_splitter.errors import OutputWriteError
from fasta_splitter.options import BYTES_PER_MB
from fasta_splitter.output_file import SplitFileInfo

STATS_COLUMNS = ["Section", "Proteins", "Residues", "FileSize_MB", "FileName"]

# Give the filesystem a moment to report final sizes of just-closed files
DEFAULT_STATS_DELAY_SECONDS = 0.25

UNKNOWN_FILE_SIZE = "??"


def stats_file_path(output_file_path_base: str) -> str:
    return f"{output_file_path_base}_SplitStats.txt"


def file_size_mb(file_path: str) -> str:
    """File size in MB with three decimals, or ``??`` if it cannot be read."""
    try:
        size = os.path.getsize(file_path)
    except OSError:
        return UNKNOWN_FILE_SIZE
    return f"{size / BYTES_PER_MB:.3f}"


def build_stats_table(split_files: Sequence[SplitFileInfo]) -> pd.DataFrame:
    rows = [
        {
            "Section": section,
            "Proteins": info.num_proteins,
            "Residues": info.num_residues,
            "FileSize_MB": file_size_mb(info.file_path),
            "FileName": os.path.basename(info.file_path),
        }
        for section, info in enumerate(split_files, start=1)
    ]
    return pd.DataFrame(rows, columns=STATS_COLUMNS)


def write_stats_file(stats_path, split_files: Sequence[SplitFileInfo],
                     delay_seconds: float = DEFAULT_STATS_DELAY_SECONDS) -> pd.DataFrame:
    """Write one row per output file to stats_path and return the table."""
    if delay_seconds > 0:
        time.sleep(delay_seconds)

    table = build_stats_table(split_files)
    try:
        table.to_csv(stats_path, sep="\t", index=False)
    except OSError as e:
        raise OutputWriteError(f"{stats_path}: {e}", stage="write stats") from e
    return table
