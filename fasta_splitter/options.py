"""Split options, output formatting options and the target-size calculation."""

from dataclasses import dataclass

DEFAULT_SPLIT_COUNT = 10
DEFAULT_TARGET_FILE_SIZE_MB = 100
MINIMUM_TARGET_FILE_SIZE_MB = 5

DEFAULT_START_CHAR = ">"
DEFAULT_ACCESSION_END_CHAR = " "
DEFAULT_RESIDUES_PER_LINE = 60

BYTES_PER_MB = 1024 * 1024


@dataclass(frozen=True)
class FastaFormatOptions:
    """How protein headers are recognized and how residues are wrapped."""

    start_char: str = DEFAULT_START_CHAR
    accession_end_char: str = DEFAULT_ACCESSION_END_CHAR
    residues_per_line: int = DEFAULT_RESIDUES_PER_LINE

    def __post_init__(self):
        if len(self.start_char) != 1:
            raise ValueError(f"start_char must be a single character, got {self.start_char!r}")
        if len(self.accession_end_char) != 1:
            raise ValueError(
                f"accession_end_char must be a single character, got {self.accession_end_char!r}"
            )
        if self.residues_per_line < 1:
            raise ValueError(f"residues_per_line must be at least 1, got {self.residues_per_line}")


@dataclass
class SplitterOptions:
    """
    Number of parts to create, or the per-file size to aim for.

    When ``use_target_file_size`` is true the split count is derived from the
    input file size and ``target_file_size_mb``; otherwise ``split_count``
    is used as-is.
    """

    split_count: int = DEFAULT_SPLIT_COUNT
    target_file_size_mb: int = DEFAULT_TARGET_FILE_SIZE_MB
    use_target_file_size: bool = False

    def __post_init__(self):
        if self.split_count < 0:
            raise ValueError(f"split_count cannot be negative, got {self.split_count}")
        if self.target_file_size_mb < 0:
            raise ValueError(
                f"target_file_size_mb cannot be negative, got {self.target_file_size_mb}"
            )


def resolve_target_size_mb(target_size_mb: float) -> float:
    """Apply the default (for 0) and the lower bound to a target file size."""
    if target_size_mb == 0:
        return DEFAULT_TARGET_FILE_SIZE_MB
    return max(target_size_mb, MINIMUM_TARGET_FILE_SIZE_MB)


def compute_split_count(file_size_bytes: int, target_size_mb: float) -> tuple[int, str | None]:
    """
    Number of output files needed so each is roughly target_size_mb.

    Returns (split_count, warning); warning is None unless the input is too
    small to be split. Uses round-half-to-even, so 9.5 parts becomes 10.
    """
    target_size_mb = resolve_target_size_mb(target_size_mb)
    file_size_mb = file_size_bytes / BYTES_PER_MB

    if file_size_mb <= target_size_mb:
        return 1, (
            f"Input file ({file_size_mb:.2f} MB) is smaller than the target size "
            f"({target_size_mb} MB); one file will be produced"
        )

    split_count = round(file_size_mb / target_size_mb)
    if split_count <= 1:
        return 1, (
            f"Input file ({file_size_mb:.2f} MB) is close to the target size "
            f"({target_size_mb} MB); one file will be produced"
        )
    return split_count, None


def digit_count(value: int) -> int:
    """Number of decimal digits in a positive integer."""
    return len(str(abs(value)))
