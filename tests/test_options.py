"""Tests for split options and the target-size calculation."""

import pytest

from fasta_splitter.options import (
    BYTES_PER_MB,
    DEFAULT_TARGET_FILE_SIZE_MB,
    MINIMUM_TARGET_FILE_SIZE_MB,
    FastaFormatOptions,
    SplitterOptions,
    compute_split_count,
    digit_count,
    resolve_target_size_mb,
)


def test_format_options_defaults() -> None:
    options = FastaFormatOptions()
    assert (options.start_char, options.accession_end_char, options.residues_per_line) == (">", " ", 60)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"start_char": ""},
        {"start_char": ">>"},
        {"accession_end_char": ""},
        {"residues_per_line": 0},
        {"residues_per_line": -5},
    ],
)
def test_format_options_validation(kwargs) -> None:
    with pytest.raises(ValueError):
        FastaFormatOptions(**kwargs)


def test_splitter_options_validation() -> None:
    with pytest.raises(ValueError):
        SplitterOptions(split_count=-1)
    with pytest.raises(ValueError):
        SplitterOptions(target_file_size_mb=-1)


def test_resolve_target_size_mb() -> None:
    assert resolve_target_size_mb(0) == DEFAULT_TARGET_FILE_SIZE_MB
    assert resolve_target_size_mb(2) == MINIMUM_TARGET_FILE_SIZE_MB
    assert resolve_target_size_mb(250) == 250


class TestComputeSplitCount:
    """Deriving the number of files from a target size."""

    def test_smaller_than_target_gives_one_file(self) -> None:
        split_count, warning = compute_split_count(40 * BYTES_PER_MB, 100)
        assert split_count == 1
        assert "one file" in warning

    def test_equal_to_target_gives_one_file(self) -> None:
        split_count, warning = compute_split_count(100 * BYTES_PER_MB, 100)
        assert split_count == 1
        assert warning is not None

    def test_rounds_to_nearest(self) -> None:
        assert compute_split_count(950 * BYTES_PER_MB, 100) == (10, None)
        assert compute_split_count(1049 * BYTES_PER_MB, 100) == (10, None)
        assert compute_split_count(330 * BYTES_PER_MB, 100) == (3, None)

    def test_barely_larger_than_target_gives_one_file(self) -> None:
        split_count, warning = compute_split_count(120 * BYTES_PER_MB, 100)
        assert split_count == 1
        assert warning is not None

    def test_zero_target_uses_default(self) -> None:
        assert compute_split_count(500 * BYTES_PER_MB, 0) == (5, None)

    def test_small_target_is_clamped_to_minimum(self) -> None:
        assert compute_split_count(50 * BYTES_PER_MB, 1) == (10, None)


@pytest.mark.parametrize(("value", "expected"), [(1, 1), (5, 1), (9, 1), (10, 2), (99, 2), (100, 3), (150, 3)])
def test_digit_count(value, expected) -> None:
    assert digit_count(value) == expected
