"""Tests for the selector module."""

import random

from fasta_splitter.selector import RANDOM_SEED, BucketSelector


class TestBucketSelector:
    """Test cases for BucketSelector."""

    def test_default_seed(self) -> None:
        assert RANDOM_SEED == 314159
        assert BucketSelector().seed == 314159

    def test_single_file_always_index_zero(self) -> None:
        selector = BucketSelector()
        assert selector.select([]) == 0
        assert selector.select([0]) == 0
        assert selector.select([500]) == 0

    def test_random_choice_when_nothing_written(self) -> None:
        selector = BucketSelector()
        picks = {selector.select([0, 0, 0, 0]) for _ in range(200)}
        assert picks <= {0, 1, 2, 3}
        # Every file can be chosen, including the last one
        assert picks == {0, 1, 2, 3}

    def test_only_below_average_files_are_chosen(self) -> None:
        selector = BucketSelector()
        totals = [100, 10, 100, 20]  # average 57.5
        picks = {selector.select(totals) for _ in range(200)}
        assert picks == {1, 3}

    def test_single_candidate(self) -> None:
        selector = BucketSelector()
        for _ in range(20):
            assert selector.select([10, 0]) == 1

    def test_all_equal_picks_any_file(self) -> None:
        selector = BucketSelector()
        picks = {selector.select([7, 7, 7]) for _ in range(200)}
        assert picks == {0, 1, 2}

    def test_same_seed_gives_same_sequence(self) -> None:
        first = BucketSelector()
        second = BucketSelector()
        totals = [0, 0, 0, 0, 0]
        assert [first.select(totals) for _ in range(50)] == [second.select(totals) for _ in range(50)]

    def test_generator_is_independent_of_global_random(self) -> None:
        first = BucketSelector()
        expected = [first.select([0] * 7) for _ in range(20)]

        random.seed(0)
        second = BucketSelector()
        random.random()
        assert [second.select([0] * 7) for _ in range(20)] == expected
