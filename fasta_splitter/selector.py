"""Choose which output file receives the next protein."""

import random
from collections.abc import Sequence

# Fixed seed so that splitting the same file the same way is reproducible
RANDOM_SEED = 314159


class BucketSelector:
    """
    Pick an output file so residue totals stay roughly balanced.

    The strategy:
    1) Compute the average residue count already stored in the files
    2) Collect the files whose residue count is below that average
    3) Randomly choose one of them

    When nothing has been written yet, or when no file is below the average,
    any file may be chosen. Each selector owns its own random generator, so
    the draws are shared across a whole run but independent of other
    selectors and of the global ``random`` state.
    """

    def __init__(self, seed: int = RANDOM_SEED):
        self.seed = seed
        self._random = random.Random(seed)

    def select(self, residue_totals: Sequence[int]) -> int:
        """Return the 0-based index of the file that should get the next protein."""
        split_count = len(residue_totals)
        if split_count <= 1:
            return 0

        total = sum(residue_totals)
        if total == 0:
            return self._random.randrange(split_count)

        average = total / split_count
        candidates = [i for i, residues in enumerate(residue_totals) if residues < average]

        if candidates:
            return candidates[self._random.randrange(len(candidates))]

        # Every file is at the average (only possible when they are all equal)
        return self._random.randrange(split_count)
