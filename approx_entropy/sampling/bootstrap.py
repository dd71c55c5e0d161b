"""
Bootstrap subsampling for entropy extrapolation.

Draws random subsamples without replacement from the empirical
histogram, on a geometric schedule:

    group i (0-indexed):  size nᵢ = N >> (i + 1),  repetitions rᵢ = 2^i

Each group halves the previous draw size and doubles the number of
draws, so smaller (noisier) subsamples are averaged over more draws.
The smallest draw N >> num_groups must be at least one sample, hence
the requirement N >= 2^num_groups.

Unlike the classical bootstrap, draws are made without replacement.
Every repetition is an independent draw from the full data, so
repetitions of the same group may overlap.
"""

import numpy as np
from typing import List, Tuple
import logging

from ..exceptions import HighDegree, LowNumGroups, TooFewSamples
from ..utils import Histogram, as_histogram, compute_naive_entropy, count_dup
from .base import SamplingMethod

logger = logging.getLogger(__name__)


class Bootstrap(SamplingMethod):
    """
    Randomized without-replacement subsampling from a histogram.

    Example:
        >>> bootstrap = Bootstrap([1, 2, 3, 4, 5, 6], num_groups=3, degree=2, rng=7)
        >>> bootstrap.size_subsamples()
        [10, 5, 2]
        >>> bootstrap.samples_rep()
        [1, 2, 4]
        >>> len(bootstrap.naive_entropies())
        7
    """

    def __init__(
        self,
        histogram: Histogram,
        num_groups: int,
        degree: int,
        rng=None
    ):
        """
        Initialize the bootstrap sampling method.

        Args:
            histogram: Counts per category of the observed samples
            num_groups: Number of subsample sizes in the schedule
            degree: Degree of the polynomial fitted downstream
            rng: Seed or numpy Generator. A Generator is used as-is,
                 anything else is passed to np.random.default_rng.

        Raises:
            LowNumGroups: If num_groups <= degree
            TooFewSamples: If the histogram holds fewer than 2^num_groups samples
        """
        if degree < 0:
            raise ValueError(f"Degree must be non-negative, got {degree}")
        if num_groups < 1:
            raise ValueError(f"Number of groups must be positive, got {num_groups}")
        if num_groups <= degree:
            raise LowNumGroups(
                f"Number of groups ({num_groups}) must exceed the degree ({degree})"
            )

        histogram = as_histogram(histogram)
        self._check_sample_size(int(histogram.sum()), num_groups)

        self._histogram = histogram
        self._num_groups = int(num_groups)
        self._degree = int(degree)
        self._rng = np.random.default_rng(rng)

    @staticmethod
    def _check_sample_size(sample_size: int, num_groups: int):
        if sample_size < 2 ** num_groups:
            raise TooFewSamples(
                f"{num_groups} groups need at least {2 ** num_groups} samples, got {sample_size}"
            )

    @property
    def degree(self) -> int:
        return self._degree

    def set_degree(self, degree: int) -> "Bootstrap":
        if degree < 0:
            raise ValueError(f"Degree must be non-negative, got {degree}")
        if self._num_groups <= degree:
            raise HighDegree(
                f"Degree ({degree}) must stay below the number of groups ({self._num_groups})"
            )
        self._degree = int(degree)
        return self

    @property
    def num_groups(self) -> int:
        return self._num_groups

    def set_num_groups(self, num_groups: int) -> "Bootstrap":
        if num_groups <= self._degree:
            raise LowNumGroups(
                f"Number of groups ({num_groups}) must exceed the degree ({self._degree})"
            )
        self._check_sample_size(self.sample_size, num_groups)
        self._num_groups = int(num_groups)
        return self

    def set_distribution(self, histogram: Histogram) -> "Bootstrap":
        histogram = as_histogram(histogram)
        self._check_sample_size(int(histogram.sum()), self._num_groups)
        self._histogram = histogram
        return self

    @property
    def histogram(self) -> np.ndarray:
        """Copy of the current histogram."""
        return self._histogram.copy()

    @property
    def sample_size(self) -> int:
        """Total number of samples in the histogram."""
        return int(self._histogram.sum())

    def size_subsamples(self) -> List[int]:
        sample_size = self.sample_size
        return [sample_size >> (i + 1) for i in range(self._num_groups)]

    def samples_rep(self) -> List[int]:
        return [1 << i for i in range(self._num_groups)]

    def naive_entropies(self) -> List[Tuple[int, float]]:
        # One label per sample: category k appears histogram[k] times
        labels = np.repeat(np.arange(len(self._histogram)), self._histogram)

        logger.debug(
            f"Bootstrap over {len(labels)} samples: sizes {self.size_subsamples()}, "
            f"repetitions {self.samples_rep()}"
        )

        observations = []
        for size, repetitions in zip(self.size_subsamples(), self.samples_rep()):
            for _ in range(repetitions):
                draw = self._rng.choice(labels, size=size, replace=False)
                value = compute_naive_entropy(count_dup(draw.tolist()))
                observations.append((size, value))

        return observations
