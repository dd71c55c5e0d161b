"""
Fixed-partition subsampling for entropy extrapolation.

Splits an explicit sample sequence into non-overlapping chunks following
a caller-given schedule:

    size_subsamples = [n₁, n₂, ..., n_g]
    samples_rep     = [r₁, r₂, ..., r_g]

Group k takes r_k chunks of n_k samples each. The schedule must fit in
the data, Σₖ nₖ·rₖ <= len(samples). Extra samples are left unused, so
strictly speaking this is a sub-partition.

Chunks are taken from the end of the buffer and the buffer shrinks as
they are consumed. No reshuffling happens unless shuffle() is called.
"""

import numpy as np
from typing import Hashable, Iterable, List, Sequence, Tuple
import logging

from ..exceptions import (
    HighDegree,
    Immutable,
    LowNumGroups,
    NullRepetition,
    NullSubsampleSize,
    PartitionExhausted,
    TooFewSamples,
    TooManyRepetitions,
    TooManySubsampleSizes,
)
from ..utils import Histogram, compute_naive_entropy, count_dup
from .base import SamplingMethod

logger = logging.getLogger(__name__)


class FixedPartition(SamplingMethod):
    """
    Deterministic subsampling of a sample sequence by a fixed schedule.

    The schedule is fixed at construction: set_num_groups() and
    set_distribution() always raise Immutable. Only the degree may change,
    as long as it stays below the number of groups.

    Example:
        >>> fixed = FixedPartition([0, 0, 0, 1, 1, 2], [3, 2, 1], [1, 1, 1], degree=2)
        >>> [size for size, _ in fixed.naive_entropies()]
        [3, 2, 1]
    """

    def __init__(
        self,
        samples: Iterable[Hashable],
        size_subsamples: Sequence[int],
        samples_rep: Sequence[int],
        degree: int
    ):
        """
        Initialize the fixed partition.

        Args:
            samples: Observed samples. Repeated elements count as separate
                     realizations of the same value.
            size_subsamples: Subsample size of each group
            samples_rep: Number of subsamples drawn for each group
            degree: Degree of the polynomial fitted downstream

        Raises:
            LowNumGroups: If len(size_subsamples) <= degree
            TooManyRepetitions: If samples_rep is longer than size_subsamples
            TooManySubsampleSizes: If size_subsamples is longer than samples_rep
            NullRepetition: If a repetition count is zero
            NullSubsampleSize: If a subsample size is zero
            TooFewSamples: If the schedule needs more samples than given
        """
        samples = list(samples)
        size_subsamples = [int(size) for size in size_subsamples]
        samples_rep = [int(rep) for rep in samples_rep]

        if degree < 0:
            raise ValueError(f"Degree must be non-negative, got {degree}")

        num_groups = len(size_subsamples)
        if num_groups <= degree:
            raise LowNumGroups(
                f"Number of groups ({num_groups}) must exceed the degree ({degree})"
            )
        if len(samples_rep) > num_groups:
            raise TooManyRepetitions(
                f"Got {len(samples_rep)} repetition counts for {num_groups} subsample sizes"
            )
        if len(samples_rep) < num_groups:
            raise TooManySubsampleSizes(
                f"Got {num_groups} subsample sizes for {len(samples_rep)} repetition counts"
            )
        if any(rep <= 0 for rep in samples_rep):
            raise NullRepetition(f"Repetition counts must be positive, got {samples_rep}")
        if any(size <= 0 for size in size_subsamples):
            raise NullSubsampleSize(f"Subsample sizes must be positive, got {size_subsamples}")

        required = sum(size * rep for size, rep in zip(size_subsamples, samples_rep))
        if len(samples) < required:
            raise TooFewSamples(
                f"The schedule needs {required} samples, got {len(samples)}"
            )

        self._samples = samples
        self._buffer = list(samples)
        self._size_subsamples = size_subsamples
        self._samples_rep = samples_rep
        self._degree = int(degree)

    @property
    def degree(self) -> int:
        return self._degree

    def set_degree(self, degree: int) -> "FixedPartition":
        if degree < 0:
            raise ValueError(f"Degree must be non-negative, got {degree}")
        if self.num_groups <= degree:
            raise HighDegree(
                f"Degree ({degree}) must stay below the number of groups ({self.num_groups})"
            )
        self._degree = int(degree)
        return self

    @property
    def num_groups(self) -> int:
        return len(self._size_subsamples)

    def set_num_groups(self, num_groups: int) -> "FixedPartition":
        """Always raises Immutable: the schedule is fixed at construction."""
        raise Immutable("The schedule of a fixed partition cannot be changed")

    def set_distribution(self, histogram: Histogram) -> "FixedPartition":
        """Always raises Immutable: the samples are fixed at construction."""
        raise Immutable("The samples of a fixed partition cannot be changed")

    def size_subsamples(self) -> List[int]:
        return list(self._size_subsamples)

    def samples_rep(self) -> List[int]:
        return list(self._samples_rep)

    def required_samples(self) -> int:
        """Number of samples consumed by one run of naive_entropies()."""
        return sum(size * rep for size, rep in zip(self._size_subsamples, self._samples_rep))

    @property
    def remaining(self) -> int:
        """Number of samples not yet consumed."""
        return len(self._buffer)

    def shuffle(self, rng=None) -> "FixedPartition":
        """
        Randomly permute the remaining samples.

        This gives a different, equally valid partition on the next run.

        Args:
            rng: Seed or numpy Generator
        """
        order = np.random.default_rng(rng).permutation(len(self._buffer))
        self._buffer = [self._buffer[i] for i in order]
        return self

    def reset(self) -> "FixedPartition":
        """Restore every sample given at construction, in the original order."""
        self._buffer = list(self._samples)
        return self

    def naive_entropies(self) -> List[Tuple[int, float]]:
        """
        Consume the buffer chunk by chunk and compute each chunk's naive entropy.

        Raises:
            PartitionExhausted: If fewer samples remain than one run needs.
                                Nothing is consumed in that case.
        """
        required = self.required_samples()
        if len(self._buffer) < required:
            raise PartitionExhausted(
                f"A run needs {required} samples but only {len(self._buffer)} remain; "
                f"call reset() to reuse the partition"
            )

        observations = []
        for size, repetitions in zip(self._size_subsamples, self._samples_rep):
            for _ in range(repetitions):
                chunk = self._buffer[-size:]
                del self._buffer[-size:]
                observations.append((size, compute_naive_entropy(count_dup(chunk))))

        logger.debug(
            f"Fixed partition consumed {required} samples, {len(self._buffer)} remain"
        )

        return observations
