"""
Utility functions for approx_entropy.

Provides the counting and histogram helpers shared by the naive estimator,
the sampling methods and the extrapolating estimators.
"""

import numpy as np
from typing import Hashable, Iterable, List, Mapping, Union
from collections import Counter

from .exceptions import NullDistribution


Histogram = Union[Iterable[int], Mapping[Hashable, int], np.ndarray]


def count_dup(samples: Iterable[Hashable]) -> List[int]:
    """
    Count the repetitions of each distinct element in `samples`.

    The correspondence between an element and its count is lost, and
    there is no guarantee on the order of the output.

    Example:
        >>> sorted(count_dup(["a", "b", "b", "c", "c", "c"]))
        [1, 2, 3]
    """
    return list(Counter(samples).values())


def as_histogram(histogram: Histogram) -> np.ndarray:
    """
    Normalize a histogram to a 1-D array of non-negative integer counts.

    Args:
        histogram: Counts per category. Either a sequence of ints, an
                   integer array, or a mapping whose values are counts
                   (e.g. a `collections.Counter`).

    Returns:
        Counts as an int64 array (may be empty)

    Raises:
        ValueError: If a count is negative or not integral
    """
    if isinstance(histogram, Mapping):
        histogram = list(histogram.values())
    elif not isinstance(histogram, np.ndarray):
        histogram = list(histogram)

    counts = np.asarray(histogram).reshape(-1)

    if counts.size == 0:
        return np.zeros(0, dtype=np.int64)

    if not np.issubdtype(counts.dtype, np.integer):
        if not np.issubdtype(counts.dtype, np.floating) or np.any(counts != np.round(counts)):
            raise ValueError(f"Histogram counts must be integers, got {counts.dtype} values")

    counts = counts.astype(np.int64)

    if np.any(counts < 0):
        raise ValueError(f"Histogram counts must be non-negative, got {counts.min()}")

    return counts


def compute_naive_entropy(histogram: Histogram) -> float:
    """
    Compute the plug-in (maximum-likelihood) entropy of a histogram.

    Mathematical Formula:
        H = -Σᵢ (cᵢ/N) ln(cᵢ/N),  N = Σᵢ cᵢ

    Categories with cᵢ = 0 contribute nothing (0 ln 0 := 0).

    Args:
        histogram: Counts per category

    Returns:
        Entropy value in nats

    Raises:
        NullDistribution: If the total count is zero

    Example:
        >>> compute_naive_entropy([5, 5])
        0.6931471805599453  # ln(2)
    """
    counts = as_histogram(histogram)
    total = int(counts.sum())

    if total == 0:
        raise NullDistribution("Cannot compute entropy: the histogram has no samples")

    counts = counts[counts > 0]
    probabilities = counts / total

    entropy = -np.sum(probabilities * np.log(probabilities))

    # A single category gives -1 * ln(1) == -0.0
    return float(entropy) + 0.0
