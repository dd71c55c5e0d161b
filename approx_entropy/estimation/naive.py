"""
Naive (plug-in) entropy estimation.

Mathematical Formulation:
    Ĥ = -Σᵢ p̂ᵢ ln p̂ᵢ,  p̂ᵢ = cᵢ / N

The plug-in estimator uses the empirical frequencies directly. It is
biased downward for finite N, with leading bias term -(m - 1) / (2N)
where m is the number of occupied categories. The extrapolating
estimators correct this bias by evaluating Ĥ at several subsample sizes.
"""

import numpy as np
from typing import Hashable, Iterable

from ..exceptions import NullDistribution
from ..utils import Histogram, as_histogram, compute_naive_entropy, count_dup


class NaiveEstimator:
    """
    Plug-in entropy estimator over a fixed histogram.

    Example:
        >>> NaiveEstimator([1, 1, 1, 1]).entropy()
        1.3862943611198906  # ln(4)
    """

    def __init__(self, histogram: Histogram):
        """
        Args:
            histogram: Counts per category

        Raises:
            NullDistribution: If the histogram has no samples
        """
        self._histogram = as_histogram(histogram)

        if self._histogram.sum() == 0:
            raise NullDistribution("Cannot build a naive estimator from an empty histogram")

    @classmethod
    def from_samples(cls, samples: Iterable[Hashable]) -> "NaiveEstimator":
        """Build the estimator by counting duplicated samples."""
        return cls(count_dup(samples))

    @property
    def histogram(self) -> np.ndarray:
        return self._histogram.copy()

    @property
    def sample_size(self) -> int:
        return int(self._histogram.sum())

    def entropy(self) -> float:
        """Plug-in entropy in nats."""
        return compute_naive_entropy(self._histogram)
