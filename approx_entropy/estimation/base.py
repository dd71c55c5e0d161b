"""
Shared wrapper for the extrapolating entropy estimators.

An extrapolating estimator owns a sampling method, asks it for naive
entropy observations (n, Ĥ(n)) and fits a polynomial in 1/n:

    Ĥ(n) ≈ H + a₁/n + a₂/n² + ... + a_d/n^d

The constant term H is the entropy extrapolated to n → ∞.
"""

from abc import ABC, abstractmethod
import numpy as np
from typing import Hashable, Iterable

from ..sampling import Bootstrap, SamplingMethod
from ..utils import Histogram, count_dup


DEFAULT_NUM_GROUPS = 3
DEFAULT_DEGREE = 2


class ExtrapolatingEstimator(ABC):
    """
    Base class for estimators that extrapolate naive entropies to n → ∞.

    Subclasses implement fit(); entropy() reads off its constant term.
    """

    def __init__(self, sampling_method: SamplingMethod):
        """
        Args:
            sampling_method: Strategy producing the naive entropy observations
        """
        self._sampling_method = self._check_sampling_method(sampling_method)

    @staticmethod
    def _check_sampling_method(sampling_method) -> SamplingMethod:
        if not isinstance(sampling_method, SamplingMethod):
            raise TypeError(
                f"Expected a SamplingMethod, got {type(sampling_method).__name__}"
            )
        return sampling_method

    @classmethod
    def from_histogram(
        cls,
        histogram: Histogram,
        num_groups: int = DEFAULT_NUM_GROUPS,
        degree: int = DEFAULT_DEGREE,
        rng=None
    ):
        """
        Build an estimator over a Bootstrap sampling method.

        Args:
            histogram: Counts per category
            num_groups: Number of groups of the bootstrap schedule
            degree: Degree of the extrapolating polynomial
            rng: Seed or numpy Generator for the bootstrap draws
        """
        return cls(Bootstrap(histogram, num_groups, degree, rng))

    @classmethod
    def from_samples(
        cls,
        samples: Iterable[Hashable],
        num_groups: int = DEFAULT_NUM_GROUPS,
        degree: int = DEFAULT_DEGREE,
        rng=None
    ):
        """
        Build an estimator over a Bootstrap sampling method from raw samples.

        Duplicated samples are counted to construct the histogram.
        """
        return cls.from_histogram(count_dup(samples), num_groups, degree, rng)

    @property
    def sampling_method(self) -> SamplingMethod:
        """The underlying sampling method (live object, not a copy)."""
        return self._sampling_method

    @sampling_method.setter
    def sampling_method(self, sampling_method: SamplingMethod):
        self._sampling_method = self._check_sampling_method(sampling_method)

    def set_sampling_method(self, sampling_method: SamplingMethod):
        """Swap the sampling method, keeping this estimator."""
        self.sampling_method = sampling_method
        return self

    @abstractmethod
    def fit(self) -> np.ndarray:
        """
        Draw naive entropies and fit the extrapolating polynomial.

        Returns:
            Coefficients of the polynomial in 1/n, constant term first

        Raises:
            FittingError: If the fit is numerically singular
        """

    def entropy(self) -> float:
        """
        Estimate the entropy of the underlying distribution in nats.

        Raises:
            FittingError: If the fit is numerically singular
        """
        return float(self.fit()[0])

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._sampling_method!r})"
