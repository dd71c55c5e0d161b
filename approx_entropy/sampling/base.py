"""
Abstract base class for subsampling methods.

A sampling method decides how subsamples are carved out of a dataset and
produces the naive entropy observations the extrapolating estimators fit:

    [(n₁, Ĥ(n₁)), (n₁, Ĥ(n₁)), (n₂, Ĥ(n₂)), ...]

Observations come grouped in schedule order. Group k contributes
samples_rep()[k] observations, each computed on a subsample of size
size_subsamples()[k]. Sizes are sorted from largest to smallest.

Every implementation keeps the invariant num_groups > degree, so that a
polynomial of the requested degree can be fitted to the observations.
"""

from abc import ABC, abstractmethod
import numpy as np
from typing import List, Sequence, Tuple

from ..utils import Histogram


def design_matrix(sizes: Sequence[int], degree: int) -> np.ndarray:
    """
    Design matrix of the size-weighted extrapolation.

    Row r, column c holds n_r / n_r^c for c = 0..degree, where n_r is
    the subsample size of observation r.

    Args:
        sizes: Subsample size of each observation
        degree: Degree of the extrapolating polynomial

    Returns:
        Array of shape [len(sizes), degree + 1]
    """
    sizes = np.asarray(sizes, dtype=np.float64)[:, np.newaxis]
    powers = np.arange(degree + 1)[np.newaxis, :]
    return sizes / sizes ** powers


class SamplingMethod(ABC):
    """
    Contract shared by all subsampling strategies.

    Subclasses implement the schedule, the mutators and naive_entropies();
    total_samples(), subsample_sizes() and design_matrix() are derived here.
    Mutators return the sampling method itself so calls can be chained.
    """

    @property
    @abstractmethod
    def degree(self) -> int:
        """Degree of the polynomial fitted downstream."""

    @abstractmethod
    def set_degree(self, degree: int) -> "SamplingMethod":
        """
        Change the polynomial degree.

        Raises:
            HighDegree: If degree >= num_groups
        """

    @property
    @abstractmethod
    def num_groups(self) -> int:
        """Number of distinct subsample sizes in the schedule."""

    @abstractmethod
    def set_num_groups(self, num_groups: int) -> "SamplingMethod":
        """Change the number of groups, re-validating the schedule."""

    @abstractmethod
    def set_distribution(self, histogram: Histogram) -> "SamplingMethod":
        """Replace the underlying data, re-validating the schedule."""

    @abstractmethod
    def size_subsamples(self) -> List[int]:
        """Subsample size of each group, largest first."""

    @abstractmethod
    def samples_rep(self) -> List[int]:
        """Number of repetitions of each group, aligned with size_subsamples()."""

    @abstractmethod
    def naive_entropies(self) -> List[Tuple[int, float]]:
        """
        Draw every subsample of the schedule and compute its naive entropy.

        Returns:
            List of (subsample size, naive entropy) pairs of length
            total_samples(), in schedule order
        """

    def total_samples(self) -> int:
        """Total number of observations produced by naive_entropies()."""
        return sum(self.samples_rep())

    def subsample_sizes(self) -> np.ndarray:
        """Size of every observation, aligned with naive_entropies()."""
        return np.repeat(
            np.asarray(self.size_subsamples(), dtype=np.int64),
            np.asarray(self.samples_rep(), dtype=np.int64)
        )

    def design_matrix(self) -> np.ndarray:
        """Design matrix of the size-weighted extrapolation for this schedule."""
        return design_matrix(self.subsample_sizes(), self.degree)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(degree={self.degree}, "
            f"size_subsamples={self.size_subsamples()}, samples_rep={self.samples_rep()})"
        )
