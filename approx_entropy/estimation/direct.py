"""
Direct entropy estimator.

Introduced by Strong et al. (Phys. Rev. Lett. 80, 197, 1998), it fits a
polynomial to the naive entropies as a function of the inverse subsample
size and reads off the value at 1/n = 0:

    Ĥ(n) ≈ H + a₁/n + a₂/n² + ... + a_d/n^d

All observations get the same weight. Extending the paper,
the subsamples can come from any sampling method.
"""

import numpy as np
import logging

from ..exceptions import FittingError
from .base import ExtrapolatingEstimator

logger = logging.getLogger(__name__)


class DirectEstimator(ExtrapolatingEstimator):
    """
    Extrapolates naive entropies with an unweighted polynomial fit in 1/n.

    Example:
        >>> estimator = DirectEstimator.from_samples([1, 2, 3, 1, 1, 2, 2, 1, 3], rng=0)
        >>> estimate = estimator.entropy()
    """

    def fit(self) -> np.ndarray:
        observations = self._sampling_method.naive_entropies()
        degree = self._sampling_method.degree

        inverse_sizes = np.array([1.0 / size for size, _ in observations])
        values = np.array([value for _, value in observations], dtype=np.float64)

        try:
            coefficients, _, rank, _, _ = np.polyfit(inverse_sizes, values, degree, full=True)
        except (np.linalg.LinAlgError, ValueError) as e:
            raise FittingError(
                "Failed to estimate entropy because of numerical instability"
            ) from e

        if rank < degree + 1:
            logger.warning(
                f"Polynomial fit of degree {degree} has rank {rank} "
                f"({len(np.unique(inverse_sizes))} distinct sizes)"
            )
            raise FittingError(
                "Failed to estimate entropy because of numerical instability"
            )

        # np.polyfit returns the highest power first
        return coefficients[::-1]
