"""
Matrix (weighted least squares) entropy estimator.

Mathematical Formulation:
    Multiplying the extrapolation Ĥ(n) ≈ Σ_c β_c n^{-c} by n gives

        n·Ĥ(n) ≈ Σ_c β_c · n / n^c,     c = 0..d

    so with X[r, c] = n_r / n_r^c and y_r = n_r·Ĥ(n_r) the coefficients
    solve the normal equations

        (XᵀX) β = Xᵀy

    This is ordinary least squares on Ĥ with weights n_r², which favours
    the larger (lower-variance) subsamples. The estimate is β₀.
"""

import numpy as np
import logging

from ..exceptions import FittingError
from ..sampling import design_matrix
from .base import ExtrapolatingEstimator

logger = logging.getLogger(__name__)


class Estimator(ExtrapolatingEstimator):
    """
    Extrapolates naive entropies by size-weighted least squares.

    Example:
        >>> estimator = Estimator.from_histogram([1, 2, 3, 4, 5, 6], rng=1)
        >>> estimate = estimator.entropy()
    """

    def fit(self) -> np.ndarray:
        observations = self._sampling_method.naive_entropies()
        degree = self._sampling_method.degree

        sizes = np.array([size for size, _ in observations], dtype=np.float64)
        values = np.array([value for _, value in observations], dtype=np.float64)

        x = design_matrix(sizes, degree)
        y = sizes * values

        if np.linalg.matrix_rank(x) < degree + 1:
            logger.warning(
                f"Rank-deficient design: {len(np.unique(sizes))} distinct sizes "
                f"for degree {degree}"
            )
            raise FittingError(
                "Failed to estimate entropy: the least squares system is singular"
            )

        a = x.T @ x
        b = x.T @ y

        try:
            coefficients = np.linalg.solve(a, b)
        except np.linalg.LinAlgError as e:
            raise FittingError(
                "Failed to estimate entropy: the least squares system is singular"
            ) from e

        if not np.all(np.isfinite(coefficients)):
            raise FittingError("Failed to estimate entropy because of numerical instability")

        return coefficients
