"""
Entropy estimators for approx_entropy.

- NaiveEstimator: Plug-in entropy of a histogram (biased for small samples)
- Estimator: Size-weighted least squares extrapolation to n → ∞
- DirectEstimator: Unweighted polynomial extrapolation in 1/n (Strong et al.)

Both extrapolating estimators wrap any SamplingMethod.
"""

from .naive import NaiveEstimator
from .base import DEFAULT_DEGREE, DEFAULT_NUM_GROUPS, ExtrapolatingEstimator
from .matrix import Estimator
from .direct import DirectEstimator

__all__ = [
    "NaiveEstimator",
    "ExtrapolatingEstimator",
    "Estimator",
    "DirectEstimator",
    "DEFAULT_NUM_GROUPS",
    "DEFAULT_DEGREE",
]
