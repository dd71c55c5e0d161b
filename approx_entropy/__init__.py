"""
approx_entropy: Entropy estimation from few samples

Estimates the Shannon entropy of a discrete random variable from a small
sample, correcting the downward bias of the naive (plug-in) estimator.

Mathematical Foundation:
    Naive entropy:  Ĥ(n) = -Σᵢ p̂ᵢ ln p̂ᵢ  on a subsample of size n

    Extrapolation:  Ĥ(n) ≈ H + a₁/n + ... + a_d/n^d

    Subsamples of decreasing size are drawn from the data (Bootstrap or
    FixedPartition), the polynomial in 1/n is fitted (Estimator or
    DirectEstimator) and the constant term H is the corrected estimate.
"""

__version__ = "0.1.0"

from .utils import count_dup, compute_naive_entropy
from .exceptions import (
    ApproxEntropyError,
    NullDistribution,
    TooFewSamples,
    LowNumGroups,
    HighDegree,
    TooManyRepetitions,
    TooManySubsampleSizes,
    NullRepetition,
    NullSubsampleSize,
    Immutable,
    PartitionExhausted,
    FittingError,
)
from .sampling import SamplingMethod, Bootstrap, FixedPartition
from .estimation import NaiveEstimator, Estimator, DirectEstimator
from .pipeline import EntropyPipeline, EntropyConfig

__all__ = [
    "count_dup",
    "compute_naive_entropy",
    "SamplingMethod",
    "Bootstrap",
    "FixedPartition",
    "NaiveEstimator",
    "Estimator",
    "DirectEstimator",
    "EntropyPipeline",
    "EntropyConfig",
    "ApproxEntropyError",
    "NullDistribution",
    "TooFewSamples",
    "LowNumGroups",
    "HighDegree",
    "TooManyRepetitions",
    "TooManySubsampleSizes",
    "NullRepetition",
    "NullSubsampleSize",
    "Immutable",
    "PartitionExhausted",
    "FittingError",
]
