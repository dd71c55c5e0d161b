"""
Entropy Pipeline - Main entry point for entropy estimation.

This module provides the high-level EntropyPipeline class that builds a
sampling method and an extrapolating estimator from a single
configuration, and reports the estimate together with the intermediate
quantities.

Usage:
    >>> from approx_entropy import EntropyPipeline
    >>> pipeline = EntropyPipeline()
    >>> estimate, stats = pipeline.run(samples)
"""

import numpy as np
from typing import List, Tuple, Optional, Dict, Any, Hashable, Iterable
from dataclasses import dataclass
import logging

from .exceptions import ApproxEntropyError, TooFewSamples
from .utils import Histogram, as_histogram, compute_naive_entropy, count_dup
from .sampling import Bootstrap, FixedPartition, SamplingMethod
from .estimation import (
    DEFAULT_DEGREE,
    DEFAULT_NUM_GROUPS,
    DirectEstimator,
    Estimator,
    ExtrapolatingEstimator,
)

logger = logging.getLogger(__name__)


ESTIMATORS = {
    "direct": DirectEstimator,
    "matrix": Estimator,
}

SAMPLING_METHODS = ("bootstrap", "fixed_partition")


@dataclass
class EntropyConfig:
    """
    Complete configuration for the entropy pipeline.

    This combines the choice of estimator, the sampling method and its
    schedule into a single configuration object.
    """
    # Estimator: "direct" or "matrix"
    method: str = "direct"

    # Sampling method: "bootstrap" or "fixed_partition"
    sampling: str = "bootstrap"

    # Schedule
    num_groups: int = DEFAULT_NUM_GROUPS
    degree: int = DEFAULT_DEGREE

    # Bootstrap draws / fixed partition shuffling
    seed: Optional[int] = None

    # Fixed partition only. Defaults to halving sizes, one repetition each.
    size_subsamples: Optional[List[int]] = None
    samples_rep: Optional[List[int]] = None
    shuffle: bool = False

    def validate(self):
        """Check the estimator and sampling method names."""
        if self.method not in ESTIMATORS:
            raise ValueError(f"Unknown estimation method: {self.method}")
        if self.sampling not in SAMPLING_METHODS:
            raise ValueError(f"Unknown sampling method: {self.sampling}")


class EntropyPipeline:
    """
    Entropy estimation pipeline.

    Combines:
    - Histogram construction from raw samples
    - A sampling method (Bootstrap or FixedPartition)
    - An extrapolating estimator (direct or matrix)

    ```
    Input: samples x₁..x_N, configuration
    Output: entropy estimate Ĥ∞

    1. Count duplicated samples into a histogram
    2. Build the sampling method and its subsample schedule
    3. Compute naive entropies Ĥ(n) on every subsample
    4. Fit Ĥ(n) as a polynomial in 1/n
    5. Return the constant term
    ```

    Example:
        >>> config = EntropyConfig(method="matrix", num_groups=4, degree=2, seed=0)
        >>> pipeline = EntropyPipeline(config)
        >>> estimate, stats = pipeline.run(samples)
        >>> print(f"Naive {stats['naive_entropy']:.3f} -> corrected {estimate:.3f} nats")
    """

    def __init__(self, config: Optional[EntropyConfig] = None):
        """
        Initialize the entropy pipeline.

        Args:
            config: Pipeline configuration. Uses defaults if None.
        """
        self.config = config or EntropyConfig()
        self.config.validate()

    def _default_schedule(self, sample_size: int) -> Tuple[List[int], List[int]]:
        num_groups = self.config.num_groups
        if sample_size < 2 ** num_groups:
            raise TooFewSamples(
                f"{num_groups} groups need at least {2 ** num_groups} samples, got {sample_size}"
            )
        size_subsamples = [sample_size >> (i + 1) for i in range(num_groups)]
        return size_subsamples, [1] * num_groups

    def build_sampling_method(self, samples: Iterable[Hashable]) -> SamplingMethod:
        """
        Build the configured sampling method over raw samples.

        Args:
            samples: Observed samples

        Returns:
            Bootstrap or FixedPartition instance
        """
        samples = list(samples)

        if self.config.sampling == "bootstrap":
            return Bootstrap(
                count_dup(samples),
                self.config.num_groups,
                self.config.degree,
                self.config.seed
            )

        size_subsamples = self.config.size_subsamples
        samples_rep = self.config.samples_rep
        if size_subsamples is None:
            size_subsamples, default_rep = self._default_schedule(len(samples))
            if samples_rep is None:
                samples_rep = default_rep
        elif samples_rep is None:
            samples_rep = [1] * len(size_subsamples)

        fixed = FixedPartition(samples, size_subsamples, samples_rep, self.config.degree)
        if self.config.shuffle:
            fixed.shuffle(self.config.seed)
        return fixed

    def build_estimator(self, samples: Iterable[Hashable]) -> ExtrapolatingEstimator:
        """Build the configured estimator over raw samples."""
        return ESTIMATORS[self.config.method](self.build_sampling_method(samples))

    def _estimate(
        self,
        estimator: ExtrapolatingEstimator,
        histogram: np.ndarray
    ) -> Tuple[float, Dict[str, Any]]:
        sampling_method = estimator.sampling_method

        if np.count_nonzero(histogram) == 1:
            logger.warning("All samples fall in a single category")

        try:
            coefficients = estimator.fit()
        except ApproxEntropyError as e:
            logger.error(f"Entropy estimation failed: {e}")
            raise

        estimate = float(coefficients[0])

        stats = {
            'method': self.config.method,
            'sampling': self.config.sampling,
            'sample_size': int(histogram.sum()),
            'num_categories': int(np.count_nonzero(histogram)),
            'naive_entropy': compute_naive_entropy(histogram),
            'size_subsamples': sampling_method.size_subsamples(),
            'samples_rep': sampling_method.samples_rep(),
            'coefficients': coefficients.tolist(),
        }

        logger.info(
            f"Entropy estimate: naive {stats['naive_entropy']:.4f} → {estimate:.4f} nats"
        )

        return estimate, stats

    def run(self, samples: Iterable[Hashable]) -> Tuple[float, Dict[str, Any]]:
        """
        Run the complete estimation on raw samples.

        Args:
            samples: Observed samples (any hashable values)

        Returns:
            Tuple of:
                - estimate: Extrapolated entropy in nats
                - stats: Dictionary with the naive entropy, schedule and
                         polynomial coefficients
        """
        samples = list(samples)
        logger.info(
            f"Starting {self.config.method} estimation with {self.config.sampling} "
            f"sampling on {len(samples)} samples"
        )

        estimator = self.build_estimator(samples)
        histogram = as_histogram(count_dup(samples))

        return self._estimate(estimator, histogram)

    def run_histogram(self, histogram: Histogram) -> Tuple[float, Dict[str, Any]]:
        """
        Run the estimation directly on a histogram.

        Only the bootstrap sampling method works from counts; a fixed
        partition needs the sample sequence.

        Args:
            histogram: Counts per category

        Returns:
            Tuple of (estimate, stats), as for run()
        """
        if self.config.sampling != "bootstrap":
            raise ValueError("A fixed partition needs raw samples, use run()")

        histogram = as_histogram(histogram)
        logger.info(
            f"Starting {self.config.method} estimation on a histogram of "
            f"{int(histogram.sum())} samples"
        )

        estimator = ESTIMATORS[self.config.method].from_histogram(
            histogram,
            self.config.num_groups,
            self.config.degree,
            self.config.seed
        )

        return self._estimate(estimator, histogram)

    def get_config(self) -> EntropyConfig:
        """Get current configuration."""
        return self.config
