"""
Subsampling methods for approx_entropy.

This package provides the strategies that carve subsamples out of the
observed data and compute their naive entropies:

- SamplingMethod: Abstract contract shared by all strategies
- Bootstrap: Random without-replacement draws on a halving schedule
- FixedPartition: Deterministic split of a sample sequence by a given schedule
"""

from .base import SamplingMethod, design_matrix
from .bootstrap import Bootstrap
from .fixed_partition import FixedPartition

__all__ = [
    "SamplingMethod",
    "Bootstrap",
    "FixedPartition",
    "design_matrix",
]
