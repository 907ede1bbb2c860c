"""Package initialization for weighted-integer-sampler.

An immutable weighted random sampler over the integers ``0..n-1`` with
O(n) construction and O(log n) sampling.
"""

from weighted_integer_sampler.errors import (
    DegenerateDistributionError,
    SamplerError,
    ValidationError,
)
from weighted_integer_sampler.random_source import RandomSource, SeededRandomSource
from weighted_integer_sampler.sampler import WeightedIntegerSampler, build
from weighted_integer_sampler.stats import (
    ChiSquaredResult,
    chi_squared_sf,
    chi_squared_test,
)

__version__ = "0.1.0"
__all__ = [
    "ChiSquaredResult",
    "DegenerateDistributionError",
    "RandomSource",
    "SamplerError",
    "SeededRandomSource",
    "ValidationError",
    "WeightedIntegerSampler",
    "build",
    "chi_squared_sf",
    "chi_squared_test",
]
