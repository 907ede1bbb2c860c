"""Chi-squared goodness-of-fit checks for sampled index counts."""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from weighted_integer_sampler.errors import DegenerateDistributionError

_MAX_ITERATIONS = 1000
_EPSILON = 1e-15
_TINY = 1e-300


@dataclass(frozen=True)
class ChiSquaredResult:
    """Outcome of Pearson's chi-squared test against a weight table."""

    chi_squared: float
    degrees_of_freedom: int
    p_value: float
    num_samples: int

    def passes(self, alpha: float = 0.05) -> bool:
        """Whether the observations are consistent with the weights at ``alpha``."""
        return self.p_value > alpha


def _lower_series(a: float, x: float) -> float:
    # Regularized lower incomplete gamma P(a, x), valid for x < a + 1.
    term = total = 1.0 / a
    denominator = a
    for _ in range(_MAX_ITERATIONS):
        denominator += 1.0
        term *= x / denominator
        total += term
        if abs(term) < abs(total) * _EPSILON:
            break
    return total * math.exp(-x + a * math.log(x) - math.lgamma(a))


def _upper_continued_fraction(a: float, x: float) -> float:
    # Regularized upper incomplete gamma Q(a, x) by modified Lentz, x >= a + 1.
    b = x + 1.0 - a
    c = 1.0 / _TINY
    d = 1.0 / b
    h = d
    for i in range(1, _MAX_ITERATIONS + 1):
        an = -i * (i - a)
        b += 2.0
        d = an * d + b
        if abs(d) < _TINY:
            d = _TINY
        c = b + an / c
        if abs(c) < _TINY:
            c = _TINY
        d = 1.0 / d
        delta = d * c
        h *= delta
        if abs(delta - 1.0) < _EPSILON:
            break
    return math.exp(-x + a * math.log(x) - math.lgamma(a)) * h


def chi_squared_sf(statistic: float, degrees_of_freedom: int) -> float:
    """Survival function of the chi-squared distribution.

    This is the probability of a statistic at least as large as ``statistic``
    under the null hypothesis, i.e. the p-value of the test.
    """
    if degrees_of_freedom < 1:
        raise ValueError(f"degrees_of_freedom must be >= 1, got {degrees_of_freedom}")
    if math.isnan(statistic):
        raise ValueError("statistic must not be NaN")
    if statistic <= 0.0:
        return 1.0
    if math.isinf(statistic):
        return 0.0
    a = degrees_of_freedom / 2.0
    x = statistic / 2.0
    if x < a + 1.0:
        return max(0.0, 1.0 - _lower_series(a, x))
    return min(1.0, _upper_continued_fraction(a, x))


def chi_squared_test(
    observed: Sequence[int], expected_weights: Sequence[float]
) -> ChiSquaredResult:
    """Compare observed index counts with the counts the weights predict.

    Indices with zero weight are left out of the statistic. Seeing any of
    them at all is impossible under the null hypothesis, so the result then
    has an infinite statistic and a p-value of zero.
    """
    if len(observed) != len(expected_weights):
        raise ValueError(
            f"observed has {len(observed)} bins but expected_weights has "
            f"{len(expected_weights)}"
        )
    num_samples = sum(observed)
    if num_samples < 1:
        raise ValueError("observed must contain at least one sample")
    total_weight = math.fsum(expected_weights)
    if total_weight <= 0.0:
        raise DegenerateDistributionError("expected weights sum to zero")

    statistic = 0.0
    bins = 0
    impossible = False
    for count, weight in zip(observed, expected_weights):
        if weight == 0.0:
            if count > 0:
                impossible = True
            continue
        bins += 1
        expected = num_samples * weight / total_weight
        statistic += (count - expected) ** 2 / expected

    degrees_of_freedom = bins - 1
    if impossible:
        return ChiSquaredResult(math.inf, degrees_of_freedom, 0.0, num_samples)
    if degrees_of_freedom == 0:
        return ChiSquaredResult(0.0, 0, 1.0, num_samples)
    p_value = chi_squared_sf(statistic, degrees_of_freedom)
    return ChiSquaredResult(statistic, degrees_of_freedom, p_value, num_samples)
