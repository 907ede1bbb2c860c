"""Weighted sampling of integer indices by inverse transform over prefix sums.

A sampler is built once from a sequence of non-negative weights. Each draw
scales a uniform value in ``[0, 1)`` by the total weight and binary searches
the cumulative weight table for the index it falls into, so index ``i`` comes
up with probability ``weights[i] / total``.
"""

import bisect
import logging
import math
from collections.abc import Iterable, Iterator

from weighted_integer_sampler.errors import (
    DegenerateDistributionError,
    ValidationError,
)
from weighted_integer_sampler.random_source import RandomSource, SeededRandomSource
from weighted_integer_sampler.stats import ChiSquaredResult, chi_squared_test

logger = logging.getLogger(__name__)


def _validate(weights: Iterable[float]) -> tuple[tuple[float, ...], tuple[float, ...]]:
    """Check ``weights`` and return the weight and cumulative tables."""
    if weights is None:
        raise ValidationError("weights must not be None")
    if isinstance(weights, (str, bytes)):
        raise ValidationError("weights must be a sequence of numbers, not a string")

    table: list[float] = []
    cumulative: list[float] = []
    running = 0.0
    for index, raw in enumerate(weights):
        if isinstance(raw, (str, bytes)):
            raise ValidationError(f"weight at index {index} is not a number", index)
        try:
            weight = float(raw)
        except (TypeError, ValueError) as e:
            raise ValidationError(
                f"weight at index {index} is not a number: {raw!r}", index
            ) from e
        if math.isnan(weight) or math.isinf(weight):
            raise ValidationError(
                f"weight at index {index} must be finite, got {weight}", index
            )
        if weight < 0.0:
            raise ValidationError(
                f"weight at index {index} must be non-negative, got {weight}", index
            )
        running += weight
        if math.isinf(running):
            raise ValidationError(
                f"total weight overflows at index {index}", index
            )
        table.append(weight)
        cumulative.append(running)

    if not table:
        raise ValidationError("weights must not be empty")
    return tuple(table), tuple(cumulative)


class WeightedIntegerSampler:
    """Draws integers in ``[0, n)`` with probability proportional to weight.

    The sampler is immutable once built, so it can be shared between
    threads. Each thread should then pass its own random source to
    :meth:`sample`, since the sampler's default source is a single
    ``random.Random`` underneath.

    Args:
        weights: Non-negative finite weights, at least one of them.
        random_source: Object with a ``random()`` method returning floats
            in ``[0, 1)``. Defaults to a fresh :class:`SeededRandomSource`.
        seed: Seed for the default random source. Cannot be combined with
            ``random_source``.

    Raises:
        ValidationError: If the weights are missing, empty, negative,
            non-finite, or sum past the largest float.
    """

    __slots__ = ("_cumulative", "_last_positive", "_random_source", "_weights")

    def __init__(
        self,
        weights: Iterable[float],
        *,
        random_source: RandomSource | None = None,
        seed: int | None = None,
    ) -> None:
        if random_source is not None and seed is not None:
            raise ValidationError("pass either random_source or seed, not both")
        if random_source is not None and not callable(
            getattr(random_source, "random", None)
        ):
            raise TypeError(
                f"random_source must have a random() method, got {random_source!r}"
            )

        self._weights, self._cumulative = _validate(weights)
        self._last_positive: int | None = None
        for index in range(len(self._weights) - 1, -1, -1):
            if self._weights[index] > 0.0:
                self._last_positive = index
                break
        if random_source is None:
            random_source = SeededRandomSource(seed)
        self._random_source = random_source

        if self._last_positive is None:
            logger.warning(
                "All %d weights are zero; sampling will raise", len(self._weights)
            )
        else:
            logger.debug(
                "Built sampler over %d indices with total weight %r",
                len(self._weights),
                self.total,
            )

    # -------------------------------------------------------------------------
    # Sampling
    # -------------------------------------------------------------------------

    def sample(self, random_source: RandomSource | None = None) -> int:
        """Draw one index.

        Consumes exactly one value from ``random_source`` (or the sampler's
        own source when omitted).

        Raises:
            DegenerateDistributionError: If every weight is zero.
        """
        self._check_not_degenerate()
        source = self._random_source if random_source is None else random_source
        return self.index_for(source.random() * self.total)

    def sample_many(
        self, k: int, random_source: RandomSource | None = None
    ) -> list[int]:
        """Draw ``k`` independent indices."""
        if k < 0:
            raise ValueError(f"k must be non-negative, got {k}")
        self._check_not_degenerate()
        source = self._random_source if random_source is None else random_source
        total = self.total
        return [self.index_for(source.random() * total) for _ in range(k)]

    def index_for(self, value: float) -> int:
        """Map a point of ``[0, total)`` to the index whose weight covers it.

        Returns the leftmost ``i`` with ``cumulative[i] > value``. Rounding
        in ``raw * total`` can land ``value`` on or past the total, in which
        case the last index with positive weight is returned.
        """
        self._check_not_degenerate()
        if math.isnan(value) or value < 0.0:
            raise ValueError(f"value must be a non-negative number, got {value}")
        index = bisect.bisect_right(self._cumulative, value)
        if index < len(self._cumulative):
            return index
        return self._last_positive

    def test_distribution(
        self, num_samples: int, random_source: RandomSource | None = None
    ) -> ChiSquaredResult:
        """Sample ``num_samples`` times and chi-squared test the counts."""
        if num_samples < 1:
            raise ValueError(f"num_samples must be positive, got {num_samples}")
        counts = [0] * len(self._weights)
        for index in self.sample_many(num_samples, random_source):
            counts[index] += 1
        result = chi_squared_test(counts, self._weights)
        logger.debug(
            "Chi-squared over %d samples: chi2=%.4f dof=%d p=%.6f",
            num_samples,
            result.chi_squared,
            result.degrees_of_freedom,
            result.p_value,
        )
        return result

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def weights(self) -> tuple[float, ...]:
        return self._weights

    @property
    def cumulative(self) -> tuple[float, ...]:
        return self._cumulative

    @property
    def total(self) -> float:
        return self._cumulative[-1]

    @property
    def is_degenerate(self) -> bool:
        """True when all weights are zero and nothing can be sampled."""
        return self._last_positive is None

    @property
    def random_source(self) -> RandomSource:
        return self._random_source

    def weight(self, index: int) -> float:
        return self._weights[index]

    def probability(self, index: int) -> float:
        """Probability that :meth:`sample` returns ``index``."""
        self._check_not_degenerate()
        return self._weights[index] / self.total

    def support(self) -> tuple[int, ...]:
        """Indices that can actually be drawn."""
        return tuple(i for i, w in enumerate(self._weights) if w > 0.0)

    def to_list(self) -> list[float]:
        return list(self._weights)

    def _check_not_degenerate(self) -> None:
        if self._last_positive is None:
            raise DegenerateDistributionError(
                f"cannot sample: all {len(self._weights)} weights are zero"
            )

    def __len__(self) -> int:
        return len(self._weights)

    def __getitem__(self, index: int) -> float:
        return self._weights[index]

    def __iter__(self) -> Iterator[float]:
        return iter(self._weights)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeightedIntegerSampler):
            return NotImplemented
        return self._weights == other._weights

    def __hash__(self) -> int:
        return hash(self._weights)

    def __repr__(self) -> str:
        return f"WeightedIntegerSampler({list(self._weights)!r})"


def build(
    weights: Iterable[float],
    *,
    random_source: RandomSource | None = None,
    seed: int | None = None,
) -> WeightedIntegerSampler:
    """Validate ``weights`` and return a sampler over their indices."""
    return WeightedIntegerSampler(weights, random_source=random_source, seed=seed)
