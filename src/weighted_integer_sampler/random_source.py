"""Uniform random sources consumed by the sampler.

Anything with a ``random()`` method returning a float in ``[0, 1)`` works:
``random.Random`` instances, the ``random`` module itself, or the seedable
wrapper below.
"""

import logging
import random
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class RandomSource(Protocol):
    """A generator of uniform reals in ``[0, 1)``."""

    def random(self) -> float: ...


class SeededRandomSource:
    """A ``random.Random`` wrapper that remembers its seed.

    Instances are deterministic when seeded, which is what tests want.
    A single instance is not meant to be shared across threads; give each
    thread its own.
    """

    __slots__ = ("_rng", "_seed")

    def __init__(self, seed: int | None = None) -> None:
        self._seed = seed
        self._rng = random.Random(seed)
        if seed is None:
            logger.debug("Created random source with non-deterministic seed")
        else:
            logger.debug("Created random source with seed=%s", seed)

    @property
    def seed(self) -> int | None:
        return self._seed

    def reseed(self, seed: int | None) -> None:
        """Restart the sequence from ``seed`` (None -> fresh system entropy)."""
        self._seed = seed
        self._rng.seed(seed)

    def random(self) -> float:
        return self._rng.random()

    def getstate(self) -> Any:
        return self._rng.getstate()

    def setstate(self, state: Any) -> None:
        self._rng.setstate(state)

    def __repr__(self) -> str:
        return f"SeededRandomSource(seed={self._seed!r})"
