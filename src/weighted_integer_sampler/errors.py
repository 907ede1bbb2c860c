"""Exceptions raised by the weighted integer sampler."""


class SamplerError(ValueError):
    """Base class for errors raised by this package."""


class ValidationError(SamplerError):
    """Raised when a weight sequence cannot be turned into a sampler.

    ``index`` is the position of the offending weight, or ``None`` when the
    problem is with the sequence as a whole (missing, empty, overflowing).
    """

    def __init__(self, message: str, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class DegenerateDistributionError(SamplerError):
    """Raised when sampling from a sampler whose weights are all zero."""
