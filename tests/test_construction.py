"""Tests for building samplers and rejecting bad weight sequences."""

import logging
import math
import random

import pytest


def test_import_works() -> None:
    """Verify the public names can be imported."""
    from weighted_integer_sampler import WeightedIntegerSampler, build

    assert WeightedIntegerSampler is not None
    assert build is not None


def test_basic_construction() -> None:
    """Verify basic sampler construction works."""
    from weighted_integer_sampler import WeightedIntegerSampler

    sampler = WeightedIntegerSampler([1.0, 2.0, 3.0])
    assert len(sampler) == 3
    assert sampler.total == 6.0


def test_build_matches_constructor() -> None:
    from weighted_integer_sampler import WeightedIntegerSampler, build

    assert build([1, 2, 3]) == WeightedIntegerSampler([1, 2, 3])


def test_cumulative_table() -> None:
    """Cumulative table is the running sum and ends at the total."""
    from weighted_integer_sampler import build

    sampler = build([1.0, 0.0, 2.5, 0.5])
    assert sampler.cumulative == (1.0, 1.0, 3.5, 4.0)
    assert sampler.cumulative[-1] == sampler.total


def test_integer_weights_become_floats() -> None:
    from weighted_integer_sampler import build

    sampler = build([1, 2])
    assert sampler.weights == (1.0, 2.0)
    assert all(isinstance(w, float) for w in sampler.weights)


def test_accepts_any_iterable() -> None:
    """Generators are consumed exactly once."""
    from weighted_integer_sampler import build

    sampler = build(w for w in (3.0, 1.0))
    assert sampler.weights == (3.0, 1.0)


def test_caller_list_is_copied() -> None:
    """Mutating the input list afterwards does not change the sampler."""
    from weighted_integer_sampler import build

    weights = [1.0, 2.0]
    sampler = build(weights)
    weights[0] = 100.0
    weights.append(5.0)
    assert sampler.weights == (1.0, 2.0)
    assert sampler.cumulative == (1.0, 3.0)


# =============================================================================
# Validation
# =============================================================================


def test_empty_weights_rejected() -> None:
    from weighted_integer_sampler import ValidationError, build

    with pytest.raises(ValidationError) as excinfo:
        build([])
    assert excinfo.value.index is None


def test_none_rejected() -> None:
    from weighted_integer_sampler import ValidationError, build

    with pytest.raises(ValidationError):
        build(None)  # type: ignore[arg-type]


def test_negative_weight_identifies_index() -> None:
    """Verify negative weights are rejected with their position."""
    from weighted_integer_sampler import ValidationError, build

    with pytest.raises(ValidationError, match="index 1") as excinfo:
        build([1, -2, 3])
    assert excinfo.value.index == 1


def test_validation_error_is_value_error() -> None:
    from weighted_integer_sampler import build

    with pytest.raises(ValueError):
        build([1.0, -1.0])


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_non_finite_weight_rejected(bad: float) -> None:
    from weighted_integer_sampler import ValidationError, build

    with pytest.raises(ValidationError) as excinfo:
        build([1.0, 2.0, bad])
    assert excinfo.value.index == 2


@pytest.mark.parametrize("bad", ["1.0", None, object(), b"1"])
def test_non_numeric_weight_rejected(bad: object) -> None:
    from weighted_integer_sampler import ValidationError, build

    with pytest.raises(ValidationError) as excinfo:
        build([1.0, bad])  # type: ignore[list-item]
    assert excinfo.value.index == 1


def test_string_sequence_rejected() -> None:
    from weighted_integer_sampler import ValidationError, build

    with pytest.raises(ValidationError):
        build("123")  # type: ignore[arg-type]


def test_overflowing_total_rejected() -> None:
    """Weights that are each finite but sum past the float range fail."""
    from weighted_integer_sampler import ValidationError, build

    with pytest.raises(ValidationError) as excinfo:
        build([1e308, 1e308])
    assert excinfo.value.index == 1


def test_negative_zero_is_allowed() -> None:
    from weighted_integer_sampler import build

    sampler = build([-0.0, 1.0])
    assert sampler.support() == (1,)


def test_random_source_and_seed_are_exclusive() -> None:
    from weighted_integer_sampler import ValidationError, build

    with pytest.raises(ValidationError):
        build([1.0], random_source=random.Random(0), seed=0)


def test_random_source_must_have_random_method() -> None:
    from weighted_integer_sampler import build

    with pytest.raises(TypeError):
        build([1.0], random_source=object())  # type: ignore[arg-type]


# =============================================================================
# Degenerate (all-zero) weights
# =============================================================================


def test_all_zero_weights_construct() -> None:
    """An all-zero table is accepted but marked degenerate."""
    from weighted_integer_sampler import build

    sampler = build([0.0, 0.0, 0.0])
    assert sampler.is_degenerate
    assert sampler.total == 0.0
    assert sampler.support() == ()


def test_all_zero_weights_cannot_sample() -> None:
    from weighted_integer_sampler import DegenerateDistributionError, build

    sampler = build([0.0, 0.0])
    with pytest.raises(DegenerateDistributionError):
        sampler.sample()
    with pytest.raises(DegenerateDistributionError):
        sampler.sample_many(3)
    with pytest.raises(DegenerateDistributionError):
        sampler.index_for(0.0)
    with pytest.raises(DegenerateDistributionError):
        sampler.probability(0)


def test_degenerate_sample_consumes_no_draw() -> None:
    from weighted_integer_sampler import DegenerateDistributionError, build

    rng = random.Random(7)
    state = rng.getstate()
    with pytest.raises(DegenerateDistributionError):
        build([0.0]).sample(rng)
    assert rng.getstate() == state


# =============================================================================
# Logging
# =============================================================================


def test_all_zero_weights_log_warning(caplog: pytest.LogCaptureFixture) -> None:
    from weighted_integer_sampler import build

    with caplog.at_level(logging.WARNING, logger="weighted_integer_sampler"):
        build([0.0, 0.0])
    assert any("zero" in r.getMessage() for r in caplog.records)


def test_construction_logs_debug(caplog: pytest.LogCaptureFixture) -> None:
    from weighted_integer_sampler import build

    with caplog.at_level(logging.DEBUG, logger="weighted_integer_sampler"):
        build([1.0, 3.0])
    messages = [r.getMessage() for r in caplog.records]
    assert any("2 indices" in m for m in messages)
