"""Tests for reductions and summary statistics."""

from __future__ import annotations

import operator
import sys

import numpy as np
import pytest

from yttria.elementwise import (
    dot,
    extremes,
    maximum,
    mean,
    minimum,
    reduce_elements,
    std,
    sum_elements,
    trapz,
    variance,
)
from yttria.errors import CapabilityError, LengthMismatchError, ShapeError
from yttria.parallel import DispatchConfig


def test_sum_parallel_close_to_sequential(four_workers: DispatchConfig) -> None:
    rng = np.random.default_rng(3)
    samples = rng.normal(size=10_007)

    sequential = sum_elements(samples, threshold=sys.maxsize)
    parallel = sum_elements(samples, threshold=0)

    assert parallel == pytest.approx(sequential, rel=1e-12)
    assert sum_elements(samples, threshold=0) == parallel


def test_sum_of_empty_sequence_is_zero() -> None:
    assert sum_elements([]) == 0.0


def test_reduce_elements_with_custom_combine(four_workers: DispatchConfig) -> None:
    samples = np.asarray([3.0, -1.0, 4.0, 1.0, -5.0, 9.0, 2.0, 6.0])
    largest = reduce_elements(samples, np.max, max, threshold=0)
    product = reduce_elements(samples[:4], np.prod, operator.mul, threshold=0)

    assert largest == 9.0
    assert product == pytest.approx(-12.0)


def test_dot_and_length_check(four_workers: DispatchConfig) -> None:
    a = np.arange(1.0, 101.0)
    b = np.full(100, 2.0)

    assert dot(a, b, threshold=0) == pytest.approx(10_100.0)
    assert dot([1j, 2.0], [1j, 1.0]) == pytest.approx(1.0 + 0j)
    with pytest.raises(LengthMismatchError):
        dot([1.0, 2.0], [1.0])


def test_mean_variance_std() -> None:
    samples = np.asarray([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0])

    assert mean(samples) == pytest.approx(5.0)
    assert variance(samples) == pytest.approx(4.0)
    assert std(samples) == pytest.approx(2.0)


def test_variance_of_complex_samples_is_real() -> None:
    samples = np.asarray([1 + 1j, -1 - 1j])

    assert variance(samples) == pytest.approx(2.0)
    assert np.isrealobj(variance(samples))


def test_mean_of_empty_sequence_raises() -> None:
    with pytest.raises(ShapeError, match="mean requires at least one sample"):
        mean([])


def test_minimum_maximum_extremes(four_workers: DispatchConfig) -> None:
    rng = np.random.default_rng(5)
    samples = rng.normal(size=1000)

    assert minimum(samples, threshold=0) == samples.min()
    assert maximum(samples, threshold=0) == samples.max()
    assert extremes(samples, threshold=0) == (samples.min(), samples.max())


def test_ordering_reductions_reject_complex() -> None:
    with pytest.raises(CapabilityError, match="minimum requires real samples"):
        minimum([1j])
    with pytest.raises(ShapeError):
        maximum([])


def test_trapz_unit_spacing() -> None:
    samples = np.asarray([0.0, 1.0, 2.0, 3.0])

    assert trapz(samples) == pytest.approx(4.5)
    assert trapz([5.0]) == 0.0
