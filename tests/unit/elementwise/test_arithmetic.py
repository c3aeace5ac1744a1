"""Tests for elementwise map/zip/scale and vector arithmetic."""

from __future__ import annotations

import sys

import numpy as np
import pytest

from yttria.elementwise import (
    add,
    add_const,
    clamp,
    divide,
    divide_const,
    map_elements,
    multiply,
    multiply_const,
    powi,
    scale,
    sqrt,
    subtract,
    subtract_const,
    zip_elements,
)
from yttria.errors import CapabilityError, InvalidParameterError, LengthMismatchError
from yttria.parallel import DispatchConfig


def test_zip_forced_parallel_matches_sequential(four_workers: DispatchConfig) -> None:
    rng = np.random.default_rng(11)
    a = rng.normal(size=4099)
    b = rng.normal(size=4099)

    sequential = zip_elements(a, b, np.add, threshold=sys.maxsize)
    parallel = zip_elements(a, b, np.add, threshold=0)

    assert np.array_equal(parallel, sequential)
    assert np.array_equal(parallel, a + b)


def test_zip_length_mismatch_leaves_out_untouched(four_workers: DispatchConfig) -> None:
    out = np.zeros(5)
    with pytest.raises(LengthMismatchError):
        zip_elements(np.ones(5), np.ones(7), np.add, out=out, threshold=0)

    assert np.array_equal(out, np.zeros(5))


def test_zip_length_mismatch_on_out_buffer() -> None:
    with pytest.raises(LengthMismatchError, match="out length mismatch"):
        add([1.0, 2.0], [3.0, 4.0], out=np.zeros(3))


def test_map_elements_accepts_lists_and_preserves_length() -> None:
    result = map_elements([1, 2, 3], np.negative)

    assert result.dtype == np.float64
    assert np.array_equal(result, [-1.0, -2.0, -3.0])


def test_map_elements_in_place(four_workers: DispatchConfig) -> None:
    samples = np.linspace(0.0, 1.0, 33)
    expected = np.exp(samples)

    map_elements(samples, np.exp, out=samples, threshold=0)

    assert np.array_equal(samples, expected)


def test_scale_and_multiply_const() -> None:
    samples = np.asarray([1.0, -2.0, 0.5])

    assert np.array_equal(scale(samples, 2.0), [2.0, -4.0, 1.0])
    assert np.array_equal(multiply_const(samples, 2.0), scale(samples, 2.0))
    assert np.allclose(scale(samples, 1j), samples * 1j)


def test_scale_by_imaginary_factor_needs_complex_out() -> None:
    samples = np.asarray([1.0, -2.0, 0.5])

    with pytest.raises(CapabilityError, match="complex128"):
        scale(samples, 1j, out=samples)

    assert np.array_equal(samples, [1.0, -2.0, 0.5])


def test_map_elements_rejects_integer_out() -> None:
    out = np.zeros(3, dtype=np.int64)

    with pytest.raises(CapabilityError, match="int64"):
        map_elements([1.0, 2.0, 3.0], lambda chunk: chunk / 2, out=out, threshold=0)

    assert np.array_equal(out, [0, 0, 0])


def test_scale_rejects_non_scalar_factor() -> None:
    with pytest.raises(InvalidParameterError, match="factor must be a numeric scalar"):
        scale([1.0], [2.0])  # type: ignore[arg-type]
    with pytest.raises(InvalidParameterError, match="factor must be a numeric scalar"):
        scale([1.0], True)


def test_binary_arithmetic() -> None:
    a = np.asarray([6.0, 8.0, -3.0])
    b = np.asarray([2.0, 4.0, 3.0])

    assert np.array_equal(add(a, b), [8.0, 12.0, 0.0])
    assert np.array_equal(subtract(a, b), [4.0, 4.0, -6.0])
    assert np.array_equal(multiply(a, b), [12.0, 32.0, -9.0])
    assert np.array_equal(divide(a, b), [3.0, 2.0, -1.0])


def test_divide_by_zero_follows_ieee() -> None:
    with np.errstate(divide="ignore"):
        result = divide([1.0, -1.0], [0.0, 0.0])

    assert np.isposinf(result[0])
    assert np.isneginf(result[1])


def test_constant_arithmetic() -> None:
    samples = np.asarray([1.0, 2.0])

    assert np.array_equal(add_const(samples, 1.5), [2.5, 3.5])
    assert np.array_equal(subtract_const(samples, 1.0), [0.0, 1.0])
    assert np.array_equal(divide_const(samples, 4.0), [0.25, 0.5])
    with pytest.raises(InvalidParameterError, match="divisor must be non-zero"):
        divide_const(samples, 0)


def test_powi_and_sqrt() -> None:
    samples = np.asarray([1.0, 2.0, 3.0])

    assert np.array_equal(powi(samples, 3), [1.0, 8.0, 27.0])
    assert np.array_equal(powi(samples, 0), [1.0, 1.0, 1.0])
    assert np.allclose(sqrt([4.0, 9.0]), [2.0, 3.0])
    assert np.allclose(sqrt(np.asarray([-4.0 + 0j])), [2j])
    with pytest.raises(InvalidParameterError, match="power must be >= 0"):
        powi(samples, -1)
    with pytest.raises(InvalidParameterError, match="power must be an integer"):
        powi(samples, 2.5)  # type: ignore[arg-type]


def test_clamp_limits_real_samples() -> None:
    assert np.array_equal(clamp([-2.0, 0.5, 3.0], -1.0, 1.0), [-1.0, 0.5, 1.0])
    with pytest.raises(InvalidParameterError, match="lower cannot be greater"):
        clamp([0.0], 1.0, -1.0)
    with pytest.raises(CapabilityError, match="clamp requires real samples"):
        clamp([1 + 1j], -1.0, 1.0)
