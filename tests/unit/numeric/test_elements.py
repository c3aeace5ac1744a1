"""Tests for numeric element capabilities and sequence borrowing."""

from __future__ import annotations

import numpy as np
import pytest

from yttria.errors import CapabilityError, ShapeError
from yttria.numeric import (
    NumericKind,
    as_complex_signal,
    as_signal,
    capability_of,
    is_power_of_two,
    next_power_of_two,
    prime_factors,
    require_complex,
)


def test_capability_of_real_and_complex_dtypes() -> None:
    real = capability_of(np.float32)
    cplx = capability_of(np.complex128)

    assert real.kind == NumericKind.REAL
    assert not real.supports_conjugation
    assert real.complex_dtype == np.dtype(np.complex64)
    assert cplx.kind == NumericKind.COMPLEX
    assert cplx.supports_magnitude
    assert cplx.complex_dtype == np.dtype(np.complex128)


def test_capability_of_sequences_and_dtype_strings() -> None:
    assert capability_of([1, 2, 3]).dtype == np.dtype(np.float64)
    assert capability_of([1 + 2j]).kind == NumericKind.COMPLEX
    assert capability_of("float16").dtype == np.dtype(np.float16)


def test_capability_of_rejects_non_numeric() -> None:
    with pytest.raises(CapabilityError, match="non-numeric"):
        capability_of(np.asarray(["a", "b"]))


def test_as_signal_borrows_qualifying_arrays_without_copy() -> None:
    samples = np.asarray([1.0, 2.0, 3.0], dtype=np.float32)
    assert as_signal(samples) is samples


def test_as_signal_promotes_integers_and_booleans() -> None:
    ints = as_signal([1, 2, 3])
    flags = as_signal(np.asarray([True, False]))

    assert ints.dtype == np.float64
    assert np.array_equal(ints, [1.0, 2.0, 3.0])
    assert flags.dtype == np.float64


def test_as_signal_rejects_multidimensional_input() -> None:
    with pytest.raises(ShapeError, match="must be 1D"):
        as_signal(np.zeros((2, 2)))


def test_as_complex_signal_promotes_with_zero_imaginary_part() -> None:
    promoted = as_complex_signal(np.asarray([1.0, -2.0], dtype=np.float32))

    assert promoted.dtype == np.complex64
    assert np.array_equal(promoted.imag, [0.0, 0.0])


def test_require_complex_gates_real_input() -> None:
    with pytest.raises(CapabilityError, match="conjugate requires complex"):
        require_complex([1.0, 2.0], "conjugate")

    values = np.asarray([1j, 2j])
    assert require_complex(values, "conjugate") is values


def test_power_of_two_helpers() -> None:
    assert [n for n in range(1, 20) if is_power_of_two(n)] == [1, 2, 4, 8, 16]
    assert not is_power_of_two(0)
    assert next_power_of_two(0) == 1
    assert next_power_of_two(17) == 32
    assert next_power_of_two(64) == 64


def test_prime_factors_ascending_with_multiplicity() -> None:
    assert prime_factors(1) == ()
    assert prime_factors(360) == (2, 2, 2, 3, 3, 5)
    assert prime_factors(97) == (97,)
    with pytest.raises(ValueError, match=">= 1"):
        prime_factors(0)
