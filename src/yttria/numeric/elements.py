"""Numeric element capabilities for real and complex sample sequences."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

import numpy as np
import numpy.typing as npt

from yttria.errors import CapabilityError, ShapeError


FloatArray = npt.NDArray[np.floating]
ComplexArray = npt.NDArray[np.complexfloating]
SignalArray = npt.NDArray[np.inexact]


class NumericKind(StrEnum):
    """Capability variant of a qualifying element type."""

    REAL = "real"
    COMPLEX = "complex"


@dataclass(frozen=True, slots=True)
class ElementCapability:
    """Capability set exposed by one qualifying element dtype."""

    kind: NumericKind
    dtype: np.dtype

    def __post_init__(self) -> None:
        expected = NumericKind.COMPLEX if np.issubdtype(self.dtype, np.complexfloating) else NumericKind.REAL
        if not np.issubdtype(self.dtype, np.inexact):
            raise CapabilityError(f"dtype {self.dtype} is not a qualifying numeric element type")
        if self.kind != expected:
            raise CapabilityError(f"dtype {self.dtype} does not match kind {self.kind.value}")

    @property
    def supports_conjugation(self) -> bool:
        """Whether conjugation-based operations are defined for this element."""
        return self.kind == NumericKind.COMPLEX

    @property
    def supports_magnitude(self) -> bool:
        return self.kind == NumericKind.COMPLEX

    @property
    def complex_dtype(self) -> np.dtype:
        """Complex dtype this element is promoted to for spectral work."""
        if self.kind == NumericKind.COMPLEX:
            return self.dtype
        if self.dtype.itemsize <= 4:
            return np.dtype(np.complex64)
        return np.dtype(np.complex128)


def capability_of(value: npt.DTypeLike | npt.ArrayLike) -> ElementCapability:
    """Return the element capability for a dtype or a sequence.

    Integer and boolean inputs report the ``float64`` capability they are
    promoted to by :func:`as_signal`.
    """
    dtype = _qualifying_dtype(_dtype_of(value))
    kind = NumericKind.COMPLEX if np.issubdtype(dtype, np.complexfloating) else NumericKind.REAL
    return ElementCapability(kind=kind, dtype=dtype)


def as_signal(sequence: npt.ArrayLike, *, name: str = "sequence") -> SignalArray:
    """Borrow a caller sequence as a 1-D array of a qualifying dtype.

    Arrays that already hold a floating or complex dtype are returned without
    copying. Integer and boolean sequences are promoted to ``float64``.
    """
    arr = np.asarray(sequence)
    if arr.ndim != 1:
        raise ShapeError(f"{name} must be 1D, got {arr.ndim} dimensions")
    dtype = _qualifying_dtype(arr.dtype, name=name)
    if dtype != arr.dtype:
        arr = arr.astype(dtype)
    return arr


def as_complex_signal(sequence: npt.ArrayLike, *, name: str = "sequence") -> ComplexArray:
    """Borrow a sequence as complex, promoting real samples with a zero imaginary part."""
    arr = as_signal(sequence, name=name)
    target = capability_of(arr.dtype).complex_dtype
    if arr.dtype != target:
        arr = arr.astype(target)
    return arr


def require_complex(sequence: npt.ArrayLike, operation: str, *, name: str = "sequence") -> ComplexArray:
    """Gate a complex-only operation on the element capability of ``sequence``."""
    arr = as_signal(sequence, name=name)
    if not capability_of(arr.dtype).supports_conjugation:
        raise CapabilityError(
            f"{operation} requires complex samples; {name} has real dtype {arr.dtype}"
        )
    return arr


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (1 for n <= 1)."""
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def prime_factors(n: int) -> tuple[int, ...]:
    """Prime factorization of ``n`` in ascending order, with multiplicity."""
    if n < 1:
        raise ValueError("n must be >= 1")
    factors: list[int] = []
    remaining = n
    divisor = 2
    while divisor * divisor <= remaining:
        while remaining % divisor == 0:
            factors.append(divisor)
            remaining //= divisor
        divisor += 1 if divisor == 2 else 2
    if remaining > 1:
        factors.append(remaining)
    return tuple(factors)


def _dtype_of(value: npt.DTypeLike | npt.ArrayLike) -> np.dtype:
    if isinstance(value, np.dtype):
        return value
    if isinstance(value, str):
        return np.dtype(value)
    if isinstance(value, type) and issubclass(value, (np.generic, int, float, complex, bool)):
        return np.dtype(value)
    return np.asarray(value).dtype


def _qualifying_dtype(dtype: np.dtype, *, name: str = "sequence") -> np.dtype:
    if np.issubdtype(dtype, np.inexact):
        return dtype
    if np.issubdtype(dtype, np.integer) or np.issubdtype(dtype, np.bool_):
        return np.dtype(np.float64)
    raise CapabilityError(f"{name} has non-numeric dtype {dtype}")
