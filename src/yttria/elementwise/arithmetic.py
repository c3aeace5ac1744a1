"""Length-preserving elementwise arithmetic on caller-owned sequences."""

from __future__ import annotations

from numbers import Number

import numpy as np
import numpy.typing as npt

from yttria.errors import CapabilityError, InvalidParameterError
from yttria.numeric import NumericKind, capability_of
from yttria.parallel import BinaryOperation, ParallelDispatch, UnaryOperation


def map_elements(
    sequence: npt.ArrayLike,
    func: UnaryOperation,
    *,
    out: np.ndarray | None = None,
    threshold: int | None = None,
) -> np.ndarray:
    """Apply a vectorized unary transform to every element of ``sequence``.

    ``func`` is called on contiguous chunks (views) and must return an array of
    the chunk's length; it should not depend on where a chunk starts.
    """
    return ParallelDispatch(threshold=threshold).apply(sequence, func, out=out)


def zip_elements(
    a: npt.ArrayLike,
    b: npt.ArrayLike,
    func: BinaryOperation,
    *,
    out: np.ndarray | None = None,
    threshold: int | None = None,
) -> np.ndarray:
    """Apply a vectorized binary transform pairwise across two equal-length sequences.

    Unequal lengths raise :class:`~yttria.errors.LengthMismatchError` before any
    element is computed or written.
    """
    return ParallelDispatch(threshold=threshold).apply_binary(a, b, func, out=out)


def scale(
    sequence: npt.ArrayLike,
    factor: complex,
    *,
    out: np.ndarray | None = None,
    threshold: int | None = None,
) -> np.ndarray:
    """Multiply every element by a scalar."""
    _check_scalar(factor, "factor")
    return map_elements(sequence, lambda chunk: chunk * factor, out=out, threshold=threshold)


def add(
    a: npt.ArrayLike,
    b: npt.ArrayLike,
    *,
    out: np.ndarray | None = None,
    threshold: int | None = None,
) -> np.ndarray:
    return zip_elements(a, b, np.add, out=out, threshold=threshold)


def subtract(
    a: npt.ArrayLike,
    b: npt.ArrayLike,
    *,
    out: np.ndarray | None = None,
    threshold: int | None = None,
) -> np.ndarray:
    return zip_elements(a, b, np.subtract, out=out, threshold=threshold)


def multiply(
    a: npt.ArrayLike,
    b: npt.ArrayLike,
    *,
    out: np.ndarray | None = None,
    threshold: int | None = None,
) -> np.ndarray:
    return zip_elements(a, b, np.multiply, out=out, threshold=threshold)


def divide(
    a: npt.ArrayLike,
    b: npt.ArrayLike,
    *,
    out: np.ndarray | None = None,
    threshold: int | None = None,
) -> np.ndarray:
    """Elementwise true division; division by zero follows IEEE-754 (inf/nan)."""
    return zip_elements(a, b, np.true_divide, out=out, threshold=threshold)


def add_const(
    sequence: npt.ArrayLike,
    addend: complex,
    *,
    out: np.ndarray | None = None,
    threshold: int | None = None,
) -> np.ndarray:
    _check_scalar(addend, "addend")
    return map_elements(sequence, lambda chunk: chunk + addend, out=out, threshold=threshold)


def subtract_const(
    sequence: npt.ArrayLike,
    subtrahend: complex,
    *,
    out: np.ndarray | None = None,
    threshold: int | None = None,
) -> np.ndarray:
    _check_scalar(subtrahend, "subtrahend")
    return map_elements(sequence, lambda chunk: chunk - subtrahend, out=out, threshold=threshold)


def multiply_const(
    sequence: npt.ArrayLike,
    multiplier: complex,
    *,
    out: np.ndarray | None = None,
    threshold: int | None = None,
) -> np.ndarray:
    return scale(sequence, multiplier, out=out, threshold=threshold)


def divide_const(
    sequence: npt.ArrayLike,
    divisor: complex,
    *,
    out: np.ndarray | None = None,
    threshold: int | None = None,
) -> np.ndarray:
    _check_scalar(divisor, "divisor")
    if divisor == 0:
        raise InvalidParameterError("divisor must be non-zero")
    return map_elements(sequence, lambda chunk: chunk / divisor, out=out, threshold=threshold)


def powi(
    sequence: npt.ArrayLike,
    power: int,
    *,
    out: np.ndarray | None = None,
    threshold: int | None = None,
) -> np.ndarray:
    """Raise every element to a non-negative integer power."""
    if isinstance(power, bool) or not isinstance(power, (int, np.integer)):
        raise InvalidParameterError(f"power must be an integer, got {power!r}")
    if power < 0:
        raise InvalidParameterError("power must be >= 0")
    exponent = int(power)
    return map_elements(
        sequence,
        lambda chunk: np.power(chunk, exponent),
        out=out,
        threshold=threshold,
    )


def sqrt(
    sequence: npt.ArrayLike,
    *,
    out: np.ndarray | None = None,
    threshold: int | None = None,
) -> np.ndarray:
    """Elementwise principal square root (negative real samples give nan)."""
    return map_elements(sequence, np.sqrt, out=out, threshold=threshold)


def clamp(
    sequence: npt.ArrayLike,
    lower: float,
    upper: float,
    *,
    out: np.ndarray | None = None,
    threshold: int | None = None,
) -> np.ndarray:
    """Limit every element to ``[lower, upper]``; real samples only."""
    if capability_of(sequence).kind != NumericKind.REAL:
        raise CapabilityError("clamp requires real samples; complex values have no ordering")
    if lower > upper:
        raise InvalidParameterError("lower cannot be greater than upper")
    return map_elements(
        sequence,
        lambda chunk: np.clip(chunk, lower, upper),
        out=out,
        threshold=threshold,
    )


def _check_scalar(value: object, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (Number, np.number)):
        raise InvalidParameterError(f"{name} must be a numeric scalar, got {type(value).__name__}")
