"""Reductions that collapse a sequence to a single sample.

Parallel reductions combine per-chunk partials with a pairwise tree by chunk
index. For a fixed partition the result is deterministic, but it may differ in
the last bits from a strictly sequential left-to-right accumulation.
"""

from __future__ import annotations

import operator
from typing import Callable, TypeVar

import numpy as np
import numpy.typing as npt

from yttria.errors import CapabilityError, LengthMismatchError, ShapeError
from yttria.numeric import NumericKind, SignalArray, as_signal, capability_of
from yttria.parallel import ParallelDispatch, tree_combine


T = TypeVar("T")


def reduce_elements(
    sequence: npt.ArrayLike,
    reducer: Callable[[SignalArray], T],
    combine: Callable[[T, T], T] = operator.add,
    *,
    threshold: int | None = None,
) -> T:
    """Reduce ``sequence`` chunk-wise with ``reducer`` and merge partials with ``combine``.

    ``combine`` must be associative for parallel and sequential execution to
    agree beyond rounding.
    """
    return ParallelDispatch(threshold=threshold).reduce(sequence, reducer, combine)


def sum_elements(sequence: npt.ArrayLike, *, threshold: int | None = None) -> np.inexact:
    """Sum of all elements (zero of the element dtype for an empty sequence)."""
    return reduce_elements(sequence, np.sum, operator.add, threshold=threshold)


def dot(a: npt.ArrayLike, b: npt.ArrayLike, *, threshold: int | None = None) -> np.inexact:
    """Non-conjugating dot product ``sum(a[i] * b[i])``."""
    x = as_signal(a, name="a")
    y = as_signal(b, name="b")
    if x.size != y.size:
        raise LengthMismatchError("b", x.size, y.size)
    dispatch = ParallelDispatch(threshold=threshold)
    partials = dispatch.run_chunks(x.size, lambda chunk: np.dot(x[chunk], y[chunk]))
    return tree_combine(partials, operator.add)


def mean(sequence: npt.ArrayLike, *, threshold: int | None = None) -> np.inexact:
    x = _non_empty(sequence, "mean")
    return sum_elements(x, threshold=threshold) / x.size


def variance(sequence: npt.ArrayLike, *, threshold: int | None = None) -> np.floating:
    """Population variance (mean squared deviation); real-valued for complex input."""
    x = _non_empty(sequence, "variance")
    center = mean(x, threshold=threshold)
    squared = reduce_elements(
        x,
        lambda chunk: np.sum(np.abs(chunk - center) ** 2),
        operator.add,
        threshold=threshold,
    )
    return squared / x.size


def std(sequence: npt.ArrayLike, *, threshold: int | None = None) -> np.floating:
    return np.sqrt(variance(sequence, threshold=threshold))


def minimum(sequence: npt.ArrayLike, *, threshold: int | None = None) -> np.floating:
    x = _non_empty_real(sequence, "minimum")
    return reduce_elements(x, np.min, np.minimum, threshold=threshold)


def maximum(sequence: npt.ArrayLike, *, threshold: int | None = None) -> np.floating:
    x = _non_empty_real(sequence, "maximum")
    return reduce_elements(x, np.max, np.maximum, threshold=threshold)


def extremes(
    sequence: npt.ArrayLike,
    *,
    threshold: int | None = None,
) -> tuple[np.floating, np.floating]:
    """``(minimum, maximum)`` computed in a single pass."""
    x = _non_empty_real(sequence, "extremes")
    return reduce_elements(
        x,
        lambda chunk: (np.min(chunk), np.max(chunk)),
        lambda left, right: (np.minimum(left[0], right[0]), np.maximum(left[1], right[1])),
        threshold=threshold,
    )


def trapz(sequence: npt.ArrayLike, *, threshold: int | None = None) -> np.inexact:
    """Trapezoidal integral of uniformly spaced samples with unit spacing."""
    x = as_signal(sequence)
    if x.size < 2:
        return x.dtype.type(0)
    total = sum_elements(x, threshold=threshold)
    return total - (x[0] + x[-1]) / 2


def _non_empty(sequence: npt.ArrayLike, operation: str) -> SignalArray:
    x = as_signal(sequence)
    if x.size == 0:
        raise ShapeError(f"{operation} requires at least one sample")
    return x


def _non_empty_real(sequence: npt.ArrayLike, operation: str) -> SignalArray:
    x = _non_empty(sequence, operation)
    if capability_of(x.dtype).kind != NumericKind.REAL:
        raise CapabilityError(f"{operation} requires real samples; complex values have no ordering")
    return x
