"""Sequence utilities: convolution, differences, scans, interpolation and shifts."""

from __future__ import annotations

import math
from enum import StrEnum

import numpy as np
import numpy.typing as npt

from yttria.errors import CapabilityError, InvalidParameterError, LengthMismatchError, ShapeError
from yttria.numeric import NumericKind, SignalArray, as_signal, capability_of
from yttria.parallel import ParallelDispatch, check_output


class ConvolutionMode(StrEnum):
    """Output extent of a linear convolution."""

    FULL = "full"
    CAUSAL = "causal"


def convolve(
    a: npt.ArrayLike,
    b: npt.ArrayLike,
    *,
    mode: ConvolutionMode | str = ConvolutionMode.CAUSAL,
    threshold: int | None = None,
) -> np.ndarray:
    """Linear convolution of ``a`` with kernel ``b``.

    ``CAUSAL`` keeps the first ``len(a)`` outputs, so the result has the length
    of ``a`` (FIR filtering). ``FULL`` returns all ``len(a) + len(b) - 1`` outputs.
    Parallel chunks are split over output indices, each reading only the input
    window it needs.
    """
    conv_mode = ConvolutionMode(mode)
    x = as_signal(a, name="a")
    kernel = as_signal(b, name="b")
    if x.size == 0 or kernel.size == 0:
        raise ShapeError("convolve requires non-empty operands")

    full_length = x.size + kernel.size - 1
    out_length = x.size if conv_mode == ConvolutionMode.CAUSAL else full_length
    reach = kernel.size - 1

    def work(chunk: slice) -> np.ndarray:
        lo = max(0, chunk.start - reach)
        hi = min(chunk.stop, x.size)
        partial = np.convolve(x[lo:hi], kernel)
        return partial[chunk.start - lo : chunk.stop - lo]

    parts = ParallelDispatch(threshold=threshold).run_chunks(out_length, work)
    return np.concatenate(parts)


def diff(sequence: npt.ArrayLike, *, threshold: int | None = None) -> np.ndarray:
    """First difference ``x[i + 1] - x[i]``; the result is one sample shorter."""
    x = as_signal(sequence)
    if x.size == 0:
        raise ShapeError("diff requires at least one sample")

    def work(chunk: slice) -> np.ndarray:
        return x[chunk.start + 1 : chunk.stop + 1] - x[chunk]

    parts = ParallelDispatch(threshold=threshold).run_chunks(x.size - 1, work)
    return np.concatenate(parts)


def cumsum(
    sequence: npt.ArrayLike,
    *,
    out: np.ndarray | None = None,
    threshold: int | None = None,
) -> np.ndarray:
    """Running sum.

    In parallel, each chunk is scanned independently and then shifted by the
    sum of all preceding chunk totals, so rounding depends on the partition.
    """
    x = as_signal(sequence)
    dispatch = ParallelDispatch(threshold=threshold)
    if out is not None:
        check_output(out, x.size, dtype=x.dtype)
    if not dispatch.should_parallelize(x.size):
        return np.cumsum(x, out=out)

    chunk_index = {chunk.start: idx for idx, chunk in enumerate(dispatch.partition(x.size))}
    scans = dispatch.run_chunks(x.size, lambda chunk: np.cumsum(x[chunk]))
    offsets = np.cumsum([x.dtype.type(0)] + [scan[-1] for scan in scans[:-1]])
    target = np.empty(x.size, dtype=x.dtype) if out is None else out

    def shift(chunk: slice) -> None:
        idx = chunk_index[chunk.start]
        target[chunk] = scans[idx] + offsets[idx]

    dispatch.run_chunks(x.size, shift)
    return target


def interp(
    x: npt.ArrayLike,
    xp: npt.ArrayLike,
    fp: npt.ArrayLike,
    *,
    threshold: int | None = None,
) -> np.ndarray:
    """Piecewise-linear interpolation of ``(xp, fp)`` at ``x``, clamped at both ends."""
    points = _real(as_signal(x, name="x"), "interp")
    grid = _real(as_signal(xp, name="xp"), "interp")
    values = as_signal(fp, name="fp")
    if grid.size == 0:
        raise ShapeError("xp must not be empty")
    if grid.size != values.size:
        raise LengthMismatchError("fp", grid.size, values.size)
    if np.any(np.diff(grid) < 0):
        raise InvalidParameterError("xp must be non-decreasing")
    return ParallelDispatch(threshold=threshold).apply(
        points,
        lambda chunk: np.interp(chunk, grid, values),
    )


def unwrap_phase(sequence: npt.ArrayLike, *, period: float = 2.0 * math.pi) -> np.ndarray:
    """Remove jumps larger than ``period / 2`` between consecutive samples."""
    if not period > 0:
        raise InvalidParameterError("period must be > 0")
    x = _real(as_signal(sequence), "unwrap_phase")
    if x.size == 0:
        return x.copy()
    return np.unwrap(x, period=period)


def roll(sequence: npt.ArrayLike, shift: int, *, threshold: int | None = None) -> np.ndarray:
    """Circularly shift so that ``out[i] == x[(i - shift) % n]``."""
    x = as_signal(sequence)
    if x.size == 0:
        return x.copy()
    offset = int(shift) % x.size

    def work(chunk: slice) -> np.ndarray:
        return x[(np.arange(chunk.start, chunk.stop) - offset) % x.size]

    parts = ParallelDispatch(threshold=threshold).run_chunks(x.size, work)
    return np.concatenate(parts)


def fftshift(sequence: npt.ArrayLike, *, threshold: int | None = None) -> np.ndarray:
    """Move the zero-frequency bin to index ``n // 2``."""
    x = as_signal(sequence)
    return roll(x, x.size // 2, threshold=threshold)


def ifftshift(sequence: npt.ArrayLike, *, threshold: int | None = None) -> np.ndarray:
    """Inverse of :func:`fftshift`, including for odd lengths."""
    x = as_signal(sequence)
    return roll(x, -(x.size // 2), threshold=threshold)


def linspace(start: float, stop: float, size: int, *, endpoint: bool = True) -> np.ndarray:
    if size < 0:
        raise InvalidParameterError("size must be >= 0")
    return np.linspace(start, stop, size, endpoint=endpoint, dtype=np.float64)


def arange(start: float, stop: float, step: float = 1.0) -> np.ndarray:
    if step == 0:
        raise InvalidParameterError("step must be non-zero")
    return np.arange(start, stop, step, dtype=np.float64)


def _real(x: SignalArray, operation: str) -> SignalArray:
    if capability_of(x.dtype).kind != NumericKind.REAL:
        raise CapabilityError(f"{operation} requires real samples")
    return x
