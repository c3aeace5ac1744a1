"""Generalized cosine-sum window families."""

from __future__ import annotations

import math
from enum import StrEnum
from typing import Sequence

import numpy as np
import numpy.typing as npt

from yttria.errors import InvalidParameterError, ShapeError


FloatArray = npt.NDArray[np.float64]


class WindowFamily(StrEnum):
    """Supported window families, all expressed as cosine sums."""

    RECTANGULAR = "rectangular"
    HANN = "hann"
    HAMMING = "hamming"
    BLACKMAN = "blackman"
    BLACKMAN_HARRIS = "blackman_harris"
    FLAT_TOP = "flat_top"


# Hamming uses a0 = 25/46, which places a zero on the first sidelobe.
COSINE_COEFFICIENTS: dict[WindowFamily, tuple[float, ...]] = {
    WindowFamily.RECTANGULAR: (1.0,),
    WindowFamily.HANN: (0.5, 0.5),
    WindowFamily.HAMMING: (25.0 / 46.0, 21.0 / 46.0),
    WindowFamily.BLACKMAN: (0.42, 0.5, 0.08),
    WindowFamily.BLACKMAN_HARRIS: (0.35875, 0.48829, 0.14128, 0.01168),
    WindowFamily.FLAT_TOP: (0.21557895, 0.41663158, 0.277263158, 0.083578947, 0.006947368),
}


def window(family: WindowFamily | str, length: int, *, symmetric: bool = True) -> FloatArray:
    """Generate ``length`` weights of a window family.

    Symmetric windows (filter design) use ``length - 1`` as the period; periodic
    windows (spectral analysis) use ``length``. A length of 0 yields an empty
    array and a length of 1 yields ``[1.0]`` for every family. The returned
    array is read-only.
    """
    try:
        resolved = WindowFamily(family)
    except ValueError as exc:
        raise InvalidParameterError(f"Unknown window family: {family!r}") from exc
    return cosine_sum(length, COSINE_COEFFICIENTS[resolved], symmetric=symmetric)


def cosine_sum(length: int, coefficients: Sequence[float], *, symmetric: bool = True) -> FloatArray:
    """Evaluate ``w[n] = sum_k (-1)**k * a_k * cos(2*pi*k*n / D)``."""
    _validate_length(length)
    if not coefficients:
        raise InvalidParameterError("coefficients must not be empty")
    if length == 0:
        return _frozen(np.zeros(0, dtype=np.float64))
    if length == 1:
        return _frozen(np.ones(1, dtype=np.float64))

    period = length - 1 if symmetric else length
    phase = 2.0 * math.pi * np.arange(length, dtype=np.float64) / period
    weights = np.zeros(length, dtype=np.float64)
    for k, coefficient in enumerate(coefficients):
        weights += (-1.0) ** k * float(coefficient) * np.cos(k * phase)

    if symmetric:
        half = (length + 1) // 2
        weights[length - half :] = weights[:half][::-1]
    return _frozen(weights)


def rectangular(length: int) -> FloatArray:
    return window(WindowFamily.RECTANGULAR, length)


def hann(length: int, *, symmetric: bool = True) -> FloatArray:
    return window(WindowFamily.HANN, length, symmetric=symmetric)


def hamming(length: int, *, symmetric: bool = True) -> FloatArray:
    return window(WindowFamily.HAMMING, length, symmetric=symmetric)


def blackman(length: int, *, symmetric: bool = True) -> FloatArray:
    return window(WindowFamily.BLACKMAN, length, symmetric=symmetric)


def coherent_gain(weights: npt.ArrayLike) -> float:
    """Mean weight: amplitude scaling a windowed sinusoid experiences."""
    w = _as_weights(weights)
    return float(np.sum(w) / w.size)


def equivalent_noise_bandwidth(weights: npt.ArrayLike) -> float:
    """Equivalent noise bandwidth in bins: ``N * sum(w**2) / sum(w)**2``."""
    w = _as_weights(weights)
    total = float(np.sum(w))
    if total == 0:
        raise InvalidParameterError("weights must not sum to zero")
    return float(w.size * np.sum(np.square(w)) / total**2)


def _validate_length(length: int) -> None:
    if isinstance(length, bool) or not isinstance(length, (int, np.integer)):
        raise InvalidParameterError(f"length must be an integer, got {length!r}")
    if length < 0:
        raise InvalidParameterError("length must be >= 0")


def _as_weights(weights: npt.ArrayLike) -> FloatArray:
    w = np.asarray(weights, dtype=np.float64)
    if w.ndim != 1:
        raise ShapeError("weights must be 1D")
    if w.size == 0:
        raise ShapeError("weights must not be empty")
    return w


def _frozen(weights: FloatArray) -> FloatArray:
    weights.flags.writeable = False
    return weights
