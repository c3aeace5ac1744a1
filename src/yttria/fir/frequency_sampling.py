"""Frequency-sampling FIR design from a piecewise-linear gain curve."""

from __future__ import annotations

import math

import numpy as np
import numpy.typing as npt

from yttria.elementwise import interp
from yttria.errors import InvalidParameterError, LengthMismatchError
from yttria.fft import irfft
from yttria.fir.coefficients import FilterCoefficients, FilterResponse
from yttria.numeric import NumericKind, as_signal, capability_of
from yttria.windows import WindowFamily
from yttria.windows import window as make_window


def fir_design_from_response(
    num_taps: int,
    freqs: npt.ArrayLike,
    gains: npt.ArrayLike,
    window: WindowFamily | str = WindowFamily.HAMMING,
    *,
    antisymmetric: bool = False,
    grid_size: int | None = None,
) -> FilterCoefficients:
    """Design taps whose response follows ``gains`` at the normalized ``freqs``.

    ``freqs`` must start at 0.0, end at 1.0 (Nyquist) and be non-decreasing; a
    frequency may appear twice to describe a step. The gain curve is sampled on
    ``grid_size`` points (default ``1 + 2**ceil(log2(num_taps))``), given a
    linear-phase delay of ``(num_taps - 1) / 2`` samples, inverted with a real
    FFT, truncated to ``num_taps`` and tapered by ``window``.

    The tap count and symmetry fix the linear-phase type, and each type forces
    zeros the gain curve has to respect:

    * even ``num_taps``, symmetric (type II): zero gain at Nyquist;
    * odd ``num_taps``, antisymmetric (type III): zero gain at DC and Nyquist;
    * even ``num_taps``, antisymmetric (type IV): zero gain at DC.
    """
    if isinstance(num_taps, bool) or not isinstance(num_taps, (int, np.integer)) or num_taps < 1:
        raise InvalidParameterError(f"num_taps must be a positive integer, got {num_taps!r}")
    try:
        family = WindowFamily(window)
    except ValueError as exc:
        raise InvalidParameterError(f"Unknown window family: {window!r}") from exc

    grid = _validated_freqs(freqs)
    curve = as_signal(gains, name="gains")
    if capability_of(curve.dtype).kind != NumericKind.REAL:
        raise InvalidParameterError("gains must be real")
    if curve.size != grid.size:
        raise LengthMismatchError("gains", grid.size, curve.size)
    _check_linear_phase_type(num_taps, antisymmetric, float(curve[0]), float(curve[-1]))

    if grid_size is None:
        grid_size = 1 + 2 ** math.ceil(math.log2(num_taps))
    elif grid_size < max(2, num_taps):
        raise InvalidParameterError(f"grid_size must be >= max(2, num_taps), got {grid_size}")

    points = np.linspace(0.0, 1.0, grid_size, dtype=np.float64)
    sampled = interp(points, _separate_steps(grid), curve.astype(np.float64))
    shift = np.exp(-(num_taps - 1) / 2.0 * 1j * math.pi * points)
    if antisymmetric:
        shift *= 1j

    impulse = irfft(sampled * shift)
    taps = impulse[:num_taps] * make_window(family, num_taps)
    if antisymmetric and num_taps % 2 == 1:
        taps[num_taps // 2] = 0.0

    return FilterCoefficients(
        taps=np.ascontiguousarray(taps, dtype=np.float64),
        response=FilterResponse.ARBITRARY,
        window=family,
        normalized=False,
    )


def _validated_freqs(freqs: npt.ArrayLike) -> np.ndarray:
    grid = as_signal(freqs, name="freqs")
    if capability_of(grid.dtype).kind != NumericKind.REAL:
        raise InvalidParameterError("freqs must be real")
    grid = grid.astype(np.float64)
    if grid.size < 2:
        raise InvalidParameterError("freqs must contain at least the points 0.0 and 1.0")
    if grid[0] != 0.0 or grid[-1] != 1.0:
        raise InvalidParameterError("freqs must start at 0.0 and end at 1.0")
    steps = np.diff(grid)
    if np.any(steps < 0):
        raise InvalidParameterError("freqs must be non-decreasing")
    if np.any((steps[:-1] == 0) & (steps[1:] == 0)):
        raise InvalidParameterError("a frequency may appear at most twice")
    if steps[0] == 0 or steps[-1] == 0:
        raise InvalidParameterError("freqs may not repeat at 0.0 or 1.0")
    return grid


def _separate_steps(grid: np.ndarray) -> np.ndarray:
    """Pull repeated frequencies apart by machine epsilon so interpolation sees a step."""
    separated = grid.copy()
    eps = np.finfo(np.float64).eps
    for idx in np.flatnonzero(np.diff(grid) == 0):
        separated[idx] -= eps
        separated[idx + 1] += eps
    return separated


def _check_linear_phase_type(num_taps: int, antisymmetric: bool, dc_gain: float, nyquist_gain: float) -> None:
    even = num_taps % 2 == 0
    if not antisymmetric and even and nyquist_gain != 0.0:
        raise InvalidParameterError("a symmetric filter with an even number of taps must have zero gain at Nyquist")
    if antisymmetric and not even and (dc_gain != 0.0 or nyquist_gain != 0.0):
        raise InvalidParameterError(
            "an antisymmetric filter with an odd number of taps must have zero gain at DC and Nyquist"
        )
    if antisymmetric and even and dc_gain != 0.0:
        raise InvalidParameterError("an antisymmetric filter with an even number of taps must have zero gain at DC")
