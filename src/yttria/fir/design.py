"""Windowed-sinc FIR design for low-pass, high-pass, band-pass and band-stop filters."""

from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np

from yttria.errors import InvalidParameterError
from yttria.fir.coefficients import FilterCoefficients, FilterResponse, FloatArray
from yttria.windows import WindowFamily
from yttria.windows import window as make_window


logger = logging.getLogger(__name__)

# Gains below this at the normalization frequency cannot be rescaled to unity.
_MIN_REFERENCE_GAIN = 1e-12

_BAND_RESPONSES = (FilterResponse.BANDPASS, FilterResponse.BANDSTOP)


def fir_design(
    cutoff: float | Sequence[float],
    order: int,
    window: WindowFamily | str = WindowFamily.HANN,
    *,
    response: FilterResponse | str = FilterResponse.LOWPASS,
    normalize: bool = True,
) -> FilterCoefficients:
    """Design a linear-phase FIR filter with ``order + 1`` taps.

    ``cutoff`` is normalized so that Nyquist is 1.0. Low-pass and high-pass take
    a single edge; band-pass and band-stop take ``(low, high)``. The low-pass
    kernel is ``fc * sinc(fc * (n - order / 2))`` tapered by the window.

    High-pass and band-stop kernels are spectral inversions, which need a centre
    tap, so they require an even order. With ``normalize`` the taps are scaled
    to unit gain at DC (low-pass, band-stop), Nyquist (high-pass) or the band
    centre (band-pass).
    """
    kind = _resolve_response(response)
    family = _resolve_window(window)
    _validate_order(order)
    edges = _validate_cutoff(cutoff, kind)
    num_taps = order + 1
    if kind in (FilterResponse.HIGHPASS, FilterResponse.BANDSTOP) and order % 2 == 1:
        raise InvalidParameterError(f"{kind.value} design requires an even order, got {order}")

    weights = make_window(family, num_taps)
    offsets = np.arange(num_taps, dtype=np.float64) - order / 2.0

    if kind == FilterResponse.LOWPASS:
        taps = _windowed_sinc(edges[0], offsets, weights)
        reference = 0.0
    elif kind == FilterResponse.HIGHPASS:
        lowpass = _unity_at(_windowed_sinc(edges[0], offsets, weights), offsets, 0.0)
        taps = _spectral_inversion(lowpass)
        reference = 1.0
    else:
        centre = 0.5 * (edges[0] + edges[1])
        half_width = 0.5 * (edges[1] - edges[0])
        taps = 2.0 * np.cos(math.pi * centre * offsets) * _windowed_sinc(half_width, offsets, weights)
        reference = centre
        if kind == FilterResponse.BANDSTOP:
            taps = _spectral_inversion(_unity_at(taps, offsets, centre))
            reference = 0.0

    if normalize:
        taps = _unity_at(taps, offsets, reference)

    logger.debug(
        "Designed %s FIR: order=%d cutoff=%s window=%s",
        kind.value,
        order,
        edges,
        family.value,
    )
    return FilterCoefficients(
        taps=np.ascontiguousarray(taps, dtype=np.float64),
        response=kind,
        window=family,
        cutoff=edges,
        normalized=normalize,
    )


def _windowed_sinc(edge: float, offsets: FloatArray, weights: FloatArray) -> FloatArray:
    return edge * np.sinc(edge * offsets) * weights


def _spectral_inversion(taps: FloatArray) -> FloatArray:
    inverted = -taps
    inverted[taps.size // 2] += 1.0
    return inverted


def _gain_at(taps: FloatArray, offsets: FloatArray, frequency: float) -> float:
    # Symmetric taps have a purely real zero-phase response.
    return float(np.sum(taps * np.cos(math.pi * frequency * offsets)))


def _unity_at(taps: FloatArray, offsets: FloatArray, frequency: float) -> FloatArray:
    gain = _gain_at(taps, offsets, frequency)
    if abs(gain) < _MIN_REFERENCE_GAIN:
        raise InvalidParameterError(
            f"designed gain at normalized frequency {frequency:g} is zero; "
            "increase the order or choose a different window"
        )
    return taps / gain


def _resolve_response(response: FilterResponse | str) -> FilterResponse:
    try:
        kind = FilterResponse(response)
    except ValueError as exc:
        raise InvalidParameterError(f"Unknown filter response: {response!r}") from exc
    if kind == FilterResponse.ARBITRARY:
        raise InvalidParameterError("arbitrary responses are designed with fir_design_from_response")
    return kind


def _resolve_window(window: WindowFamily | str) -> WindowFamily:
    try:
        return WindowFamily(window)
    except ValueError as exc:
        raise InvalidParameterError(f"Unknown window family: {window!r}") from exc


def _validate_order(order: int) -> None:
    if isinstance(order, bool) or not isinstance(order, (int, np.integer)):
        raise InvalidParameterError(f"order must be an integer, got {order!r}")
    if order < 1:
        raise InvalidParameterError(f"order must be >= 1, got {order}")


def _validate_cutoff(cutoff: float | Sequence[float], kind: FilterResponse) -> tuple[float, ...]:
    try:
        values = np.atleast_1d(np.asarray(cutoff, dtype=np.float64))
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(f"cutoff must be numeric, got {cutoff!r}") from exc
    if kind in _BAND_RESPONSES and values.shape != (2,):
        raise InvalidParameterError(f"{kind.value} design requires a (low, high) cutoff pair")
    if kind not in _BAND_RESPONSES and values.shape != (1,):
        raise InvalidParameterError(f"{kind.value} design requires a single cutoff")

    edges = tuple(float(edge) for edge in values)
    for edge in edges:
        if not math.isfinite(edge) or not 0.0 < edge < 1.0:
            raise InvalidParameterError(f"cutoff must satisfy 0 < cutoff < 1 (Nyquist = 1), got {edge}")
    if len(edges) == 2 and not edges[0] < edges[1]:
        raise InvalidParameterError(f"band edges must be increasing, got {edges}")
    return edges
