"""Tests for frequency-sampling FIR design."""

from __future__ import annotations

import numpy as np
import pytest
from scipy.signal import firwin2

from yttria.errors import InvalidParameterError, LengthMismatchError
from yttria.fir import FilterResponse, fir_design_from_response
from yttria.windows import WindowFamily

HAMMING_25_46 = ("general_hamming", 25.0 / 46.0)


def test_lowpass_curve_matches_scipy() -> None:
    freqs = [0.0, 0.3, 0.6, 1.0]
    gains = [1.0, 1.0, 0.0, 0.0]
    coefficients = fir_design_from_response(31, freqs, gains)

    assert coefficients.response == FilterResponse.ARBITRARY
    assert coefficients.window == WindowFamily.HAMMING
    assert coefficients.num_taps == 31
    assert coefficients.is_symmetric
    assert np.allclose(coefficients.taps, firwin2(31, freqs, gains, window=HAMMING_25_46), atol=1e-12)


def test_even_tap_count_with_zero_nyquist_gain() -> None:
    freqs = [0.0, 0.5, 1.0]
    gains = [1.0, 0.5, 0.0]
    coefficients = fir_design_from_response(20, freqs, gains, WindowFamily.HANN)

    assert coefficients.num_taps == 20
    assert coefficients.is_symmetric
    assert np.allclose(coefficients.taps, firwin2(20, freqs, gains, window="hann"), atol=1e-12)


def test_antisymmetric_differentiator_matches_scipy() -> None:
    freqs = [0.0, 1.0]
    gains = [0.0, 1.0]
    coefficients = fir_design_from_response(16, freqs, gains, antisymmetric=True)

    assert coefficients.is_antisymmetric
    assert np.allclose(
        coefficients.taps,
        firwin2(16, freqs, gains, window=HAMMING_25_46, antisymmetric=True),
        atol=1e-12,
    )


def test_type_three_zeroes_the_centre_tap() -> None:
    coefficients = fir_design_from_response(
        15,
        [0.0, 0.5, 1.0],
        [0.0, 1.0, 0.0],
        antisymmetric=True,
    )

    assert coefficients.taps[7] == 0.0
    assert coefficients.is_antisymmetric


def test_explicit_grid_size_matches_scipy() -> None:
    freqs = [0.0, 0.25, 0.5, 1.0]
    gains = [0.0, 1.0, 1.0, 0.0]
    coefficients = fir_design_from_response(21, freqs, gains, grid_size=257)
    reference = firwin2(21, freqs, gains, nfreqs=257, window=HAMMING_25_46)

    assert np.allclose(coefficients.taps, reference, atol=1e-12)


@pytest.mark.parametrize(
    ("num_taps", "gains", "antisymmetric", "message"),
    [
        (20, [1.0, 1.0], False, "zero gain at Nyquist"),
        (21, [0.0, 1.0], True, "zero gain at DC and Nyquist"),
        (20, [1.0, 0.0], True, "zero gain at DC"),
    ],
)
def test_linear_phase_type_constraints(
    num_taps: int,
    gains: list[float],
    antisymmetric: bool,
    message: str,
) -> None:
    with pytest.raises(InvalidParameterError, match=message):
        fir_design_from_response(num_taps, [0.0, 1.0], gains, antisymmetric=antisymmetric)


def test_frequency_grid_validation() -> None:
    with pytest.raises(InvalidParameterError, match="start at 0.0 and end at 1.0"):
        fir_design_from_response(11, [0.1, 1.0], [1.0, 0.0])
    with pytest.raises(InvalidParameterError, match="non-decreasing"):
        fir_design_from_response(11, [0.0, 0.6, 0.4, 1.0], [1.0, 1.0, 0.0, 0.0])
    with pytest.raises(InvalidParameterError, match="at most twice"):
        fir_design_from_response(11, [0.0, 0.5, 0.5, 0.5, 1.0], [1.0, 1.0, 0.5, 0.0, 0.0])
    with pytest.raises(InvalidParameterError, match="may not repeat"):
        fir_design_from_response(11, [0.0, 0.0, 1.0], [1.0, 1.0, 0.0])
    with pytest.raises(LengthMismatchError):
        fir_design_from_response(11, [0.0, 0.5, 1.0], [1.0, 0.0])


def test_step_in_gain_curve_is_accepted() -> None:
    coefficients = fir_design_from_response(41, [0.0, 0.5, 0.5, 1.0], [1.0, 1.0, 0.0, 0.0])
    freqs, response = coefficients.frequency_response(513)

    assert coefficients.is_symmetric
    assert abs(response[0]) == pytest.approx(1.0, abs=0.05)
    assert abs(response[-1]) == pytest.approx(0.0, abs=0.05)
    assert freqs[256] == pytest.approx(0.5)


def test_invalid_tap_count_and_grid() -> None:
    with pytest.raises(InvalidParameterError, match="num_taps must be a positive integer"):
        fir_design_from_response(0, [0.0, 1.0], [1.0, 1.0])
    with pytest.raises(InvalidParameterError, match="grid_size"):
        fir_design_from_response(33, [0.0, 1.0], [1.0, 1.0], grid_size=16)
