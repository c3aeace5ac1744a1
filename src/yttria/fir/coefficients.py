"""Designed FIR filter taps and the operations that consume them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

import numpy as np
import numpy.typing as npt

from yttria.elementwise import ConvolutionMode, convolve
from yttria.errors import InvalidParameterError, ShapeError
from yttria.fft import rfft
from yttria.windows import WindowFamily


FloatArray = npt.NDArray[np.float64]
ComplexArray = npt.NDArray[np.complex128]


class FilterResponse(StrEnum):
    """Passband shape of a designed filter."""

    LOWPASS = "lowpass"
    HIGHPASS = "highpass"
    BANDPASS = "bandpass"
    BANDSTOP = "bandstop"
    ARBITRARY = "arbitrary"


@dataclass(frozen=True, slots=True)
class FilterCoefficients:
    """Read-only FIR taps plus the parameters they were designed from.

    ``cutoff`` holds band edges normalized to Nyquist = 1.0 (empty for
    frequency-sampling designs).
    """

    taps: FloatArray
    response: FilterResponse
    window: WindowFamily
    cutoff: tuple[float, ...] = ()
    normalized: bool = False

    def __post_init__(self) -> None:
        # Private copy; freezing must not touch the caller's buffer.
        object.__setattr__(self, "taps", np.array(self.taps, dtype=np.float64))
        if self.taps.ndim != 1:
            raise ShapeError("taps must be a 1D array")
        if self.taps.size == 0:
            raise ShapeError("taps must contain at least one coefficient")
        if not np.all(np.isfinite(self.taps)):
            raise ValueError("taps must contain only finite values")
        self.taps.flags.writeable = False

    @property
    def num_taps(self) -> int:
        return int(self.taps.size)

    @property
    def order(self) -> int:
        return self.num_taps - 1

    @property
    def is_symmetric(self) -> bool:
        """Even symmetry about the centre tap (linear phase, types I/II)."""
        return bool(np.allclose(self.taps, self.taps[::-1], rtol=0.0, atol=1e-12))

    @property
    def is_antisymmetric(self) -> bool:
        return bool(np.allclose(self.taps, -self.taps[::-1], rtol=0.0, atol=1e-12))

    @property
    def dc_gain(self) -> float:
        """Response at zero frequency, i.e. the sum of the taps."""
        return float(np.sum(self.taps))

    @property
    def group_delay(self) -> float:
        """Constant group delay in samples of a linear-phase filter."""
        return self.order / 2.0

    def frequency_response(self, num_points: int = 512) -> tuple[FloatArray, ComplexArray]:
        """Complex response at ``num_points`` frequencies evenly spaced over ``[0, 1]`` (Nyquist = 1)."""
        if num_points < 2:
            raise InvalidParameterError("num_points must be >= 2")
        fft_size = 2 * (num_points - 1)
        if fft_size < self.num_taps:
            raise InvalidParameterError(
                f"num_points must be >= {self.num_taps // 2 + 1} to resolve {self.num_taps} taps"
            )
        padded = np.zeros(fft_size, dtype=np.float64)
        padded[: self.num_taps] = self.taps
        freqs = np.linspace(0.0, 1.0, num_points, dtype=np.float64)
        return freqs, rfft(padded)

    def apply(self, signal: npt.ArrayLike, *, threshold: int | None = None) -> np.ndarray:
        """Causally filter ``signal``; the output has the same length as the input."""
        return convolve(signal, self.taps, mode=ConvolutionMode.CAUSAL, threshold=threshold)
