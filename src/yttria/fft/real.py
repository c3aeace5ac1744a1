"""One-sided spectra of real sequences and Hermitian reconstruction."""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from yttria.errors import CapabilityError, InvalidParameterError, InvalidSizeError
from yttria.fft.engine import fft_forward, fft_inverse
from yttria.fft.twiddle import TwiddleCache
from yttria.numeric import ComplexArray, FloatArray, NumericKind, as_complex_signal, as_signal, capability_of


def rfft(
    sequence: npt.ArrayLike,
    *,
    threshold: int | None = None,
    cache: TwiddleCache | None = None,
) -> ComplexArray:
    """Non-negative-frequency half of the DFT of a real sequence (``n // 2 + 1`` bins)."""
    x = as_signal(sequence)
    if capability_of(x.dtype).kind != NumericKind.REAL:
        raise CapabilityError("rfft requires real samples; use fft_forward for complex input")
    spectrum = fft_forward(x, threshold=threshold, cache=cache)
    return spectrum[: x.size // 2 + 1].copy()


def irfft(
    spectrum: npt.ArrayLike,
    n: int | None = None,
    *,
    threshold: int | None = None,
    cache: TwiddleCache | None = None,
) -> FloatArray:
    """Real sequence of length ``n`` whose one-sided spectrum is ``spectrum``.

    ``n`` defaults to ``2 * (len(spectrum) - 1)``. Bins beyond ``n // 2`` are
    dropped and missing bins are zero; imaginary parts of the DC and (for even
    ``n``) Nyquist bins do not contribute.
    """
    half = as_complex_signal(spectrum, name="spectrum")
    length = 2 * (half.size - 1) if n is None else n
    if length < 1:
        raise InvalidSizeError(f"output length must be >= 1, got {length}")

    bins = length // 2 + 1
    full = np.zeros(length, dtype=half.dtype)
    used = min(bins, half.size)
    full[:used] = half[:used]
    mirrored = (length + 1) // 2
    full[length - mirrored + 1 :] = np.conjugate(full[1:mirrored][::-1])
    return np.real(fft_inverse(full, threshold=threshold, cache=cache)).copy()


def fftfreq(n: int, spacing: float = 1.0) -> FloatArray:
    """Bin centre frequencies of an ``n``-point DFT, in cycles per unit of ``spacing``."""
    _validate_grid(n, spacing)
    return np.asarray(np.fft.fftfreq(n, d=spacing), dtype=np.float64)


def rfftfreq(n: int, spacing: float = 1.0) -> FloatArray:
    """Bin centre frequencies matching :func:`rfft` output."""
    _validate_grid(n, spacing)
    return np.asarray(np.fft.rfftfreq(n, d=spacing), dtype=np.float64)


def _validate_grid(n: int, spacing: float) -> None:
    if n < 1:
        raise InvalidSizeError(f"transform size must be >= 1, got {n}")
    if spacing <= 0:
        raise InvalidParameterError("spacing must be > 0")
