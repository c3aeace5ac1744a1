"""Window library: finite real weighting sequences for spectral analysis and FIR design."""

from yttria.windows.families import (
    COSINE_COEFFICIENTS,
    WindowFamily,
    blackman,
    coherent_gain,
    cosine_sum,
    equivalent_noise_bandwidth,
    hamming,
    hann,
    rectangular,
    window,
)

__all__ = [
    "COSINE_COEFFICIENTS",
    "WindowFamily",
    "blackman",
    "coherent_gain",
    "cosine_sum",
    "equivalent_noise_bandwidth",
    "hamming",
    "hann",
    "rectangular",
    "window",
]
