"""FFT engine with a shared, synchronized twiddle-factor cache."""

from yttria.fft.engine import fft_forward, fft_inverse
from yttria.fft.real import fftfreq, irfft, rfft, rfftfreq
from yttria.fft.twiddle import (
    MIXED_RADIX_MAX_FACTOR,
    TransformDirection,
    TransformStrategy,
    TwiddleCache,
    TwiddleCacheStats,
    TwiddleTable,
    build_twiddle_table,
    default_twiddle_cache,
    transform_strategy,
)

__all__ = [
    "MIXED_RADIX_MAX_FACTOR",
    "TransformDirection",
    "TransformStrategy",
    "TwiddleCache",
    "TwiddleCacheStats",
    "TwiddleTable",
    "build_twiddle_table",
    "default_twiddle_cache",
    "fft_forward",
    "fft_inverse",
    "fftfreq",
    "irfft",
    "rfft",
    "rfftfreq",
    "transform_strategy",
]
