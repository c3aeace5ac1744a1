"""Forward and inverse discrete Fourier transforms on caller-owned sequences.

Forward transforms are unnormalized; inverse transforms use the conjugate
twiddle set and scale by ``1 / n``. Real input is promoted to complex with a
zero imaginary part and the output is always complex. Output length always
equals input length.
"""

from __future__ import annotations

import logging

import numpy as np
import numpy.typing as npt

from yttria.errors import InvalidSizeError
from yttria.fft.twiddle import (
    TransformDirection,
    TransformStrategy,
    TwiddleCache,
    TwiddleTable,
    default_twiddle_cache,
    transform_strategy,
)
from yttria.numeric import ComplexArray, as_complex_signal, next_power_of_two, prime_factors
from yttria.parallel import ParallelDispatch


logger = logging.getLogger(__name__)

# Sub-transforms this small (or of prime size) are evaluated as a direct DFT.
DIRECT_DFT_MAX_SIZE = 16


def fft_forward(
    sequence: npt.ArrayLike,
    *,
    threshold: int | None = None,
    cache: TwiddleCache | None = None,
) -> ComplexArray:
    """Discrete Fourier transform ``X[k] = sum_j x[j] * exp(-2j*pi*j*k/n)``."""
    return _transform(sequence, TransformDirection.FORWARD, threshold=threshold, cache=cache)


def fft_inverse(
    sequence: npt.ArrayLike,
    *,
    threshold: int | None = None,
    cache: TwiddleCache | None = None,
) -> ComplexArray:
    """Inverse DFT ``x[j] = (1/n) * sum_k X[k] * exp(2j*pi*j*k/n)``."""
    return _transform(sequence, TransformDirection.INVERSE, threshold=threshold, cache=cache)


def _transform(
    sequence: npt.ArrayLike,
    direction: TransformDirection,
    *,
    threshold: int | None,
    cache: TwiddleCache | None,
) -> ComplexArray:
    x = as_complex_signal(sequence)
    n = x.size
    if n == 0:
        raise InvalidSizeError("transform size must be >= 1, got 0")
    if n == 1:
        return x.copy()

    twiddles = cache if cache is not None else default_twiddle_cache()
    dispatch = ParallelDispatch(threshold=threshold)
    strategy = transform_strategy(n)
    logger.debug("%s transform n=%d via %s", direction.value, n, strategy.value)

    if strategy == TransformStrategy.RADIX2:
        result = _radix2(x, twiddles.get(n, direction), dispatch)
    elif strategy == TransformStrategy.MIXED_RADIX:
        table = twiddles.get(n, direction)
        result = _mixed_radix(x, table.factors.astype(x.dtype, copy=False), n, dispatch)
    else:
        result = _bluestein(x, direction, twiddles, dispatch)

    if direction == TransformDirection.INVERSE:
        result /= n
    return result


def _radix2(x: ComplexArray, table: TwiddleTable, dispatch: ParallelDispatch) -> ComplexArray:
    """Iterative decimation-in-time Cooley-Tukey over a bit-reversed scratch copy."""
    n = x.size
    if table.bit_reversal is None:
        raise InvalidSizeError(f"radix-2 transform requires a power-of-two size, got {n}")
    factors = table.factors.astype(x.dtype, copy=False)
    work = x[table.bit_reversal]

    span = 2
    while span <= n:
        stage_twiddles = factors[: n // 2 : n // span]
        blocks = work.reshape(n // span, span)
        _butterfly_stage(blocks, stage_twiddles, dispatch)
        span *= 2
    return work


def _butterfly_stage(blocks: np.ndarray, twiddles: ComplexArray, dispatch: ParallelDispatch) -> None:
    num_blocks = blocks.shape[0]
    half = twiddles.size
    butterflies = num_blocks * half

    # Early stages have many short blocks, late stages a few long ones.
    if num_blocks >= dispatch.max_workers:
        dispatch.run_chunks(
            num_blocks,
            lambda rows: _butterfly(blocks, twiddles, rows, slice(0, half)),
            workload=butterflies,
        )
    else:
        dispatch.run_chunks(
            half,
            lambda cols: _butterfly(blocks, twiddles, slice(0, num_blocks), cols),
            workload=butterflies,
        )


def _butterfly(blocks: np.ndarray, twiddles: ComplexArray, rows: slice, cols: slice) -> None:
    half = twiddles.size
    top = blocks[rows, cols]
    bottom = blocks[rows, cols.start + half : cols.stop + half]
    product = bottom * twiddles[cols]
    np.subtract(top, product, out=bottom)
    top += product


def _mixed_radix(
    x: ComplexArray,
    factors: ComplexArray,
    n_total: int,
    dispatch: ParallelDispatch,
) -> ComplexArray:
    """Recursive decimation in time by the smallest prime factor of ``x.size``.

    ``factors`` is the twiddle table of the top-level size ``n_total``; a
    sub-transform of size ``n`` reads it with stride ``n_total // n``.
    """
    n = x.size
    if n == 1:
        return x.copy()
    step = n_total // n
    radix = prime_factors(n)[0]
    sub_size = n // radix

    if sub_size == 1 or n <= DIRECT_DFT_MAX_SIZE:
        exponents = np.outer(np.arange(n), np.arange(n)) % n
        return factors[exponents * step] @ x

    subs = np.stack(
        [_mixed_radix(x[offset::radix], factors, n_total, dispatch) for offset in range(radix)]
    )
    out = np.empty(n, dtype=x.dtype)
    offsets = np.arange(radix)[:, None]

    def combine(chunk: slice) -> None:
        k = np.arange(chunk.start, chunk.stop)
        rotations = factors[((offsets * k[None, :]) % n) * step]
        out[chunk] = np.sum(rotations * subs[:, k % sub_size], axis=0)

    dispatch.run_chunks(n, combine, workload=n * radix)
    return out


def _bluestein(
    x: ComplexArray,
    direction: TransformDirection,
    twiddles: TwiddleCache,
    dispatch: ParallelDispatch,
) -> ComplexArray:
    """Chirp-z: express the n-point DFT as a circular convolution of padded length."""
    n = x.size
    table = twiddles.get(n, direction)
    if table.chirp is None:
        raise InvalidSizeError(f"no chirp table for transform size {n}")
    chirp = table.chirp.astype(x.dtype, copy=False)
    padded = next_power_of_two(2 * n - 1)

    signal = np.zeros(padded, dtype=x.dtype)
    signal[:n] = x * chirp
    kernel = np.zeros(padded, dtype=x.dtype)
    kernel[:n] = np.conjugate(chirp)
    kernel[padded - n + 1 :] = np.conjugate(chirp[1:])[::-1]

    forward = twiddles.get(padded, TransformDirection.FORWARD)
    spectrum = _radix2(signal, forward, dispatch) * _radix2(kernel, forward, dispatch)
    circular = _radix2(spectrum, twiddles.get(padded, TransformDirection.INVERSE), dispatch)
    circular /= padded
    return chirp * circular[:n]
