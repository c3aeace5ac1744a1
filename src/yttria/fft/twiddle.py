"""Twiddle-factor tables and the process-wide, synchronized twiddle cache."""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass
from enum import StrEnum
from typing import Callable

import numpy as np
import numpy.typing as npt

from yttria.errors import InvalidSizeError
from yttria.numeric import is_power_of_two, prime_factors


logger = logging.getLogger(__name__)

ComplexArray = npt.NDArray[np.complex128]
IndexArray = npt.NDArray[np.intp]

# Sizes whose prime factors all stay at or below this use mixed-radix decimation.
MIXED_RADIX_MAX_FACTOR = 7


class TransformDirection(StrEnum):
    """Sign convention of the transform kernel."""

    FORWARD = "forward"
    INVERSE = "inverse"

    @property
    def sign(self) -> float:
        """Exponent sign: ``exp(sign * 2j * pi * k / n)``."""
        return -1.0 if self == TransformDirection.FORWARD else 1.0


class TransformStrategy(StrEnum):
    """Algorithm used for a given transform size."""

    IDENTITY = "identity"
    RADIX2 = "radix2"
    MIXED_RADIX = "mixed_radix"
    BLUESTEIN = "bluestein"


def transform_strategy(n: int) -> TransformStrategy:
    """Return the algorithm an ``n``-point transform is routed to.

    Powers of two use radix-2 Cooley-Tukey; sizes factoring into primes no
    larger than ``MIXED_RADIX_MAX_FACTOR`` use mixed-radix decimation; every
    other size uses Bluestein's chirp-z over zero-padded radix-2 transforms.
    Every path computes the exact ``n``-point DFT.
    """
    if n < 1:
        raise InvalidSizeError(f"transform size must be >= 1, got {n}")
    if n == 1:
        return TransformStrategy.IDENTITY
    if is_power_of_two(n):
        return TransformStrategy.RADIX2
    if max(prime_factors(n)) <= MIXED_RADIX_MAX_FACTOR:
        return TransformStrategy.MIXED_RADIX
    return TransformStrategy.BLUESTEIN


@dataclass(frozen=True, slots=True)
class TwiddleTable:
    """Read-only roots of unity for one ``(n, direction)`` pair.

    ``factors[k] = exp(sign * 2j*pi*k/n)`` for ``k < n``. ``bit_reversal`` is set
    for power-of-two sizes and ``chirp[k] = exp(sign * 1j*pi*k**2/n)`` for
    Bluestein sizes.
    """

    n: int
    direction: TransformDirection
    factors: ComplexArray
    bit_reversal: IndexArray | None = None
    chirp: ComplexArray | None = None


@dataclass(frozen=True, slots=True)
class TwiddleCacheStats:
    """Counters for cache behaviour; a miss that waited on another thread still counts as a miss."""

    hits: int
    misses: int
    computations: int
    entries: int


def build_twiddle_table(n: int, direction: TransformDirection) -> TwiddleTable:
    """Compute the twiddle table for one transform size and direction."""
    if n < 1:
        raise InvalidSizeError(f"transform size must be >= 1, got {n}")
    direction = TransformDirection(direction)
    k = np.arange(n, dtype=np.int64)
    factors = _unit_phasors(direction.sign * 2.0 * math.pi * k / n)

    bit_reversal: IndexArray | None = None
    chirp: ComplexArray | None = None
    strategy = transform_strategy(n)
    if strategy == TransformStrategy.RADIX2:
        bit_reversal = _bit_reversal_permutation(n)
    elif strategy == TransformStrategy.BLUESTEIN:
        # k**2 is reduced modulo 2n so the phase stays small and exact.
        chirp = _unit_phasors(direction.sign * math.pi * ((k * k) % (2 * n)) / n)

    return TwiddleTable(
        n=n,
        direction=direction,
        factors=_frozen(factors),
        bit_reversal=None if bit_reversal is None else _frozen(bit_reversal),
        chirp=None if chirp is None else _frozen(chirp),
    )


class _PendingTable:
    __slots__ = ("done", "table", "error")

    def __init__(self) -> None:
        self.done = threading.Event()
        self.table: TwiddleTable | None = None
        self.error: BaseException | None = None


class TwiddleCache:
    """Lazily populated, append-only map from ``(n, direction)`` to :class:`TwiddleTable`.

    Concurrent misses on the same key block on a single computation performed
    by the first caller. Entries are never mutated; :meth:`invalidate` drops
    them all at once.
    """

    def __init__(
        self,
        builder: Callable[[int, TransformDirection], TwiddleTable] = build_twiddle_table,
    ) -> None:
        self._builder = builder
        self._lock = threading.Lock()
        self._tables: dict[tuple[int, TransformDirection], TwiddleTable] = {}
        self._pending: dict[tuple[int, TransformDirection], _PendingTable] = {}
        self._hits = 0
        self._misses = 0
        self._computations = 0

    def get(self, n: int, direction: TransformDirection | str) -> TwiddleTable:
        """Return the table for ``(n, direction)``, computing it on first use."""
        if n < 1:
            raise InvalidSizeError(f"transform size must be >= 1, got {n}")
        key = (n, TransformDirection(direction))

        with self._lock:
            table = self._tables.get(key)
            if table is not None:
                self._hits += 1
                return table
            self._misses += 1
            pending = self._pending.get(key)
            is_owner = pending is None
            if pending is None:
                pending = _PendingTable()
                self._pending[key] = pending

        if not is_owner:
            pending.done.wait()
            if pending.error is not None:
                raise pending.error
            if pending.table is None:
                raise RuntimeError(f"Twiddle table {key} was signalled without a result")
            return pending.table

        try:
            logger.debug("Computing twiddle table n=%d direction=%s", n, key[1].value)
            table = self._builder(*key)
        except BaseException as exc:
            with self._lock:
                del self._pending[key]
            pending.error = exc
            pending.done.set()
            raise

        with self._lock:
            self._tables[key] = table
            del self._pending[key]
            self._computations += 1
        pending.table = table
        pending.done.set()
        return table

    def invalidate(self) -> None:
        """Evict every cached table; in-flight computations still complete."""
        with self._lock:
            self._tables.clear()

    def stats(self) -> TwiddleCacheStats:
        with self._lock:
            return TwiddleCacheStats(
                hits=self._hits,
                misses=self._misses,
                computations=self._computations,
                entries=len(self._tables),
            )

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._tables

    def __len__(self) -> int:
        with self._lock:
            return len(self._tables)


_default_cache = TwiddleCache()


def default_twiddle_cache() -> TwiddleCache:
    """Process-wide cache shared by every transform that is not given its own."""
    return _default_cache


def _unit_phasors(angles: npt.NDArray[np.float64]) -> ComplexArray:
    phasors = np.empty(angles.shape, dtype=np.complex128)
    phasors.real = np.cos(angles)
    phasors.imag = np.sin(angles)
    return phasors


def _bit_reversal_permutation(n: int) -> IndexArray:
    bits = n.bit_length() - 1
    idx = np.arange(n, dtype=np.intp)
    reversed_idx = np.zeros(n, dtype=np.intp)
    for bit in range(bits):
        reversed_idx |= ((idx >> bit) & 1) << (bits - 1 - bit)
    return reversed_idx


def _frozen(arr: np.ndarray) -> np.ndarray:
    arr.flags.writeable = False
    return arr
