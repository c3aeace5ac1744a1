"""Sequential or chunked data-parallel execution of numeric sequence work.

Chunks run on a shared, fixed-size thread pool. Idle workers pull the next
pending chunk from the pool queue, so uneven chunks are balanced dynamically.
NumPy releases the GIL inside its vectorized kernels, which is what makes the
chunks genuinely concurrent.

Order-independent operations (maps, elementwise arithmetic) produce results
that are bit-identical to sequential execution. Reductions compute one partial
per chunk and combine the partials with a pairwise tree by chunk index: the
result is deterministic for a fixed partition but may differ in the last bits
from a strictly left-to-right accumulation.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Callable, Sequence, TypeVar

import numpy as np
import numpy.typing as npt

from yttria.errors import CapabilityError, InvalidParameterError, LengthMismatchError, ShapeError
from yttria.numeric import SignalArray, as_signal
from yttria.parallel.config import get_dispatch_config


logger = logging.getLogger(__name__)

T = TypeVar("T")

UnaryOperation = Callable[[SignalArray], npt.ArrayLike]
BinaryOperation = Callable[[SignalArray, SignalArray], npt.ArrayLike]

_executor: ThreadPoolExecutor | None = None
_executor_lock = threading.Lock()
_worker_state = threading.local()


class ParallelDispatch:
    """Decide between sequential and chunked parallel execution for one call."""

    def __init__(self, threshold: int | None = None, max_workers: int | None = None) -> None:
        if threshold is None or max_workers is None:
            config = get_dispatch_config()
            threshold = config.threshold if threshold is None else threshold
            max_workers = config.max_workers if max_workers is None else max_workers
        if threshold < 0:
            raise InvalidParameterError("threshold must be >= 0")
        if max_workers <= 0:
            raise InvalidParameterError("max_workers must be > 0")
        self._threshold = threshold
        self._max_workers = max_workers

    @property
    def threshold(self) -> int:
        """Sequence length from which work is split across the pool."""
        return self._threshold

    @property
    def max_workers(self) -> int:
        return self._max_workers

    def should_parallelize(self, length: int, *, workload: int | None = None) -> bool:
        """Whether ``length`` items of work would be split into concurrent chunks."""
        if (length if workload is None else workload) < self._threshold:
            return False
        if min(self._max_workers, length) < 2:
            return False
        # Work submitted from a pool worker stays on that worker.
        return not _in_pool_worker()

    def partition(self, length: int) -> tuple[slice, ...]:
        """Split ``range(length)`` into contiguous, balanced chunks in index order."""
        if length < 0:
            raise InvalidParameterError("length must be >= 0")
        num_chunks = max(1, min(self._max_workers, length))
        bounds = [length * idx // num_chunks for idx in range(num_chunks + 1)]
        return tuple(slice(bounds[idx], bounds[idx + 1]) for idx in range(num_chunks))

    def run_chunks(
        self,
        length: int,
        work: Callable[[slice], T],
        *,
        workload: int | None = None,
    ) -> list[T]:
        """Run ``work`` over ``range(length)`` and return per-chunk results in index order.

        ``workload`` (default ``length``) is the amount of work compared against
        the threshold, for callers whose partitioned axis is shorter than the
        work it carries. Sequential execution calls ``work`` once with the full
        range. If any chunk raises, chunks that have not started are cancelled,
        running chunks are awaited, and the first failure by chunk index is
        re-raised.
        """
        if not self.should_parallelize(length, workload=workload):
            return [work(slice(0, length))]

        chunks = self.partition(length)
        logger.debug("Dispatching %d items across %d chunks", length, len(chunks))
        executor = _shared_executor()
        futures = [executor.submit(_run_in_pool_worker, work, chunk) for chunk in chunks]
        return _collect_in_order(futures)

    def apply(
        self,
        sequence: npt.ArrayLike,
        operation: UnaryOperation,
        *,
        out: np.ndarray | None = None,
    ) -> np.ndarray:
        """Apply a length-preserving chunk operation to ``sequence``.

        ``operation`` receives a contiguous view of the input and must return an
        array of the same length. With ``out`` the results are written into the
        caller's buffer, which may be the input itself. Nothing is written
        until every chunk has succeeded and its dtype casts to ``out.dtype``
        under ``same_kind`` rules, so a failed call leaves ``out`` untouched.
        """
        x = as_signal(sequence)
        if out is not None:
            check_output(out, x.size)

        def work(chunk: slice) -> tuple[slice, np.ndarray]:
            return chunk, _chunk_result(operation(x[chunk]), chunk)

        results = self.run_chunks(x.size, work)
        if out is not None:
            return _commit(results, out)
        return _assemble([result for _, result in results], source=x)

    def apply_binary(
        self,
        a: npt.ArrayLike,
        b: npt.ArrayLike,
        operation: BinaryOperation,
        *,
        out: np.ndarray | None = None,
    ) -> np.ndarray:
        """Apply a length-preserving chunk operation across two equal-length sequences."""
        x = as_signal(a, name="a")
        y = as_signal(b, name="b")
        if x.size != y.size:
            raise LengthMismatchError("b", x.size, y.size)
        if out is not None:
            check_output(out, x.size)

        def work(chunk: slice) -> tuple[slice, np.ndarray]:
            return chunk, _chunk_result(operation(x[chunk], y[chunk]), chunk)

        results = self.run_chunks(x.size, work)
        if out is not None:
            return _commit(results, out)
        return _assemble([result for _, result in results], source=x)

    def reduce(
        self,
        sequence: npt.ArrayLike,
        reducer: Callable[[SignalArray], T],
        combine: Callable[[T, T], T],
    ) -> T:
        """Reduce each chunk with ``reducer`` and tree-combine the partials by chunk index."""
        x = as_signal(sequence)
        partials = self.run_chunks(x.size, lambda chunk: reducer(x[chunk]))
        return tree_combine(partials, combine)


def apply(
    sequence: npt.ArrayLike,
    operation: UnaryOperation,
    threshold: int | None = None,
    *,
    out: np.ndarray | None = None,
) -> np.ndarray:
    """Apply ``operation`` to ``sequence`` sequentially or in parallel chunks."""
    return ParallelDispatch(threshold=threshold).apply(sequence, operation, out=out)


def tree_combine(partials: Sequence[T], combine: Callable[[T, T], T]) -> T:
    """Combine partial results pairwise, level by level, preserving chunk order."""
    if not partials:
        raise ValueError("partials must not be empty")
    level = list(partials)
    while len(level) > 1:
        merged = [combine(level[idx], level[idx + 1]) for idx in range(0, len(level) - 1, 2)]
        if len(level) % 2 == 1:
            merged.append(level[-1])
        level = merged
    return level[0]


def _chunk_result(raw: npt.ArrayLike, chunk: slice) -> np.ndarray:
    result = np.asarray(raw)
    expected = chunk.stop - chunk.start
    if result.shape != (expected,):
        raise ShapeError(
            f"operation must return a 1D array of length {expected}, got shape {result.shape}"
        )
    return result


def check_output(out: object, length: int, *, dtype: npt.DTypeLike | None = None) -> None:
    """Validate a caller-supplied output buffer before any work is done.

    ``dtype``, when known up front, is the dtype of the values that will be
    written; it must cast to ``out.dtype`` under ``same_kind`` rules.
    """
    if not isinstance(out, np.ndarray):
        raise TypeError("out must be a numpy.ndarray")
    if out.ndim != 1:
        raise ShapeError(f"out must be 1D, got {out.ndim} dimensions")
    if out.size != length:
        raise LengthMismatchError("out", length, out.size)
    if not out.flags.writeable:
        raise ValueError("out must be writeable")
    if dtype is not None:
        _check_castable(np.dtype(dtype), out)


def _check_castable(dtype: np.dtype, out: np.ndarray) -> None:
    if not np.can_cast(dtype, out.dtype, casting="same_kind"):
        raise CapabilityError(f"cannot write {dtype} results into an out buffer of dtype {out.dtype}")


def _commit(results: list[tuple[slice, np.ndarray]], out: np.ndarray) -> np.ndarray:
    for _, result in results:
        _check_castable(result.dtype, out)
    for chunk, result in results:
        np.copyto(out[chunk], result, casting="same_kind")
    return out


def _assemble(results: list[np.ndarray], *, source: np.ndarray) -> np.ndarray:
    if len(results) == 1:
        single = results[0]
        # Never hand the caller's own buffer back as a "new" sequence.
        if np.may_share_memory(single, source):
            return single.copy()
        return single
    return np.concatenate(results)


def _collect_in_order(futures: list[Future[T]]) -> list[T]:
    results: list[T] = []
    for idx, future in enumerate(futures):
        try:
            results.append(future.result())
        except BaseException:
            for pending in futures[idx + 1 :]:
                pending.cancel()
            wait(futures)
            raise
    return results


def _run_in_pool_worker(work: Callable[[slice], T], chunk: slice) -> T:
    _worker_state.active = True
    try:
        return work(chunk)
    finally:
        _worker_state.active = False


def _in_pool_worker() -> bool:
    return bool(getattr(_worker_state, "active", False))


def _shared_executor() -> ThreadPoolExecutor:
    """The one process-wide pool, sized from the resolved dispatch configuration.

    A dispatcher's own ``max_workers`` only bounds how many chunks it submits.
    """
    global _executor
    with _executor_lock:
        if _executor is None:
            size = get_dispatch_config().max_workers
            logger.debug("Starting shared dispatch pool with %d workers", size)
            _executor = ThreadPoolExecutor(max_workers=size, thread_name_prefix="yttria")
        return _executor
