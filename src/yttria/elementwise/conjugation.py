"""Operations that require the complex capability (conjugation, magnitude)."""

from __future__ import annotations

import operator

import numpy as np
import numpy.typing as npt

from yttria.elementwise.sequences import ConvolutionMode, convolve
from yttria.errors import LengthMismatchError
from yttria.numeric import require_complex
from yttria.parallel import ParallelDispatch, tree_combine


def conjugate(
    sequence: npt.ArrayLike,
    *,
    out: np.ndarray | None = None,
    threshold: int | None = None,
) -> np.ndarray:
    x = require_complex(sequence, "conjugate")
    return ParallelDispatch(threshold=threshold).apply(x, np.conjugate, out=out)


def real_part(sequence: npt.ArrayLike, *, threshold: int | None = None) -> np.ndarray:
    x = require_complex(sequence, "real_part")
    return ParallelDispatch(threshold=threshold).apply(x, np.real)


def imag_part(sequence: npt.ArrayLike, *, threshold: int | None = None) -> np.ndarray:
    x = require_complex(sequence, "imag_part")
    return ParallelDispatch(threshold=threshold).apply(x, np.imag)


def magnitude(sequence: npt.ArrayLike, *, threshold: int | None = None) -> np.ndarray:
    """Elementwise modulus ``|z|``."""
    x = require_complex(sequence, "magnitude")
    return ParallelDispatch(threshold=threshold).apply(x, np.abs)


def phase(sequence: npt.ArrayLike, *, threshold: int | None = None) -> np.ndarray:
    """Elementwise argument in radians, in ``(-pi, pi]``."""
    x = require_complex(sequence, "phase")
    return ParallelDispatch(threshold=threshold).apply(x, np.angle)


def complex_exp(
    sequence: npt.ArrayLike,
    *,
    out: np.ndarray | None = None,
    threshold: int | None = None,
) -> np.ndarray:
    x = require_complex(sequence, "complex_exp")
    return ParallelDispatch(threshold=threshold).apply(x, np.exp, out=out)


def vdot(a: npt.ArrayLike, b: npt.ArrayLike, *, threshold: int | None = None) -> np.complexfloating:
    """Conjugating dot product ``sum(conj(a[i]) * b[i])``."""
    x = require_complex(a, "vdot", name="a")
    y = require_complex(b, "vdot", name="b")
    if x.size != y.size:
        raise LengthMismatchError("b", x.size, y.size)
    partials = ParallelDispatch(threshold=threshold).run_chunks(
        x.size,
        lambda chunk: np.vdot(x[chunk], y[chunk]),
    )
    return tree_combine(partials, operator.add)


def correlate(a: npt.ArrayLike, b: npt.ArrayLike, *, threshold: int | None = None) -> np.ndarray:
    """Full cross-correlation ``r[k] = sum_n a[n + k] * conj(b[n])``.

    Output has ``len(a) + len(b) - 1`` lags; index ``len(b) - 1`` is lag zero.
    """
    x = require_complex(a, "correlate", name="a")
    y = require_complex(b, "correlate", name="b")
    kernel = np.conjugate(y[::-1])
    return convolve(x, kernel, mode=ConvolutionMode.FULL, threshold=threshold)
