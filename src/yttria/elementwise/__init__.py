"""Elementwise arithmetic, reductions and sequence utilities routed through dispatch."""

from yttria.elementwise.arithmetic import (
    add,
    add_const,
    clamp,
    divide,
    divide_const,
    map_elements,
    multiply,
    multiply_const,
    powi,
    scale,
    sqrt,
    subtract,
    subtract_const,
    zip_elements,
)
from yttria.elementwise.conjugation import (
    complex_exp,
    conjugate,
    correlate,
    imag_part,
    magnitude,
    phase,
    real_part,
    vdot,
)
from yttria.elementwise.reductions import (
    dot,
    extremes,
    maximum,
    mean,
    minimum,
    reduce_elements,
    std,
    sum_elements,
    trapz,
    variance,
)
from yttria.elementwise.sequences import (
    ConvolutionMode,
    arange,
    convolve,
    cumsum,
    diff,
    fftshift,
    ifftshift,
    interp,
    linspace,
    roll,
    unwrap_phase,
)

__all__ = [
    "ConvolutionMode",
    "add",
    "add_const",
    "arange",
    "clamp",
    "complex_exp",
    "conjugate",
    "convolve",
    "correlate",
    "cumsum",
    "diff",
    "divide",
    "divide_const",
    "dot",
    "extremes",
    "fftshift",
    "ifftshift",
    "imag_part",
    "interp",
    "linspace",
    "magnitude",
    "map_elements",
    "maximum",
    "mean",
    "minimum",
    "multiply",
    "multiply_const",
    "phase",
    "powi",
    "real_part",
    "reduce_elements",
    "roll",
    "scale",
    "sqrt",
    "std",
    "subtract",
    "subtract_const",
    "sum_elements",
    "trapz",
    "unwrap_phase",
    "variance",
    "vdot",
    "zip_elements",
]
