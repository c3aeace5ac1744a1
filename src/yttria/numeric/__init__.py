"""Qualifying numeric element types and sequence borrowing helpers."""

from yttria.numeric.elements import (
    ComplexArray,
    ElementCapability,
    FloatArray,
    NumericKind,
    SignalArray,
    as_complex_signal,
    as_signal,
    capability_of,
    is_power_of_two,
    next_power_of_two,
    prime_factors,
    require_complex,
)

__all__ = [
    "ComplexArray",
    "ElementCapability",
    "FloatArray",
    "NumericKind",
    "SignalArray",
    "as_complex_signal",
    "as_signal",
    "capability_of",
    "is_power_of_two",
    "next_power_of_two",
    "prime_factors",
    "require_complex",
]
