"""Error taxonomy shared by every yttria operation."""

from __future__ import annotations


class ShapeError(ValueError):
    """Input sequence has the wrong dimensionality or length for an operation."""


class LengthMismatchError(ShapeError):
    """Operands (or an output buffer) that must share a length do not."""

    def __init__(self, name: str, expected: int, actual: int) -> None:
        super().__init__(f"{name} length mismatch: expected {expected}, got {actual}")
        self.name = name
        self.expected = expected
        self.actual = actual


class InvalidParameterError(ValueError):
    """A scalar parameter is outside the range an operation accepts."""


class InvalidSizeError(InvalidParameterError):
    """A transform was requested for a size it cannot be defined on."""


class CapabilityError(TypeError):
    """Element type does not provide the capability an operation requires."""
