"""FIR filter coefficient synthesis."""

from yttria.fir.coefficients import FilterCoefficients, FilterResponse
from yttria.fir.design import fir_design
from yttria.fir.frequency_sampling import fir_design_from_response

__all__ = [
    "FilterCoefficients",
    "FilterResponse",
    "fir_design",
    "fir_design_from_response",
]
