"""
gammaconv.core
==============

Data model shared by every convolution pass.

Submodules
----------
- :mod:`gammaconv.core.buffer` : PixelBuffer, the raw 8-bit image contract.
- :mod:`gammaconv.core.gamma`  : GammaTable and alpha byte conversions.
- :mod:`gammaconv.core.errors` : PreconditionViolation / AllocationFailure.
"""

from .errors import (
    GammaconvError,
    PreconditionViolation,
    AllocationFailure,
)
from .buffer import PixelBuffer, SUPPORTED_CHANNELS
from .gamma import (
    GAMMA,
    GammaTable,
    default_gamma_table,
    alpha_byte_to_linear,
    linear_to_alpha_byte,
)

__all__ = [
    # errors
    "GammaconvError",
    "PreconditionViolation",
    "AllocationFailure",
    # buffer
    "PixelBuffer",
    "SUPPORTED_CHANNELS",
    # gamma
    "GAMMA",
    "GammaTable",
    "default_gamma_table",
    "alpha_byte_to_linear",
    "linear_to_alpha_byte",
]
