# src/gammaconv/core/errors.py
"""Exception types raised by the convolution core."""
from __future__ import annotations

__all__ = [
    "GammaconvError",
    "PreconditionViolation",
    "AllocationFailure",
]


class GammaconvError(Exception):
    """Base class for all gammaconv errors."""


class PreconditionViolation(GammaconvError, ValueError):
    """
    Input breaks the convolution contract.

    Raised before any work is done: even-length kernels, unsupported channel
    counts, buffers whose byte length does not match their dimensions, and
    out-of-range numeric parameters.
    """


class AllocationFailure(GammaconvError, MemoryError):
    """The destination buffer could not be allocated."""
