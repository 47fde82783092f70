"""
gammaconv
Gamma-aware, alpha-weighted separable convolution for 8-bit images.
"""

# Robust version detection that works even when not installed
try:
    from importlib import metadata as _metadata
except ImportError:
    _metadata = None  # type: ignore

try:
    __version__ = _metadata.version("gammaconv") if _metadata else "0.0.0.dev0"
except Exception:
    # Not installed (dev mode) or no metadata available
    __version__ = "0.0.0.dev0"

# Re-export the main entry points for convenience
from . import core, conv2d, io  # noqa: E402
from .core import PixelBuffer, GammaTable, PreconditionViolation, AllocationFailure  # noqa: E402
from .conv2d import (  # noqa: E402
    Kernel,
    ConvolutionOp,
    SeparableConvolver,
    make_gaussian_kernel,
    blur,
    glow,
    make_shadow,
)

__all__ = [
    "core",
    "conv2d",
    "io",
    "PixelBuffer",
    "GammaTable",
    "PreconditionViolation",
    "AllocationFailure",
    "Kernel",
    "ConvolutionOp",
    "SeparableConvolver",
    "make_gaussian_kernel",
    "blur",
    "glow",
    "make_shadow",
    "__version__",
]
