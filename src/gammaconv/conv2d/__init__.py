"""
gammaconv.conv2d
================

Separable 2D convolution of 8-bit images.

Submodules
----------
- :mod:`gammaconv.conv2d.kernels`   : Kernel type and builders (Gaussian, box).
- :mod:`gammaconv.conv2d.separable` : One gamma-correct, alpha-weighted pass (transposing).
- :mod:`gammaconv.conv2d.image`     : Two-pass ConvolutionOp, blur and glow.
- :mod:`gammaconv.conv2d.shadow`    : Drop shadow from alpha.
"""

from .kernels import (
    Kernel,
    make_gaussian_kernel,
    make_box_kernel,
    outer_2d,
)
from .separable import SeparableConvolver, convolve_transposed
from .image import ConvolutionOp, apply_convolution, blur, glow
from .shadow import make_shadow

__all__ = [
    # kernels
    "Kernel",
    "make_gaussian_kernel",
    "make_box_kernel",
    "outer_2d",
    # single pass
    "SeparableConvolver",
    "convolve_transposed",
    # two-pass ops
    "ConvolutionOp",
    "apply_convolution",
    "blur",
    "glow",
    # effects
    "make_shadow",
]
