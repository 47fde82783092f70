"""
gammaconv.io
============

Pillow adapters that produce and consume :class:`gammaconv.core.PixelBuffer`.
The convolution core itself never touches files.

Submodules:
- gammaconv.io.image
"""

from .image import (
    read_image,
    write_image,
    buffer_from_pil,
    buffer_to_pil,
    rgba_to_argb,
    argb_to_rgba,
)

__all__ = [
    "read_image",
    "write_image",
    "buffer_from_pil",
    "buffer_to_pil",
    "rgba_to_argb",
    "argb_to_rgba",
]
