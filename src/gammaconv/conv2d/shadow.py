# src/gammaconv/conv2d/shadow.py
"""Drop shadows derived from an image's alpha channel."""
from __future__ import annotations

from typing import Optional

import numpy as np

from gammaconv.core.buffer import PixelBuffer
from gammaconv.core.errors import PreconditionViolation
from gammaconv.core.gamma import GammaTable
from gammaconv.conv2d.image import blur
from gammaconv.utils.logging import get_logger

__all__ = ["make_shadow"]

logger = get_logger()


def make_shadow(
    image: PixelBuffer,
    radius: float,
    darkness: float,
    gamma: Optional[GammaTable] = None,
) -> PixelBuffer:
    """
    Return the blurred shadow of a semi-transparent image.

    Only the alpha channel of ``image`` is used. The result has the same
    size, is black everywhere, and carries the shadow in its alpha.

    Parameters
    ----------
    image : PixelBuffer
        4-channel (alpha first) source.
    radius : float
        Blur radius (one sigma) in pixels.
    darkness : float
        Shadow strength: 0.0 is invisible, 1.0 is the darkest.
    """
    logger.debug("Making a shadow of radius %g and darkness %g", radius, darkness)

    if image.channels != 4:
        raise PreconditionViolation(
            f"make_shadow needs a 4-channel image with alpha, got {image.channels} channels"
        )
    darkness = float(darkness)
    if not np.isfinite(darkness):
        raise PreconditionViolation(f"darkness must be finite, got {darkness!r}")

    # Opaque grey image where grey = source alpha.
    alpha = image.as_array()[..., 0]
    grey = PixelBuffer.from_array(np.repeat(alpha[..., None], 3, axis=-1))

    blurred = blur(grey, radius, gamma=gamma).as_array()[..., 0]

    # Colour is black and the buffer is not premultiplied, so only alpha is set.
    shadow_alpha = np.clip(np.floor(blurred.astype(np.float64) * darkness), 0, 255)
    out = np.zeros((image.height, image.width, 4), dtype=np.uint8)
    out[..., 0] = shadow_alpha.astype(np.uint8)
    return PixelBuffer.from_array(out)
