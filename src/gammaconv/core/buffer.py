# src/gammaconv/core/buffer.py
"""Raw 8-bit pixel buffer exchanged with the convolution core."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .errors import PreconditionViolation

__all__ = [
    "PixelBuffer",
    "SUPPORTED_CHANNELS",
]

# 3 = opaque gamma-encoded color, 4 = linear alpha in channel 0 + color.
SUPPORTED_CHANNELS = (3, 4)


@dataclass(frozen=True)
class PixelBuffer:
    """
    Row-major, pixel-interleaved image with one byte per channel.

    Attributes
    ----------
    width, height : int
        Image size in pixels.
    channels : int
        Bytes per pixel. With 4 channels, channel 0 is alpha (linear) and
        channels 1..3 are gamma-encoded color; with 3 channels every channel
        is gamma-encoded color and the image is fully opaque.
    data : bytes
        ``width * height * channels`` bytes, no row padding.
    """

    width: int
    height: int
    channels: int
    data: bytes

    def __post_init__(self) -> None:
        for name in ("width", "height", "channels"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
                raise PreconditionViolation(f"{name} must be a positive integer, got {value!r}")
            object.__setattr__(self, name, int(value))

        if not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))

        expected = self.width * self.height * self.channels
        if len(self.data) != expected:
            raise PreconditionViolation(
                f"Buffer holds {len(self.data)} bytes, expected "
                f"{self.width}x{self.height}x{self.channels} = {expected}"
            )

    # ------------------------------------------------------------------
    # Constructors / views
    # ------------------------------------------------------------------

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "PixelBuffer":
        """
        Build a buffer from a (H, W, C) uint8 array.

        The array is copied; later changes to it do not affect the buffer.
        """
        a = np.asarray(arr)
        if a.ndim != 3:
            raise PreconditionViolation(f"Expected (H, W, C) array, got shape {a.shape}")
        if a.dtype != np.uint8:
            raise PreconditionViolation(f"Expected uint8 array, got dtype {a.dtype}")
        h, w, c = a.shape
        return cls(width=w, height=h, channels=c, data=np.ascontiguousarray(a).tobytes())

    @classmethod
    def filled(cls, width: int, height: int, pixel) -> "PixelBuffer":
        """Uniform buffer where every pixel equals ``pixel`` (a byte sequence)."""
        px = np.asarray(pixel, dtype=np.uint8).reshape(-1)
        arr = np.broadcast_to(px, (int(height), int(width), px.shape[0]))
        return cls.from_array(arr)

    def as_array(self) -> np.ndarray:
        """Read-only (H, W, C) uint8 view over ``data``."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(
            self.height, self.width, self.channels
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def has_alpha(self) -> bool:
        return self.channels == 4

    @property
    def shape(self) -> Tuple[int, int, int]:
        """(height, width, channels), matching ``as_array().shape``."""
        return self.height, self.width, self.channels

    def transposed_shape(self) -> Tuple[int, int, int]:
        """Shape of a single convolution pass output (width and height swapped)."""
        return self.width, self.height, self.channels

    def pixel(self, x: int, y: int) -> Tuple[int, ...]:
        """Channel values of the pixel at column ``x``, row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} buffer")
        start = (y * self.width + x) * self.channels
        return tuple(self.data[start : start + self.channels])

    def __repr__(self) -> str:
        return (
            f"PixelBuffer(width={self.width}, height={self.height}, "
            f"channels={self.channels}, data=<{len(self.data)} bytes>)"
        )
