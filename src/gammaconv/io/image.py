# gammaconv/io/image.py
"""
Image I/O adapters using Pillow.

Converts between files / ``PIL.Image`` objects and :class:`PixelBuffer`.
Buffers with alpha keep it in channel 0 (A, R, G, B); Pillow keeps it last.
"""
from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

from gammaconv.core.buffer import PixelBuffer
from gammaconv.core.errors import PreconditionViolation

PathLike = Union[str, Path]

__all__ = [
    "read_image",
    "write_image",
    "buffer_from_pil",
    "buffer_to_pil",
    "rgba_to_argb",
    "argb_to_rgba",
]


def _pathify(path: PathLike) -> str:
    return str(Path(path))


def rgba_to_argb(x: np.ndarray) -> np.ndarray:
    """Move the last (alpha) channel of an (H, W, 4) array to the front."""
    arr = np.asarray(x)
    if arr.ndim != 3 or arr.shape[2] != 4:
        raise ValueError(f"Expected (H, W, 4) array, got {arr.shape}")
    return np.ascontiguousarray(np.roll(arr, 1, axis=-1))


def argb_to_rgba(x: np.ndarray) -> np.ndarray:
    """Inverse of :func:`rgba_to_argb`."""
    arr = np.asarray(x)
    if arr.ndim != 3 or arr.shape[2] != 4:
        raise ValueError(f"Expected (H, W, 4) array, got {arr.shape}")
    return np.ascontiguousarray(np.roll(arr, -1, axis=-1))


def _has_alpha(im: Image.Image) -> bool:
    if im.mode in ("RGBA", "LA", "PA", "RGBa", "La"):
        return True
    return im.mode == "P" and "transparency" in im.info


def buffer_from_pil(im: Image.Image) -> PixelBuffer:
    """
    Convert a Pillow image to a PixelBuffer.

    Images with any kind of transparency become 4-channel ARGB buffers,
    everything else 3-channel RGB.
    """
    if _has_alpha(im):
        arr = np.asarray(im.convert("RGBA"), dtype=np.uint8)
        return PixelBuffer.from_array(rgba_to_argb(arr))
    arr = np.asarray(im.convert("RGB"), dtype=np.uint8)
    return PixelBuffer.from_array(arr)


def buffer_to_pil(buf: PixelBuffer) -> Image.Image:
    """Convert a 3- or 4-channel PixelBuffer to an RGB / RGBA Pillow image."""
    arr = buf.as_array()
    if buf.channels == 4:
        return Image.fromarray(argb_to_rgba(arr))
    if buf.channels == 3:
        return Image.fromarray(np.ascontiguousarray(arr))
    raise PreconditionViolation(f"Unsupported channel count {buf.channels}")


def read_image(path: PathLike) -> PixelBuffer:
    """
    Read an image file via Pillow.

    Parameters
    ----------
    path : str or Path
        Input image path.

    Returns
    -------
    PixelBuffer
        4-channel (A, R, G, B) if the file has transparency, else 3-channel.
    """
    with Image.open(_pathify(path)) as im:
        im.load()
        return buffer_from_pil(im)


def write_image(path: PathLike, buf: PixelBuffer) -> None:
    """
    Save a PixelBuffer via Pillow; the extension decides the format.

    4-channel buffers are written as RGBA, so pick a format that keeps
    alpha (PNG, WebP, TIFF).
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    buffer_to_pil(buf).save(_pathify(p))
