# src/gammaconv/conv2d/separable.py
"""One gamma-correct, alpha-weighted 1D convolution pass with transposed output."""
from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional, Union

import numpy as np

from gammaconv.core.buffer import PixelBuffer, SUPPORTED_CHANNELS
from gammaconv.core.errors import AllocationFailure, PreconditionViolation
from gammaconv.core.gamma import GammaTable, default_gamma_table
from gammaconv.conv2d.kernels import Kernel
from gammaconv.utils.logging import get_logger

__all__ = [
    "SeparableConvolver",
    "convolve_transposed",
]

KernelLike = Union[Kernel, Iterable[float], np.ndarray]

logger = get_logger()

# Alpha weight of a pixel in a 3-channel (fully opaque) image.
_OPAQUE = 255.0


def _check_brightness(brightness: float) -> float:
    b = float(brightness)
    if not math.isfinite(b) or b < 0.0:
        raise PreconditionViolation(f"brightness must be finite and >= 0, got {brightness!r}")
    return b


class SeparableConvolver:
    """
    Applies a 1D kernel along each row and writes the result transposed.

    Calling :meth:`convolve` twice, feeding the first output into the second
    call, yields the full separable 2D convolution in the original
    orientation. Each pass only walks memory along rows.

    Parameters
    ----------
    kernel : Kernel or sequence of float
        Odd-length tap weights.
    brightness : float, default=1.0
        Factor applied to color channels after the alpha-weighted average.
        1.0 is a plain blur; larger values brighten and clip at 255.
    gamma : GammaTable or None
        Table used to linearize color samples. Defaults to the shared 2.2
        table.
    workers : int, default=1
        Number of threads. Rows are split into bands, each band fills its own
        destination columns.
    """

    def __init__(
        self,
        kernel: KernelLike,
        brightness: float = 1.0,
        gamma: Optional[GammaTable] = None,
        workers: int = 1,
    ) -> None:
        self.kernel = Kernel(kernel)
        self.brightness = _check_brightness(brightness)
        self.gamma = gamma if gamma is not None else default_gamma_table()
        if isinstance(workers, bool) or int(workers) != workers or workers < 1:
            raise PreconditionViolation(f"workers must be a positive integer, got {workers!r}")
        self.workers = int(workers)

    def __repr__(self) -> str:
        return (
            f"SeparableConvolver(kernel={self.kernel!r}, brightness={self.brightness!r}, "
            f"gamma={self.gamma!r}, workers={self.workers})"
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def convolve(self, src: PixelBuffer) -> PixelBuffer:
        """
        Convolve ``src`` horizontally and return the transposed result.

        The output has ``width = src.height`` and ``height = src.width``,
        with the same channel count.

        Raises
        ------
        PreconditionViolation
            If ``src`` has a channel count other than 3 or 4.
        AllocationFailure
            If the destination buffer cannot be allocated.
        """
        if not isinstance(src, PixelBuffer):
            raise PreconditionViolation(f"Expected PixelBuffer, got {type(src).__name__}")
        if src.channels not in SUPPORTED_CHANNELS:
            raise PreconditionViolation(
                f"Unsupported channel count {src.channels}; expected one of {SUPPORTED_CHANNELS}"
            )

        logger.debug(
            "Convolving %dx%dx%d with %d taps (brightness %g)",
            src.width,
            src.height,
            src.channels,
            len(self.kernel),
            self.brightness,
        )

        arr = src.as_array()
        try:
            # Destination is (width, height, C): rows of dest are columns of src.
            out = np.empty((src.width, src.height, src.channels), dtype=np.uint8)
            self._run(arr, out)
        except MemoryError as exc:
            raise AllocationFailure(
                f"Could not allocate {src.height}x{src.width}x{src.channels} destination"
            ) from exc

        return PixelBuffer(
            width=src.height,
            height=src.width,
            channels=src.channels,
            data=out.tobytes(),
        )

    __call__ = convolve

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run(self, arr: np.ndarray, out: np.ndarray) -> None:
        height = arr.shape[0]
        n_bands = min(self.workers, height)
        if n_bands <= 1:
            self._convolve_band(arr, out, 0, height)
            return

        bounds = np.linspace(0, height, n_bands + 1).astype(int)
        with ThreadPoolExecutor(max_workers=n_bands) as pool:
            futures = [
                pool.submit(self._convolve_band, arr, out, int(lo), int(hi))
                for lo, hi in zip(bounds[:-1], bounds[1:])
                if hi > lo
            ]
            for fut in futures:
                # Re-raise worker errors in the caller.
                fut.result()

    def _convolve_band(self, arr: np.ndarray, out: np.ndarray, y0: int, y1: int) -> None:
        """Convolve source rows ``[y0, y1)`` into destination columns ``[y0, y1)``."""
        rows = arr[y0:y1]
        h, w, c = rows.shape
        weights = self.kernel.weights
        radius = self.kernel.radius
        has_alpha = c == 4

        color = rows[..., 1:] if has_alpha else rows
        linear = self.gamma.to_linear(color)
        color_sum = np.zeros(linear.shape, dtype=np.float64)

        if has_alpha:
            alpha = rows[..., 0].astype(np.float64)
            alpha_sum = np.zeros((h, w), dtype=np.float64)
            denom = np.zeros((h, w), dtype=np.float64)
        else:
            denom = 0.0

        cols = np.arange(w)
        for i, k in enumerate(weights):
            # Clamp to edge: off-image taps repeat the nearest edge pixel.
            idx = np.clip(cols - radius + i, 0, w - 1)
            if has_alpha:
                a = alpha[:, idx]
                alpha_sum += a * k
                wt = a * k
                color_sum += linear[:, idx, :] * wt[..., None]
                denom += wt
            else:
                wt = _OPAQUE * k
                color_sum += linear[:, idx, :] * wt
                denom += wt

        # Renormalize by the alpha weight actually present in each window.
        # A zero denominator (fully transparent window) keeps the raw sum.
        if has_alpha:
            nonzero = denom != 0.0
            scale = np.ones_like(denom)
            np.divide(self.brightness, denom, out=scale, where=nonzero)
            color_sum *= scale[..., None]
        elif denom != 0.0:
            color_sum *= self.brightness / denom

        encoded = np.empty((h, w, c), dtype=np.uint8)
        if has_alpha:
            encoded[..., 0] = np.clip(np.floor(alpha_sum + 0.5), 0, 255).astype(np.uint8)
            encoded[..., 1:] = self.gamma.to_gamma(color_sum)
        else:
            encoded[...] = self.gamma.to_gamma(color_sum)

        out[:, y0:y1, :] = encoded.transpose(1, 0, 2)


def convolve_transposed(
    src: PixelBuffer,
    kernel: KernelLike,
    brightness: float = 1.0,
    gamma: Optional[GammaTable] = None,
) -> PixelBuffer:
    """Single pass of :class:`SeparableConvolver`; output has swapped width/height."""
    return SeparableConvolver(kernel, brightness=brightness, gamma=gamma).convolve(src)
