# src/gammaconv/conv2d/kernels.py
"""1D separable kernels: Gaussian, box, and custom weight sequences."""
from __future__ import annotations

import math
from typing import Iterable, Union

import numpy as np

from gammaconv.core.errors import PreconditionViolation

__all__ = [
    "Kernel",
    "make_gaussian_kernel",
    "make_box_kernel",
    "outer_2d",
]


class Kernel:
    """
    Immutable 1D convolution kernel of odd length.

    The kernel is the horizontal (or vertical) cross-section of a separable
    2D filter through its centre, so the same weights are used for both
    passes.

    Parameters
    ----------
    weights : sequence of float
        Tap weights. Must be non-empty, finite and of odd length so that a
        centre tap exists. They are not renormalized.
    """

    __slots__ = ("_weights",)

    def __init__(self, weights: Union["Kernel", Iterable[float], np.ndarray]) -> None:
        if isinstance(weights, Kernel):
            self._weights = weights._weights
            return

        w = np.array(weights, dtype=np.float64)
        if w.ndim != 1:
            raise PreconditionViolation(f"Kernel must be one-dimensional, got shape {w.shape}")
        if w.size == 0:
            raise PreconditionViolation("Kernel must have at least one tap")
        if w.size % 2 == 0:
            raise PreconditionViolation(f"Kernel length must be odd, got {w.size}")
        if not np.all(np.isfinite(w)):
            raise PreconditionViolation("Kernel weights must be finite")

        w.flags.writeable = False
        self._weights = w

    @property
    def weights(self) -> np.ndarray:
        """Read-only float64 array of tap weights."""
        return self._weights

    @property
    def radius(self) -> int:
        """Number of taps on each side of the centre."""
        return (self._weights.size - 1) // 2

    @property
    def total(self) -> float:
        return float(self._weights.sum())

    def is_symmetric(self, atol: float = 1e-12) -> bool:
        return bool(np.allclose(self._weights, self._weights[::-1], rtol=0.0, atol=atol))

    def normalized(self) -> "Kernel":
        """Copy scaled to sum to 1. Zero-sum kernels are returned unchanged."""
        s = self.total
        if s == 0.0:
            return self
        return Kernel(self._weights / s)

    def __len__(self) -> int:
        return int(self._weights.size)

    def __iter__(self):
        return iter(self._weights.tolist())

    def __getitem__(self, index):
        return self._weights[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Kernel):
            return NotImplemented
        return np.array_equal(self._weights, other._weights)

    def __hash__(self) -> int:
        return hash(self._weights.tobytes())

    def __repr__(self) -> str:
        return f"Kernel(len={len(self)}, radius={self.radius}, total={self.total:.6g})"


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def make_gaussian_kernel(radius: float) -> Kernel:
    """
    Gaussian kernel whose radius is one standard deviation.

    Parameters
    ----------
    radius : float
        Sigma of the Gaussian, in pixels. ``0`` gives the single-tap
        identity kernel ``[1.0]``.

    Returns
    -------
    Kernel
        ``2 * ceil(3 * radius) + 1`` taps, symmetric, summing to 1.

    Raises
    ------
    PreconditionViolation
        If ``radius`` is negative or not finite.
    """
    radius = float(radius)
    if not math.isfinite(radius) or radius < 0.0:
        raise PreconditionViolation(f"radius must be finite and >= 0, got {radius!r}")
    if radius == 0.0:
        return Kernel([1.0])

    sigma = radius

    # Past 3 sigma the weights are negligible.
    half = int(math.ceil(radius * 3.0))
    x = np.arange(-half, half + 1, dtype=np.float64)

    # No 1/(sigma*sqrt(2pi)) factor, normalized below.
    g = np.exp(-(x * x) / (2.0 * sigma * sigma))
    g /= g.sum()
    return Kernel(g)


def make_box_kernel(radius: int) -> Kernel:
    """
    Uniform kernel with ``2 * radius + 1`` equal taps summing to 1.

    Parameters
    ----------
    radius : int
        Taps on each side of the centre, >= 0.
    """
    if isinstance(radius, bool) or int(radius) != radius or radius < 0:
        raise PreconditionViolation(f"box radius must be a non-negative integer, got {radius!r}")
    n = 2 * int(radius) + 1
    return Kernel(np.full(n, 1.0 / n, dtype=np.float64))


def outer_2d(kernel: Kernel) -> np.ndarray:
    """
    Equivalent 2D kernel of a separable filter, ``outer(k, k)``.

    Mostly useful as a reference when checking the two-pass result.
    """
    w = Kernel(kernel).weights
    return np.outer(w, w)
