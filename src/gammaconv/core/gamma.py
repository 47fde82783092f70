# src/gammaconv/core/gamma.py
"""Gamma <-> linear-light conversion for 8-bit samples."""
from __future__ import annotations

import threading
from typing import Optional

import numpy as np

from .errors import PreconditionViolation

__all__ = [
    "GAMMA",
    "GammaTable",
    "default_gamma_table",
    "alpha_byte_to_linear",
    "linear_to_alpha_byte",
]

# Roughly approximates monitors.
GAMMA = 2.2

# Scale used when quantizing [0, 1] back to a byte. Slightly above 255 so
# that 1.0 still lands on 255 after truncation.
_BYTE_SCALE = 255.9


class GammaTable:
    """
    Immutable lookup from 8-bit gamma-encoded samples to linear light.

    Parameters
    ----------
    gamma : float
        Exponent of the encoding curve, 2.2 by default.

    Notes
    -----
    The forward direction (byte -> linear) is tabulated; the inverse is
    computed analytically since it runs once per output sample.
    The table array is read-only, so an instance can be shared freely
    between threads.
    """

    __slots__ = ("_gamma", "_inv_gamma", "_table")

    def __init__(self, gamma: float = GAMMA) -> None:
        gamma = float(gamma)
        if not np.isfinite(gamma) or gamma <= 0.0:
            raise PreconditionViolation(f"gamma must be positive and finite, got {gamma!r}")
        table = np.power(np.arange(256, dtype=np.float64) / 255.0, gamma)
        table.flags.writeable = False
        self._gamma = gamma
        self._inv_gamma = 1.0 / gamma
        self._table = table

    def __repr__(self) -> str:
        return f"GammaTable(gamma={self._gamma!r})"

    @property
    def gamma(self) -> float:
        return self._gamma

    @property
    def table(self) -> np.ndarray:
        """Read-only float64 array of shape (256,)."""
        return self._table

    def to_linear(self, sample):
        """
        Convert gamma-encoded sample(s) in 0..255 to linear light in [0, 1].

        Accepts a Python int or an integer ndarray (vectorized lookup).
        """
        if isinstance(sample, np.ndarray):
            return self._table[sample]
        return float(self._table[int(sample)])

    def to_gamma(self, value):
        """
        Convert linear light back to a gamma-encoded byte.

        Out-of-range input is clamped: negatives encode to 0, anything above
        1.0 saturates at 255. Scalars give an ``int``, arrays give uint8.
        """
        if isinstance(value, np.ndarray):
            lin = np.clip(np.nan_to_num(np.asarray(value, dtype=np.float64)), 0.0, 1.0)
            enc = np.floor(np.power(lin, self._inv_gamma) * _BYTE_SCALE)
            return np.clip(enc, 0, 255).astype(np.uint8)

        lin = float(value)
        if not lin > 0.0:
            # Covers negatives and NaN.
            return 0
        lin = min(lin, 1.0)
        enc = int(lin ** self._inv_gamma * _BYTE_SCALE)
        return min(max(enc, 0), 255)


_DEFAULT_TABLE: Optional[GammaTable] = None
_DEFAULT_LOCK = threading.Lock()


def default_gamma_table() -> GammaTable:
    """Return the shared 2.2 table, building it on first use."""
    global _DEFAULT_TABLE
    if _DEFAULT_TABLE is None:
        with _DEFAULT_LOCK:
            if _DEFAULT_TABLE is None:
                _DEFAULT_TABLE = GammaTable(GAMMA)
    return _DEFAULT_TABLE


def alpha_byte_to_linear(sample):
    """Alpha byte -> [0, 1]. Alpha is linear, no gamma curve applied."""
    if isinstance(sample, np.ndarray):
        return sample.astype(np.float64) / 255.0
    return int(sample) / 255.0


def linear_to_alpha_byte(value):
    """[0, 1] -> alpha byte, truncating and clamping to 0..255."""
    if isinstance(value, np.ndarray):
        lin = np.clip(np.nan_to_num(value.astype(np.float64)), 0.0, 1.0)
        enc = np.floor(lin * _BYTE_SCALE)
        return np.clip(enc, 0, 255).astype(np.uint8)
    v = float(value)
    if not v > 0.0:
        return 0
    return min(int(min(v, 1.0) * _BYTE_SCALE), 255)
