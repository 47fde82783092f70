"""
Command-line entry for the gammaconv package.

Usage
-----
$ python -m gammaconv
"""

import numpy as np

from .core import PixelBuffer, default_gamma_table
from .conv2d import make_gaussian_kernel, blur
from . import __version__


def _diagnostics():
    print(f"gammaconv separable convolution toolkit v{__version__}\n")

    print("Kernel check:")
    k = make_gaussian_kernel(2.0)
    print(f"  gaussian r=2: {len(k)} taps, sum={k.total:.12f}, symmetric={k.is_symmetric()}")

    print("\nGamma round trip:")
    table = default_gamma_table()
    values = np.arange(256, dtype=np.uint8)
    back = table.to_gamma(table.to_linear(values))
    print(f"  mismatches over 0..255: {int(np.count_nonzero(back != values))}")

    print("\nUniform image identity:")
    img = PixelBuffer.filled(16, 9, (200, 90, 30))
    out = blur(img, 3.0)
    print(f"  size in/out: {img.width}x{img.height} / {out.width}x{out.height}")
    print(f"  unchanged: {out == img}")

    print("\nAll checks done ✅")


if __name__ == "__main__":
    _diagnostics()
