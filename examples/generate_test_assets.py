"""
generate_test_assets.py

Creates tiny synthetic image assets for testing gammaconv.

Generates:
 - img_checker.png   (opaque RGB checkerboard)
 - img_gradients.png (opaque RGB gradients)
 - img_sprite.png    (RGBA disk on a transparent background, garbage color underneath)
"""

from pathlib import Path

import numpy as np
from PIL import Image


IMAGE_FILES = [
    "img_checker.png",
    "img_gradients.png",
    "img_sprite.png",
]


# ------------------------------
# Image generator 1: checkerboard
# ------------------------------

def generate_checker(size=32, tile=4):
    """Black/white checkerboard, (size, size, 3) uint8."""
    y, x = np.mgrid[0:size, 0:size]
    board = ((x // tile + y // tile) % 2).astype(np.uint8) * 255
    return np.stack([board, board, board], axis=-1)


# ------------------------------
# Image generator 2: gradients
# ------------------------------

def generate_gradients(width=48, height=32):
    """Horizontal red ramp, vertical green ramp, constant blue."""
    x = np.linspace(0, 255, width, dtype=np.float64)
    y = np.linspace(0, 255, height, dtype=np.float64)
    r = np.broadcast_to(x[None, :], (height, width))
    g = np.broadcast_to(y[:, None], (height, width))
    b = np.full((height, width), 96.0)
    return np.stack([r, g, b], axis=-1).round().astype(np.uint8)


# ------------------------------
# Image generator 3: transparent sprite
# ------------------------------

def generate_sprite(size=32, radius=9, color=(230, 120, 20), seed=0):
    """
    Opaque disk of ``color`` on a fully transparent background.

    Transparent pixels carry random color so any bleeding shows up.
    """
    rng = np.random.default_rng(seed)
    rgba = rng.integers(0, 256, size=(size, size, 4), dtype=np.uint8)
    y, x = np.mgrid[0:size, 0:size]
    c = (size - 1) / 2.0
    inside = (x - c) ** 2 + (y - c) ** 2 <= radius ** 2
    rgba[..., 3] = np.where(inside, 255, 0).astype(np.uint8)
    rgba[inside, :3] = np.asarray(color, dtype=np.uint8)
    return rgba


def main(out_folder="samples/input/test_assets"):
    out = Path(out_folder)
    out.mkdir(parents=True, exist_ok=True)

    Image.fromarray(generate_checker()).save(out / "img_checker.png")
    Image.fromarray(generate_gradients()).save(out / "img_gradients.png")
    Image.fromarray(generate_sprite()).save(out / "img_sprite.png")

    print(f"Assets written to {out.resolve()}")


if __name__ == "__main__":
    main()
