# tests/test_conv2d_shadow.py
import numpy as np
import pytest

from gammaconv.conv2d.image import blur
from gammaconv.conv2d.shadow import make_shadow
from gammaconv.core import PixelBuffer, PreconditionViolation


def _sprite(size=32, radius=4):
    y, x = np.mgrid[0:size, 0:size]
    c = (size - 1) / 2.0
    inside = (x - c) ** 2 + (y - c) ** 2 <= radius**2
    arr = np.zeros((size, size, 4), dtype=np.uint8)
    arr[..., 0] = np.where(inside, 255, 0)
    arr[..., 1:] = (40, 200, 90)
    return PixelBuffer.from_array(arr)


def test_shadow_is_black_with_blurred_alpha():
    src = _sprite()
    shadow = make_shadow(src, 2.0, 1.0)
    assert (shadow.width, shadow.height, shadow.channels) == (32, 32, 4)

    arr = shadow.as_array()
    assert (arr[..., 1:] == 0).all()
    alpha = arr[..., 0].astype(int)
    # centre stays dark, the shadow spreads past the sprite, corners stay clear
    assert alpha[16, 16] >= 200
    assert alpha[16, 16] >= alpha.max() - 1
    assert alpha[16, 22] > 0
    assert alpha[0, 0] == 0


def test_shadow_alpha_follows_blurred_grey():
    src = _sprite()
    grey = PixelBuffer.from_array(np.repeat(src.as_array()[..., :1], 3, axis=2))
    blurred = blur(grey, 1.5).as_array()[..., 0].astype(float)
    shadow = make_shadow(src, 1.5, 0.5).as_array()[..., 0]
    np.testing.assert_array_equal(shadow, np.floor(blurred * 0.5).astype(np.uint8))


def test_zero_darkness_is_invisible():
    shadow = make_shadow(_sprite(), 3.0, 0.0)
    assert shadow.as_array().max() == 0


def test_shadow_needs_alpha():
    with pytest.raises(PreconditionViolation):
        make_shadow(PixelBuffer.filled(4, 4, (1, 2, 3)), 1.0, 0.5)
    with pytest.raises(PreconditionViolation):
        make_shadow(_sprite(), 1.0, float("nan"))
