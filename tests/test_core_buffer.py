# tests/test_core_buffer.py
import numpy as np
import pytest

from gammaconv.core import PixelBuffer, PreconditionViolation


def test_from_array_roundtrip_layout():
    arr = np.arange(2 * 3 * 4, dtype=np.uint8).reshape(2, 3, 4)
    buf = PixelBuffer.from_array(arr)
    assert (buf.width, buf.height, buf.channels) == (3, 2, 4)
    assert len(buf.data) == 24
    # row-major, pixel-interleaved
    assert buf.pixel(0, 0) == (0, 1, 2, 3)
    assert buf.pixel(1, 0) == (4, 5, 6, 7)
    assert buf.pixel(0, 1) == (12, 13, 14, 15)
    np.testing.assert_array_equal(buf.as_array(), arr)
    assert buf.has_alpha
    assert buf.shape == (2, 3, 4)
    assert buf.transposed_shape() == (3, 2, 4)


def test_buffer_is_immutable_and_copies_input():
    arr = np.zeros((2, 2, 3), dtype=np.uint8)
    buf = PixelBuffer.from_array(arr)
    arr[0, 0, 0] = 99
    assert buf.pixel(0, 0) == (0, 0, 0)

    view = buf.as_array()
    with pytest.raises(ValueError):
        view[0, 0, 0] = 1
    with pytest.raises(AttributeError):
        buf.width = 5


def test_length_mismatch_rejected():
    with pytest.raises(PreconditionViolation):
        PixelBuffer(width=2, height=2, channels=3, data=bytes(11))


@pytest.mark.parametrize("field", ["width", "height", "channels"])
def test_non_positive_dimensions_rejected(field):
    kwargs = dict(width=1, height=1, channels=3, data=bytes(3))
    kwargs[field] = 0
    with pytest.raises(PreconditionViolation):
        PixelBuffer(**kwargs)


def test_from_array_rejects_bad_input():
    with pytest.raises(PreconditionViolation):
        PixelBuffer.from_array(np.zeros((4, 4), dtype=np.uint8))
    with pytest.raises(PreconditionViolation):
        PixelBuffer.from_array(np.zeros((4, 4, 3), dtype=np.float32))


def test_filled_and_equality():
    a = PixelBuffer.filled(4, 3, (10, 20, 30))
    b = PixelBuffer.from_array(np.tile(np.array([10, 20, 30], dtype=np.uint8), (3, 4, 1)))
    assert a == b
    assert a.pixel(3, 2) == (10, 20, 30)
    with pytest.raises(IndexError):
        a.pixel(4, 0)
