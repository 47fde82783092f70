# tests/conftest.py
from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest

from gammaconv.core import GammaTable, PixelBuffer

# Root of repo: tests/.. = project root
PROJECT_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture(scope="session")
def gamma_table() -> GammaTable:
    return GammaTable()


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def half_transparent():
    """
    Factory for 4-channel buffers: left half opaque ``color``, right half
    alpha 0 with random garbage color.
    """

    def make(width: int, height: int, color, seed: int = 0) -> PixelBuffer:
        r = np.random.default_rng(seed)
        arr = r.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
        half = width // 2
        arr[:, :half, 0] = 255
        arr[:, :half, 1:] = np.asarray(color, dtype=np.uint8)
        arr[:, half:, 0] = 0
        return PixelBuffer.from_array(arr)

    return make


@pytest.fixture(scope="session")
def test_assets_dir(tmp_path_factory) -> Path:
    """Synthetic PNG assets generated by examples/generate_test_assets.py."""
    try:
        # examples/ is not a package; make sure the project root is importable
        sys.path.insert(0, str(PROJECT_ROOT))
        from examples import generate_test_assets
    except ImportError as exc:
        pytest.skip(f"Could not import examples.generate_test_assets: {exc}")

    out = tmp_path_factory.mktemp("test_assets")
    generate_test_assets.main(out_folder=str(out))
    return out
