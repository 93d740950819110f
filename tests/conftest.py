"""Shared fixtures: small numpy-backed sources."""

import numpy as np
import pytest

from pixel_mask import ArrayView


@pytest.fixture
def two_pixel_source() -> ArrayView:
    """One row, two 8-bit RGB pixels: (0,0,0) then (10,20,30)."""
    return ArrayView(np.array([[[0, 0, 0], [10, 20, 30]]], dtype=np.uint8))


@pytest.fixture
def small_rgb_source() -> ArrayView:
    """6x5 RGB image with values 0..3 and a few explicit (1,1,1) pixels."""
    rng = np.random.default_rng(0)
    data = rng.integers(0, 4, size=(5, 6, 3)).astype(np.uint8)
    data[0, 0] = (1, 1, 1)
    data[2, 3] = (1, 1, 1)
    data[4, 5] = (1, 1, 1)
    return ArrayView(data)
