"""Reductions: mean of channels and block summaries."""

import numpy as np
import pytest

from pixel_mask import (
    GRAY,
    RGB,
    MaskedBlock,
    MaskedPixel,
    is_transparent,
    mean_channel_value,
    mean_channel_values,
    valid_fraction,
)


def test_mean_of_valid_pixel():
    assert mean_channel_value(MaskedPixel(RGB(2, 4, 6))) == pytest.approx(4.0)


def test_mean_of_invalid_pixel_is_zero():
    mp = MaskedPixel(RGB(2, 4, 6))
    mp.invalidate()
    assert mean_channel_value(mp) == 0.0
    assert mean_channel_value(MaskedPixel.default(RGB)) == 0.0


def test_mean_does_not_overflow_small_ints():
    mp = MaskedPixel(RGB(250, 250, 250, dtype=np.uint8))
    assert mean_channel_value(mp) == pytest.approx(250.0)


def test_mean_single_channel():
    assert mean_channel_value(MaskedPixel(GRAY(9))) == pytest.approx(9.0)


def test_is_transparent():
    mp = MaskedPixel(RGB(1, 1, 1))
    assert not is_transparent(mp)
    mp.invalidate()
    assert is_transparent(mp)


def test_block_means_and_valid_fraction():
    values = np.array([[[2, 4, 6], [1, 1, 1]], [[0, 0, 3], [9, 9, 9]]], dtype=np.uint8)
    valid = np.array([[True, False], [True, True]])
    block = MaskedBlock(values, valid, RGB)

    np.testing.assert_allclose(mean_channel_values(block), [[4.0, 0.0], [1.0, 9.0]])
    assert valid_fraction(block) == pytest.approx(0.75)


def test_block_means_agree_with_per_pixel():
    values = np.arange(18, dtype=np.uint8).reshape(2, 3, 3)
    block = MaskedBlock(values, np.array([[True, False, True], [False, True, True]]), RGB)
    means = mean_channel_values(block)
    for row in range(2):
        for col in range(3):
            assert means[row, col] == pytest.approx(mean_channel_value(block.pixel(col, row)))


def test_empty_block_fraction():
    block = MaskedBlock.invalid(RGB, 0, 4)
    assert valid_fraction(block) == 0.0
