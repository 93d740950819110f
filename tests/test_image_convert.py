"""Pillow bridge: images to views and masked blocks back to images."""

import numpy as np
import pytest
from PIL import Image

from pixel_mask import (
    GRAY,
    RGB,
    RGBA,
    XYZ,
    MaskedBlock,
    alpha_from_block,
    create_mask,
    image_from_array,
    image_from_block,
    rasterize,
    view_from_image,
)


def test_rgb_image_to_view():
    im = Image.new("RGB", (3, 2), (10, 20, 30))
    view = view_from_image(im)
    assert (view.cols, view.rows) == (3, 2)
    assert view.pixel_kind is RGB
    assert view(2, 1) == RGB(10, 20, 30, dtype=np.uint8)


def test_gray_image_to_view():
    view = view_from_image(Image.new("L", (2, 2), 7))
    assert view.pixel_kind is GRAY
    assert view(0, 0).to_tuple() == (7,)


def test_unsupported_mode_is_converted_with_warning(capsys):
    im = Image.new("P", (2, 1))
    view = view_from_image(im)
    assert view.pixel_kind is RGBA
    assert "[warn]" in capsys.readouterr().out


def test_image_from_array_round_trip():
    arr = np.array([[[1, 2, 3], [4, 5, 6]]], dtype=np.uint8)
    im = image_from_array(arr, RGB)
    assert im.mode == "RGB"
    assert im.size == (2, 1)
    assert im.getpixel((1, 0)) == (4, 5, 6)


def test_image_from_array_checks():
    with pytest.raises(TypeError):
        image_from_array(np.zeros((1, 1, 3), dtype=np.float32), RGB)
    with pytest.raises(ValueError):
        image_from_array(np.zeros((1, 1, 3), dtype=np.uint8), XYZ)
    with pytest.raises(ValueError):
        image_from_array(np.zeros((1, 1, 4), dtype=np.uint8), RGB)


def test_block_to_image_and_alpha():
    block = MaskedBlock(
        np.array([[[1, 2, 3], [4, 5, 6]]], dtype=np.uint8),
        np.array([[False, True]]),
        RGB,
    )
    im = image_from_block(block, replacement=(255, 0, 255))
    assert im.getpixel((0, 0)) == (255, 0, 255)
    assert im.getpixel((1, 0)) == (4, 5, 6)

    alpha = alpha_from_block(block)
    assert alpha.mode == "L"
    assert alpha.getpixel((0, 0)) == 0
    assert alpha.getpixel((1, 0)) == 255


def test_image_through_mask_and_back():
    im = Image.new("RGB", (4, 3), (0, 0, 0))
    im.putpixel((2, 1), (9, 8, 7))
    block = rasterize(create_mask(view_from_image(im), (0, 0, 0)))
    assert block.valid_count == 1
    out = image_from_block(block)
    assert out.getpixel((2, 1)) == (9, 8, 7)
    assert out.getpixel((0, 0)) == (0, 0, 0)


def test_block_replacement_outside_channel_range_rejected():
    block = MaskedBlock.invalid(RGB, 1, 1, np.uint8)
    with pytest.raises(ValueError):
        image_from_block(block, replacement=(256, 0, 0))
